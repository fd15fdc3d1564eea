"""Building blocks for replaying captured MySQL traffic and comparing results."""

__version__ = "0.1.0"
__all__ = ["cmdutil", "collations", "convert", "counter", "protocol", "result", "stats"]