"""Process statistics reported by the replay tool."""

from __future__ import annotations

import threading

_UINT64_MASK = (1 << 64) - 1

DEFAULT_KEYS: tuple[str, ...] = (
    "ReadPacket",
    "DealPacket",
    "GetSQL",
    "DealSQL",
    "GetRes",
    "WriteRes",
    "PacketChanLen",
    "SQLChanLen",
    "WriteResChanLen",
    "ExecSQLFail",
    "WriteResFileFail",
    "FormatJsonFail",
)


class Statistics:
    """Unsigned 64-bit statistic values keyed by name."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.values: dict[str, int] = dict.fromkeys(DEFAULT_KEYS, 0)

    def add_static(self, key: str, value: int, replace: bool) -> None:
        """Add ``value`` to ``key``, or set it when ``replace`` is true."""
        with self._lock:
            if replace or key not in self.values:
                self.values[key] = value & _UINT64_MASK
            else:
                self.values[key] = (self.values[key] + value) & _UINT64_MASK

    def dump_static(self) -> str:
        """Render every statistic as ``key-value`` lines."""
        with self._lock:
            return "".join(f"{k}-{v}\n" for k, v in self.values.items())

    def get_value(self, key: str) -> int:
        """Return the value of ``key``, zero when unknown."""
        with self._lock:
            return self.values.get(key, 0)


_default = Statistics()


def add_static(key: str, value: int, replace: bool) -> None:
    """Update a statistic of the process-wide set."""
    _default.add_static(key, value, replace)


def dump_static() -> str:
    """Render the process-wide statistics."""
    return _default.dump_static()


def get_value(key: str) -> int:
    """Read a statistic of the process-wide set."""
    return _default.get_value(key)