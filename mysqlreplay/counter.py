"""Named integer counters shared by the replay pipeline."""

from __future__ import annotations

import threading

PACKETS = "packets"
QUERIES = "queries"
STREAMS = "streams"
CONNECTIONS = "connections"
CONN_WAITING = "conn.waiting"
CONN_RUNNING = "conn.running"
STMT_EXECUTES = "stmt.executes"
STMT_PREPARES = "stmt.prepares"

FAILED_QUERIES = "err.queries"
FAILED_STMT_EXECUTES = "err.stmt.executes"
FAILED_STMT_PREPARES = "err.stmt.prepares"

METRICS: tuple[str, ...] = (
    PACKETS,
    QUERIES,
    STMT_EXECUTES,
    STMT_PREPARES,
    STREAMS,
    CONNECTIONS,
    FAILED_QUERIES,
    FAILED_STMT_EXECUTES,
    FAILED_STMT_PREPARES,
    CONN_WAITING,
    CONN_RUNNING,
)


class CounterRegistry:
    """Thread-safe set of signed counters.

    The well-known metrics always exist; any other name is created on first use.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._metrics: dict[str, int] = dict.fromkeys(METRICS, 0)
        self._others: dict[str, int] = {}

    def _bucket(self, name: str) -> dict[str, int]:
        return self._metrics if name in self._metrics else self._others

    def add(self, name: str, delta: int) -> int:
        """Add ``delta`` to counter ``name`` and return the new value."""
        with self._lock:
            bucket = self._bucket(name)
            bucket[name] = bucket.get(name, 0) + delta
            return bucket[name]

    def get(self, name: str) -> int:
        """Return the value of counter ``name``, zero if it was never touched."""
        with self._lock:
            return self._bucket(name).get(name, 0)

    def dump(self) -> dict[str, int]:
        """Return a snapshot of every counter."""
        with self._lock:
            out = dict(self._metrics)
            out.update(self._others)
            return out


_default = CounterRegistry()


def add(name: str, delta: int) -> int:
    """Add to a counter of the process-wide registry."""
    return _default.add(name, delta)


def get(name: str) -> int:
    """Read a counter of the process-wide registry."""
    return _default.get(name)


def dump() -> dict[str, int]:
    """Snapshot the process-wide registry."""
    return _default.dump()