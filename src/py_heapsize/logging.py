"""Audit log for heap-size probes.

Each probe of a process leaves a trail: which maps file was read, how
big it was, what total came out, and which reads failed.  The logger
keeps that trail in memory so the CLI can echo it with ``--verbose``
and tests can assert on it.

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — a single structured record (level, message, source, pid).
- **Logger** — an append-only log with filtering and clearing.  A
  long-running process (the web endpoint) gives it a capacity so only
  the most recent entries are kept.
"""

from collections import deque
from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels for log entries."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The component that generated the event (e.g. "procfs").
        pid: The probed process id, or ``None`` for the calling process.

    """

    level: LogLevel
    message: str
    source: str
    pid: int | None = None

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Append-only log buffer with filtering.

    With a *max_entries* capacity the buffer is a ring: once full, each
    new entry evicts the oldest one and bumps ``dropped``.
    """

    def __init__(self, max_entries: int | None = None) -> None:
        """Create an empty logger.

        Args:
            max_entries: Keep at most this many entries, or all of them
                when ``None``.

        Raises:
            ValueError: If *max_entries* is not positive.

        """
        if max_entries is not None and max_entries <= 0:
            msg = f"max_entries must be positive, got {max_entries}"
            raise ValueError(msg)
        self._entries: deque[LogEntry] = deque(maxlen=max_entries)
        self._dropped = 0

    @property
    def max_entries(self) -> int | None:
        """Return the capacity, or ``None`` when unbounded."""
        return self._entries.maxlen

    @property
    def dropped(self) -> int:
        """Return how many entries were evicted to stay within capacity."""
        return self._dropped

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        return list(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        pid: int | None = None,
    ) -> None:
        """Append a new entry to the log.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Component that generated the event.
            pid: Process id the event concerns.

        """
        if len(self._entries) == self._entries.maxlen:
            self._dropped += 1
        self._entries.append(LogEntry(level=level, message=message, source=source, pid=pid))

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return entries matching the given criteria.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.

        Returns:
            A filtered list of log entries.

        """
        result = list(self._entries)
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        return result

    def clear(self) -> None:
        """Remove all log entries and reset the eviction count."""
        self._entries.clear()
        self._dropped = 0
