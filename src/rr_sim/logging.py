"""Simulation event log.

``Simulation.run`` narrates the schedule into a ``Logger`` under the
source ``"scheduler"``, stamping each entry with the simulated clock:

- DEBUG: a process joined the ready queue.
- INFO: run start and end, every executed slice
  (``CPU executing P1 from time 0 to 2``), idle gaps, completions.

The entries written during one run are also copied onto
``SimulationResult.log``.  The console prints the INFO-and-above ones
between its start/end banners; passing a shared ``Logger`` to
``simulate`` collects several runs in one place.

The engine only writes DEBUG and INFO; WARNING and ERROR are left to
callers that log alongside it.
"""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels, ordered so ``level >= LogLevel.INFO`` filters."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """One engine event, stamped with the simulated clock.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The component that generated the event; the engine uses
            ``"scheduler"``.
        time: The simulation clock when the event was recorded, not
            wall time.

    """

    level: LogLevel
    message: str
    source: str
    time: int = 0

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Append-only event buffer, shareable across simulation runs."""

    def __init__(self) -> None:
        """Create an empty logger."""
        self._entries: list[LogEntry] = []

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
        time: int = 0,
    ) -> None:
        """Append a new entry to the log.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Component that generated the event.
            time: Simulation clock at the moment of the event.

        """
        self._entries.append(LogEntry(level=level, message=message, source=source, time=time))

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
        result = self._entries
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        return result if result is not self._entries else list(result)

    def clear(self) -> None:
        """Remove all log entries."""
        self._entries.clear()

    def __len__(self) -> int:
        """Return the number of entries."""
        return len(self._entries)
