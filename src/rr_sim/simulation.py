"""The Round Robin simulation engine.

The engine owns the simulated clock and steps it forward one time
slice at a time.  Each iteration:

1. Dispatch the head of the ready queue (strict FIFO).
2. If the process has not arrived yet, jump the clock forward to its
   arrival and book the gap as CPU idle time.
3. Run it for ``min(quantum, remaining)``, record the slice in the
   trace, and charge the context switch.  The switch is charged after
   *every* slice, the last one included; ``mark_complete`` takes it
   back out of the completion time, but the clock keeps it.
4. Admit every NEW process that has arrived by now, in arrival order.
5. Only then put the just-run process back at the tail of the queue,
   so newly arrived processes go ahead of it on a tie.
6. If nothing is queued but work remains, admit the lowest-index
   unfinished process (the clock catches up with it on dispatch).

Nothing here is concurrent: time-slicing is modelled purely as data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rr_sim.logging import LogEntry, Logger, LogLevel
from rr_sim.process import Process, ProcessState, ProcessTable
from rr_sim.scheduler import RoundRobinScheduler

if TYPE_CHECKING:
    from rr_sim.config import SimulationConfig

_SOURCE = "scheduler"


@dataclass(frozen=True)
class TraceEntry:
    """One execution slice in the Gantt chart.

    The end time is stored when the slice runs rather than being
    reconstructed from the process's bookkeeping afterwards.
    """

    pid: int
    start: int
    end: int

    @property
    def duration(self) -> int:
        """Return the CPU time consumed by this slice."""
        return self.end - self.start

    def __str__(self) -> str:
        """Format as ``P1[0-2]``."""
        return f"P{self.pid}[{self.start}-{self.end}]"


@dataclass(frozen=True)
class SimulationResult:
    """Everything a completed run produced.

    Attributes:
        processes: Final process states, ordered by arrival.
        trace: Execution slices in dispatch order.
        idle_time: Total time the CPU had nothing to run.
        total_time: The final clock value (includes the trailing switch).
        quantum: The time quantum used.
        context_switch_time: The per-slice switch cost used.
        log: Events recorded during the run.

    """

    processes: tuple[Process, ...]
    trace: tuple[TraceEntry, ...]
    idle_time: int
    total_time: int
    quantum: int
    context_switch_time: int
    log: tuple[LogEntry, ...] = field(default_factory=tuple)

    @property
    def busy_time(self) -> int:
        """Return the total CPU time spent executing processes."""
        return sum(entry.duration for entry in self.trace)

    @property
    def context_switch_overhead(self) -> int:
        """Return the total time charged to context switches."""
        return len(self.trace) * self.context_switch_time


class Simulation:
    """Run Round Robin scheduling over a process table.

    A simulation consumes its table: every process ends TERMINATED, so
    a table can be simulated only once.
    """

    def __init__(
        self,
        table: ProcessTable,
        *,
        quantum: int,
        context_switch_time: int = 0,
        logger: Logger | None = None,
    ) -> None:
        """Prepare a simulation.

        Args:
            table: The processes to schedule (all must be NEW).
            quantum: Maximum CPU time per dispatch.
            context_switch_time: Overhead charged after every slice.
            logger: Where to record events; a private one if omitted.

        Raises:
            ValueError: If the quantum is not positive or the switch
                time is negative.

        """
        if context_switch_time < 0:
            msg = f"Context switch time must be >= 0, got {context_switch_time}"
            raise ValueError(msg)
        self._table = table
        self._scheduler = RoundRobinScheduler(quantum=quantum)
        self._context_switch_time = context_switch_time
        self._logger = logger if logger is not None else Logger()
        self._clock = 0
        self._idle_time = 0
        self._trace: list[TraceEntry] = []

    @property
    def clock(self) -> int:
        """Return the current simulated time."""
        return self._clock

    @property
    def idle_time(self) -> int:
        """Return the idle time accumulated so far."""
        return self._idle_time

    @property
    def scheduler(self) -> RoundRobinScheduler:
        """Return the underlying scheduler."""
        return self._scheduler

    def run(self) -> SimulationResult:
        """Simulate until every process has finished.

        Returns:
            The final process states, trace, and idle/clock totals.

        Raises:
            RuntimeError: If the table is empty or was already simulated.

        """
        processes = self._table.sort_by_arrival()
        if not processes:
            msg = "Cannot simulate an empty process table"
            raise RuntimeError(msg)
        if any(p.state is not ProcessState.NEW for p in processes):
            msg = "Process table has already been simulated"
            raise RuntimeError(msg)

        log_start = len(self._logger)
        self._log(
            LogLevel.INFO,
            f"Round Robin scheduling start: {len(processes)} processes, "
            f"quantum={self._scheduler.quantum}, context switch={self._context_switch_time}",
        )
        completed = 0
        self._admit(processes[0])

        while not self._scheduler.idle:
            process = self._scheduler.dispatch()
            assert process is not None  # noqa: S101

            if self._clock < process.arrival_time:
                gap = process.arrival_time - self._clock
                self._idle_time += gap
                self._log(
                    LogLevel.INFO, f"CPU idle from time {self._clock} to {process.arrival_time}"
                )
                self._clock = process.arrival_time

            start = self._clock
            used = process.run(self._scheduler.quantum)
            self._trace.append(TraceEntry(pid=process.pid, start=start, end=start + used))
            self._log(
                LogLevel.INFO, f"CPU executing P{process.pid} from time {start} to {start + used}"
            )
            self._clock += used + self._context_switch_time

            if process.finished:
                self._table.mark_complete(
                    process, clock_time=self._clock, context_switch_time=self._context_switch_time
                )
                self._log(
                    LogLevel.INFO,
                    f"Process P{process.pid} completed at time {process.completion_time}",
                )
                completed += 1

            for candidate in processes:
                if candidate.state is ProcessState.NEW and candidate.arrival_time <= self._clock:
                    self._admit(candidate)

            if process.finished:
                self._scheduler.terminate_current()
            else:
                self._scheduler.preempt()

            if self._scheduler.idle and completed < len(processes):
                self._admit(next(p for p in processes if not p.finished))

        self._log(LogLevel.INFO, f"All processes completed, clock at {self._clock}")
        return SimulationResult(
            processes=tuple(processes),
            trace=tuple(self._trace),
            idle_time=self._idle_time,
            total_time=self._clock,
            quantum=self._scheduler.quantum,
            context_switch_time=self._context_switch_time,
            log=tuple(self._logger.entries[log_start:]),
        )

    def _admit(self, process: Process) -> None:
        """Move a NEW process into the ready queue."""
        self._scheduler.admit(process)
        self._log(LogLevel.DEBUG, f"P{process.pid} admitted to the ready queue")

    def _log(self, level: LogLevel, message: str) -> None:
        self._logger.log(level, message, source=_SOURCE, time=self._clock)


def build_table(config: SimulationConfig) -> ProcessTable:
    """Create a process table from a configuration, in input order."""
    table = ProcessTable()
    for spec in config.processes:
        table.create(arrival_time=spec.arrival_time, burst_time=spec.burst_time)
    return table


def simulate(config: SimulationConfig, *, logger: Logger | None = None) -> SimulationResult:
    """Validate *config*, build a fresh table, and run it.

    Raises:
        ConfigError: If the configuration is invalid.

    """
    config.validate()
    simulation = Simulation(
        build_table(config),
        quantum=config.quantum,
        context_switch_time=config.context_switch_time,
        logger=logger,
    )
    return simulation.run()
