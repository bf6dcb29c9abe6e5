"""Processes and the process table (the registry).

A process here is a pure CPU burst: it arrives at some point on the
simulated time axis, needs ``burst_time`` units of CPU, and finishes.
There is no I/O and therefore no WAITING state.

Each process tracks two kinds of data:

- **Input** — ``pid``, ``arrival_time`` and ``burst_time``, fixed at
  creation.
- **Simulation state** — ``remaining_time``, the lifecycle ``state``,
  and the timing metrics (completion, turnaround, waiting) filled in
  exactly once when the process finishes.

State machine::

    NEW → READY ⇄ RUNNING → TERMINATED

The state doubles as the engine's membership map: NEW processes have
not been admitted yet, READY ones sit in the ready queue, the RUNNING
one owns the CPU, and TERMINATED ones are done.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class ProcessState(StrEnum):
    """Lifecycle states of a simulated process.

    - NEW: created, not yet admitted to the ready queue.
    - READY: waiting in the ready queue for CPU time.
    - RUNNING: currently executing a time slice.
    - TERMINATED: all burst time consumed.
    """

    NEW = "new"
    READY = "ready"
    RUNNING = "running"
    TERMINATED = "terminated"


class Process:
    """A simulated process.

    Arrival and burst time are immutable.  Everything else is mutated
    only by the scheduler engine while a simulation runs, and is
    read-only afterwards.
    """

    def __init__(self, *, pid: int, arrival_time: int, burst_time: int) -> None:
        """Create a new process in the NEW state.

        Args:
            pid: Stable identifier, unique within its process table.
            arrival_time: Time at which the process becomes eligible to run.
                Expected to be non-negative; callers validate this.
            burst_time: Total CPU time required (must be positive).

        Raises:
            ValueError: If ``burst_time`` is not positive.

        """
        if burst_time <= 0:
            msg = f"Process {pid}: burst time must be positive, got {burst_time}"
            raise ValueError(msg)
        self._pid = pid
        self._arrival_time = arrival_time
        self._burst_time = burst_time
        self._remaining_time = burst_time
        self._state = ProcessState.NEW
        self._completion_time = 0
        self._turnaround_time = 0
        self._waiting_time = 0

    @property
    def pid(self) -> int:
        """Return the process identifier."""
        return self._pid

    @property
    def arrival_time(self) -> int:
        """Return the arrival time."""
        return self._arrival_time

    @property
    def burst_time(self) -> int:
        """Return the total CPU time required."""
        return self._burst_time

    @property
    def remaining_time(self) -> int:
        """Return the CPU time still needed."""
        return self._remaining_time

    @property
    def state(self) -> ProcessState:
        """Return the current lifecycle state."""
        return self._state

    @property
    def completion_time(self) -> int:
        """Return the completion time (0 until the process finishes)."""
        return self._completion_time

    @property
    def turnaround_time(self) -> int:
        """Return completion minus arrival (0 until the process finishes)."""
        return self._turnaround_time

    @property
    def waiting_time(self) -> int:
        """Return turnaround minus burst (0 until the process finishes)."""
        return self._waiting_time

    @property
    def finished(self) -> bool:
        """Return True once all burst time has been consumed."""
        return self._remaining_time == 0

    def run(self, ticks: int) -> int:
        """Execute for at most *ticks* units of CPU time.

        Args:
            ticks: The time slice on offer (the quantum).

        Returns:
            The time actually consumed, ``min(ticks, remaining_time)``.

        Raises:
            RuntimeError: If the process is not RUNNING.

        """
        if self._state is not ProcessState.RUNNING:
            msg = f"Cannot run: process {self._pid} is {self._state}, expected running"
            raise RuntimeError(msg)
        used = min(ticks, self._remaining_time)
        self._remaining_time -= used
        return used

    def record_completion(self, completion_time: int) -> None:
        """Set the completion time and derive turnaround and waiting time.

        Raises:
            RuntimeError: If the process still has work left or was
                already completed.

        """
        if not self.finished:
            msg = f"Cannot complete: process {self._pid} has {self._remaining_time} left"
            raise RuntimeError(msg)
        if self._completion_time:
            msg = f"Cannot complete: process {self._pid} already completed"
            raise RuntimeError(msg)
        self._completion_time = completion_time
        self._turnaround_time = completion_time - self._arrival_time
        self._waiting_time = self._turnaround_time - self._burst_time

    def _transition(self, action: str, expected: ProcessState, target: ProcessState) -> None:
        """Enforce a state transition.

        Raises:
            RuntimeError: If the process is not in the expected state.

        """
        if self._state is not expected:
            msg = f"Cannot {action}: process {self._pid} is {self._state}, expected {expected}"
            raise RuntimeError(msg)
        self._state = target

    def admit(self) -> None:
        """Transition NEW → READY. Admit the process to the ready queue."""
        self._transition("admit", ProcessState.NEW, ProcessState.READY)

    def dispatch(self) -> None:
        """Transition READY → RUNNING. Give the process the CPU."""
        self._transition("dispatch", ProcessState.READY, ProcessState.RUNNING)

    def preempt(self) -> None:
        """Transition RUNNING → READY. The quantum expired."""
        self._transition("preempt", ProcessState.RUNNING, ProcessState.READY)

    def terminate(self) -> None:
        """Transition RUNNING → TERMINATED. The burst is done."""
        self._transition("terminate", ProcessState.RUNNING, ProcessState.TERMINATED)

    def __repr__(self) -> str:
        """Return a debug-friendly representation."""
        return (
            f"Process(pid={self._pid}, arrival={self._arrival_time}, "
            f"burst={self._burst_time}, remaining={self._remaining_time}, state={self._state})"
        )


class ProcessTable:
    """The registry of every process taking part in one simulation.

    PIDs are handed out sequentially from 1 in creation order, so two
    tables built from the same input hold identical processes.
    """

    def __init__(self) -> None:
        """Create an empty process table."""
        self._processes: dict[int, Process] = {}

    def create(self, *, arrival_time: int, burst_time: int) -> Process:
        """Create a process with the next free PID and register it.

        Raises:
            ValueError: If ``burst_time`` is not positive.

        """
        pid = len(self._processes) + 1
        process = Process(pid=pid, arrival_time=arrival_time, burst_time=burst_time)
        self._processes[process.pid] = process
        return process

    def get(self, pid: int) -> Process:
        """Return the process with *pid*.

        Raises:
            KeyError: If no such process exists.

        """
        return self._processes[pid]

    @property
    def processes(self) -> list[Process]:
        """Return all processes in creation order."""
        return list(self._processes.values())

    def sort_by_arrival(self) -> list[Process]:
        """Return all processes ordered by ascending arrival time.

        ``sorted`` is stable, so processes arriving at the same time keep
        their creation order.
        """
        return sorted(self._processes.values(), key=lambda p: p.arrival_time)

    @staticmethod
    def mark_complete(process: Process, *, clock_time: int, context_switch_time: int) -> None:
        """Record that *process* finished.

        The engine charges a context switch after every slice, including
        the last one, so the switch is subtracted back out here.

        Args:
            process: The process whose final slice just ended.
            clock_time: The clock after the slice and its context switch.
            context_switch_time: The per-dispatch switch cost.

        """
        process.record_completion(clock_time - context_switch_time)

    def __len__(self) -> int:
        """Return the number of registered processes."""
        return len(self._processes)

    def __iter__(self) -> Iterator[Process]:
        """Iterate over processes in creation order."""
        return iter(self.processes)
