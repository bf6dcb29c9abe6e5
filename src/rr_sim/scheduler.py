"""Round Robin dispatcher: the ready queue and the CPU slot.

The ready queue is a plain FIFO of ``Process`` references.  Dispatch
takes the head; a process whose quantum ran out goes to the tail; a
finished process leaves for good.  The scheduler never looks at the
clock: slice sizing and timing belong to ``rr_sim.simulation``, which
reads ``quantum`` from here.
"""

from __future__ import annotations

from collections import deque

from rr_sim.process import Process


class RoundRobinScheduler:
    """Strict FIFO dispatch with tail requeue on preemption."""

    def __init__(self, *, quantum: int) -> None:
        """Create an empty scheduler.

        Args:
            quantum: Maximum CPU time per dispatch.

        Raises:
            ValueError: If the quantum is not positive.

        """
        if quantum <= 0:
            msg = f"Time quantum must be positive, got {quantum}"
            raise ValueError(msg)
        self._quantum = quantum
        self._ready_queue: deque[Process] = deque()
        self._current: Process | None = None
        self._context_switches = 0

    @property
    def quantum(self) -> int:
        """Return the time quantum."""
        return self._quantum

    @property
    def ready_count(self) -> int:
        """Return the number of processes waiting for the CPU."""
        return len(self._ready_queue)

    @property
    def current(self) -> Process | None:
        """Return the process holding the CPU, or None."""
        return self._current

    @property
    def context_switches(self) -> int:
        """Return how many dispatches have happened."""
        return self._context_switches

    @property
    def idle(self) -> bool:
        """Return True when nothing is running and nothing is ready."""
        return self._current is None and not self._ready_queue

    def admit(self, process: Process) -> None:
        """Admit a NEW process at the tail of the ready queue.

        Raises:
            RuntimeError: If the process is not NEW.

        """
        process.admit()
        self._ready_queue.append(process)

    def dispatch(self) -> Process | None:
        """Give the CPU to the head of the ready queue.

        Returns:
            The dispatched process, or None if nothing is ready.

        Raises:
            RuntimeError: If a process is already running.

        """
        if self._current is not None:
            msg = f"Cannot dispatch: process {self._current.pid} is still running"
            raise RuntimeError(msg)
        if not self._ready_queue:
            return None
        process = self._ready_queue.popleft()
        process.dispatch()
        self._current = process
        self._context_switches += 1
        return process

    def preempt(self) -> None:
        """Send the running process to the tail of the ready queue.

        Raises:
            RuntimeError: If no process is currently running.

        """
        process = self._release()
        process.preempt()
        self._ready_queue.append(process)

    def terminate_current(self) -> None:
        """Retire the running process.

        Raises:
            RuntimeError: If no process is currently running.

        """
        self._release().terminate()

    def _release(self) -> Process:
        if self._current is None:
            msg = "No process is currently running"
            raise RuntimeError(msg)
        process, self._current = self._current, None
        return process
