"""Aggregate statistics for a finished simulation.

Averages are taken over every process.  Throughput and CPU utilization
are measured against the makespan (the latest completion time); when
the makespan is zero they are undefined and reported as ``None``
rather than dividing by zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rr_sim.simulation import SimulationResult

_PERCENT = 100.0


@dataclass(frozen=True)
class Metrics:
    """Summary statistics of one run."""

    process_count: int
    avg_waiting_time: float
    avg_turnaround_time: float
    makespan: int
    throughput: float | None
    cpu_utilization: float | None
    idle_time: int
    busy_time: int
    context_switch_overhead: int
    total_time: int

    def to_dict(self) -> dict[str, float | int | None]:
        """Return the metrics as a JSON-compatible dict."""
        return {
            "process_count": self.process_count,
            "avg_waiting_time": self.avg_waiting_time,
            "avg_turnaround_time": self.avg_turnaround_time,
            "makespan": self.makespan,
            "throughput": self.throughput,
            "cpu_utilization": self.cpu_utilization,
            "idle_time": self.idle_time,
            "busy_time": self.busy_time,
            "context_switch_overhead": self.context_switch_overhead,
            "total_time": self.total_time,
        }


def compute_metrics(result: SimulationResult) -> Metrics:
    """Summarise a simulation result.

    Args:
        result: A completed simulation.

    Returns:
        The aggregate metrics.

    Raises:
        ValueError: If the result contains no processes.

    """
    processes = result.processes
    if not processes:
        msg = "Cannot compute metrics for zero processes"
        raise ValueError(msg)
    count = len(processes)
    makespan = max(p.completion_time for p in processes)
    throughput = count / makespan if makespan > 0 else None
    utilization = (
        (makespan - result.idle_time) / makespan * _PERCENT if makespan > 0 else None
    )
    return Metrics(
        process_count=count,
        avg_waiting_time=sum(p.waiting_time for p in processes) / count,
        avg_turnaround_time=sum(p.turnaround_time for p in processes) / count,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=utilization,
        idle_time=result.idle_time,
        busy_time=result.busy_time,
        context_switch_overhead=result.context_switch_overhead,
        total_time=result.total_time,
    )
