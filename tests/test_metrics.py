"""Tests for aggregate metrics.

Throughput and CPU utilization divide by the makespan, so a zero
makespan must produce ``None`` ("undefined") instead of an error.
"""

import pytest

from rr_sim.config import ProcessSpec, SimulationConfig
from rr_sim.metrics import compute_metrics
from rr_sim.process import Process
from rr_sim.simulation import SimulationResult, simulate

# P1 (0, 2) and P2 (10, 3), quantum 2, switch 1:
# P1[0-2] idle 3..10 P2[10-12] P2[13-14], final clock 15.
_GAP_CONFIG = SimulationConfig(
    processes=(
        ProcessSpec(arrival_time=0, burst_time=2),
        ProcessSpec(arrival_time=10, burst_time=3),
    ),
    quantum=2,
    context_switch_time=1,
)
_MAKESPAN = 14
_IDLE = 7
_BUSY = 5
_SWITCH_OVERHEAD = 3
_TOTAL = 15


class TestComputeMetrics:
    """Verify metrics for a run with idle time and context switches."""

    def test_averages(self) -> None:
        """Averages are taken over every process."""
        metrics = compute_metrics(simulate(_GAP_CONFIG))
        assert metrics.process_count == len(_GAP_CONFIG.processes)
        assert metrics.avg_waiting_time == pytest.approx(0.5)  # pyright: ignore[reportUnknownMemberType]
        assert metrics.avg_turnaround_time == pytest.approx(3.0)  # pyright: ignore[reportUnknownMemberType]

    def test_makespan_and_throughput(self) -> None:
        """Throughput is processes per unit of makespan."""
        metrics = compute_metrics(simulate(_GAP_CONFIG))
        assert metrics.makespan == _MAKESPAN
        assert metrics.throughput == pytest.approx(2 / _MAKESPAN)  # pyright: ignore[reportUnknownMemberType]

    def test_cpu_utilization(self) -> None:
        """Utilization is the non-idle share of the makespan."""
        metrics = compute_metrics(simulate(_GAP_CONFIG))
        assert metrics.cpu_utilization == pytest.approx(50.0)  # pyright: ignore[reportUnknownMemberType]

    def test_time_breakdown(self) -> None:
        """Idle, busy and switch overhead add up to the final clock."""
        metrics = compute_metrics(simulate(_GAP_CONFIG))
        assert metrics.idle_time == _IDLE
        assert metrics.busy_time == _BUSY
        assert metrics.context_switch_overhead == _SWITCH_OVERHEAD
        assert metrics.total_time == _TOTAL

    def test_full_utilization_without_idle(self) -> None:
        """A CPU that never idles is 100% utilized."""
        config = SimulationConfig(processes=(ProcessSpec(arrival_time=0, burst_time=5),), quantum=5)
        metrics = compute_metrics(simulate(config))
        assert metrics.cpu_utilization == pytest.approx(100.0)  # pyright: ignore[reportUnknownMemberType]
        assert metrics.throughput == pytest.approx(0.2)  # pyright: ignore[reportUnknownMemberType]

    def test_to_dict(self) -> None:
        """Metrics serialize to a plain dict."""
        data = compute_metrics(simulate(_GAP_CONFIG)).to_dict()
        assert data["makespan"] == _MAKESPAN
        assert data["idle_time"] == _IDLE
        assert set(data) >= {"throughput", "cpu_utilization", "avg_waiting_time"}


class TestDegenerateMetrics:
    """Verify the zero-denominator guards."""

    def _zero_makespan_result(self) -> SimulationResult:
        """Return a result whose only process never recorded a completion."""
        return SimulationResult(
            processes=(Process(pid=1, arrival_time=0, burst_time=1),),
            trace=(),
            idle_time=0,
            total_time=0,
            quantum=1,
            context_switch_time=0,
        )

    def test_zero_makespan_is_undefined(self) -> None:
        """Throughput and utilization are None when the makespan is zero."""
        metrics = compute_metrics(self._zero_makespan_result())
        assert metrics.makespan == 0
        assert metrics.throughput is None
        assert metrics.cpu_utilization is None

    def test_no_processes_raises(self) -> None:
        """An empty result cannot be summarised."""
        result = SimulationResult(
            processes=(), trace=(), idle_time=0, total_time=0, quantum=1, context_switch_time=0
        )
        with pytest.raises(ValueError, match="zero processes"):
            compute_metrics(result)
