"""Plain-text rendering of simulation results.

Every function returns a string; nothing here prints.  The console
front end and the web API both build their output from these.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rr_sim.metrics import compute_metrics

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rr_sim.logging import LogEntry
    from rr_sim.metrics import Metrics
    from rr_sim.process import Process
    from rr_sim.simulation import SimulationResult, TraceEntry

# (header, width) for each results column; the last column is unpadded.
_COLUMNS = (
    ("PID", 8),
    ("Arrival", 12),
    ("Burst", 10),
    ("Completion", 15),
    ("Waiting", 10),
    ("Turnaround", 0),
)
_SECTION_DASHES = 19
_RULE_WIDTH = 50
UNDEFINED = "undefined"


def _section(title: str) -> str:
    """Return a dashed section header like ``---- RESULTS ----``."""
    dashes = "-" * _SECTION_DASHES
    return f"{dashes} {title} {dashes}"


def _row(values: Iterable[object]) -> str:
    return "".join(
        f"{value!s:<{width}}" if width else str(value)
        for value, (_, width) in zip(values, _COLUMNS, strict=True)
    )


def format_results_table(processes: Iterable[Process]) -> str:
    """Format the per-process timing table."""
    lines = [_row(header for header, _ in _COLUMNS)]
    lines.extend(
        _row(
            (
                p.pid,
                p.arrival_time,
                p.burst_time,
                p.completion_time,
                p.waiting_time,
                p.turnaround_time,
            )
        )
        for p in processes
    )
    return "\n".join(lines)


def _fmt(value: float | None) -> str:
    return UNDEFINED if value is None else f"{value:.2f}"


def format_metrics(metrics: Metrics) -> str:
    """Format the aggregate statistics, two decimals each."""
    throughput = _fmt(metrics.throughput)
    if metrics.throughput is not None:
        throughput += " processes/unit time"
    utilization = _fmt(metrics.cpu_utilization)
    if metrics.cpu_utilization is not None:
        utilization += " %"
    return "\n".join(
        [
            f"Average Waiting Time: {metrics.avg_waiting_time:.2f}",
            f"Average Turnaround Time: {metrics.avg_turnaround_time:.2f}",
            f"Throughput: {throughput}",
            f"CPU Utilization: {utilization}",
            f"Total Idle Time: {metrics.idle_time}",
        ]
    )


def format_gantt_chart(trace: Iterable[TraceEntry]) -> str:
    """Format the trace as ``P1[0-2] P2[2-4] ...``."""
    return " ".join(str(entry) for entry in trace)


def format_execution_log(entries: Iterable[LogEntry]) -> str:
    """Format log entries one per line, messages only."""
    return "\n".join(entry.message for entry in entries)


def format_report(result: SimulationResult, metrics: Metrics | None = None) -> str:
    """Format the full results report: table, statistics, and Gantt chart."""
    if metrics is None:
        metrics = compute_metrics(result)
    return "\n".join(
        [
            _section("RESULTS"),
            format_results_table(result.processes),
            "",
            format_metrics(metrics),
            "",
            _section("GANTT CHART"),
            format_gantt_chart(result.trace),
            "-" * _RULE_WIDTH,
        ]
    )
