"""rr-sim — a Round Robin CPU scheduling simulator.

Re-exports the public API so callers can write::

    from rr_sim import SimulationConfig, ProcessSpec, simulate, compute_metrics
"""

from rr_sim.config import ConfigError, ProcessSpec, SimulationConfig, dump_config, load_config
from rr_sim.logging import LogEntry, Logger, LogLevel
from rr_sim.metrics import Metrics, compute_metrics
from rr_sim.process import Process, ProcessState, ProcessTable
from rr_sim.scheduler import RoundRobinScheduler
from rr_sim.simulation import (
    Simulation,
    SimulationResult,
    TraceEntry,
    build_table,
    simulate,
)

__all__ = [
    "ConfigError",
    "LogEntry",
    "LogLevel",
    "Logger",
    "Metrics",
    "Process",
    "ProcessSpec",
    "ProcessState",
    "ProcessTable",
    "RoundRobinScheduler",
    "Simulation",
    "SimulationConfig",
    "SimulationResult",
    "TraceEntry",
    "build_table",
    "compute_metrics",
    "dump_config",
    "load_config",
    "simulate",
]
