"""Simulation configuration — the workload and the scheduler knobs.

A configuration is everything a run needs:

- the processes, each an ``(arrival_time, burst_time)`` pair,
- the time quantum,
- the context-switch cost charged after every slice.

Configurations are validated up front so the engine never sees a
degenerate input.  They can be saved to and loaded from JSON workload
files::

    {
      "quantum": 2,
      "context_switch_time": 0,
      "processes": [
        {"arrival_time": 0, "burst_time": 5},
        [1, 3]
      ]
    }

Each process may be written as an object or as an ``[arrival, burst]``
pair.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path

_PAIR_LENGTH = 2


class ConfigError(ValueError):
    """Raised when a simulation configuration is invalid."""


@dataclass(frozen=True)
class ProcessSpec:
    """The input description of one process."""

    arrival_time: int
    burst_time: int


@dataclass(frozen=True)
class SimulationConfig:
    """A complete, immutable description of one simulation run.

    Attributes:
        processes: The workload, in input order (PIDs follow this order).
        quantum: Maximum CPU time per dispatch.
        context_switch_time: Overhead charged after every slice.

    """

    processes: tuple[ProcessSpec, ...] = field(default_factory=tuple)
    quantum: int = 1
    context_switch_time: int = 0

    def validate(self) -> SimulationConfig:
        """Check the configuration and return it unchanged.

        Raises:
            ConfigError: Describing the first problem found.

        """
        if not self.processes:
            msg = "At least one process is required"
            raise ConfigError(msg)
        for pid, spec in enumerate(self.processes, start=1):
            _require_int(spec.arrival_time, f"Process {pid} arrival time")
            _require_int(spec.burst_time, f"Process {pid} burst time")
            if spec.arrival_time < 0:
                msg = f"Process {pid} arrival time must be >= 0, got {spec.arrival_time}"
                raise ConfigError(msg)
            if spec.burst_time <= 0:
                msg = f"Process {pid} burst time must be > 0, got {spec.burst_time}"
                raise ConfigError(msg)
        _require_int(self.quantum, "Time quantum")
        if self.quantum <= 0:
            msg = f"Time quantum must be > 0, got {self.quantum}"
            raise ConfigError(msg)
        _require_int(self.context_switch_time, "Context switch time")
        if self.context_switch_time < 0:
            msg = f"Context switch time must be >= 0, got {self.context_switch_time}"
            raise ConfigError(msg)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "quantum": self.quantum,
            "context_switch_time": self.context_switch_time,
            "processes": [
                {"arrival_time": p.arrival_time, "burst_time": p.burst_time}
                for p in self.processes
            ],
        }

    @classmethod
    def from_dict(cls, data: Any) -> SimulationConfig:
        """Build and validate a configuration from a parsed JSON document.

        Raises:
            ConfigError: If the document is malformed or the values are
                invalid.

        """
        if not isinstance(data, dict):
            msg = "Configuration must be a JSON object"
            raise ConfigError(msg)
        if "quantum" not in data:
            msg = "Missing 'quantum'"
            raise ConfigError(msg)
        raw_processes = data.get("processes")
        if not isinstance(raw_processes, list):
            msg = "'processes' must be a list"
            raise ConfigError(msg)
        specs = tuple(
            _parse_process(raw, pid) for pid, raw in enumerate(raw_processes, start=1)
        )
        config = cls(
            processes=specs,
            quantum=data["quantum"],
            context_switch_time=data.get("context_switch_time", 0),
        )
        return config.validate()


def _require_int(value: object, label: str) -> None:
    """Reject anything that is not a plain int (bools included)."""
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"{label} must be an integer, got {value!r}"
        raise ConfigError(msg)


def _parse_process(raw: object, pid: int) -> ProcessSpec:
    """Parse one process entry (object or ``[arrival, burst]`` pair)."""
    if isinstance(raw, dict):
        try:
            return ProcessSpec(arrival_time=raw["arrival_time"], burst_time=raw["burst_time"])
        except KeyError as e:
            msg = f"Process {pid} is missing {e.args[0]!r}"
            raise ConfigError(msg) from e
    if isinstance(raw, list) and len(raw) == _PAIR_LENGTH:
        return ProcessSpec(arrival_time=raw[0], burst_time=raw[1])
    msg = f"Process {pid} must be an object or an [arrival, burst] pair, got {raw!r}"
    raise ConfigError(msg)


def load_config(path: Path) -> SimulationConfig:
    """Load and validate a workload from a JSON file.

    Raises:
        ConfigError: If the file cannot be read as text, is not valid
            JSON, or the workload is invalid.

    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        msg = f"{path}: cannot read workload ({e})"
        raise ConfigError(msg) from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        msg = f"{path}: invalid JSON ({e.msg} at line {e.lineno})"
        raise ConfigError(msg) from e
    return SimulationConfig.from_dict(data)


def dump_config(config: SimulationConfig, path: Path) -> None:
    """Save a workload to a JSON file."""
    path.write_text(json.dumps(config.to_dict(), indent=2))
