"""Tests for simulation configuration and JSON workload files."""

import json
from pathlib import Path

import pytest

from rr_sim.config import (
    ConfigError,
    ProcessSpec,
    SimulationConfig,
    dump_config,
    load_config,
)

DEFAULT_QUANTUM = 2


def _valid() -> SimulationConfig:
    """Return a small valid configuration."""
    return SimulationConfig(
        processes=(
            ProcessSpec(arrival_time=0, burst_time=5),
            ProcessSpec(arrival_time=1, burst_time=3),
        ),
        quantum=DEFAULT_QUANTUM,
        context_switch_time=1,
    )


class TestValidate:
    """Verify up-front validation."""

    def test_valid_config_is_returned(self) -> None:
        """validate() returns the config itself."""
        config = _valid()
        assert config.validate() is config

    def test_no_processes(self) -> None:
        """A run needs at least one process."""
        with pytest.raises(ConfigError, match="At least one process"):
            SimulationConfig(processes=(), quantum=DEFAULT_QUANTUM).validate()

    @pytest.mark.parametrize("burst", [0, -1])
    def test_non_positive_burst(self, burst: int) -> None:
        """Burst times must be positive."""
        config = SimulationConfig(
            processes=(ProcessSpec(arrival_time=0, burst_time=burst),), quantum=DEFAULT_QUANTUM
        )
        with pytest.raises(ConfigError, match="Process 1 burst time must be > 0"):
            config.validate()

    def test_negative_arrival(self) -> None:
        """Arrival times cannot be negative."""
        config = SimulationConfig(
            processes=(ProcessSpec(arrival_time=-1, burst_time=1),), quantum=DEFAULT_QUANTUM
        )
        with pytest.raises(ConfigError, match="arrival time must be >= 0"):
            config.validate()

    @pytest.mark.parametrize("quantum", [0, -2])
    def test_non_positive_quantum(self, quantum: int) -> None:
        """The quantum must be positive."""
        config = SimulationConfig(processes=_valid().processes, quantum=quantum)
        with pytest.raises(ConfigError, match="Time quantum must be > 0"):
            config.validate()

    def test_negative_context_switch(self) -> None:
        """The context switch cannot be negative."""
        config = SimulationConfig(
            processes=_valid().processes, quantum=DEFAULT_QUANTUM, context_switch_time=-1
        )
        with pytest.raises(ConfigError, match="Context switch time must be >= 0"):
            config.validate()

    def test_bool_is_not_an_integer(self) -> None:
        """True is not accepted as a quantum of 1."""
        config = SimulationConfig(processes=_valid().processes, quantum=True)
        with pytest.raises(ConfigError, match="must be an integer"):
            config.validate()

    def test_config_error_is_value_error(self) -> None:
        """Callers catching ValueError also catch configuration errors."""
        assert issubclass(ConfigError, ValueError)


class TestFromDict:
    """Verify parsing of JSON documents."""

    def test_object_and_pair_entries(self) -> None:
        """Processes may be objects or [arrival, burst] pairs."""
        config = SimulationConfig.from_dict(
            {
                "quantum": DEFAULT_QUANTUM,
                "processes": [{"arrival_time": 0, "burst_time": 5}, [1, 3]],
            }
        )
        assert config.processes == (
            ProcessSpec(arrival_time=0, burst_time=5),
            ProcessSpec(arrival_time=1, burst_time=3),
        )
        assert config.context_switch_time == 0

    def test_round_trip(self) -> None:
        """to_dict output parses back to an equal config."""
        config = _valid()
        assert SimulationConfig.from_dict(config.to_dict()) == config

    def test_not_an_object(self) -> None:
        """The document must be an object."""
        with pytest.raises(ConfigError, match="JSON object"):
            SimulationConfig.from_dict([1, 2])

    def test_missing_quantum(self) -> None:
        """The quantum is required."""
        with pytest.raises(ConfigError, match="Missing 'quantum'"):
            SimulationConfig.from_dict({"processes": [[0, 1]]})

    def test_processes_not_a_list(self) -> None:
        """Processes must be a list."""
        with pytest.raises(ConfigError, match="'processes' must be a list"):
            SimulationConfig.from_dict({"quantum": 1, "processes": "0 1"})

    def test_entry_missing_key(self) -> None:
        """Object entries need both times."""
        with pytest.raises(ConfigError, match="Process 1 is missing 'burst_time'"):
            SimulationConfig.from_dict({"quantum": 1, "processes": [{"arrival_time": 0}]})

    def test_bad_pair(self) -> None:
        """Pairs must have exactly two values."""
        with pytest.raises(ConfigError, match="Process 2 must be an object or"):
            SimulationConfig.from_dict({"quantum": 1, "processes": [[0, 1], [0, 1, 2]]})

    def test_values_are_validated(self) -> None:
        """Parsed configs are validated."""
        with pytest.raises(ConfigError, match="must be an integer"):
            SimulationConfig.from_dict({"quantum": "2", "processes": [[0, 1]]})


class TestWorkloadFiles:
    """Verify JSON file persistence."""

    def test_dump_and_load(self, tmp_path: Path) -> None:
        """A dumped workload loads back unchanged."""
        path = tmp_path / "workload.json"
        dump_config(_valid(), path)
        assert load_config(path) == _valid()

    def test_dump_writes_json(self, tmp_path: Path) -> None:
        """The file is plain JSON."""
        path = tmp_path / "workload.json"
        dump_config(_valid(), path)
        data = json.loads(path.read_text())
        assert data["quantum"] == DEFAULT_QUANTUM

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Malformed files raise ConfigError."""
        path = tmp_path / "broken.json"
        path.write_text("{ not json")
        with pytest.raises(ConfigError, match="invalid JSON"):
            load_config(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file is a configuration error."""
        with pytest.raises(ConfigError, match="cannot read workload"):
            load_config(tmp_path / "nope.json")

    def test_directory(self, tmp_path: Path) -> None:
        """A directory is not a workload file."""
        with pytest.raises(ConfigError, match="cannot read workload"):
            load_config(tmp_path)

    def test_not_utf8(self, tmp_path: Path) -> None:
        """Undecodable bytes are a configuration error."""
        path = tmp_path / "binary.json"
        path.write_bytes(b"\xff\xfe{")
        with pytest.raises(ConfigError, match="cannot read workload"):
            load_config(path)
