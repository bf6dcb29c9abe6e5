"""Interactive console front end.

The console asks for the workload the classic way:

    1. the number of processes,
    2. ``arrival burst`` for each process,
    3. the time quantum,
    4. the context-switch time.

It then runs the simulation and prints the execution log followed by
the results report.  A JSON workload file may be given on the command
line instead (``rr-sim workload.json``).

The helpers (``format_banner``, ``parse_int``, ``parse_process_line``,
``render_run``) are pure.  ``read_config`` prints the per-process
instructions and takes an injectable reader, so everything but ``run()``
is testable without a terminal.
"""

import sys
from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

from rr_sim.config import ConfigError, ProcessSpec, SimulationConfig, load_config
from rr_sim.logging import LogLevel
from rr_sim.report import format_execution_log, format_report
from rr_sim.simulation import SimulationResult, simulate

_BANNER_FILL = 10
_PAIR_LENGTH = 2

Reader: TypeAlias = Callable[[str], str]


def format_banner(title: str, *, fill: int = _BANNER_FILL) -> str:
    """Return ``title`` wrapped in ``=`` runs, e.g. ``=== TITLE ===``."""
    bar = "=" * fill
    return f"{bar} {title} {bar}"


def parse_int(text: str, label: str) -> int:
    """Parse a single integer typed at a prompt.

    Raises:
        ConfigError: If *text* is not an integer.

    """
    try:
        return int(text.strip())
    except ValueError as e:
        msg = f"{label} must be an integer, got {text.strip()!r}"
        raise ConfigError(msg) from e


def parse_process_line(line: str, pid: int) -> ProcessSpec:
    """Parse an ``arrival burst`` line (e.g. ``0 5``).

    Raises:
        ConfigError: If the line does not hold exactly two integers.

    """
    fields = line.split()
    if len(fields) != _PAIR_LENGTH:
        msg = f"Process {pid}: expected 'arrival burst', got {line.strip()!r}"
        raise ConfigError(msg)
    return ProcessSpec(
        arrival_time=parse_int(fields[0], f"Process {pid} arrival time"),
        burst_time=parse_int(fields[1], f"Process {pid} burst time"),
    )


def read_config(read: Reader | None = None) -> SimulationConfig:
    """Prompt for a workload and return the validated configuration.

    Args:
        read: Prompt-and-read function, ``input`` if omitted.

    Raises:
        ConfigError: On the first invalid answer.

    """
    if read is None:
        read = input
    count = parse_int(read("Enter number of processes: "), "Number of processes")
    if count <= 0:
        msg = f"Number of processes must be > 0, got {count}"
        raise ConfigError(msg)
    print(  # noqa: T201
        "Enter Arrival Time and Burst Time for each process\n"
        "(example: 0 5 means AT=0, BT=5)\n"
    )
    specs = tuple(
        parse_process_line(read(f"Process {pid}: "), pid) for pid in range(1, count + 1)
    )
    quantum = parse_int(read("Enter Time Quantum: "), "Time quantum")
    switch = parse_int(read("Enter Context Switch Time (0 if none): "), "Context switch time")
    config = SimulationConfig(processes=specs, quantum=quantum, context_switch_time=switch)
    return config.validate()


def render_run(result: SimulationResult) -> str:
    """Return the execution log and report of a finished run."""
    events = [e for e in result.log if e.level >= LogLevel.INFO]
    return "\n".join(
        [
            "",
            format_banner("ROUND ROBIN CPU SCHEDULING START"),
            format_execution_log(events),
            format_banner("ALL PROCESSES COMPLETED"),
            "",
            format_report(result),
        ]
    )


def run(argv: list[str] | None = None) -> int:
    """Read a workload, simulate it, and print the results.

    Args:
        argv: Command-line arguments without the program name; an
            optional single workload file path.

    Returns:
        The process exit status (0 on success, 1 on invalid input).

    """
    args = sys.argv[1:] if argv is None else argv
    print(format_banner("ROUND ROBIN CPU SCHEDULING SIMULATOR", fill=3) + "\n")  # noqa: T201
    try:
        config = load_config(Path(args[0])) if args else read_config()
        result = simulate(config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)  # noqa: T201
        return 1
    except EOFError:
        # Ctrl+D
        print("\nNo input.")  # noqa: T201
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted.")  # noqa: T201
        return 1
    print(render_run(result))  # noqa: T201
    return 0
