"""Flask application factory for the rr-sim web UI.

The ``create_app`` function returns a Flask app with three endpoints:

- ``GET /`` — render the HTML page, pre-filled with the example workload.
- ``POST /api/simulate`` — run a workload and return JSON.
- ``GET /api/example`` — return the example workload.
"""

from __future__ import annotations

import json
from typing import Any

from flask import Flask, Response, jsonify, render_template, request

from rr_sim.config import ConfigError, ProcessSpec, SimulationConfig
from rr_sim.metrics import compute_metrics
from rr_sim.report import format_report
from rr_sim.simulation import SimulationResult, simulate

_HTTP_BAD_REQUEST = 400

EXAMPLE_CONFIG = SimulationConfig(
    processes=(
        ProcessSpec(arrival_time=0, burst_time=5),
        ProcessSpec(arrival_time=1, burst_time=3),
        ProcessSpec(arrival_time=2, burst_time=8),
        ProcessSpec(arrival_time=3, burst_time=6),
    ),
    quantum=2,
    context_switch_time=0,
)


def result_to_dict(result: SimulationResult) -> dict[str, Any]:
    """Serialize a simulation result (and its metrics) for JSON output."""
    metrics = compute_metrics(result)
    return {
        "processes": [
            {
                "pid": p.pid,
                "arrival_time": p.arrival_time,
                "burst_time": p.burst_time,
                "completion_time": p.completion_time,
                "waiting_time": p.waiting_time,
                "turnaround_time": p.turnaround_time,
            }
            for p in result.processes
        ],
        "trace": [{"pid": e.pid, "start": e.start, "end": e.end} for e in result.trace],
        "metrics": metrics.to_dict(),
        "report": format_report(result, metrics),
    }


def create_app() -> Flask:
    """Create and configure the Flask application.

    Returns:
        A configured Flask application ready to serve.

    """
    app = Flask(__name__)

    @app.route("/")
    def index() -> str:  # pyright: ignore[reportUnusedFunction]
        """Render the HTML page."""
        example = json.dumps(EXAMPLE_CONFIG.to_dict(), indent=2)
        return render_template("index.html", example=example)

    @app.route("/api/simulate", methods=["POST"])
    def run() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Run the posted workload.

        Expects a JSON workload body (see ``rr_sim.config``).

        Returns:
            JSON with ``processes``, ``trace``, ``metrics`` and ``report``
            fields, or ``error`` with status 400.

        """
        data = request.get_json(silent=True)
        if data is None:
            return jsonify({"error": "Expected a JSON workload body"}), _HTTP_BAD_REQUEST
        try:
            config = SimulationConfig.from_dict(data)
        except ConfigError as e:
            return jsonify({"error": str(e)}), _HTTP_BAD_REQUEST
        app.logger.info("Simulating %d processes", len(config.processes))
        return jsonify(result_to_dict(simulate(config)))

    @app.route("/api/example")
    def example() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the example workload."""
        return jsonify(EXAMPLE_CONFIG.to_dict())

    return app


def main() -> None:
    """Run the web UI development server.

    This is the ``rr-sim-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
