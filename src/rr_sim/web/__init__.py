"""Browser-based UI and JSON API for rr-sim.

This package provides a Flask application around the simulator.  It is
an **optional** extra — install with::

    pip install rr-sim[web]

The ``create_app`` factory in ``app.py`` serves three endpoints:

- ``GET /`` — HTML page with a workload form.
- ``POST /api/simulate`` — run a workload and return JSON results.
- ``GET /api/example`` — a sample workload to start from.
"""
