"""Allow ``python -m rr_sim``."""

import sys

from rr_sim.repl import run

sys.exit(run())
