# pathstep/config.py
"""
Configuration constants for pathstep.

Paths and tunables live here. A couple of them can be overridden from the
environment so scripts can point at another map directory or get more
verbose logs without code changes.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

# =============================================================================
# Paths
# =============================================================================

# Project root is parent of pathstep/
PROJECT_ROOT = Path(__file__).resolve().parents[1]

MAPS_DIR = Path(os.getenv("PATHSTEP_MAPS_DIR", str(PROJECT_ROOT / "maps")))
DEFAULT_MAP = MAPS_DIR / "basic_7x7.json"

# =============================================================================
# Search
# =============================================================================

# Expansions per animation frame when a render loop drives the search
DEFAULT_STEPS_PER_FRAME = 5

# Nearest-neighbor upscaling factors used by the stress benchmark
BENCH_SCALE_FACTORS = (1, 2, 3, 4, 5, 6, 7, 8)

# =============================================================================
# Logging
# =============================================================================

LOG_LEVEL = os.getenv("PATHSTEP_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: Optional[Union[str, int]] = None) -> None:
    """Set up root logging once for scripts."""
    if level is None:
        level = LOG_LEVEL
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
