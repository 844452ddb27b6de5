"""Configuration constants, axis conventions and paths."""

import os
import pathlib

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name, "").strip()
    return float(value) if value else default


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name, "").strip()
    return int(value) if value else default


# ── Axis conventions ─────────────────────────────────────────────────────
# Y-up, right-handed. Footprints wound counter-clockwise about UP get
# outward-facing walls.
UP = (0.0, 1.0, 0.0)
FORWARD = (0.0, 0.0, 1.0)

# ── Building defaults ────────────────────────────────────────────────────
DEFAULT_HEIGHT = _env_float("FLOORPLAN_HEIGHT", 10.0)        # metres
DEFAULT_RADIUS = _env_float("FLOORPLAN_RADIUS", 10.0)        # metres
DEFAULT_CORNER_COUNT = _env_int("FLOORPLAN_CORNERS", 5)
MIN_CORNER_COUNT = 3
MAX_CORNER_COUNT = 30
DEFAULT_NAME = "Building"

# Faces whose doubled area is below this are reported as degenerate
DEGENERATE_AREA_TOL = 1e-12

# ── Paths ────────────────────────────────────────────────────────────────
BASE_DIR = pathlib.Path(__file__).parent.parent.absolute()
OUTPUT_DIR = pathlib.Path(os.environ.get("FLOORPLAN_OUTPUT_DIR", BASE_DIR / "output"))

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s: %(message)s"
