"""Footprint helpers: coercion, winding, diagnostics and corner generation.

A footprint is an ordered ring of 3D corners; the last corner connects
back to the first.  Winding is measured about the up axis with the
right-hand rule: a footprint is counter-clockwise when its corners turn
anticlockwise as seen from the tip of ``up`` looking down.  Only
counter-clockwise footprints get outward-facing walls when extruded along
``up``; extruding the other way (negative height) needs the reverse winding.
"""

import logging
import math
import pathlib
from typing import List, Optional, Tuple

import numpy as np
import trimesh
from pydantic import BaseModel, ValidationError
from shapely.geometry import LinearRing, Polygon
from shapely.validation import explain_validity

from .constants import UP, FORWARD, MIN_CORNER_COUNT, DEFAULT_NAME
from .errors import InvalidPolygon

logger = logging.getLogger(__name__)


# ── Coercion ────────────────────────────────────────────────────────────

def as_points(points) -> np.ndarray:
    """Coerce a sequence of 3D points to an ``(n, 3)`` float64 array.

    An empty sequence gives an empty ``(0, 3)`` array.  Anything that is
    not a list of 3-component finite coordinates raises InvalidPolygon.
    """
    try:
        arr = np.asarray(points, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidPolygon(f"Footprint corners are not numeric: {e}") from e

    if arr.size == 0:
        return np.zeros((0, 3), dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise InvalidPolygon(
            f"Footprint corners must be 3D points, got array of shape {arr.shape}",
            count=len(arr) if arr.ndim else 0)
    if not np.isfinite(arr).all():
        raise InvalidPolygon("Footprint contains non-finite coordinates",
                             count=len(arr))
    return arr


def unit_vector(direction) -> np.ndarray:
    """Normalise ``direction``; a zero vector raises ValueError."""
    vec = np.asarray(direction, dtype=np.float64).reshape(3)
    if not np.isfinite(vec).all() or np.linalg.norm(vec) < 1e-12:
        raise ValueError(f"Direction must be a non-zero finite vector, got {vec.tolist()}")
    return trimesh.util.unitize(vec)


# ── Plane projection ────────────────────────────────────────────────────

def plane_basis(up=UP) -> Tuple[np.ndarray, np.ndarray]:
    """Return in-plane axes ``(forward, right)`` with ``forward x right == up``.

    ``forward`` is +Z with its ``up`` component removed, or +X when ``up``
    is parallel to Z.  For the default Y-up axis this gives forward=+Z,
    right=+X.
    """
    u = unit_vector(up)
    forward = np.asarray(FORWARD, dtype=np.float64)
    forward = forward - np.dot(forward, u) * u
    if np.linalg.norm(forward) < 1e-9:
        forward = np.array([1.0, 0.0, 0.0]) - u[0] * u
    forward = trimesh.util.unitize(forward)
    right = np.cross(u, forward)
    return forward, right


def project_to_plane(points, up=UP) -> np.ndarray:
    """Project corners onto the plane perpendicular to ``up`` as 2D coords."""
    pts = as_points(points)
    forward, right = plane_basis(up)
    return np.column_stack([pts @ forward, pts @ right])


# ── Winding ─────────────────────────────────────────────────────────────

def signed_area(points, up=UP) -> float:
    """Area of the footprint projected along ``up``.

    Positive for counter-clockwise footprints, negative for clockwise,
    0.0 for fewer than three corners or a collapsed ring.
    """
    coords = project_to_plane(points, up)
    if len(coords) < 3:
        return 0.0
    area = Polygon(coords).area
    if area == 0.0:
        return 0.0
    return area if LinearRing(coords).is_ccw else -area


def is_ccw(points, up=UP) -> bool:
    """True if the footprint winds counter-clockwise about ``up``."""
    return signed_area(points, up) > 0


def ensure_ccw(points, up=UP) -> np.ndarray:
    """Return the corners wound counter-clockwise about ``up``.

    Clockwise footprints are reversed; the first corner stays first so
    the result still starts where the caller's footprint started.
    """
    pts = as_points(points)
    if signed_area(pts, up) < 0:
        logger.debug(f"Reversing clockwise footprint with {len(pts)} corners")
        return np.concatenate([pts[:1], pts[:0:-1]])
    return pts


# ── Diagnostics ─────────────────────────────────────────────────────────

def validity_issues(points, up=UP) -> List[str]:
    """List warning-level problems with a footprint.  Never raises.

    Reports coincident consecutive corners, a footprint with no area
    across ``up`` and self-intersections.  None of these stop a build;
    they produce degenerate or overlapping walls.
    """
    try:
        pts = as_points(points)
        coords = project_to_plane(pts, up)
    except ValueError as e:
        return [str(e)]

    issues = []
    n = len(pts)
    if n < MIN_CORNER_COUNT:
        issues.append(f"Footprint has {n} corners, at least {MIN_CORNER_COUNT} required")
        return issues

    steps = np.linalg.norm(np.roll(pts, -1, axis=0) - pts, axis=1)
    for i in np.flatnonzero(steps < 1e-9):
        issues.append(f"Corners {i} and {(i + 1) % n} coincide")

    poly = Polygon(coords)
    if poly.area < 1e-12:
        issues.append("Footprint has zero area when viewed along the up axis")
    if not poly.is_valid:
        issues.append(f"Footprint is not simple: {explain_validity(poly)}")
    return issues


# ── Corner generation ───────────────────────────────────────────────────

def regular_polygon(count: int, radius: float,
                    center=(0.0, 0.0, 0.0), up=UP) -> np.ndarray:
    """Place ``count`` corners evenly on a circle around ``center``.

    Corner ``i`` sits at angle ``360 * i / count`` degrees, starting at
    ``forward * radius`` (see :func:`plane_basis`) and turning right-handed
    about ``up``.  With the default Y-up axis that is
    ``center + (r sin a, 0, r cos a)``.  The ring is counter-clockwise,
    so extruding it along ``up`` gives outward walls.
    """
    if count < MIN_CORNER_COUNT:
        raise InvalidPolygon(
            f"A footprint needs at least {MIN_CORNER_COUNT} corners, got {count}",
            count=count)
    if not radius > 0:
        raise ValueError(f"Radius must be positive, got {radius}")

    forward, right = plane_basis(up)
    angles = np.arange(count) * (2.0 * math.pi / count)
    offsets = (np.outer(np.cos(angles), forward) +
               np.outer(np.sin(angles), right)) * radius
    return np.asarray(center, dtype=np.float64).reshape(1, 3) + offsets


# ── Footprint files ─────────────────────────────────────────────────────

class FootprintFile(BaseModel):
    corners: List[Tuple[float, float, float]]
    height: Optional[float] = None
    up: Tuple[float, float, float] = UP
    name: str = DEFAULT_NAME


def load_footprint(path) -> FootprintFile:
    """Read a JSON footprint file.

    Expected layout::

        {"corners": [[x, y, z], ...], "height": 10.0, "up": [0, 1, 0]}

    ``height``, ``up`` and ``name`` are optional.  Malformed files raise
    InvalidPolygon; a missing file raises FileNotFoundError.
    """
    path = pathlib.Path(path)
    text = path.read_text(encoding="utf-8")
    try:
        footprint = FootprintFile.model_validate_json(text)
    except ValidationError as e:
        raise InvalidPolygon(f"Invalid footprint file {path}: {e}") from e
    logger.info(f"Loaded footprint {path.name}: {len(footprint.corners)} corners")
    return footprint
