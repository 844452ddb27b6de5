"""Prism extrusion of building footprints.

A footprint ring of ``n`` corners is copied along the up axis and the two
rings are joined by ``n`` wall quads, each split into two triangles.  The
vertex buffer always holds the base ring first and the displaced ring
second, so displaced corner ``i`` lives at row ``i + n``; the index math
in :func:`side_faces` relies on that layout.

No roof or floor caps are generated: the prism is open top and bottom.
"""

import logging
import math

import numpy as np
import trimesh

from .constants import UP, DEFAULT_NAME, DEGENERATE_AREA_TOL, MIN_CORNER_COUNT
from .errors import InvalidPolygon
from .footprint import as_points, ensure_ccw, signed_area
from .models import Mesh

logger = logging.getLogger(__name__)


# ── Vertex displacement ─────────────────────────────────────────────────

def displace(vertices, height: float, direction=UP) -> np.ndarray:
    """Translate every vertex by ``direction * height``.

    Order is preserved 1:1.  ``direction`` is used as given (not
    normalised) and a negative ``height`` moves the copy the other way.
    An empty input gives an empty ``(0, 3)`` array.
    """
    pts = np.asarray(vertices, dtype=np.float64).reshape(-1, 3)
    offset = np.asarray(direction, dtype=np.float64).reshape(3) * height
    return pts + offset


# ── Side faces ──────────────────────────────────────────────────────────

def side_faces(n: int) -> np.ndarray:
    """Flat triangle indices for the walls of an ``n``-corner prism.

    For each base corner ``i`` with ``j = (i + 1) % n`` this emits
    ``(i, j, i + n)`` and ``(i + n, j, j + n)``: 6 indices per wall,
    ``6 * n`` in total.  Walls face outward when the footprint winds
    counter-clockwise about the displacement direction.

    ``n < 3`` is not rejected here; it gives degenerate walls (or nothing
    for ``n <= 0``).
    """
    i = np.arange(max(n, 0), dtype=np.int64)
    if len(i) == 0:
        return np.zeros(0, dtype=np.int64)
    j = (i + 1) % n
    return np.column_stack([i, j, i + n,
                            i + n, j, j + n]).reshape(-1)


# ── Normals ─────────────────────────────────────────────────────────────

def face_normal(a, b, c) -> np.ndarray:
    """Cross product ``(b - a) x (c - a)``.

    Not normalised: its length is twice the triangle's area, and it is
    the zero vector for collinear or coincident points.
    """
    a = np.asarray(a, dtype=np.float64)
    return np.cross(np.asarray(b, dtype=np.float64) - a,
                    np.asarray(c, dtype=np.float64) - a)


def face_normals(vertices, indices) -> np.ndarray:
    """Unnormalised normals for every triangle in a flat index buffer."""
    verts = np.asarray(vertices, dtype=np.float64).reshape(-1, 3)
    faces = np.asarray(indices, dtype=np.int64).reshape(-1, 3)
    tri = verts[faces]
    return np.cross(tri[:, 1] - tri[:, 0], tri[:, 2] - tri[:, 0])


def vertex_normals(vertices, indices) -> np.ndarray:
    """Area-weighted unit normals per vertex.

    Each vertex gets the sum of the unnormalised normals of the faces
    that use it, so larger faces weigh more.  Vertices touched only by
    zero-area faces (or by none) get the zero vector.
    """
    verts = np.asarray(vertices, dtype=np.float64).reshape(-1, 3)
    faces = np.asarray(indices, dtype=np.int64).reshape(-1, 3)
    summed = np.zeros_like(verts)
    if len(faces):
        normals = face_normals(verts, faces)
        for corner in range(3):
            np.add.at(summed, faces[:, corner], normals)
    return trimesh.util.unitize(summed)


def degenerate_faces(vertices, indices, tol: float = DEGENERATE_AREA_TOL) -> np.ndarray:
    """Indices of triangles whose doubled area is at most ``tol``."""
    normals = face_normals(vertices, indices)
    return np.flatnonzero(np.linalg.norm(normals, axis=1) <= tol)


# ── Mesh assembly ───────────────────────────────────────────────────────

def build_prism_mesh(base_polygon, height: float, up=UP,
                     material=None, name: str = DEFAULT_NAME,
                     orient: bool = False) -> Mesh:
    """Extrude a footprint into an open-ended prism of wall triangles.

    Parameters
    ----------
    base_polygon : sequence of (x, y, z)
        Footprint corners in ring order, at least three.
    height : float
        Extrusion distance along ``up``.  Negative heights extrude the
        other way, which turns the walls inside out.
    up : (x, y, z)
        Displacement direction, used as given.
    material : any
        Passed through to the returned Mesh untouched.
    name : str
        Name of the resulting object.
    orient : bool
        Reverse footprints that wind clockwise about the extrusion
        direction (``up`` flipped for negative heights) so the walls always
        face outward.  Off by default: such footprints then give
        inward-facing walls and a warning is logged.

    Returns
    -------
    Mesh with ``2n`` vertices and ``6n`` triangle indices.

    Raises
    ------
    InvalidPolygon
        Fewer than three corners, or corners that are not 3D points.
    ValueError
        Non-finite height or a zero ``up`` vector.
    """
    pts = as_points(base_polygon)
    n = len(pts)
    if n < MIN_CORNER_COUNT:
        raise InvalidPolygon(
            f"A footprint needs at least {MIN_CORNER_COUNT} corners, got {n}",
            count=n)
    if not math.isfinite(height):
        raise ValueError(f"Height must be finite, got {height}")

    # Walls face outward when the footprint winds counter-clockwise about
    # the direction the copy actually moves in, i.e. up * sign(height).
    extrusion = np.asarray(up, dtype=np.float64) * (-1.0 if height < 0 else 1.0)
    if signed_area(pts, extrusion) < 0:
        if orient:
            pts = ensure_ccw(pts, extrusion)
        else:
            logger.warning(f"Footprint of '{name}' is clockwise about the extrusion "
                           f"direction; walls will face inward")
    if height < 0:
        logger.debug(f"Negative height {height} for '{name}': extruding downward")

    displaced = displace(pts, height, up)
    indices = side_faces(n)
    vertices = np.concatenate([pts, displaced])
    normals = vertex_normals(vertices, indices)

    degenerate = degenerate_faces(vertices, indices)
    if len(degenerate):
        logger.warning(f"'{name}' has {len(degenerate)} zero-area wall triangle(s): "
                       f"{degenerate.tolist()}")

    logger.debug(f"Built '{name}': {len(vertices)} vertices, "
                 f"{len(indices) // 3} triangles")
    return Mesh(vertices=vertices, indices=indices, normals=normals,
                material=material, name=name)
