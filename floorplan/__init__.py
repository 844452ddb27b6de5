"""Floorplan package — wall meshes extruded from building footprints."""

from floorplan.errors import InvalidPolygon
from floorplan.models import Mesh
from floorplan.geometry import (
    build_prism_mesh, displace, side_faces, face_normal, vertex_normals,
)
from floorplan.footprint import regular_polygon, ensure_ccw, is_ccw
from floorplan.builder import BuildingGenerator

__version__ = "0.1.0"
