"""BuildingGenerator: explicit regenerate command over a held footprint."""

import logging
from typing import Optional

import numpy as np

from .constants import (UP, DEFAULT_HEIGHT, DEFAULT_RADIUS,
                        DEFAULT_CORNER_COUNT, DEFAULT_NAME)
from .export import export_mesh
from .footprint import as_points, regular_polygon, validity_issues
from .geometry import build_prism_mesh
from .models import Mesh, PathManager

logger = logging.getLogger(__name__)


class BuildingGenerator:
    """Hold a footprint and a height, and rebuild the wall mesh on request.

    Each call to :meth:`regenerate` produces a brand new Mesh and drops
    the previous one; nothing is shared between builds.
    """

    def __init__(self, height: float = DEFAULT_HEIGHT, corners=None,
                 material=None, up=UP, name: str = DEFAULT_NAME,
                 orient: bool = False):
        """
        height: extrusion height along ``up``.
        corners: initial footprint; use generate_corners() when omitted.
        material: passed through to every generated Mesh.
        orient: reverse footprints that would give inward walls.
        """
        self.height = height
        self.corners = as_points(corners if corners is not None else [])
        self.material = material
        self.up = up
        self.name = name
        self.orient = orient
        self.last_mesh: Optional[Mesh] = None

    def generate_corners(self, count: int = DEFAULT_CORNER_COUNT,
                         radius: float = DEFAULT_RADIUS,
                         center=(0.0, 0.0, 0.0)) -> np.ndarray:
        """Replace the footprint with ``count`` corners on a circle."""
        self.corners = regular_polygon(count, radius, center=center, up=self.up)
        logger.info(f"Generated {count} corners at radius {radius}")
        return self.corners

    def regenerate(self, footprint=None, height: Optional[float] = None) -> Mesh:
        """Build a fresh mesh, replacing the previous one.

        ``footprint`` and ``height`` override the held values for this
        call only.  Raises InvalidPolygon for footprints with fewer than
        three corners.
        """
        corners = self.corners if footprint is None else as_points(footprint)
        height = self.height if height is None else height

        for issue in validity_issues(corners, self.up):
            logger.warning(f"{self.name}: {issue}")

        self.last_mesh = None
        mesh = build_prism_mesh(corners, height, up=self.up,
                                material=self.material, name=self.name,
                                orient=self.orient)
        self.last_mesh = mesh
        logger.info(f"Regenerated '{self.name}': {mesh.vertex_count} vertices, "
                    f"{mesh.triangle_count} triangles")
        return mesh

    def export(self, output_path=None, file_type: Optional[str] = None) -> str:
        """Write the last generated mesh, regenerating first if needed.

        Without ``output_path`` the file goes to ``OUTPUT_DIR/<name>.glb``.
        """
        if self.last_mesh is None:
            self.regenerate()
        if output_path is None:
            output_path = PathManager.get_output_path(f"{self.name.lower()}.glb")
        return export_mesh(self.last_mesh, output_path, file_type=file_type)
