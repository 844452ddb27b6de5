"""Data classes and path management."""

import pathlib
from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np

from .constants import OUTPUT_DIR, DEFAULT_NAME


class PathManager:
    """Manage paths for generated building files."""

    @staticmethod
    def get_output_path(filename: str) -> pathlib.Path:
        """Get the output file path."""
        return OUTPUT_DIR / filename


@dataclass(frozen=True, eq=False)
class Mesh:
    """Triangle mesh of a building's walls.

    ``vertices`` holds the base ring followed by the displaced ring, so
    base corner ``i`` sits at row ``i`` and its displaced copy at row
    ``i + n``.  ``indices`` is the flat triangle-index buffer (three
    entries per triangle).  ``normals`` are unit per-vertex normals.

    The arrays are made read-only on construction; build a new Mesh
    instead of editing one.  ``material`` is carried along untouched.
    """
    vertices: np.ndarray
    indices: np.ndarray
    normals: np.ndarray
    material: Any = None
    name: str = DEFAULT_NAME
    _ring_size: int = field(default=0, init=False, repr=False)

    def __post_init__(self):
        vertices = np.array(self.vertices, dtype=np.float64).reshape(-1, 3)
        indices = np.array(self.indices, dtype=np.int64).reshape(-1)
        normals = np.array(self.normals, dtype=np.float64).reshape(-1, 3)
        for arr in (vertices, indices, normals):
            arr.flags.writeable = False
        object.__setattr__(self, 'vertices', vertices)
        object.__setattr__(self, 'indices', indices)
        object.__setattr__(self, 'normals', normals)
        object.__setattr__(self, '_ring_size', len(vertices) // 2)

    @property
    def faces(self) -> np.ndarray:
        """Triangles as an ``(m, 3)`` index array."""
        return self.indices.reshape(-1, 3)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    @property
    def base_ring(self) -> np.ndarray:
        """The footprint corners, in input order."""
        return self.vertices[:self._ring_size]

    @property
    def top_ring(self) -> np.ndarray:
        """The displaced corners, aligned 1:1 with ``base_ring``."""
        return self.vertices[self._ring_size:]

    @property
    def bounds(self) -> Optional[np.ndarray]:
        """``[[min_x, min_y, min_z], [max_x, max_y, max_z]]`` or None if empty."""
        if len(self.vertices) == 0:
            return None
        return np.array([self.vertices.min(axis=0), self.vertices.max(axis=0)])

    def __eq__(self, other):
        if not isinstance(other, Mesh):
            return NotImplemented
        return (np.array_equal(self.vertices, other.vertices) and
                np.array_equal(self.indices, other.indices) and
                np.array_equal(self.normals, other.normals) and
                self.name == other.name)

    def __repr__(self) -> str:
        return (f"Mesh(name={self.name!r}, vertices={self.vertex_count}, "
                f"triangles={self.triangle_count})")
