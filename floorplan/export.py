"""Conversion of building meshes to trimesh objects and files.

Usage:
    from floorplan.export import export_mesh
    export_mesh(mesh, "output/building.glb")
"""

import logging
import pathlib
from typing import Optional

import numpy as np
import trimesh

from .models import Mesh

logger = logging.getLogger(__name__)


def _material_for(material):
    """Resolve a Mesh's pass-through material into a trimesh material.

    Trimesh materials are used as-is, an RGB(A) sequence becomes a
    double-sided PBR material (components in 0-1), anything else is
    ignored.
    """
    if material is None or isinstance(material, (str, bytes)):
        return None
    if isinstance(material, trimesh.visual.material.Material):
        return material
    try:
        color = [float(c) for c in material]
    except (TypeError, ValueError):
        logger.debug(f"Ignoring material of type {type(material).__name__}")
        return None
    if len(color) == 3:
        color.append(1.0)
    if len(color) != 4:
        logger.debug(f"Ignoring colour with {len(color)} components")
        return None
    if not all(0.0 <= c <= 1.0 for c in color):
        logger.debug(f"Ignoring colour outside 0-1: {color}")
        return None
    return trimesh.visual.material.PBRMaterial(
        baseColorFactor=color,
        doubleSided=True,
    )


def to_trimesh(mesh: Mesh) -> trimesh.Trimesh:
    """Build a trimesh.Trimesh that keeps the mesh's vertex order and normals."""
    result = trimesh.Trimesh(
        vertices=np.array(mesh.vertices, dtype=np.float64),
        faces=np.array(mesh.faces, dtype=np.int64),
        vertex_normals=np.array(mesh.normals, dtype=np.float64),
        process=False,
    )
    material = _material_for(mesh.material)
    if material is not None:
        result.visual = trimesh.visual.TextureVisuals(material=material)
    result.metadata['name'] = mesh.name
    return result


def export_mesh(mesh: Mesh, output_path, file_type: Optional[str] = None) -> str:
    """Write ``mesh`` to ``output_path`` (GLB, OBJ, STL, PLY, ...).

    The format follows the file extension unless ``file_type`` is given.
    Missing parent directories are created.
    """
    output_path = pathlib.Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    file_type = (file_type or output_path.suffix.lstrip('.')).lower()
    if not file_type:
        raise ValueError(f"Cannot infer export format from {output_path}")

    tm = to_trimesh(mesh)
    if file_type == 'glb':
        # Scenes keep the geometry name in the exported node
        scene = trimesh.Scene()
        scene.add_geometry(tm, geom_name=mesh.name)
        scene.export(str(output_path), file_type=file_type)
    else:
        tm.export(str(output_path), file_type=file_type)

    logger.info(f"Exported '{mesh.name}' ({mesh.triangle_count} triangles) "
                f"to {output_path}")
    return str(output_path)
