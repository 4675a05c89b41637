"""
Topology cleanup after clipping.

Clipping leaves coincident points along domain and cut boundaries and can
produce collapsed cells. ``clean_mesh`` merges coincident points, drops
unused points and removes cells whose distinct points no longer span their
dimension; ``CleanGrid`` applies it to every domain of a dataset.
"""

from __future__ import annotations

import numpy as np
import pyvista as pv
from numpy.typing import NDArray

from domain_clip.data import PartitionedDataSet
from domain_clip.utils.clip_logging import get_logger

from .base import Filter

logger = get_logger(__name__)

# Minimum number of distinct points for a non-degenerate cell, by VTK cell type
_MIN_DISTINCT_POINTS = {
    pv.CellType.VERTEX: 1,
    pv.CellType.POLY_VERTEX: 1,
    pv.CellType.LINE: 2,
    pv.CellType.POLY_LINE: 2,
    pv.CellType.TRIANGLE: 3,
    pv.CellType.TRIANGLE_STRIP: 3,
    pv.CellType.POLYGON: 3,
    pv.CellType.PIXEL: 3,
    pv.CellType.QUAD: 3,
    pv.CellType.TETRA: 4,
    pv.CellType.VOXEL: 4,
    pv.CellType.HEXAHEDRON: 4,
    pv.CellType.WEDGE: 4,
    pv.CellType.PYRAMID: 4,
    pv.CellType.PENTAGONAL_PRISM: 4,
    pv.CellType.HEXAGONAL_PRISM: 4,
    pv.CellType.POLYHEDRON: 4,
}


def _degenerate_cells(grid: pv.UnstructuredGrid) -> NDArray[np.bool_]:
    sizes = np.diff(np.asarray(grid.cell_offsets))
    connectivity = np.asarray(grid.cell_connectivity)
    owner = np.repeat(np.arange(grid.n_cells), sizes)

    distinct = np.unique(np.stack([owner, connectivity], axis=1), axis=0)
    distinct_per_cell = np.bincount(distinct[:, 0], minlength=grid.n_cells)

    # Cell types without an entry are never flagged
    required = np.array([_MIN_DISTINCT_POINTS.get(int(t), 1) for t in grid.celltypes], dtype=int)
    return distinct_per_cell < required


def clean_mesh(mesh: pv.DataSet, tolerance: float = 0.0) -> pv.UnstructuredGrid:
    """
    Merge coincident points and drop unused points and degenerate cells.

    Args:
        mesh: Mesh to clean (left unmodified)
        tolerance: Absolute distance under which points are merged

    Returns:
        Cleaned ``UnstructuredGrid``; empty if the mesh has no cells
    """
    if mesh.n_cells == 0:
        return pv.UnstructuredGrid()

    grid = mesh if isinstance(mesh, pv.UnstructuredGrid) else mesh.cast_to_unstructured_grid()
    cleaned = grid.clean(tolerance=tolerance, remove_unused_points=True, produce_merge_map=False)

    degenerate = _degenerate_cells(cleaned)
    if np.any(degenerate):
        logger.debug(f"Removing {int(degenerate.sum())} degenerate cells")
        cleaned = cleaned.extract_cells(np.flatnonzero(~degenerate))
        for name in ("vtkOriginalPointIds", "vtkOriginalCellIds"):
            for attributes in (cleaned.point_data, cleaned.cell_data):
                if name in attributes:
                    attributes.remove(name)
    return cleaned


class CleanGrid(Filter):
    """
    Clean every domain of a ``PartitionedDataSet``.

    Domain ids and order are preserved; empty domains stay empty.
    """

    def __init__(self, tolerance: float = 0.0):
        super().__init__()
        if tolerance < 0:
            raise ValueError(f"tolerance must be non-negative, got {tolerance}")
        self.tolerance = float(tolerance)

    @property
    def name(self) -> str:
        return "CleanGrid"

    def do_execute(self) -> None:
        output = PartitionedDataSet()
        for mesh, domain_id in self._input:
            output.add_domain(clean_mesh(mesh, self.tolerance), domain_id)
        self._output = output
