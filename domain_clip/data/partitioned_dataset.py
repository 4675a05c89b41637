"""
Multi-domain dataset container.

A ``PartitionedDataSet`` holds the subdomains of a distributed mesh as
``(mesh, domain_id)`` pairs, in insertion order. Domain ids are opaque
integers supplied by the decomposition; they are not required to be sorted
or contiguous.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import numpy as np
import pyvista as pv


class PartitionedDataSet:
    """
    Ordered collection of pyvista meshes keyed by domain id.

    Example:
        >>> dataset = PartitionedDataSet()
        >>> dataset.add_domain(pv.Cube().cast_to_unstructured_grid(), domain_id=7)
        >>> dataset.num_domains
        1
        >>> mesh, domain_id = dataset.get_domain(0)
    """

    def __init__(self, domains: Iterable[tuple[pv.DataSet, int]] | None = None):
        self._meshes: list[pv.DataSet] = []
        self._domain_ids: list[int] = []
        for mesh, domain_id in domains or ():
            self.add_domain(mesh, domain_id)

    def add_domain(self, mesh: pv.DataSet, domain_id: int) -> None:
        """Append a domain."""
        if not isinstance(mesh, pv.DataSet):
            raise TypeError(f"Domain mesh must be a pyvista.DataSet, got {type(mesh).__name__}")
        self._meshes.append(mesh)
        self._domain_ids.append(int(domain_id))

    def get_domain(self, index: int) -> tuple[pv.DataSet, int]:
        """Return ``(mesh, domain_id)`` for the domain at ``index``."""
        if not 0 <= index < len(self._meshes):
            raise IndexError(f"Domain index {index} out of range for {len(self._meshes)} domains")
        return self._meshes[index], self._domain_ids[index]

    def get_domain_by_id(self, domain_id: int) -> pv.DataSet:
        """Return the first mesh stored under ``domain_id``."""
        for mesh, did in zip(self._meshes, self._domain_ids):
            if did == domain_id:
                return mesh
        raise KeyError(f"No domain with id {domain_id}")

    def has_domain(self, domain_id: int) -> bool:
        return domain_id in self._domain_ids

    @property
    def num_domains(self) -> int:
        return len(self._meshes)

    @property
    def domain_ids(self) -> list[int]:
        return list(self._domain_ids)

    def __len__(self) -> int:
        return len(self._meshes)

    def __iter__(self) -> Iterator[tuple[pv.DataSet, int]]:
        return iter(zip(self._meshes, self._domain_ids))

    @property
    def num_cells(self) -> int:
        return sum(mesh.n_cells for mesh in self._meshes)

    @property
    def num_points(self) -> int:
        return sum(mesh.n_points for mesh in self._meshes)

    def is_empty(self) -> bool:
        """True when no domain holds any cell."""
        return self.num_cells == 0

    def get_bounds(self) -> tuple[float, float, float, float, float, float] | None:
        """
        Union of the bounds of all non-empty domains.

        Returns:
            (xmin, xmax, ymin, ymax, zmin, zmax), or None if every domain is empty
        """
        boxes = [np.asarray(mesh.bounds, dtype=float).reshape(3, 2) for mesh in self._meshes if mesh.n_points > 0]
        if not boxes:
            return None
        stacked = np.array(boxes)
        bounds = np.stack([stacked[:, :, 0].min(axis=0), stacked[:, :, 1].max(axis=0)], axis=1)
        return tuple(float(v) for v in bounds.ravel())

    def field_names(self) -> set[str]:
        """Names of point and cell arrays present on any domain."""
        names: set[str] = set()
        for mesh in self._meshes:
            names.update(mesh.point_data.keys())
            names.update(mesh.cell_data.keys())
        return names

    def to_multiblock(self) -> pv.MultiBlock:
        """Pack the domains into a ``pyvista.MultiBlock`` named ``domain_<id>``."""
        blocks = pv.MultiBlock()
        for mesh, domain_id in self:
            blocks.append(mesh, f"domain_{domain_id}")
        return blocks

    def __repr__(self) -> str:
        return f"PartitionedDataSet(domains={self.num_domains}, cells={self.num_cells})"
