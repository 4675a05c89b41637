"""
Clip filter.

Cuts every domain of a ``PartitionedDataSet`` with one implicit surface and
reassembles the results under the original domain ids, then cleans the
assembled topology.

Example:
    >>> clip = Clip()
    >>> clip.set_2plane_clip([0.5, 0.5, 0.5], [1, 0, 0], [0.5, 0.5, 0.5], [0, 1, 0])
    >>> clip.set_input(dataset)
    >>> wedge = clip.update()
"""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

import numpy as np
import pyvista as pv
from numpy.typing import NDArray

from domain_clip.config import ClipConfig
from domain_clip.data import PartitionedDataSet
from domain_clip.geometry.implicit import Box, ImplicitFunction, MultiPlane, Plane, Sphere
from domain_clip.utils.clip_logging import (
    get_domain_logger,
    get_logger,
    log_filter_configuration,
    log_performance_metric,
)
from domain_clip.utils.exceptions import ClipExecutionError, FilterStateError, GeometryContractError, validate_vector3

from .base import Filter
from .clean_grid import CleanGrid
from .clip_mesh import clip_mesh
from .field_selection import FieldSelection

if TYPE_CHECKING:
    from collections.abc import Callable

    from domain_clip.config import ClipSurfaceSpec

logger = get_logger(__name__)


class Clip(Filter):
    """
    Clip a multi-domain dataset with a box, sphere, plane or 2/3-plane corner.

    Each ``set_*_clip`` call replaces the active surface. The surface and the
    invert flag are read once at the start of ``update`` and shared read-only
    by every domain; reconfiguring while a run is in flight is not supported.
    """

    def __init__(self, config: ClipConfig | None = None):
        super().__init__()
        self._function: ImplicitFunction | None = None
        self._invert = False
        self.max_workers = 1
        self.clean_output = True
        self.merge_tolerance = 0.0
        if config is not None:
            self.apply_config(config)

    @property
    def name(self) -> str:
        return "Clip"

    @property
    def implicit_function(self) -> ImplicitFunction | None:
        return self._function

    @property
    def invert(self) -> bool:
        return self._invert

    # ------------------------------------------------------------------
    # Configuration surface
    # ------------------------------------------------------------------

    def set_invert_clip(self, invert: bool) -> None:
        self._invert = bool(invert)

    def set_implicit_function(self, function: ImplicitFunction) -> None:
        if not isinstance(function, ImplicitFunction):
            raise TypeError(f"Expected an ImplicitFunction, got {type(function).__name__}")
        self._function = function

    def set_box_clip(self, bounds: NDArray | list | tuple) -> None:
        """Clip to a box given as (xmin, xmax, ymin, ymax, zmin, zmax)."""
        self._function = Box.from_bounds(bounds)

    def set_sphere_clip(self, center: NDArray | list, radius: float) -> None:
        self._function = Sphere(center, radius)

    def set_plane_clip(self, origin: NDArray | list, normal: NDArray | list) -> None:
        self._function = Plane(origin, normal)

    def set_2plane_clip(
        self,
        origin1: NDArray | list,
        normal1: NDArray | list,
        origin2: NDArray | list,
        normal2: NDArray | list,
    ) -> None:
        """Clip to the intersection of two half-spaces. The third slot is zeroed."""
        points = np.zeros((3, 3))
        normals = np.zeros((3, 3))
        points[0] = validate_vector3(origin1, "origin1", self.name)
        points[1] = validate_vector3(origin2, "origin2", self.name)
        normals[0] = self._unit_normal(normal1, "normal1")
        normals[1] = self._unit_normal(normal2, "normal2")
        self._function = MultiPlane(points, normals, num_planes=2)

    def set_3plane_clip(
        self,
        origin1: NDArray | list,
        normal1: NDArray | list,
        origin2: NDArray | list,
        normal2: NDArray | list,
        origin3: NDArray | list,
        normal3: NDArray | list,
    ) -> None:
        """Clip to the intersection of three half-spaces."""
        points = np.array(
            [
                validate_vector3(origin1, "origin1", self.name),
                validate_vector3(origin2, "origin2", self.name),
                validate_vector3(origin3, "origin3", self.name),
            ]
        )
        normals = np.array(
            [
                self._unit_normal(normal1, "normal1"),
                self._unit_normal(normal2, "normal2"),
                self._unit_normal(normal3, "normal3"),
            ]
        )
        self._function = MultiPlane(points, normals, num_planes=3)

    def _unit_normal(self, normal: NDArray | list, name: str) -> NDArray[np.float64]:
        vec = validate_vector3(normal, name, self.name)
        length = np.linalg.norm(vec)
        if length == 0.0:
            raise GeometryContractError(name, normal, "normal must be non-zero", filter_name=self.name)
        return vec / length

    def apply_config(self, config: ClipConfig) -> None:
        """Apply invert flag, execution options and (if given) the surface."""
        self.set_invert_clip(config.invert)
        self.max_workers = config.max_workers
        self.clean_output = config.clean_output
        self.merge_tolerance = config.merge_tolerance
        if config.surface is not None:
            self._surface_dispatch()[config.surface.kind](config.surface)

    def _surface_dispatch(self) -> dict[str, Callable[[ClipSurfaceSpec], None]]:
        return {
            "box": lambda spec: self.set_box_clip(spec.bounds),
            "sphere": lambda spec: self.set_sphere_clip(spec.center, spec.radius),
            "plane": lambda spec: self.set_plane_clip(spec.origin, spec.normal),
            "multi_plane": self._apply_multi_plane_spec,
        }

    def _apply_multi_plane_spec(self, spec) -> None:
        pairs = [value for pair in zip(spec.origins, spec.normals) for value in pair]
        if len(spec.origins) == 2:
            self.set_2plane_clip(*pairs)
        else:
            self.set_3plane_clip(*pairs)

    @classmethod
    def from_config(cls, config: ClipConfig) -> Clip:
        return cls(config)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def pre_execute(self) -> None:
        super().pre_execute()
        if self._function is None:
            raise FilterStateError(
                "update",
                filter_name=self.name,
                filter_state="no_clip_surface",
                suggested_action="Call one of set_box_clip/set_sphere_clip/set_plane_clip/"
                "set_2plane_clip/set_3plane_clip before update()",
            )
        log_filter_configuration(
            logger,
            self.name,
            {
                "surface": self._function,
                "invert": self._invert,
                "domains": self._input.num_domains,
                "max_workers": self.max_workers,
                "clean_output": self.clean_output,
            },
        )

    def _clip_domain(
        self,
        index: int,
        function: ImplicitFunction,
        invert: bool,
        selection: FieldSelection,
    ) -> pv.DataSet:
        mesh, domain_id = self._input.get_domain(index)
        domain_logger = get_domain_logger(logger, domain_id)
        try:
            clipped = clip_mesh(mesh, function, invert, selection)
        except Exception as e:
            domain_logger.error(f"clip failed at index {index}: {e}")
            raise ClipExecutionError(domain_id, index, e, filter_name=self.name) from e
        domain_logger.debug(f"{mesh.n_cells} -> {clipped.n_cells} cells")
        return clipped

    def do_execute(self) -> None:
        function, invert = self._function, self._invert
        selection = self.get_field_selection()
        num_domains = self._input.num_domains
        start = time.perf_counter()

        results: list[pv.DataSet | None] = [None] * num_domains
        if self.max_workers <= 1 or num_domains <= 1:
            for i in range(num_domains):
                results[i] = self._clip_domain(i, function, invert, selection)
        else:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, num_domains)) as executor:
                futures = [executor.submit(self._clip_domain, i, function, invert, selection) for i in range(num_domains)]
                try:
                    for i, future in enumerate(futures):
                        results[i] = future.result()
                except BaseException:
                    for future in futures:
                        future.cancel()
                    raise

        clipped = PartitionedDataSet()
        for i, mesh in enumerate(results):
            clipped.add_domain(mesh, self._input.get_domain(i)[1])

        log_performance_metric(
            logger,
            "clip",
            time.perf_counter() - start,
            {"domains": num_domains, "cells_in": self._input.num_cells, "cells_out": clipped.num_cells},
        )

        if self.clean_output:
            cleaner = CleanGrid(tolerance=self.merge_tolerance)
            cleaner.set_input(clipped)
            self._output = cleaner.update()
        else:
            self._output = clipped
