"""
Axis-Aligned Box Clip Surface

Box: all points between a minimum and a maximum corner
    D = {x ∈ ℝ³ : min_i ≤ x_i ≤ max_i}

Signed distance function (exact):
    q = |x - c| - h          (c = center, h = half extents)
    φ(x) = ||max(q, 0)|| + min(max_i q_i, 0)
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from domain_clip.utils.exceptions import GeometryContractError, validate_vector3

from .implicit_function import ImplicitFunction, ImplicitFunctionType


class Box(ImplicitFunction):
    """
    Axis-aligned box.

    Outside the box the value is the Euclidean distance to the box; inside it
    is minus the distance to the nearest face. The gradient is the outward unit
    direction: the nearest face normal inside, the direction from the closest
    box point outside. Ties between faces go to the lowest axis.

    Example:
        >>> box = Box([0, 0, 0], [1, 1, 1])
        >>> box.value([0.5, 0.5, 0.5])   # -0.5
        >>> box.value([2.0, 0.5, 0.5])   #  1.0
        >>> box.gradient([0.9, 0.5, 0.5])  # [1, 0, 0]
    """

    def __init__(self, min_point: NDArray | list, max_point: NDArray | list):
        super().__init__()
        self._min_point, self._max_point = self._check_corners(min_point, max_point)

    @classmethod
    def from_bounds(cls, bounds: NDArray | list | tuple) -> Box:
        """
        Build a box from bounds.

        Args:
            bounds: Either (xmin, xmax, ymin, ymax, zmin, zmax), the ordering
                used by ``pyvista.DataSet.bounds``, or an array of shape (3, 2)
                where bounds[i] = [min_i, max_i]
        """
        arr = np.asarray(bounds, dtype=np.float64)
        if arr.shape == (6,):
            arr = arr.reshape(3, 2)
        if arr.shape != (3, 2):
            raise GeometryContractError("bounds", bounds, f"expected 6 values or shape (3, 2), got shape {arr.shape}")
        return cls(arr[:, 0], arr[:, 1])

    @staticmethod
    def _check_corners(min_point, max_point) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        lo = validate_vector3(min_point, "min_point")
        hi = validate_vector3(max_point, "max_point")
        if np.any(lo > hi):
            raise GeometryContractError("bounds", np.stack([lo, hi], axis=1), "min must not exceed max on any axis")
        return lo, hi

    @property
    def function_type(self) -> ImplicitFunctionType:
        return ImplicitFunctionType.BOX

    @property
    def min_point(self) -> NDArray[np.float64]:
        return self._min_point.copy()

    @property
    def max_point(self) -> NDArray[np.float64]:
        return self._max_point.copy()

    @property
    def bounds(self) -> tuple[float, float, float, float, float, float]:
        """Bounds as (xmin, xmax, ymin, ymax, zmin, zmax)."""
        return tuple(float(v) for v in np.stack([self._min_point, self._max_point], axis=1).ravel())

    def set_bounds(self, min_point: NDArray | list, max_point: NDArray | list) -> None:
        self._min_point, self._max_point = self._check_corners(min_point, max_point)
        self.modified()

    def _local(self, points: NDArray[np.float64]) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        center = 0.5 * (self._min_point + self._max_point)
        half_size = 0.5 * (self._max_point - self._min_point)
        offset = points - center
        return offset, np.abs(offset) - half_size

    def _evaluate(self, points: NDArray[np.float64]) -> NDArray[np.float64]:
        _, q = self._local(points)
        outside = np.linalg.norm(np.maximum(q, 0.0), axis=1)
        inside = np.minimum(np.max(q, axis=1), 0.0)
        return outside + inside

    def _evaluate_gradient(self, points: NDArray[np.float64]) -> NDArray[np.float64]:
        offset, q = self._local(points)
        sign = np.where(offset >= 0.0, 1.0, -1.0)

        q_pos = np.maximum(q, 0.0)
        dist = np.linalg.norm(q_pos, axis=1)
        outside = dist > 0.0

        grads = np.zeros_like(points)
        grads[outside] = sign[outside] * q_pos[outside] / dist[outside, None]

        inner = np.flatnonzero(~outside)
        axis = np.argmax(q[inner], axis=1)
        grads[inner, axis] = sign[inner, axis]
        return grads

    def __repr__(self) -> str:
        return f"Box(min={self._min_point.tolist()}, max={self._max_point.tolist()})"
