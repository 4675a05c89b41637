"""
Single Plane Clip Surface

Half-space bounded by the plane through ``origin`` with normal ``normal``:
    φ(x) = (x - origin) · normal
    ∇φ(x) = normal

The normal points toward the discarded side. It is used as given; a
non-unit normal scales the value but leaves the zero level set unchanged.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from domain_clip.utils.exceptions import GeometryContractError, validate_vector3

from .implicit_function import ImplicitFunction, ImplicitFunctionType


class Plane(ImplicitFunction):
    """
    Single plane from origin and normal.

    Example:
        >>> plane = Plane(origin=[0.5, 0, 0], normal=[1, 0, 0])
        >>> plane.value([1.0, 3.0, 3.0])  # 0.5
    """

    def __init__(self, origin: NDArray | list, normal: NDArray | list):
        super().__init__()
        self._origin = validate_vector3(origin, "origin")
        self._normal = self._check_normal(normal)

    @staticmethod
    def _check_normal(normal) -> NDArray[np.float64]:
        vec = validate_vector3(normal, "normal")
        if not np.any(vec):
            raise GeometryContractError("normal", normal, "normal must be non-zero")
        return vec

    @property
    def function_type(self) -> ImplicitFunctionType:
        return ImplicitFunctionType.PLANE

    @property
    def origin(self) -> NDArray[np.float64]:
        return self._origin.copy()

    @property
    def normal(self) -> NDArray[np.float64]:
        return self._normal.copy()

    def set_origin(self, origin: NDArray | list) -> None:
        self._origin = validate_vector3(origin, "origin")
        self.modified()

    def set_normal(self, normal: NDArray | list) -> None:
        self._normal = self._check_normal(normal)
        self.modified()

    def _evaluate(self, points: NDArray[np.float64]) -> NDArray[np.float64]:
        return (points - self._origin) @ self._normal

    def _evaluate_gradient(self, points: NDArray[np.float64]) -> NDArray[np.float64]:
        return np.broadcast_to(self._normal, points.shape).copy()

    def __repr__(self) -> str:
        return f"Plane(origin={self._origin.tolist()}, normal={self._normal.tolist()})"
