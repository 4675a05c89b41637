"""
Sphere Clip Surface

Sphere: all points within distance r from center c
    D = {x ∈ ℝ³ : ||x - c|| ≤ r}

Implicit function (analytic, smooth everywhere):
    φ(x) = ||x - c||² - r²
    ∇φ(x) = 2 (x - c)

The squared form has the same zero level set and sign as the exact distance
||x - c|| - r but its gradient is defined at the center as well.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from domain_clip.utils.exceptions import GeometryContractError, validate_vector3

from .implicit_function import ImplicitFunction, ImplicitFunctionType


class Sphere(ImplicitFunction):
    """
    Sphere from center and radius.

    Example:
        >>> sphere = Sphere(center=[0, 0, 0], radius=2.0)
        >>> sphere.value([0, 0, 0])   # -4.0 (center)
        >>> sphere.value([2, 0, 0])   #  0.0 (surface)
        >>> sphere.gradient([1, 0, 0])  # [2, 0, 0]
    """

    def __init__(self, center: NDArray | list, radius: float):
        """
        Args:
            center: Center point - array-like of shape (3,)
            radius: Radius (must be positive)

        Raises:
            GeometryContractError: If radius <= 0
        """
        super().__init__()
        self._center = validate_vector3(center, "center")
        self._radius = self._check_radius(radius)

    @staticmethod
    def _check_radius(radius: float) -> float:
        r = float(radius)
        if not np.isfinite(r) or r <= 0:
            raise GeometryContractError("radius", radius, "radius must be positive and finite")
        return r

    @property
    def function_type(self) -> ImplicitFunctionType:
        return ImplicitFunctionType.SPHERE

    @property
    def center(self) -> NDArray[np.float64]:
        return self._center.copy()

    @property
    def radius(self) -> float:
        return self._radius

    def set_center(self, center: NDArray | list) -> None:
        self._center = validate_vector3(center, "center")
        self.modified()

    def set_radius(self, radius: float) -> None:
        self._radius = self._check_radius(radius)
        self.modified()

    def _evaluate(self, points: NDArray[np.float64]) -> NDArray[np.float64]:
        offset = points - self._center
        return np.einsum("ij,ij->i", offset, offset) - self._radius**2

    def _evaluate_gradient(self, points: NDArray[np.float64]) -> NDArray[np.float64]:
        return 2.0 * (points - self._center)

    def __repr__(self) -> str:
        return f"Sphere(center={self._center.tolist()}, radius={self._radius:.6g})"
