"""
Implicit Function Infrastructure for Clipping

An implicit function f: ℝ³ → ℝ describes a clip boundary as its zero level set:
    f(x) < 0   (inside, kept by a non-inverted clip)
    f(x) = 0   (on the clip surface)
    f(x) > 0   (outside, discarded by a non-inverted clip)

Every function exposes ``value`` and ``gradient`` evaluated on a single point
(shape (3,)) or on a batch of points (shape (N, 3)). Evaluation is read-only,
so one configured instance can be shared by many workers clipping different
domains at the same time.

Each setter bumps ``version``; a collaborator that caches evaluations compares
the version it saw against the current one to decide whether to re-evaluate.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

import numpy as np
from numpy.typing import NDArray

from domain_clip.utils.exceptions import DimensionMismatchError


class ImplicitFunctionType(Enum):
    """
    Enumeration of the supported clip surfaces.

    Attributes:
        BOX: Axis-aligned box
        SPHERE: Sphere from center and radius
        PLANE: Single half-space
        MULTI_PLANE: Intersection of two or three half-spaces
    """

    BOX = "box"
    SPHERE = "sphere"
    PLANE = "plane"
    MULTI_PLANE = "multi_plane"


def as_points(x: NDArray | list) -> tuple[NDArray[np.float64], bool]:
    """
    Normalize point input to an (N, 3) float64 array.

    Returns:
        (points, is_single) where is_single is True for a (3,) input
    """
    pts = np.asarray(x, dtype=np.float64)
    is_single = pts.ndim == 1

    if is_single:
        pts = pts.reshape(1, -1)

    if pts.ndim != 2 or pts.shape[1] != 3:
        raise DimensionMismatchError("points", np.shape(x), "(3,) or (N, 3)")

    return pts, is_single


class ImplicitFunction(ABC):
    """
    Abstract base class for clip surfaces.

    Subclasses must implement:
    - function_type: Which surface this is
    - _evaluate(points): Values for an (N, 3) batch
    - _evaluate_gradient(points): Gradients for an (N, 3) batch
    """

    def __init__(self) -> None:
        self._version = 0

    @property
    @abstractmethod
    def function_type(self) -> ImplicitFunctionType:
        """Kind of surface."""

    @abstractmethod
    def _evaluate(self, points: NDArray[np.float64]) -> NDArray[np.float64]: ...

    @abstractmethod
    def _evaluate_gradient(self, points: NDArray[np.float64]) -> NDArray[np.float64]: ...

    @property
    def version(self) -> int:
        """Modification counter, incremented by every setter."""
        return self._version

    def modified(self) -> None:
        """Mark the function as changed."""
        self._version += 1

    def value(self, x: NDArray | list) -> float | NDArray[np.float64]:
        """
        Evaluate the implicit function.

        Args:
            x: Point(s) - shape (3,) or (N, 3)

        Returns:
            Scalar for a single point, array of shape (N,) otherwise
        """
        pts, is_single = as_points(x)
        values = self._evaluate(pts)
        return float(values[0]) if is_single else values

    def gradient(self, x: NDArray | list) -> NDArray[np.float64]:
        """
        Evaluate the gradient of the implicit function.

        Args:
            x: Point(s) - shape (3,) or (N, 3)

        Returns:
            Array of shape (3,) for a single point, (N, 3) otherwise
        """
        pts, is_single = as_points(x)
        grads = self._evaluate_gradient(pts)
        return grads[0] if is_single else grads

    def __call__(self, x: NDArray | list) -> float | NDArray[np.float64]:
        return self.value(x)

    def contains(self, x: NDArray | list) -> bool | NDArray[np.bool_]:
        """True where the point is retained by a non-inverted clip (value <= 0)."""
        values = self.value(x)
        if np.isscalar(values):
            return bool(values <= 0)
        return values <= 0

    def is_on_boundary(self, x: NDArray | list, tol: float = 1e-8) -> bool | NDArray[np.bool_]:
        """True where |value| < tol."""
        values = self.value(x)
        if np.isscalar(values):
            return bool(abs(values) < tol)
        return np.abs(values) < tol

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(version={self._version})"
