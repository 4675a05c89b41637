"""
Multi-Plane Clip Surface (Convex Corner)

Intersection of N half-spaces, N ∈ {2, 3}:
    D = {x ∈ ℝ³ : (x - p_i) · n_i ≤ 0  for all i < N}

For signed distance functions an intersection is the pointwise maximum
(see CSG intersection), so the combined implicit function is
    φ(x) = max_i d_i(x),   d_i(x) = (x - p_i) · n_i

x lies inside every half-space ⟺ every d_i(x) ≤ 0 ⟺ φ(x) ≤ 0.

The gradient is the normal of the plane attaining the maximum, i.e. a
subgradient of the max. On a crease (two planes tied) the lowest-index plane
wins, which is the first maximum found when scanning planes in order and
keeping a candidate only when strictly greater.

Storage has a fixed capacity of three planes; only the first ``num_planes``
are evaluated. Normals are expected to be unit length and are not
re-normalized here (the Clip filter builders normalize them).
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from domain_clip.utils.exceptions import DimensionMismatchError, GeometryContractError

from .implicit_function import ImplicitFunction, ImplicitFunctionType, as_points

PLANE_CAPACITY = 3
MIN_PLANES = 2


class MultiPlane(ImplicitFunction):
    """
    Intersection of two or three half-spaces.

    Attributes:
        points: Plane points - array of shape (3, 3), one row per slot
        normals: Plane normals - array of shape (3, 3), one row per slot
        num_planes: Number of active slots (2 or 3)

    Example:
        >>> corner = MultiPlane(
        ...     points=[[0.5, 0, 0], [0, 0.5, 0]],
        ...     normals=[[1, 0, 0], [0, 1, 0]],
        ...     num_planes=2,
        ... )
        >>> corner.value([0.0, 0.0, 0.0])   # -0.5 (inside both)
        >>> corner.value([1.0, 0.0, 0.0])   #  0.5 (outside the first)
        >>> corner.gradient([1.0, 0.0, 0.0])  # [1, 0, 0]
    """

    def __init__(self, points: NDArray | list, normals: NDArray | list, num_planes: int):
        """
        Args:
            points: Plane points - shape (k, 3) with num_planes <= k <= 3;
                missing slots are filled with zeros
            normals: Plane normals - same shape as points
            num_planes: Number of active planes (2 or 3)

        Raises:
            GeometryContractError: If num_planes is not 2 or 3, or fewer
                planes are supplied than num_planes
            DimensionMismatchError: If points/normals are not (k, 3)
        """
        super().__init__()
        num_planes = self._check_num_planes(num_planes)
        pts = self._pad_slots(points, "points")
        nrm = self._pad_slots(normals, "normals")

        supplied = min(np.asarray(points).shape[0], np.asarray(normals).shape[0])
        if supplied < num_planes:
            raise GeometryContractError(
                "num_planes", num_planes, f"plane count {num_planes} exceeds the {supplied} planes supplied"
            )

        self._points = pts
        self._normals = nrm
        self._num_planes = num_planes

    @staticmethod
    def _check_num_planes(num_planes: int) -> int:
        if int(num_planes) != num_planes or not MIN_PLANES <= num_planes <= PLANE_CAPACITY:
            raise GeometryContractError(
                "num_planes", num_planes, f"plane count must be between {MIN_PLANES} and {PLANE_CAPACITY}"
            )
        return int(num_planes)

    @staticmethod
    def _pad_slots(values: NDArray | list, name: str) -> NDArray[np.float64]:
        arr = np.asarray(values, dtype=np.float64)
        if arr.ndim != 2 or arr.shape[1] != 3 or not 1 <= arr.shape[0] <= PLANE_CAPACITY:
            raise DimensionMismatchError(name, arr.shape, f"(k, 3) with 1 <= k <= {PLANE_CAPACITY}")
        if not np.all(np.isfinite(arr)):
            raise GeometryContractError(name, arr, "components must be finite")

        slots = np.zeros((PLANE_CAPACITY, 3))
        slots[: arr.shape[0]] = arr
        return slots

    @property
    def function_type(self) -> ImplicitFunctionType:
        return ImplicitFunctionType.MULTI_PLANE

    @property
    def num_planes(self) -> int:
        return self._num_planes

    @property
    def points(self) -> NDArray[np.float64]:
        """All three point slots, shape (3, 3)."""
        return self._points.copy()

    @property
    def normals(self) -> NDArray[np.float64]:
        """All three normal slots, shape (3, 3)."""
        return self._normals.copy()

    def get_planes(self) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Return copies of (points, normals), each of shape (3, 3)."""
        return self.points, self.normals

    def set_planes(self, points: NDArray | list, normals: NDArray | list) -> None:
        """Replace every slot; slots not supplied are reset to zero."""
        pts = self._pad_slots(points, "points")
        nrm = self._pad_slots(normals, "normals")
        self._points = pts
        self._normals = nrm
        self.modified()

    def set_plane(self, index: int, point: NDArray | list, normal: NDArray | list) -> None:
        """Replace a single slot."""
        if not 0 <= index < PLANE_CAPACITY:
            raise GeometryContractError("index", index, f"slot index must be in [0, {PLANE_CAPACITY})")
        pts = self._points.copy()
        nrm = self._normals.copy()
        pts[index] = self._pad_slots([point], "point")[0]
        nrm[index] = self._pad_slots([normal], "normal")[0]
        self._points = pts
        self._normals = nrm
        self.modified()

    def set_num_planes(self, num_planes: int) -> None:
        self._num_planes = self._check_num_planes(num_planes)
        self.modified()

    def plane_distances(self, x: NDArray | list) -> NDArray[np.float64]:
        """
        Signed distance to each active plane.

        Args:
            x: Point(s) - shape (3,) or (N, 3)

        Returns:
            Array of shape (num_planes,) or (N, num_planes)
        """
        pts, is_single = as_points(x)
        d = self._distances(pts)
        return d[0] if is_single else d

    def _distances(self, points: NDArray[np.float64]) -> NDArray[np.float64]:
        n = self._num_planes
        offsets = points[:, None, :] - self._points[None, :n, :]
        return np.einsum("ikj,kj->ik", offsets, self._normals[:n])

    def _evaluate(self, points: NDArray[np.float64]) -> NDArray[np.float64]:
        return np.max(self._distances(points), axis=1)

    def _evaluate_gradient(self, points: NDArray[np.float64]) -> NDArray[np.float64]:
        # argmax returns the first maximum, so exact ties resolve to the lowest index
        winner = np.argmax(self._distances(points), axis=1)
        return self._normals[winner]

    def __repr__(self) -> str:
        return f"MultiPlane(num_planes={self._num_planes}, version={self._version})"
