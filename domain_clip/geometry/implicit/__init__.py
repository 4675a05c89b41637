"""
Implicit Clip Surfaces

A clip surface is an implicit function f: ℝ³ → ℝ whose zero level set is the
cut. A non-inverted clip keeps the region where f ≤ 0.

Components:
- ImplicitFunction: Abstract base class with vectorized value/gradient
- Box: Axis-aligned box (exact signed distance)
- Sphere: Sphere from center and radius
- Plane: Single half-space
- MultiPlane: Intersection of two or three half-spaces (pointwise max)

Example - Corner clip:
    >>> from domain_clip.geometry.implicit import MultiPlane
    >>> corner = MultiPlane(
    ...     points=[[0.5, 0.5, 0.5]] * 2,
    ...     normals=[[1, 0, 0], [0, 1, 0]],
    ...     num_planes=2,
    ... )
    >>> corner.contains([0.25, 0.25, 0.9])
    True
"""

from .box import Box
from .implicit_function import ImplicitFunction, ImplicitFunctionType, as_points
from .multi_plane import PLANE_CAPACITY, MultiPlane
from .plane import Plane
from .sphere import Sphere

__all__ = [
    "PLANE_CAPACITY",
    "Box",
    "ImplicitFunction",
    "ImplicitFunctionType",
    "MultiPlane",
    "Plane",
    "Sphere",
    "as_points",
]
