"""Geometry for clip filters."""

from .implicit import Box, ImplicitFunction, ImplicitFunctionType, MultiPlane, Plane, Sphere

__all__ = [
    "Box",
    "ImplicitFunction",
    "ImplicitFunctionType",
    "MultiPlane",
    "Plane",
    "Sphere",
]
