"""
Pydantic configuration for the Clip filter.

A ``ClipConfig`` captures everything a clip run needs: the surface to cut
with (a discriminated union keyed by ``kind``), the invert flag and execution
options. It can be built in code or loaded from YAML (see ``config.io``).

YAML Format
-----------
invert: false
max_workers: 4
surface:
  kind: multi_plane
  origins: [[0.5, 0.5, 0.5], [0.5, 0.5, 0.5]]
  normals: [[1, 0, 0], [0, 1, 0]]
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Vec3 = tuple[float, float, float]


def _check_nonzero(normal: Vec3) -> Vec3:
    if not any(normal):
        raise ValueError("normal must be non-zero")
    return normal


class BoxClipSpec(BaseModel):
    """Axis-aligned box given as (xmin, xmax, ymin, ymax, zmin, zmax)."""

    kind: Literal["box"] = "box"
    bounds: tuple[float, float, float, float, float, float] = Field(..., description="Box bounds")

    @field_validator("bounds")
    @classmethod
    def validate_ordering(cls, v: tuple[float, ...]) -> tuple[float, ...]:
        for axis, (lo, hi) in zip("xyz", zip(v[0::2], v[1::2])):
            if lo > hi:
                raise ValueError(f"{axis}min ({lo}) exceeds {axis}max ({hi})")
        return v

    model_config = ConfigDict(extra="forbid")


class SphereClipSpec(BaseModel):
    """Sphere from center and radius."""

    kind: Literal["sphere"] = "sphere"
    center: Vec3 = Field(..., description="Sphere center")
    radius: float = Field(..., gt=0.0, description="Sphere radius")

    model_config = ConfigDict(extra="forbid")


class PlaneClipSpec(BaseModel):
    """Single plane from origin and normal."""

    kind: Literal["plane"] = "plane"
    origin: Vec3 = Field(..., description="Point on the plane")
    normal: Vec3 = Field(..., description="Normal pointing toward the discarded side")

    @field_validator("normal")
    @classmethod
    def validate_normal(cls, v: Vec3) -> Vec3:
        return _check_nonzero(v)

    model_config = ConfigDict(extra="forbid")


class MultiPlaneClipSpec(BaseModel):
    """Intersection of two or three half-spaces."""

    kind: Literal["multi_plane"] = "multi_plane"
    origins: list[Vec3] = Field(..., min_length=2, max_length=3, description="One point per plane")
    normals: list[Vec3] = Field(..., min_length=2, max_length=3, description="One normal per plane")

    @field_validator("normals")
    @classmethod
    def validate_normals(cls, v: list[Vec3]) -> list[Vec3]:
        for normal in v:
            _check_nonzero(normal)
        return v

    @model_validator(mode="after")
    def validate_pairs(self) -> MultiPlaneClipSpec:
        if len(self.origins) != len(self.normals):
            raise ValueError(f"got {len(self.origins)} origins but {len(self.normals)} normals")
        return self

    model_config = ConfigDict(extra="forbid")


ClipSurfaceSpec = Annotated[
    BoxClipSpec | SphereClipSpec | PlaneClipSpec | MultiPlaneClipSpec,
    Field(discriminator="kind"),
]


class ClipConfig(BaseModel):
    """
    Clip filter configuration.

    Attributes:
        invert: Keep the region where the surface function is >= 0 instead of <= 0
        surface: Clip surface (None leaves the filter unconfigured)
        max_workers: Worker threads for per-domain clipping (1 = serial)
        clean_output: Run CleanGrid on the assembled output
        merge_tolerance: Point-merge distance used by CleanGrid
    """

    invert: bool = Field(False, description="Retain the complementary region")
    surface: ClipSurfaceSpec | None = Field(None, description="Clip surface")
    max_workers: int = Field(1, ge=1, le=256, description="Worker threads for per-domain clipping")
    clean_output: bool = Field(True, description="Merge duplicate points and drop degenerate cells")
    merge_tolerance: float = Field(0.0, ge=0.0, description="Absolute point-merge tolerance")

    model_config = ConfigDict(validate_assignment=True, extra="forbid")
