"""Clip filter configuration: pydantic models and YAML I/O."""

from .clip_config import (
    BoxClipSpec,
    ClipConfig,
    ClipSurfaceSpec,
    MultiPlaneClipSpec,
    PlaneClipSpec,
    SphereClipSpec,
)
from .io import load_clip_config, save_clip_config, validate_yaml_config

__all__ = [
    "BoxClipSpec",
    "ClipConfig",
    "ClipSurfaceSpec",
    "MultiPlaneClipSpec",
    "PlaneClipSpec",
    "SphereClipSpec",
    "load_clip_config",
    "save_clip_config",
    "validate_yaml_config",
]
