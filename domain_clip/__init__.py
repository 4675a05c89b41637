"""
domain_clip: implicit-surface clip filters for multi-domain meshes.

Example:
    >>> import pyvista as pv
    >>> from domain_clip import Clip, PartitionedDataSet
    >>> dataset = PartitionedDataSet([(pv.Cube().cast_to_unstructured_grid(), 0)])
    >>> clip = Clip()
    >>> clip.set_sphere_clip(center=[0, 0, 0], radius=0.4)
    >>> clip.set_input(dataset)
    >>> result = clip.update()
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("domain-clip")
except PackageNotFoundError:
    # package is not installed
    __version__ = "0.0.0-dev"

from .config import ClipConfig, load_clip_config, save_clip_config  # noqa: E402
from .data import PartitionedDataSet  # noqa: E402
from .filters import (  # noqa: E402
    CleanGrid,
    Clip,
    FieldAssociation,
    FieldSelection,
    FieldSelectionMode,
    NoOp,
    clean_mesh,
    clip_mesh,
)
from .geometry import Box, ImplicitFunction, ImplicitFunctionType, MultiPlane, Plane, Sphere  # noqa: E402
from .utils import (  # noqa: E402
    ClipExecutionError,
    ClipFilterError,
    DimensionMismatchError,
    FilterStateError,
    GeometryContractError,
    configure_logging,
    get_logger,
)

__all__ = [
    "Box",
    "CleanGrid",
    "Clip",
    "ClipConfig",
    "ClipExecutionError",
    "ClipFilterError",
    "DimensionMismatchError",
    "FieldAssociation",
    "FieldSelection",
    "FieldSelectionMode",
    "FilterStateError",
    "GeometryContractError",
    "ImplicitFunction",
    "ImplicitFunctionType",
    "MultiPlane",
    "NoOp",
    "PartitionedDataSet",
    "Plane",
    "Sphere",
    "clean_mesh",
    "clip_mesh",
    "configure_logging",
    "get_logger",
    "load_clip_config",
    "save_clip_config",
]
