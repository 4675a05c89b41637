"""
Multi-domain filters.

- Clip: cut every domain with an implicit surface, then clean
- CleanGrid: merge duplicate points and drop degenerate cells per domain
- NoOp: pass domains through, keeping only the selected fields
- clip_mesh / clean_mesh: the single-mesh primitives behind them
"""

from .base import Filter
from .clean_grid import CleanGrid, clean_mesh
from .clip import Clip
from .clip_mesh import IMPLICIT_VALUE_ARRAY, apply_field_selection, clip_mesh
from .field_selection import FieldAssociation, FieldSelection, FieldSelectionMode
from .no_op import NoOp

__all__ = [
    "IMPLICIT_VALUE_ARRAY",
    "CleanGrid",
    "Clip",
    "FieldAssociation",
    "FieldSelection",
    "FieldSelectionMode",
    "Filter",
    "NoOp",
    "apply_field_selection",
    "clean_mesh",
    "clip_mesh",
]
