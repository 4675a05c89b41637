"""
Field selection for filters.

A ``FieldSelection`` decides which point/cell arrays a filter carries from its
input to its output. Filters hand it to the mesh primitives unchanged; only
the primitives look at field names.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class FieldSelectionMode(Enum):
    """
    Selection modes.

    Attributes:
        ALL: Keep every field
        NONE: Drop every field
        SELECT: Keep only the listed fields
        EXCLUDE: Keep every field except the listed ones
    """

    ALL = "all"
    NONE = "none"
    SELECT = "select"
    EXCLUDE = "exclude"


class FieldAssociation(Enum):
    """Where a field lives on the mesh."""

    ANY = "any"
    POINTS = "points"
    CELLS = "cells"


@dataclass
class FieldSelection:
    """
    Field filter handed to mesh primitives.

    Example:
        >>> selection = FieldSelection(FieldSelectionMode.SELECT)
        >>> selection.add_field("temperature", FieldAssociation.POINTS)
        >>> selection.is_field_selected("temperature", FieldAssociation.POINTS)
        True
        >>> selection.is_field_selected("pressure", FieldAssociation.CELLS)
        False
    """

    mode: FieldSelectionMode = FieldSelectionMode.ALL
    fields: dict[str, FieldAssociation] = field(default_factory=dict)

    def add_field(self, name: str, association: FieldAssociation = FieldAssociation.ANY) -> None:
        self.fields[name] = association

    def clear(self) -> None:
        self.fields.clear()

    def _is_listed(self, name: str, association: FieldAssociation) -> bool:
        listed = self.fields.get(name)
        if listed is None:
            return False
        return FieldAssociation.ANY in (listed, association) or listed == association

    def is_field_selected(self, name: str, association: FieldAssociation = FieldAssociation.ANY) -> bool:
        """True if the field should be carried to the output."""
        if self.mode is FieldSelectionMode.ALL:
            return True
        if self.mode is FieldSelectionMode.NONE:
            return False
        if self.mode is FieldSelectionMode.SELECT:
            return self._is_listed(name, association)
        return not self._is_listed(name, association)

    @classmethod
    def select(cls, *names: str) -> FieldSelection:
        """Selection keeping only ``names`` (any association)."""
        return cls(FieldSelectionMode.SELECT, {name: FieldAssociation.ANY for name in names})
