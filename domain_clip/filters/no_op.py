"""
Pass-through filter.

``NoOp`` hands every domain to the output unchanged apart from the field
selection, which makes it a baseline when timing a pipeline or a quick way to
strip a dataset down to a few arrays.
"""

from __future__ import annotations

from domain_clip.data import PartitionedDataSet

from .base import Filter
from .clip_mesh import apply_field_selection


class NoOp(Filter):
    """
    Copy the input to the output, keeping only the selected fields.

    Meshes are shallow copies: geometry and the kept arrays are shared with
    the input, and the input meshes themselves are never modified.

    Example:
        >>> noop = NoOp()
        >>> noop.set_field("temperature")
        >>> noop.set_input(dataset)
        >>> slim = noop.update()
    """

    @property
    def name(self) -> str:
        return "NoOp"

    def set_field(self, field_name: str) -> None:
        """Keep ``field_name``; shorthand for ``add_map_field``."""
        self.add_map_field(field_name)

    def do_execute(self) -> None:
        selection = self.get_field_selection()
        output = PartitionedDataSet()
        for mesh, domain_id in self._input:
            copy = mesh.copy(deep=False)
            apply_field_selection(copy, selection)
            output.add_domain(copy, domain_id)
        self._output = output
