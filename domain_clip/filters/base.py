"""Filter base class shared by Clip and CleanGrid.

Uses the Template Method pattern: ``update`` runs
``pre_execute -> do_execute -> post_execute``, timed and logged, while
subclasses supply ``do_execute`` and ``name``.

Subclasses **must** implement::

    name        - filter name used in logs and errors
    do_execute  - build ``self._output`` from ``self._input``

Subclasses **may** override::

    pre_execute  - extra validation before running (call super first)
    post_execute - extra bookkeeping after running
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from domain_clip.data import PartitionedDataSet
from domain_clip.utils.clip_logging import LoggedOperation, get_logger
from domain_clip.utils.exceptions import FilterStateError

from .field_selection import FieldAssociation, FieldSelection, FieldSelectionMode

logger = get_logger(__name__)


class Filter(ABC):
    """Multi-domain filter with map-field selection."""

    def __init__(self) -> None:
        self._input: PartitionedDataSet | None = None
        self._output: PartitionedDataSet | None = None
        self._map_fields: list[str] = []

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def do_execute(self) -> None: ...

    # ------------------------------------------------------------------
    # Input / output
    # ------------------------------------------------------------------

    def set_input(self, dataset: PartitionedDataSet) -> None:
        if not isinstance(dataset, PartitionedDataSet):
            raise TypeError(f"{self.name} expects a PartitionedDataSet, got {type(dataset).__name__}")
        self._input = dataset
        self._output = None

    def get_output(self) -> PartitionedDataSet:
        if self._output is None:
            raise FilterStateError("get_output", filter_name=self.name, filter_state="not_executed")
        return self._output

    # ------------------------------------------------------------------
    # Field selection
    # ------------------------------------------------------------------

    def add_map_field(self, field_name: str) -> None:
        """Carry ``field_name`` to the output. With no map fields every field is kept."""
        if field_name not in self._map_fields:
            self._map_fields.append(field_name)

    def clear_map_fields(self) -> None:
        self._map_fields.clear()

    def get_field_selection(self) -> FieldSelection:
        if not self._map_fields:
            return FieldSelection(FieldSelectionMode.ALL)
        return FieldSelection(
            FieldSelectionMode.SELECT,
            {name: FieldAssociation.ANY for name in self._map_fields},
        )

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def pre_execute(self) -> None:
        if self._input is None:
            raise FilterStateError(
                "update",
                filter_name=self.name,
                filter_state="no_input",
                suggested_action="Call set_input() with a PartitionedDataSet first",
            )

    def post_execute(self) -> None:
        if self._output is not None:
            logger.debug(f"{self.name} produced {self._output}")

    def update(self) -> PartitionedDataSet:
        """Run the filter and return its output."""
        self._output = None
        with LoggedOperation(logger, f"{self.name} on {self._input}"):
            self.pre_execute()
            self.do_execute()
            self.post_execute()
        return self.get_output()
