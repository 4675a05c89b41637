"""
Tests for the pass-through filter.
"""

import pytest

import numpy as np
import pyvista as pv

from domain_clip import NoOp, PartitionedDataSet
from domain_clip.utils.exceptions import FilterStateError


class TestNoOp:
    def test_passes_domains_through(self, cube_factory):
        dataset = PartitionedDataSet([(cube_factory(), 6), (pv.UnstructuredGrid(), 2)])
        noop = NoOp()
        noop.set_input(dataset)
        output = noop.update()

        assert output.domain_ids == [6, 2]
        mesh, _ = output.get_domain(0)
        assert mesh.n_cells == 64
        np.testing.assert_array_equal(mesh.points, dataset.get_domain(0)[0].points)
        assert {"temperature", "material"} <= set(mesh.array_names)
        assert output.get_domain(1)[0].n_cells == 0

    def test_set_field_keeps_only_that_field(self, single_domain, unit_cube):
        noop = NoOp()
        noop.set_field("material")
        noop.set_input(single_domain)
        mesh, _ = noop.update().get_domain(0)

        assert "material" in mesh.cell_data
        assert "temperature" not in mesh.point_data
        # the input mesh keeps all of its arrays
        assert "temperature" in unit_cube.point_data

    def test_requires_input(self):
        with pytest.raises(FilterStateError):
            NoOp().update()

    def test_name(self):
        assert NoOp().name == "NoOp"
