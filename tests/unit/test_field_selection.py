"""Tests for field selection."""

import pytest

from domain_clip.filters import Clip, FieldAssociation, FieldSelection, FieldSelectionMode


class TestFieldSelection:
    def test_default_keeps_everything(self):
        selection = FieldSelection()
        assert selection.mode is FieldSelectionMode.ALL
        assert selection.is_field_selected("anything")
        assert selection.is_field_selected("anything", FieldAssociation.CELLS)

    def test_none_drops_everything(self):
        selection = FieldSelection(FieldSelectionMode.NONE, {"temperature": FieldAssociation.ANY})
        assert not selection.is_field_selected("temperature")

    def test_select_by_association(self):
        selection = FieldSelection(FieldSelectionMode.SELECT)
        selection.add_field("temperature", FieldAssociation.POINTS)

        assert selection.is_field_selected("temperature", FieldAssociation.POINTS)
        assert selection.is_field_selected("temperature")
        assert not selection.is_field_selected("temperature", FieldAssociation.CELLS)
        assert not selection.is_field_selected("pressure", FieldAssociation.POINTS)

    def test_select_any_matches_both(self):
        selection = FieldSelection.select("material")
        assert selection.is_field_selected("material", FieldAssociation.POINTS)
        assert selection.is_field_selected("material", FieldAssociation.CELLS)

    def test_exclude(self):
        selection = FieldSelection(FieldSelectionMode.EXCLUDE)
        selection.add_field("debug_ids", FieldAssociation.CELLS)

        assert not selection.is_field_selected("debug_ids", FieldAssociation.CELLS)
        assert selection.is_field_selected("debug_ids", FieldAssociation.POINTS)
        assert selection.is_field_selected("temperature")

    def test_clear(self):
        selection = FieldSelection.select("a", "b")
        selection.clear()
        assert selection.fields == {}
        assert not selection.is_field_selected("a")


class TestFilterMapFields:
    """Test how a filter turns its map fields into a selection."""

    def test_no_map_fields_selects_all(self):
        assert Clip().get_field_selection().mode is FieldSelectionMode.ALL

    def test_map_fields_select_only_listed(self):
        clip = Clip()
        clip.add_map_field("temperature")
        clip.add_map_field("temperature")

        selection = clip.get_field_selection()
        assert selection.mode is FieldSelectionMode.SELECT
        assert list(selection.fields) == ["temperature"]
        assert not selection.is_field_selected("material")

    @pytest.mark.parametrize("names", [["a"], ["a", "b", "c"]])
    def test_clear_map_fields(self, names):
        clip = Clip()
        for name in names:
            clip.add_map_field(name)
        clip.clear_map_fields()
        assert clip.get_field_selection().mode is FieldSelectionMode.ALL
