"""
Unit tests for the element tree contracts.

Covers wire-name aliasing, the widget/widgetType invariant and the
lossless load/save round trip.
"""

import pytest
from pydantic import ValidationError

from elementor_mcp.core.exceptions import MalformedElementError
from elementor_mcp.models.contracts.elements import (
    Element,
    StructureItem,
    elements_from_data,
    elements_to_data,
)


class TestElementModel:
    """Tests for Element parsing and dumping."""

    def test_parses_wire_names(self):
        element = Element.model_validate({
            "id": "abc1234",
            "elType": "widget",
            "widgetType": "heading",
            "isInner": False,
            "settings": {"title": "Hi"},
            "elements": [],
        })

        assert element.kind == "widget"
        assert element.widget_type == "heading"
        assert element.settings == {"title": "Hi"}
        assert element.children == []

    def test_dumps_wire_names(self):
        element = Element(id="abc1234", kind="container", settings={"a": 1})

        assert element.to_data() == {
            "id": "abc1234",
            "elType": "container",
            "isInner": False,
            "settings": {"a": 1},
            "elements": [],
        }

    def test_round_trip_is_lossless(self, sample_tree):
        assert elements_to_data(elements_from_data(sample_tree)) == sample_tree

    def test_unknown_wire_keys_are_kept(self):
        data = {
            "id": "abc1234",
            "elType": "container",
            "isInner": False,
            "settings": {},
            "elements": [],
            "isLocked": True,
        }

        assert Element.model_validate(data).to_data() == data

    def test_empty_list_settings_become_mapping(self):
        """PHP serializes an empty settings map as []."""
        element = Element.model_validate({"id": "abc1234", "elType": "container", "settings": []})
        assert element.settings == {}

    def test_widget_requires_widget_type(self):
        with pytest.raises(ValidationError):
            Element.model_validate({"id": "abc1234", "elType": "widget"})

    def test_container_rejects_widget_type(self):
        with pytest.raises(ValidationError):
            Element.model_validate({"id": "abc1234", "elType": "container", "widgetType": "heading"})

    def test_container_empty_widget_type_normalized(self):
        element = Element.model_validate({"id": "abc1234", "elType": "section", "widgetType": ""})
        assert element.widget_type is None
        assert "widgetType" not in element.to_data()

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            Element.model_validate({"id": "abc1234", "elType": "row"})

    def test_missing_id_rejected(self):
        with pytest.raises(ValidationError):
            Element.model_validate({"elType": "container"})


class TestElementsFromData:
    """Tests for parsing a root sequence."""

    def test_none_is_empty_tree(self):
        assert elements_from_data(None) == []

    def test_non_list_raises(self):
        with pytest.raises(MalformedElementError):
            elements_from_data({"id": "x"})

    def test_malformed_node_raises(self):
        with pytest.raises(MalformedElementError) as exc_info:
            elements_from_data([{"id": "abc1234", "elType": "widget"}])
        assert "Malformed element data" in str(exc_info.value)

    def test_malformed_is_an_assertion(self):
        assert issubclass(MalformedElementError, AssertionError)


class TestStructureItem:
    """Tests for build_page structure items."""

    def test_accepts_both_widget_type_spellings(self):
        assert StructureItem.model_validate({"type": "widget", "widget_type": "heading"}).widget_type == "heading"
        assert StructureItem.model_validate({"type": "widget", "widgetType": "image"}).widget_type == "image"

    def test_defaults(self):
        item = StructureItem.model_validate({"type": "container", "children": None})
        assert item.settings == {}
        assert item.children == []
        assert item.widget_type is None

    def test_type_is_required(self):
        with pytest.raises(ValidationError):
            StructureItem.model_validate({"settings": {}})
