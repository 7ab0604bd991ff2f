"""
Unit tests for the control to JSON Schema mapper.
"""

import pytest

from elementor_mcp.models.contracts.widgets import ControlDescriptor
from elementor_mcp.services.schemas.control_mapper import map_control


def _map(**control) -> dict:
    return map_control(ControlDescriptor.model_validate(control))


class TestSkippedControls:
    """Structural controls are not settings."""

    @pytest.mark.parametrize(
        "control_type",
        ["section", "tab", "tabs", "divider", "heading", "raw_html", "notice", "button"],
    )
    def test_structural_controls_map_to_empty(self, control_type):
        assert _map(name="x", type=control_type, label="Ignored") == {}


class TestScalarControls:
    def test_text(self):
        assert _map(name="title", type="text") == {"type": "string"}

    def test_textarea_with_label_and_default(self):
        assert _map(name="title", type="textarea", label="Title", default="Hi") == {
            "type": "string",
            "description": "Title",
            "default": "Hi",
        }

    def test_number(self):
        assert _map(name="n", type="number", default=3) == {"type": "number", "default": 3}

    def test_color(self):
        assert _map(name="c", type="color")["type"] == "string"

    def test_date_time(self):
        assert _map(name="d", type="date_time") == {"type": "string", "format": "date-time"}

    def test_unknown_type_falls_back_to_string(self):
        assert _map(name="x", type="some_future_control") == {"type": "string"}


class TestChoiceControls:
    def test_select_enum_from_option_keys(self):
        fragment = _map(
            name="header_size",
            type="select",
            options={"h1": "H1", "h2": "H2"},
        )
        assert fragment == {"type": "string", "enum": ["h1", "h2"]}

    def test_choose_without_options_has_no_enum(self):
        assert _map(name="align", type="choose") == {"type": "string"}

    def test_switcher_uses_yes_empty_convention(self):
        assert _map(name="autoplay", type="switcher") == {"type": "string", "enum": ["yes", ""]}

    def test_list_options_are_accepted(self):
        assert _map(name="s", type="select", options=["a", "b"])["enum"] == ["a", "b"]


class TestCompositeControls:
    """Controls whose values are objects or arrays."""

    def test_slider(self):
        assert _map(name="width", type="slider") == {
            "type": "object",
            "properties": {"size": {"type": "number"}, "unit": {"type": "string"}},
        }

    def test_url(self):
        properties = _map(name="link", type="url")["properties"]
        assert properties == {
            "url": {"type": "string"},
            "is_external": {"type": "boolean"},
            "nofollow": {"type": "boolean"},
        }

    def test_media(self):
        assert _map(name="image", type="media")["properties"] == {
            "url": {"type": "string"},
            "id": {"type": "integer"},
        }

    def test_icons(self):
        assert _map(name="icon", type="icons")["properties"] == {
            "value": {"type": "string"},
            "library": {"type": "string"},
        }

    def test_dimensions(self):
        properties = _map(name="padding", type="dimensions")["properties"]
        assert set(properties) == {"top", "right", "bottom", "left", "unit", "isLinked"}
        assert properties["isLinked"] == {"type": "boolean"}

    def test_gallery(self):
        fragment = _map(name="gallery", type="gallery")
        assert fragment["type"] == "array"
        assert set(fragment["items"]["properties"]) == {"id", "url"}

    def test_box_shadow(self):
        properties = _map(name="shadow", type="box_shadow")["properties"]
        assert set(properties) == {"horizontal", "vertical", "blur", "spread", "color"}

    def test_text_shadow(self):
        properties = _map(name="shadow", type="text_shadow")["properties"]
        assert set(properties) == {"horizontal", "vertical", "blur", "color"}

    def test_composite_default_is_dropped(self):
        fragment = _map(name="width", type="slider", default={"size": 10, "unit": "px"})
        assert "default" not in fragment


class TestRepeater:
    def test_item_schema_built_from_fields(self):
        fragment = _map(
            name="tabs",
            type="repeater",
            label="Items",
            fields=[
                {"name": "tab_title", "type": "text", "label": "Title"},
                {"name": "tab_content", "type": "wysiwyg"},
                {"name": "note", "type": "raw_html"},
            ],
        )

        assert fragment["type"] == "array"
        assert fragment["description"] == "Items"
        assert fragment["items"] == {
            "type": "object",
            "properties": {
                "tab_title": {"type": "string", "description": "Title"},
                "tab_content": {"type": "string"},
            },
        }

    def test_fields_keyed_by_name(self):
        """Elementor keys repeater fields by control name."""
        fragment = _map(
            name="list",
            type="repeater",
            fields={"text": {"type": "text"}, "link": {"type": "url"}},
        )
        assert list(fragment["items"]["properties"]) == ["text", "link"]

    def test_nested_repeater(self):
        fragment = _map(
            name="outer",
            type="repeater",
            fields=[{"name": "inner", "type": "repeater", "fields": [{"name": "x", "type": "number"}]}],
        )
        inner = fragment["items"]["properties"]["inner"]
        assert inner["items"]["properties"] == {"x": {"type": "number"}}
