"""
Control to JSON Schema mapping.

Turns one Elementor control descriptor into a JSON Schema fragment.
Structural controls (headings, tabs, notices, buttons) produce no fragment;
unknown control types fall back to a plain string.
"""

from typing import Any

from elementor_mcp.models.contracts.widgets import ControlDescriptor

SKIP_TYPES = frozenset({
    "section",
    "tab",
    "tabs",
    "divider",
    "heading",
    "raw_html",
    "notice",
    "deprecated_notice",
    "alert",
    "button",
})

STRING_TYPES = frozenset({
    "text",
    "textarea",
    "wysiwyg",
    "code",
    "font",
    "animation",
    "hover_animation",
    "exit_animation",
    "hidden",
})

CHOICE_TYPES = frozenset({"select", "select2", "choose", "visual_choice"})

TOGGLE_TYPES = frozenset({"switcher", "popover_toggle"})

# Toggles are stored as "yes" / "" rather than booleans
TOGGLE_VALUES = ["yes", ""]


def _object(properties: dict[str, dict[str, Any]]) -> dict[str, Any]:
    return {"type": "object", "properties": properties}


def _strings(*names: str) -> dict[str, dict[str, Any]]:
    return {name: {"type": "string"} for name in names}


def _integers(*names: str) -> dict[str, dict[str, Any]]:
    return {name: {"type": "integer"} for name in names}


def should_skip(control: ControlDescriptor) -> bool:
    return control.type in SKIP_TYPES


def _base_fragment(control: ControlDescriptor) -> dict[str, Any]:
    control_type = control.type

    if control_type in STRING_TYPES:
        return {"type": "string"}

    if control_type == "number":
        return {"type": "number"}

    if control_type == "slider":
        return _object({"size": {"type": "number"}, "unit": {"type": "string"}})

    if control_type in CHOICE_TYPES:
        fragment: dict[str, Any] = {"type": "string"}
        if control.options:
            fragment["enum"] = [str(key) for key in control.options]
        return fragment

    if control_type in TOGGLE_TYPES:
        return {"type": "string", "enum": list(TOGGLE_VALUES)}

    if control_type == "color":
        return {"type": "string", "description": "Hex or RGBA color value"}

    if control_type == "url":
        return _object({
            "url": {"type": "string"},
            "is_external": {"type": "boolean"},
            "nofollow": {"type": "boolean"},
        })

    if control_type == "media":
        return _object({"url": {"type": "string"}, "id": {"type": "integer"}})

    if control_type in ("icons", "icon"):
        return _object(_strings("value", "library"))

    if control_type == "dimensions":
        return _object({
            **_strings("top", "right", "bottom", "left", "unit"),
            "isLinked": {"type": "boolean"},
        })

    if control_type == "repeater":
        item_properties: dict[str, Any] = {}
        for field in control.fields:
            if not field.name:
                continue
            field_fragment = map_control(field)
            if field_fragment:
                item_properties[field.name] = field_fragment
        return {"type": "array", "items": _object(item_properties)}

    if control_type == "date_time":
        return {"type": "string", "format": "date-time"}

    if control_type == "gallery":
        return {
            "type": "array",
            "items": _object({"id": {"type": "integer"}, "url": {"type": "string"}}),
        }

    if control_type == "image_dimensions":
        return _object(_integers("width", "height"))

    if control_type == "box_shadow":
        return _object({
            **_integers("horizontal", "vertical", "blur", "spread"),
            "color": {"type": "string"},
        })

    if control_type == "text_shadow":
        return _object({
            **_integers("horizontal", "vertical", "blur"),
            "color": {"type": "string"},
        })

    if control_type == "gaps":
        return _object({
            **_strings("column", "row", "unit"),
            "isLinked": {"type": "boolean"},
        })

    return {"type": "string"}


def map_control(control: ControlDescriptor) -> dict[str, Any]:
    """
    Map a control to a schema fragment.

    Returns an empty dict for structural controls that are not settings.
    """
    if should_skip(control):
        return {}

    fragment = _base_fragment(control)

    if control.label:
        fragment["description"] = control.label

    default = control.default
    if default is not None and not isinstance(default, (dict, list)):
        fragment["default"] = default

    return fragment
