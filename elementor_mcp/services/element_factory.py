"""
Element Factory

Builds well-formed tree nodes with fresh ids. Settings are trusted here;
callers validate external input before construction.
"""

from typing import Any

from elementor_mcp.models.contracts.elements import Element
from elementor_mcp.services.id_generator import generate_element_id

CONTAINER_DEFAULTS: dict[str, Any] = {
    "container_type": "flex",
    "content_width": "boxed",
}

COLUMN_DEFAULTS: dict[str, Any] = {
    "column_size": 100,
}


def create_container(
    settings: dict[str, Any] | None = None,
    children: list[Element] | None = None,
) -> Element:
    """Flex container; caller settings win over the defaults."""
    return Element(
        id=generate_element_id(),
        kind="container",
        is_inner=False,
        settings={**CONTAINER_DEFAULTS, **(settings or {})},
        children=list(children or []),
    )


def create_widget(widget_type: str, settings: dict[str, Any] | None = None) -> Element:
    return Element(
        id=generate_element_id(),
        kind="widget",
        widget_type=widget_type,
        settings=dict(settings or {}),
        children=[],
    )


# =============================================================================
# Legacy section/column layout
# =============================================================================


def create_section(
    settings: dict[str, Any] | None = None,
    columns: list[Element] | None = None,
) -> Element:
    return Element(
        id=generate_element_id(),
        kind="section",
        settings=dict(settings or {}),
        children=list(columns or []),
    )


def create_column(
    settings: dict[str, Any] | None = None,
    widgets: list[Element] | None = None,
) -> Element:
    return Element(
        id=generate_element_id(),
        kind="column",
        settings={**COLUMN_DEFAULTS, **(settings or {})},
        children=list(widgets or []),
    )
