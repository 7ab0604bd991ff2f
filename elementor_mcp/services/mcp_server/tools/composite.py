"""
Composite MCP Tools

build_page creates a page and its whole element tree in one call from a
nested structure description.
"""

import logging
from typing import Any

from mcp.types import CallToolResult

from elementor_mcp.core.exceptions import ElementorMCPError
from elementor_mcp.services.mcp_server.tool_decorator import system_tool
from elementor_mcp.services.mcp_server.tool_registry import ToolCategory
from elementor_mcp.services.mcp_server.tool_result import (
    exception_result,
    success_result,
    unexpected_error_result,
)
from elementor_mcp.services.page_editor_service import PageEditorService

logger = logging.getLogger(__name__)

STRUCTURE_ITEM_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "type": {
            "type": "string",
            "enum": ["container", "widget"],
            "description": "Item type",
        },
        "widget_type": {
            "type": "string",
            "description": "Widget type name (widgets only)",
        },
        "settings": {"type": "object", "description": "Element settings"},
        "children": {
            "type": "array",
            "items": {"type": "object"},
            "description": "Nested items (containers only)",
        },
    },
    "required": ["type"],
}


@system_tool(
    id="build_page",
    name="Build Page",
    description=(
        "Create a complete page from a nested structure of containers and widgets in one call. "
        "Children of a container with flex_direction 'row' get equal percentage widths "
        "unless they set width, _flex_size or _flex_grow themselves."
    ),
    category=ToolCategory.COMPOSITE,
    input_schema={
        "type": "object",
        "properties": {
            "title": {"type": "string", "description": "Page title"},
            "structure": {
                "type": "array",
                "items": STRUCTURE_ITEM_SCHEMA,
                "description": (
                    "Root items, e.g. [{\"type\": \"container\", \"settings\": "
                    "{\"flex_direction\": \"row\"}, \"children\": [{\"type\": \"widget\", "
                    "\"widget_type\": \"heading\", \"settings\": {\"title\": \"Hello\"}}]}]"
                ),
            },
            "status": {
                "type": "string",
                "enum": ["draft", "publish", "pending", "private"],
                "description": "Post status (default: draft)",
            },
            "post_type": {"type": "string", "description": "Post type (default: page)"},
            "page_settings": {"type": "object", "description": "Page-level settings"},
        },
        "required": ["title", "structure"],
    },
)
async def build_page(
    context: Any,
    title: str,
    structure: list[dict[str, Any]],
    status: str = "draft",
    post_type: str = "page",
    page_settings: dict[str, Any] | None = None,
) -> CallToolResult:
    """Create a page and compile the structure into its element tree."""
    logger.info(
        f"MCP build_page called with title={title}, {len(structure or [])} root item(s), "
        f"status={status}, post_type={post_type}"
    )

    try:
        result = await PageEditorService(context.get_backend()).build_page(
            title=title,
            structure=structure,
            status=status,
            post_type=post_type,
            page_settings=page_settings,
        )
        return success_result(
            f"Built page '{title}' (ID: {result['post_id']}) with "
            f"{result['elements_created']} element(s)",
            result,
        )
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error building page via MCP: {e}")
        return unexpected_error_result("building page", e)
