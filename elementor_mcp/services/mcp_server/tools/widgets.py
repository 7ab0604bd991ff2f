"""
Widget MCP Tools

Generic tools for adding and updating widgets of any registered type.
Settings keys are validated against the widget's generated schema.
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


@system_tool(
    id="add_widget",
    name="Add Widget",
    description="Add a widget of any type to a container. Use get_widget_schema first to see which settings the widget accepts.",
    category=ToolCategory.WIDGET,
    input_schema={
        "type": "object",
        "properties": {
            "post_id": {"type": "integer", "description": "Page/post ID"},
            "parent_id": {"type": "string", "description": "Parent container ID"},
            "widget_type": {"type": "string", "description": "Widget type name (e.g. 'heading')"},
            "settings": {"type": "object", "description": "Widget settings"},
            "position": {
                "type": "integer",
                "description": "Insert position (-1 = append)",
                "default": -1,
            },
        },
        "required": ["post_id", "parent_id", "widget_type"],
    },
)
async def add_widget(
    context: Any,
    post_id: int,
    parent_id: str,
    widget_type: str,
    settings: dict[str, Any] | None = None,
    position: int = -1,
) -> CallToolResult:
    """Insert a validated widget under a container."""
    logger.info(
        f"MCP add_widget called with post_id={post_id}, parent_id={parent_id}, "
        f"widget_type={widget_type}"
    )

    try:
        result = await PageEditorService(context.get_backend()).add_widget(
            post_id, parent_id, widget_type, settings, position
        )
        return success_result(
            f"Added {widget_type} widget {result['element_id']} to {parent_id}", result
        )
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error adding widget via MCP: {e}")
        return unexpected_error_result("adding widget", e)


@system_tool(
    id="update_widget",
    name="Update Widget",
    description="Update settings of an existing widget. Only the given keys change; nested values such as {size, unit} are replaced as a whole.",
    category=ToolCategory.WIDGET,
    input_schema={
        "type": "object",
        "properties": {
            "post_id": {"type": "integer", "description": "Page/post ID"},
            "element_id": {"type": "string", "description": "Widget element ID"},
            "settings": {"type": "object", "description": "Settings to merge"},
        },
        "required": ["post_id", "element_id", "settings"],
    },
)
async def update_widget(
    context: Any,
    post_id: int,
    element_id: str,
    settings: dict[str, Any],
) -> CallToolResult:
    logger.info(f"MCP update_widget called with post_id={post_id}, element_id={element_id}")

    try:
        result = await PageEditorService(context.get_backend()).update_widget(
            post_id, element_id, settings
        )
        return success_result(
            f"Updated widget {element_id}: {', '.join(result['updated_keys'])}", result
        )
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error updating widget via MCP: {e}")
        return unexpected_error_result("updating widget", e)
