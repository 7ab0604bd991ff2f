"""
Layout MCP Tools

Tools for adding containers and moving, removing and duplicating elements.
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
    id="add_container",
    name="Add Container",
    description=(
        "Add a flexbox container to a page, at the root or inside another container. "
        "Common settings: flex_direction (row/column), justify_content, align_items, "
        "flex_gap, content_width (boxed/full), padding, background_color."
    ),
    category=ToolCategory.LAYOUT,
    input_schema={
        "type": "object",
        "properties": {
            "post_id": {"type": "integer", "description": "Page/post ID"},
            "settings": {"type": "object", "description": "Container settings"},
            "parent_id": {
                "type": "string",
                "description": "Parent container ID (omit for a top-level container)",
            },
            "position": {
                "type": "integer",
                "description": "Insert position (-1 = append)",
                "default": -1,
            },
        },
        "required": ["post_id"],
    },
)
async def add_container(
    context: Any,
    post_id: int,
    settings: dict[str, Any] | None = None,
    parent_id: str | None = None,
    position: int = -1,
) -> CallToolResult:
    """Insert a new container."""
    logger.info(f"MCP add_container called with post_id={post_id}, parent_id={parent_id}, position={position}")

    try:
        result = await PageEditorService(context.get_backend()).add_container(
            post_id, settings, parent_id, position
        )
        return success_result(f"Added container {result['element_id']} to page {post_id}", result)
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error adding container via MCP: {e}")
        return unexpected_error_result("adding container", e)


@system_tool(
    id="move_element",
    name="Move Element",
    description="Move an element (with its children) to another container or to the page root, at a given position.",
    category=ToolCategory.LAYOUT,
    input_schema={
        "type": "object",
        "properties": {
            "post_id": {"type": "integer", "description": "Page/post ID"},
            "element_id": {"type": "string", "description": "Element to move"},
            "target_parent_id": {
                "type": "string",
                "description": "New parent container ID (omit for page root)",
            },
            "position": {
                "type": "integer",
                "description": "Position in the new parent (-1 = append)",
                "default": -1,
            },
        },
        "required": ["post_id", "element_id"],
    },
)
async def move_element(
    context: Any,
    post_id: int,
    element_id: str,
    target_parent_id: str | None = None,
    position: int = -1,
) -> CallToolResult:
    logger.info(
        f"MCP move_element called with post_id={post_id}, element_id={element_id}, "
        f"target_parent_id={target_parent_id}, position={position}"
    )

    try:
        result = await PageEditorService(context.get_backend()).move_element(
            post_id, element_id, target_parent_id, position
        )
        return success_result(
            f"Moved element {element_id} to {target_parent_id or 'page root'}", result
        )
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error moving element via MCP: {e}")
        return unexpected_error_result("moving element", e)


@system_tool(
    id="remove_element",
    name="Remove Element",
    description="Remove an element and all of its children from a page.",
    category=ToolCategory.LAYOUT,
    input_schema={
        "type": "object",
        "properties": {
            "post_id": {"type": "integer", "description": "Page/post ID"},
            "element_id": {"type": "string", "description": "Element to remove"},
        },
        "required": ["post_id", "element_id"],
    },
)
async def remove_element(context: Any, post_id: int, element_id: str) -> CallToolResult:
    logger.info(f"MCP remove_element called with post_id={post_id}, element_id={element_id}")

    try:
        result = await PageEditorService(context.get_backend()).remove_element(post_id, element_id)
        return success_result(
            f"Removed element {element_id} ({result['removed_count']} element(s))", result
        )
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error removing element via MCP: {e}")
        return unexpected_error_result("removing element", e)


@system_tool(
    id="duplicate_element",
    name="Duplicate Element",
    description="Duplicate an element (with its children) and place the copy right after the original. The copy gets new IDs.",
    category=ToolCategory.LAYOUT,
    input_schema={
        "type": "object",
        "properties": {
            "post_id": {"type": "integer", "description": "Page/post ID"},
            "element_id": {"type": "string", "description": "Element to duplicate"},
        },
        "required": ["post_id", "element_id"],
    },
)
async def duplicate_element(context: Any, post_id: int, element_id: str) -> CallToolResult:
    logger.info(f"MCP duplicate_element called with post_id={post_id}, element_id={element_id}")

    try:
        result = await PageEditorService(context.get_backend()).duplicate_element(
            post_id, element_id
        )
        return success_result(
            f"Duplicated element {element_id} as {result['new_element_id']}", result
        )
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error duplicating element via MCP: {e}")
        return unexpected_error_result("duplicating element", e)
