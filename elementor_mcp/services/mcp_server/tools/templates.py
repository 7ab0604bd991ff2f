"""
Template MCP Tools

Save a page (or one element) as a reusable template and apply templates to
pages. Applied content always receives fresh element IDs.
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
    id="save_as_template",
    name="Save as Template",
    description="Save a page, or a single element of it, as an Elementor template.",
    category=ToolCategory.TEMPLATE,
    input_schema={
        "type": "object",
        "properties": {
            "post_id": {"type": "integer", "description": "Source page/post ID"},
            "title": {"type": "string", "description": "Template title"},
            "element_id": {
                "type": "string",
                "description": "Save only this element (omit for the whole page)",
            },
            "template_type": {
                "type": "string",
                "enum": ["page", "section", "container"],
                "description": "Template type (default: page)",
            },
        },
        "required": ["post_id", "title"],
    },
)
async def save_as_template(
    context: Any,
    post_id: int,
    title: str,
    element_id: str | None = None,
    template_type: str = "page",
) -> CallToolResult:
    """Store page content as a template document."""
    logger.info(
        f"MCP save_as_template called with post_id={post_id}, title={title}, "
        f"element_id={element_id}, template_type={template_type}"
    )

    try:
        result = await PageEditorService(context.get_backend()).save_as_template(
            post_id, title, element_id, template_type
        )
        return success_result(
            f"Saved template '{title}' (ID: {result['template_id']}, "
            f"{result['elements_count']} element(s))",
            result,
        )
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error saving template via MCP: {e}")
        return unexpected_error_result("saving template", e)


@system_tool(
    id="apply_template",
    name="Apply Template",
    description="Insert a saved template's content into a page, at the root or inside a container.",
    category=ToolCategory.TEMPLATE,
    input_schema={
        "type": "object",
        "properties": {
            "post_id": {"type": "integer", "description": "Target page/post ID"},
            "template_id": {"type": "integer", "description": "Template ID"},
            "parent_id": {
                "type": "string",
                "description": "Parent container ID (omit for page root)",
            },
            "position": {
                "type": "integer",
                "description": "Insert position (-1 = append)",
                "default": -1,
            },
        },
        "required": ["post_id", "template_id"],
    },
)
async def apply_template(
    context: Any,
    post_id: int,
    template_id: int,
    parent_id: str | None = None,
    position: int = -1,
) -> CallToolResult:
    logger.info(
        f"MCP apply_template called with post_id={post_id}, template_id={template_id}, "
        f"parent_id={parent_id}, position={position}"
    )

    try:
        result = await PageEditorService(context.get_backend()).apply_template(
            post_id, template_id, parent_id, position
        )
        return success_result(
            f"Applied template {template_id} to page {post_id} "
            f"({result['elements_count']} element(s))",
            result,
        )
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error applying template via MCP: {e}")
        return unexpected_error_result("applying template", e)
