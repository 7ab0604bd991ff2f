"""
Document MCP Tools

Tools for creating pages, updating page settings, clearing content and
importing/exporting element trees.
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
    id="create_document",
    name="Create Page",
    description="Create a new Elementor page or post. Optionally pass initial content as an Elementor element array.",
    category=ToolCategory.DOCUMENT,
    input_schema={
        "type": "object",
        "properties": {
            "title": {"type": "string", "description": "Page title"},
            "status": {
                "type": "string",
                "enum": ["draft", "publish", "pending", "private"],
                "description": "Post status (default: draft)",
            },
            "post_type": {"type": "string", "description": "Post type (default: page)"},
            "content": {
                "type": "array",
                "items": {"type": "object"},
                "description": "Initial Elementor element data",
            },
        },
        "required": ["title"],
    },
)
async def create_document(
    context: Any,
    title: str,
    status: str = "draft",
    post_type: str = "page",
    content: list[dict[str, Any]] | None = None,
) -> CallToolResult:
    """Create a page with an empty (or given) element tree."""
    logger.info(f"MCP create_document called with title={title}, status={status}, post_type={post_type}")

    try:
        result = await PageEditorService(context.get_backend()).create_document(
            title=title, status=status, post_type=post_type, content=content
        )
        return success_result(f"Created {result['post_type']} '{title}' (ID: {result['post_id']})", result)
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error creating document via MCP: {e}")
        return unexpected_error_result("creating document", e)


@system_tool(
    id="update_document_settings",
    name="Update Page Settings",
    description="Update page-level Elementor settings (background, padding, hide title, ...). Keys are merged into the existing settings.",
    category=ToolCategory.DOCUMENT,
    input_schema={
        "type": "object",
        "properties": {
            "post_id": {"type": "integer", "description": "Page/post ID"},
            "settings": {"type": "object", "description": "Page settings to merge"},
        },
        "required": ["post_id", "settings"],
    },
)
async def update_document_settings(
    context: Any, post_id: int, settings: dict[str, Any]
) -> CallToolResult:
    logger.info(f"MCP update_document_settings called with post_id={post_id}")

    try:
        result = await PageEditorService(context.get_backend()).update_document_settings(
            post_id, settings
        )
        return success_result(
            f"Updated page settings of {post_id}: {', '.join(result['updated_keys'])}", result
        )
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error updating page settings via MCP: {e}")
        return unexpected_error_result("updating page settings", e)


@system_tool(
    id="clear_document_content",
    name="Delete Page Content",
    description="Remove every element from a page, leaving an empty Elementor document. This cannot be undone.",
    category=ToolCategory.DOCUMENT,
    default_enabled_for_coding_agent=False,
    input_schema={
        "type": "object",
        "properties": {
            "post_id": {"type": "integer", "description": "Page/post ID"},
        },
        "required": ["post_id"],
    },
)
async def clear_document_content(context: Any, post_id: int) -> CallToolResult:
    logger.info(f"MCP clear_document_content called with post_id={post_id}")

    try:
        result = await PageEditorService(context.get_backend()).clear_document_content(post_id)
        return success_result(f"Cleared all content of page {post_id}", result)
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error clearing page content via MCP: {e}")
        return unexpected_error_result("clearing page content", e)


@system_tool(
    id="import_structure_into_document",
    name="Import Template",
    description="Import Elementor JSON (an element array or an export file with a 'content' key) into a page. All element IDs are regenerated.",
    category=ToolCategory.DOCUMENT,
    input_schema={
        "type": "object",
        "properties": {
            "post_id": {"type": "integer", "description": "Page/post ID"},
            "template_json": {
                "description": "Element array, export object, or the same as a JSON string",
            },
            "position": {
                "type": "integer",
                "description": "Insert position at the page root (-1 = append)",
                "default": -1,
            },
        },
        "required": ["post_id", "template_json"],
    },
)
async def import_structure_into_document(
    context: Any,
    post_id: int,
    template_json: list[dict[str, Any]] | dict[str, Any] | str,
    position: int = -1,
) -> CallToolResult:
    logger.info(f"MCP import_structure_into_document called with post_id={post_id}, position={position}")

    try:
        result = await PageEditorService(context.get_backend()).import_structure_into_document(
            post_id, template_json, position
        )
        return success_result(
            f"Imported {result['elements_count']} element(s) into page {post_id}", result
        )
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error importing template via MCP: {e}")
        return unexpected_error_result("importing template", e)


@system_tool(
    id="export_document",
    name="Export Page",
    description="Export a page's full Elementor element tree and page settings as JSON.",
    category=ToolCategory.DOCUMENT,
    input_schema={
        "type": "object",
        "properties": {
            "post_id": {"type": "integer", "description": "Page/post ID"},
        },
        "required": ["post_id"],
    },
)
async def export_document(context: Any, post_id: int) -> CallToolResult:
    logger.info(f"MCP export_document called with post_id={post_id}")

    try:
        result = await PageEditorService(context.get_backend()).export_document(post_id)
        return success_result(
            f"Exported page {post_id} '{result['title']}' ({len(result['content'])} root element(s))",
            result,
        )
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error exporting page via MCP: {e}")
        return unexpected_error_result("exporting page", e)
