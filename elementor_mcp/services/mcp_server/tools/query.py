"""
Query MCP Tools

Read-only discovery tools: widget catalog, widget schemas, page structure,
element settings, page/template listings and global settings.
"""

import logging
from typing import Any

from mcp.types import CallToolResult

from elementor_mcp.core.exceptions import ElementorMCPError
from elementor_mcp.services.global_settings_service import GlobalSettingsService
from elementor_mcp.services.mcp_server.tool_decorator import system_tool
from elementor_mcp.services.mcp_server.tool_registry import ToolCategory
from elementor_mcp.services.mcp_server.tool_result import (
    exception_result,
    json_text,
    success_result,
    unexpected_error_result,
)
from elementor_mcp.services.page_editor_service import PageEditorService

logger = logging.getLogger(__name__)


@system_tool(
    id="list_widgets",
    name="List Widgets",
    description="List all available Elementor widget types with their title, icon, categories and keywords. Optionally filter by category (e.g. 'basic', 'general').",
    category=ToolCategory.QUERY,
    input_schema={
        "type": "object",
        "properties": {
            "category": {
                "type": "string",
                "description": "Only return widgets in this category",
            },
        },
        "required": [],
    },
)
async def list_widgets(context: Any, category: str | None = None) -> CallToolResult:
    """List registered widget types."""
    logger.info(f"MCP list_widgets called with category={category}")

    try:
        widgets = PageEditorService(context.get_backend()).list_widgets(category)
        names = ", ".join(widget["name"] for widget in widgets)
        return success_result(
            f"Found {len(widgets)} widget(s): {names}",
            {"widgets": widgets, "count": len(widgets)},
        )
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error listing widgets via MCP: {e}")
        return unexpected_error_result("listing widgets", e)


@system_tool(
    id="get_widget_schema",
    name="Get Widget Schema",
    description="Get the JSON Schema of the settings a widget type accepts. Use it before add_widget or update_widget to find valid setting keys.",
    category=ToolCategory.QUERY,
    input_schema={
        "type": "object",
        "properties": {
            "widget_type": {
                "type": "string",
                "description": "Widget type name (e.g. 'heading', 'image', 'button')",
            },
        },
        "required": ["widget_type"],
    },
)
async def get_widget_schema(context: Any, widget_type: str) -> CallToolResult:
    """Settings schema generated from the widget's controls."""
    logger.info(f"MCP get_widget_schema called with widget_type={widget_type}")

    try:
        result = PageEditorService(context.get_backend()).get_widget_schema(widget_type)
        return success_result(json_text(result["schema"]), result)
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error getting widget schema via MCP: {e}")
        return unexpected_error_result("getting widget schema", e)


@system_tool(
    id="get_page_structure",
    name="Get Page Structure",
    description="Get a simplified element tree of a page: element ids, types, widget types and a summary of key settings. Use the ids with the editing tools.",
    category=ToolCategory.QUERY,
    input_schema={
        "type": "object",
        "properties": {
            "post_id": {"type": "integer", "description": "Page/post ID"},
        },
        "required": ["post_id"],
    },
)
async def get_page_structure(context: Any, post_id: int) -> CallToolResult:
    """Simplified tree with settings summaries."""
    logger.info(f"MCP get_page_structure called with post_id={post_id}")

    try:
        result = await PageEditorService(context.get_backend()).get_page_structure(post_id)
        return success_result(json_text(result["elements"]), result)
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error getting page structure via MCP: {e}")
        return unexpected_error_result("getting page structure", e)


@system_tool(
    id="get_element_settings",
    name="Get Element Settings",
    description="Get the full settings of one element on a page.",
    category=ToolCategory.QUERY,
    input_schema={
        "type": "object",
        "properties": {
            "post_id": {"type": "integer", "description": "Page/post ID"},
            "element_id": {"type": "string", "description": "Element ID"},
        },
        "required": ["post_id", "element_id"],
    },
)
async def get_element_settings(context: Any, post_id: int, element_id: str) -> CallToolResult:
    logger.info(f"MCP get_element_settings called with post_id={post_id}, element_id={element_id}")

    try:
        result = await PageEditorService(context.get_backend()).get_element_settings(
            post_id, element_id
        )
        return success_result(json_text(result["settings"]), result)
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error getting element settings via MCP: {e}")
        return unexpected_error_result("getting element settings", e)


@system_tool(
    id="list_pages",
    name="List Pages",
    description="List pages and posts. Optionally filter by post type and status ('publish', 'draft', 'any').",
    category=ToolCategory.QUERY,
    input_schema={
        "type": "object",
        "properties": {
            "post_type": {"type": "string", "description": "Post type (default: page and post)"},
            "status": {"type": "string", "description": "Post status filter"},
        },
        "required": [],
    },
)
async def list_pages(
    context: Any,
    post_type: str | None = None,
    status: str | None = None,
) -> CallToolResult:
    logger.info(f"MCP list_pages called with post_type={post_type}, status={status}")

    try:
        pages = await PageEditorService(context.get_backend()).list_pages(post_type, status)
        display_text = f"Found {len(pages)} page(s)"
        return success_result(display_text, {"pages": pages, "count": len(pages)})
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error listing pages via MCP: {e}")
        return unexpected_error_result("listing pages", e)


@system_tool(
    id="list_templates",
    name="List Templates",
    description="List saved Elementor templates. Optionally filter by template type ('page', 'section', 'container').",
    category=ToolCategory.QUERY,
    input_schema={
        "type": "object",
        "properties": {
            "template_type": {"type": "string", "description": "Template type filter"},
        },
        "required": [],
    },
)
async def list_templates(context: Any, template_type: str | None = None) -> CallToolResult:
    logger.info(f"MCP list_templates called with template_type={template_type}")

    try:
        templates = await PageEditorService(context.get_backend()).list_templates(template_type)
        display_text = f"Found {len(templates)} template(s)"
        return success_result(display_text, {"templates": templates, "count": len(templates)})
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error listing templates via MCP: {e}")
        return unexpected_error_result("listing templates", e)


@system_tool(
    id="get_global_settings",
    name="Get Global Settings",
    description="Get the active kit's global colors, typography and other site-wide settings.",
    category=ToolCategory.QUERY,
)
async def get_global_settings(context: Any) -> CallToolResult:
    logger.info("MCP get_global_settings called")

    try:
        result = await GlobalSettingsService(context.get_backend()).get_global_settings()
        display_text = (
            f"{len(result['colors'])} color(s), {len(result['typography'])} typography preset(s)"
        )
        return success_result(display_text, result)
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error getting global settings via MCP: {e}")
        return unexpected_error_result("getting global settings", e)
