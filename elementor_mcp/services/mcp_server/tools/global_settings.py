"""
Global Settings MCP Tools

Update the kit's global colors and typography presets.
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
    success_result,
    unexpected_error_result,
)

logger = logging.getLogger(__name__)


@system_tool(
    id="update_global_colors",
    name="Update Global Colors",
    description="Add or update global colors. Entries are matched by _id; colors must be hex values (e.g. '#1a2b3c').",
    category=ToolCategory.GLOBAL,
    input_schema={
        "type": "object",
        "properties": {
            "colors": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "_id": {"type": "string", "description": "Color ID"},
                        "title": {"type": "string", "description": "Display name"},
                        "color": {"type": "string", "description": "Hex color"},
                    },
                    "required": ["_id", "color"],
                },
                "description": "Colors to upsert",
            },
        },
        "required": ["colors"],
    },
)
async def update_global_colors(context: Any, colors: list[dict[str, Any]]) -> CallToolResult:
    logger.info(f"MCP update_global_colors called with {len(colors or [])} color(s)")

    try:
        result = await GlobalSettingsService(context.get_backend()).update_global_colors(colors)
        return success_result(f"Updated global colors: {', '.join(result['updated'])}", result)
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error updating global colors via MCP: {e}")
        return unexpected_error_result("updating global colors", e)


@system_tool(
    id="update_global_typography",
    name="Update Global Typography",
    description=(
        "Add or update global typography presets. Entries are matched by _id; "
        "supported keys are title and typography_* (font_family, font_size, "
        "font_weight, line_height, letter_spacing, ...)."
    ),
    category=ToolCategory.GLOBAL,
    input_schema={
        "type": "object",
        "properties": {
            "typography": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "_id": {"type": "string", "description": "Typography ID"},
                        "title": {"type": "string", "description": "Display name"},
                        "typography_font_family": {"type": "string"},
                        "typography_font_size": {
                            "type": "object",
                            "properties": {
                                "size": {"type": "number"},
                                "unit": {"type": "string"},
                            },
                        },
                        "typography_font_weight": {"type": "string"},
                        "typography_line_height": {
                            "type": "object",
                            "properties": {
                                "size": {"type": "number"},
                                "unit": {"type": "string"},
                            },
                        },
                    },
                    "required": ["_id"],
                },
                "description": "Typography presets to upsert",
            },
        },
        "required": ["typography"],
    },
)
async def update_global_typography(
    context: Any, typography: list[dict[str, Any]]
) -> CallToolResult:
    logger.info(f"MCP update_global_typography called with {len(typography or [])} preset(s)")

    try:
        result = await GlobalSettingsService(context.get_backend()).update_global_typography(
            typography
        )
        return success_result(
            f"Updated global typography: {', '.join(result['updated'])}", result
        )
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error updating global typography via MCP: {e}")
        return unexpected_error_result("updating global typography", e)
