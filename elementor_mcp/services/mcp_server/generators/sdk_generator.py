"""
Claude Agent SDK tools built from the editor tool registry.

SDK handlers receive one ``args`` dict; only keys declared in the tool's
input schema are forwarded to the implementation.
"""

import json
import logging
from typing import TYPE_CHECKING, Any

from claude_agent_sdk import SdkMcpTool, tool as sdk_tool
from mcp.types import CallToolResult, TextContent

from elementor_mcp.services.mcp_server.tool_registry import (
    SystemToolMetadata,
    get_all_system_tools,
)

if TYPE_CHECKING:
    from elementor_mcp.services.mcp_server.server import MCPContext

logger = logging.getLogger(__name__)


def _is_selected(metadata: SystemToolMetadata, enabled_tools: set[str] | None) -> bool:
    if metadata.implementation is None:
        return False
    if enabled_tools is None:
        return metadata.default_enabled_for_coding_agent
    return metadata.id in enabled_tools


def create_sdk_tools(
    context: "MCPContext", enabled_tools: set[str] | None
) -> list[SdkMcpTool]:
    """
    Build one SDK tool per selected registry entry.

    Args:
        context: Context handed to every implementation call
        enabled_tools: Tool ids to build; None builds the default-enabled tools
    """
    tools = [
        _create_sdk_tool(context, metadata)
        for metadata in get_all_system_tools()
        if _is_selected(metadata, enabled_tools)
    ]
    logger.info(f"Created {len(tools)} SDK tools from registry")
    return tools


def to_sdk_content(result: CallToolResult) -> dict[str, Any]:
    """
    SDK handler response for a tool result.

    Errors set ``is_error`` and carry the JSON error payload as their text.
    """
    if result.isError and result.structuredContent:
        return {
            "content": [{"type": "text", "text": json.dumps(result.structuredContent, default=str)}],
            "is_error": True,
        }
    response: dict[str, Any] = {
        "content": [
            {"type": "text", "text": block.text}
            for block in result.content
            if isinstance(block, TextContent)
        ]
    }
    if result.isError:
        response["is_error"] = True
    return response


def _create_sdk_tool(context: "MCPContext", metadata: SystemToolMetadata) -> SdkMcpTool:
    impl = metadata.implementation
    assert impl is not None
    declared = set(metadata.input_schema.get("properties", {}))

    async def handler(args: dict[str, Any]) -> dict[str, Any]:
        kwargs = {key: value for key, value in args.items() if key in declared}
        return to_sdk_content(await impl(context, **kwargs))

    handler.__name__ = f"sdk_{metadata.id}"
    handler.__qualname__ = f"sdk_{metadata.id}"

    logger.debug(f"Created SDK tool: {metadata.id}")
    return sdk_tool(metadata.id, metadata.description, metadata.input_schema)(handler)
