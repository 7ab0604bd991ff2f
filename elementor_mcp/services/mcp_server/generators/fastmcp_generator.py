"""
FastMCP tools built from the editor tool registry.

Each implementation is exposed through a wrapper whose signature is the
implementation's minus the leading ``context`` parameter, so FastMCP derives
the same parameters the registry's input schema describes. Query tools are
flagged read-only and every tool is tagged with its category.
"""

import inspect
import json
import logging
from typing import TYPE_CHECKING, Any, Callable

from fastmcp.exceptions import ToolError
from fastmcp.tools.tool import ToolResult
from mcp.types import CallToolResult, TextContent, ToolAnnotations

from elementor_mcp.services.mcp_server.tool_registry import (
    SystemToolMetadata,
    get_all_system_tools,
)

if TYPE_CHECKING:
    from fastmcp import FastMCP

    from elementor_mcp.services.mcp_server.server import MCPContext

logger = logging.getLogger(__name__)


def register_fastmcp_tools(
    mcp: "FastMCP",
    enabled_tools: set[str] | None,
    get_context_fn: Callable[[], "MCPContext"],
) -> int:
    """
    Register the selected registry tools on a FastMCP server.

    Args:
        mcp: FastMCP server instance
        enabled_tools: Tool ids to register (None = all)
        get_context_fn: Returns the context for each call

    Returns:
        Number of tools registered
    """
    count = 0
    for metadata in get_all_system_tools():
        if metadata.implementation is None:
            continue
        if enabled_tools is not None and metadata.id not in enabled_tools:
            continue

        mcp.tool(
            name=metadata.id,
            description=metadata.description,
            tags={metadata.category.value},
            annotations=ToolAnnotations(title=metadata.name, readOnlyHint=metadata.read_only),
        )(build_wrapper(metadata, get_context_fn))
        count += 1
        logger.debug(f"Registered FastMCP tool: {metadata.id}")

    logger.info(f"Registered {count} FastMCP tools from registry")
    return count


def to_tool_result(result: CallToolResult) -> ToolResult:
    """
    FastMCP result for a tool result.

    Error results raise ToolError so FastMCP reports them with isError set.
    The error text is the JSON error payload, so clients keep the error code.
    """
    if result.isError:
        if result.structuredContent:
            raise ToolError(json.dumps(result.structuredContent, default=str))
        message = " ".join(
            block.text for block in result.content if isinstance(block, TextContent)
        )
        raise ToolError(message or "Tool failed")
    return ToolResult(content=result.content, structured_content=result.structuredContent)


def build_wrapper(
    metadata: SystemToolMetadata,
    get_context_fn: Callable[[], Any],
) -> Callable[..., Any]:
    """Context-free coroutine for one tool, carrying the implementation's parameters."""
    impl = metadata.implementation
    assert impl is not None
    signature = inspect.signature(impl)
    params = list(signature.parameters.values())[1:]

    async def wrapper(**kwargs: Any) -> ToolResult:
        return to_tool_result(await impl(get_context_fn(), **kwargs))

    wrapper.__name__ = metadata.id
    wrapper.__qualname__ = metadata.id
    wrapper.__doc__ = metadata.description
    wrapper.__signature__ = signature.replace(  # type: ignore[attr-defined]
        parameters=params, return_annotation=ToolResult
    )
    # FastMCP's type adapter reads __annotations__; unannotated params are strings
    wrapper.__annotations__ = {
        **{
            param.name: str if param.annotation is inspect.Parameter.empty else param.annotation
            for param in params
        },
        "return": ToolResult,
    }
    return wrapper
