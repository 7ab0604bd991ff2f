"""
@system_tool: declare an editor tool next to its implementation.

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
        ...

The function itself is registered as the implementation and returned as is,
with its metadata attached as ``_tool_metadata``.
"""

from typing import Any, Callable, TypeVar

from elementor_mcp.services.mcp_server.tool_registry import (
    SystemToolMetadata,
    ToolCategory,
    ToolImplementation,
    empty_input_schema,
    register_tool,
)

F = TypeVar("F", bound=ToolImplementation)


def system_tool(
    id: str,
    name: str,
    description: str,
    *,
    category: ToolCategory = ToolCategory.QUERY,
    default_enabled_for_coding_agent: bool = True,
    input_schema: dict[str, Any] | None = None,
) -> Callable[[F], F]:
    """
    Register the decorated coroutine function as an editor tool.

    Args:
        id: Tool id exposed to MCP clients (snake_case, e.g. "add_widget")
        name: Human-readable name
        description: Description shown to the model
        category: Editor area the tool belongs to
        default_enabled_for_coding_agent: Include in SDK servers built without an explicit tool list
        input_schema: JSON Schema of the tool's keyword arguments

    Raises:
        ValueError: If a tool with the same id is already registered
    """

    def decorator(func: F) -> F:
        metadata = SystemToolMetadata(
            id=id,
            name=name,
            description=description,
            category=category,
            default_enabled_for_coding_agent=default_enabled_for_coding_agent,
            input_schema=input_schema or empty_input_schema(),
            implementation=func,
        )
        register_tool(metadata)
        func._tool_metadata = metadata  # type: ignore[attr-defined]
        return func

    return decorator
