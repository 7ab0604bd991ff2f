"""
Editor tool registry.

Process-wide table of the editor tools, filled by @system_tool when the
tool modules are imported. The server and both generators only ever read
tools from here.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Coroutine

from mcp.types import CallToolResult

ToolImplementation = Callable[..., Coroutine[Any, Any, CallToolResult]]


class ToolCategory(str, Enum):
    """What part of the editor a tool works on."""

    QUERY = "query"
    DOCUMENT = "document"
    LAYOUT = "layout"
    WIDGET = "widget"
    TEMPLATE = "template"
    GLOBAL = "global"
    COMPOSITE = "composite"
    MEDIA = "media"


def empty_input_schema() -> dict[str, Any]:
    return {"type": "object", "properties": {}, "required": []}


@dataclass
class SystemToolMetadata:
    """
    One editor tool.

    ``input_schema`` is what MCP clients see; ``implementation`` receives an
    MCPContext followed by the schema's properties as keyword arguments.
    """

    id: str
    name: str
    description: str
    category: ToolCategory = ToolCategory.QUERY
    default_enabled_for_coding_agent: bool = True
    input_schema: dict[str, Any] = field(default_factory=empty_input_schema)
    implementation: ToolImplementation | None = None

    @property
    def read_only(self) -> bool:
        """Query tools never write to a document or the global kit."""
        return self.category == ToolCategory.QUERY


_TOOLS: dict[str, SystemToolMetadata] = {}


def register_tool(metadata: SystemToolMetadata) -> None:
    if metadata.id in _TOOLS:
        raise ValueError(f"Tool '{metadata.id}' is already registered")
    _TOOLS[metadata.id] = metadata


def get_all_system_tools() -> list[SystemToolMetadata]:
    """Registered tools in registration order."""
    return list(_TOOLS.values())


def get_system_tool(tool_id: str) -> SystemToolMetadata | None:
    return _TOOLS.get(tool_id)


def get_all_tool_ids() -> list[str]:
    return list(_TOOLS)


def get_tools_by_category(category: ToolCategory) -> list[SystemToolMetadata]:
    return [tool for tool in _TOOLS.values() if tool.category == category]


def select_tool_ids(
    enabled: Iterable[str] | None = None,
    disabled: Iterable[str] | None = None,
) -> set[str] | None:
    """
    Resolve the tool ids a server exposes.

    Returns None when nothing restricts the set. A non-empty ``enabled``
    list narrows it; ``disabled`` ids are then removed from what remains.
    """
    selected = set(enabled) if enabled else None
    if disabled:
        base = selected if selected is not None else set(_TOOLS)
        selected = base - set(disabled)
    return selected
