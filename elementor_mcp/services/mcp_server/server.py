"""
Elementor MCP server.

One registry of editor tools, served two ways:
- Claude Agent SDK in-process server (``get_sdk_server``) for agents running
  in the same process
- FastMCP server (``get_fastmcp_server``) for stdio or HTTP clients

    backend = create_backend(get_settings())
    server = create_mcp_server(backend, disabled_tools=["build_page"])

    options = ClaudeAgentOptions(mcp_servers={"elementor": server.get_sdk_server()})
    # or
    server.get_fastmcp_server().run()
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from claude_agent_sdk import create_sdk_mcp_server
from fastmcp import FastMCP

# Registers every tool through its @system_tool decorator
import elementor_mcp.services.mcp_server.tools  # noqa: F401

from elementor_mcp.services.backend import EditorBackend, get_default_backend
from elementor_mcp.services.mcp_server.generators import create_sdk_tools, register_fastmcp_tools
from elementor_mcp.services.mcp_server.tool_registry import get_all_tool_ids, select_tool_ids

logger = logging.getLogger(__name__)

SERVER_VERSION = "1.0.0"

SERVER_INSTRUCTIONS = (
    "Build and edit Elementor pages. Use list_widgets and get_widget_schema to "
    "discover widget settings, get_page_structure to inspect a page, and "
    "build_page to create a complete page in one call."
)


@dataclass
class MCPContext:
    """
    Per-server call context.

    Calls arrive pre-authorized: the context records who is calling and which
    editor backend the tools operate on.
    """

    user_id: str = "local"
    user_email: str = ""
    user_name: str = ""

    # Empty means every registered tool
    enabled_system_tools: list[str] = field(default_factory=list)
    disabled_tools: list[str] = field(default_factory=list)

    backend: EditorBackend | None = None

    def get_backend(self) -> EditorBackend:
        """The injected backend, or the process default built from settings."""
        if self.backend is None:
            self.backend = get_default_backend()
        return self.backend


class ElementorMCPServer:
    """
    Serves the selected editor tools for one context.

    Both server flavors are built lazily and cached.
    """

    def __init__(self, context: MCPContext, *, name: str = "elementor"):
        self.context = context
        self._name = name
        self._enabled_tools = select_tool_ids(
            context.enabled_system_tools, context.disabled_tools
        )

        self._sdk_server: Any = None
        self._fastmcp: FastMCP | None = None

    def get_sdk_server(self) -> Any:
        """SDK server config for ``ClaudeAgentOptions.mcp_servers``."""
        if self._sdk_server is None:
            tools = create_sdk_tools(self.context, self._enabled_tools)
            self._sdk_server = create_sdk_mcp_server(
                name=self._name,
                version=SERVER_VERSION,
                tools=tools,
            )
            logger.info(f"Created SDK MCP server '{self._name}' with {len(tools)} tools")
        return self._sdk_server

    def get_fastmcp_server(self) -> FastMCP:
        if self._fastmcp is None:
            context = self.context
            self._fastmcp = FastMCP(self._name, instructions=SERVER_INSTRUCTIONS)
            count = register_fastmcp_tools(self._fastmcp, self._enabled_tools, lambda: context)
            logger.info(f"Created FastMCP server '{self._name}' with {count} tools")
        return self._fastmcp

    def get_tool_names(self) -> list[str]:
        """Exposed tools as the SDK names them: ``mcp__<server>__<tool>``."""
        return [
            f"mcp__{self._name}__{tool_id}"
            for tool_id in get_all_tool_ids()
            if self._enabled_tools is None or tool_id in self._enabled_tools
        ]


def create_mcp_server(
    backend: EditorBackend,
    *,
    name: str = "elementor",
    enabled_tools: list[str] | None = None,
    disabled_tools: list[str] | None = None,
    user_id: str = "local",
) -> ElementorMCPServer:
    """
    Server bound to ``backend``.

    Args:
        backend: Editor backend the tools operate on
        name: Server name, also the SDK tool name prefix
        enabled_tools: Tool ids to expose (None = all)
        disabled_tools: Tool ids to hide
        user_id: Caller identity recorded in the context
    """
    context = MCPContext(
        user_id=user_id,
        enabled_system_tools=enabled_tools or [],
        disabled_tools=disabled_tools or [],
        backend=backend,
    )
    return ElementorMCPServer(context, name=name)
