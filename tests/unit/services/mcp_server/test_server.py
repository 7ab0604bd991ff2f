"""
Unit tests for ElementorMCPServer and MCPContext.
"""

from fastmcp import FastMCP

from elementor_mcp.services.mcp_server.server import (
    ElementorMCPServer,
    MCPContext,
    create_mcp_server,
)
from elementor_mcp.services.mcp_server.tool_registry import get_all_tool_ids


class TestMCPContext:
    def test_returns_injected_backend(self, backend):
        context = MCPContext(backend=backend)
        assert context.get_backend() is backend

    def test_defaults(self):
        context = MCPContext()

        assert context.user_id == "local"
        assert context.enabled_system_tools == []
        assert context.disabled_tools == []


class TestToolSelection:
    """Enabled/disabled tool lists drive what the server exposes."""

    def test_all_tools_by_default(self, backend):
        server = create_mcp_server(backend)

        names = server.get_tool_names()

        assert len(names) == len(get_all_tool_ids())
        assert all(name.startswith("mcp__elementor__") for name in names)

    def test_disabled_tools(self, backend):
        server = create_mcp_server(backend, disabled_tools=["build_page", "add_heading"])

        names = server.get_tool_names()

        assert "mcp__elementor__build_page" not in names
        assert "mcp__elementor__add_heading" not in names
        assert "mcp__elementor__add_widget" in names

    def test_enabled_tools(self, backend):
        server = create_mcp_server(backend, enabled_tools=["list_widgets", "add_widget"])

        assert set(server.get_tool_names()) == {
            "mcp__elementor__list_widgets",
            "mcp__elementor__add_widget",
        }

    def test_enabled_minus_disabled(self, backend):
        server = create_mcp_server(
            backend,
            enabled_tools=["list_widgets", "add_widget"],
            disabled_tools=["add_widget"],
        )

        assert server.get_tool_names() == ["mcp__elementor__list_widgets"]

    def test_custom_name_prefix(self, mcp_context):
        server = ElementorMCPServer(mcp_context, name="pages")

        assert all(name.startswith("mcp__pages__") for name in server.get_tool_names())


class TestServerModes:
    def test_fastmcp_server_is_cached(self, backend):
        server = create_mcp_server(backend, enabled_tools=["list_widgets"])

        fastmcp = server.get_fastmcp_server()

        assert isinstance(fastmcp, FastMCP)
        assert server.get_fastmcp_server() is fastmcp

    def test_sdk_server_is_cached(self, backend):
        server = create_mcp_server(backend, name="elementor", enabled_tools=["list_widgets"])

        sdk_server = server.get_sdk_server()

        assert sdk_server["name"] == "elementor"
        assert server.get_sdk_server() is sdk_server
