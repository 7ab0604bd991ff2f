"""Tool generators: registry -> FastMCP tools / Claude Agent SDK tools."""

from elementor_mcp.services.mcp_server.generators.fastmcp_generator import register_fastmcp_tools
from elementor_mcp.services.mcp_server.generators.sdk_generator import create_sdk_tools

__all__ = ["create_sdk_tools", "register_fastmcp_tools"]
