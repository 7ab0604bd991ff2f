"""
Elementor MCP Server Module

Provides Model Context Protocol (MCP) tools for building and editing
Elementor pages, served in-process through the Claude Agent SDK or
standalone through FastMCP.

Usage:
    from elementor_mcp.services.mcp_server import ElementorMCPServer, MCPContext

    context = MCPContext(backend=backend)
    server = ElementorMCPServer(context)
    sdk_server = server.get_sdk_server()
"""

from elementor_mcp.services.mcp_server.server import (
    ElementorMCPServer,
    MCPContext,
    create_mcp_server,
)

__all__ = ["ElementorMCPServer", "MCPContext", "create_mcp_server"]
