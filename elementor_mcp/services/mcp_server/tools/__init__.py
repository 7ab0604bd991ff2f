"""
MCP tool implementations.

Importing this package registers every tool with the system tool registry
through the @system_tool decorator.
"""

from elementor_mcp.services.mcp_server.tools import (  # noqa: F401
    composite,
    convenience,
    global_settings,
    layout,
    media,
    pages,
    query,
    templates,
    widgets,
)
