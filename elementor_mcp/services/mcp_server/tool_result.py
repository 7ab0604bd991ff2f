"""
Tool results.

Every tool returns a CallToolResult with a short human-readable text block
and the operation's data as structuredContent. Failures carry
``{"error": message, "code": ...}`` plus ``field`` for invalid input.
"""

import json
from typing import Any

from mcp.types import CallToolResult, TextContent

from elementor_mcp.core.exceptions import ElementorMCPError, UpstreamFailureError


def success_result(display_text: str, data: dict[str, Any]) -> CallToolResult:
    return CallToolResult(
        content=[TextContent(type="text", text=display_text)],
        structuredContent=data,
        isError=False,
    )


def error_result(error_message: str, extra_data: dict[str, Any] | None = None) -> CallToolResult:
    """Error result; the text block is prefixed with "Error: "."""
    data: dict[str, Any] = {"error": error_message, **(extra_data or {})}
    return CallToolResult(
        content=[TextContent(type="text", text=f"Error: {error_message}")],
        structuredContent=data,
        isError=True,
    )


def exception_result(error: ElementorMCPError) -> CallToolResult:
    """Error result carrying the exception's code, and field if it has one."""
    data = error.to_dict()
    return error_result(data.pop("error"), data)


def unexpected_error_result(action: str, error: Exception) -> CallToolResult:
    """Result for an exception outside the error taxonomy, reported as an upstream failure."""
    message = f"Error {action}: {error}"
    return CallToolResult(
        content=[TextContent(type="text", text=message)],
        structuredContent={"error": message, "code": UpstreamFailureError.code},
        isError=True,
    )


def json_text(data: Any) -> str:
    """Compact JSON for the text block of structural results."""
    return json.dumps(data, default=str)
