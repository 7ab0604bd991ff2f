"""
Unit tests for the FastMCP and Claude Agent SDK tool generators.
"""

import inspect
import json
from unittest.mock import MagicMock

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError
from fastmcp.tools.tool import ToolResult

from elementor_mcp.services.mcp_server.generators import create_sdk_tools, register_fastmcp_tools
from elementor_mcp.services.mcp_server.generators.fastmcp_generator import to_tool_result
from elementor_mcp.services.mcp_server.generators.sdk_generator import to_sdk_content
from elementor_mcp.services.mcp_server.server import ElementorMCPServer
from elementor_mcp.services.mcp_server.tool_result import error_result, success_result


def _registered_wrappers(mcp: MagicMock) -> dict:
    """Map tool name -> wrapper passed to the mcp.tool(...) decorator."""
    return {
        call.args[0].__name__: call.args[0]
        for call in mcp.tool.return_value.call_args_list
    }


class TestResultConversion:
    def test_to_tool_result_success(self):
        result = to_tool_result(success_result("done", {"post_id": 1}))

        assert isinstance(result, ToolResult)
        assert result.structured_content == {"post_id": 1}

    def test_to_tool_result_error_raises(self):
        with pytest.raises(ToolError) as exc_info:
            to_tool_result(error_result("Element not found: x", {"code": "not_found"}))

        assert json.loads(str(exc_info.value)) == {
            "error": "Element not found: x",
            "code": "not_found",
        }

    def test_to_sdk_content(self):
        assert to_sdk_content(success_result("done", {})) == {
            "content": [{"type": "text", "text": "done"}]
        }

    def test_to_sdk_content_error(self):
        response = to_sdk_content(
            error_result("bad", {"code": "invalid_input", "field": "bogus"})
        )

        assert response["is_error"] is True
        assert json.loads(response["content"][0]["text"]) == {
            "error": "bad",
            "code": "invalid_input",
            "field": "bogus",
        }


class TestFastMCPGenerator:
    """Registration against a mocked FastMCP instance."""

    def test_registers_enabled_tools(self, mcp_context):
        mcp = MagicMock()

        count = register_fastmcp_tools(mcp, {"list_widgets", "add_widget"}, lambda: mcp_context)

        assert count == 2
        names = {call.kwargs["name"] for call in mcp.tool.call_args_list}
        assert names == {"list_widgets", "add_widget"}

    def test_tags_and_read_only_hint(self, mcp_context):
        mcp = MagicMock()

        register_fastmcp_tools(mcp, {"list_widgets", "add_widget"}, lambda: mcp_context)

        kwargs = {call.kwargs["name"]: call.kwargs for call in mcp.tool.call_args_list}
        assert kwargs["list_widgets"]["tags"] == {"query"}
        assert kwargs["list_widgets"]["annotations"].readOnlyHint is True
        assert kwargs["add_widget"]["annotations"].readOnlyHint is False
        assert kwargs["add_widget"]["annotations"].title == "Add Widget"

    def test_wrapper_signature_drops_context(self, mcp_context):
        mcp = MagicMock()

        register_fastmcp_tools(mcp, {"add_widget"}, lambda: mcp_context)

        wrapper = _registered_wrappers(mcp)["add_widget"]
        params = list(inspect.signature(wrapper).parameters)
        assert params == ["post_id", "parent_id", "widget_type", "settings", "position"]
        assert wrapper.__annotations__["post_id"] is int

    def test_convenience_wrapper_signature(self, mcp_context):
        mcp = MagicMock()

        register_fastmcp_tools(mcp, {"add_heading"}, lambda: mcp_context)

        wrapper = _registered_wrappers(mcp)["add_heading"]
        params = list(inspect.signature(wrapper).parameters)
        assert params[:4] == ["post_id", "parent_id", "title", "position"]

    @pytest.mark.asyncio
    async def test_wrapper_calls_tool_with_context(self, mcp_context, page_id):
        mcp = MagicMock()
        register_fastmcp_tools(mcp, {"get_element_settings"}, lambda: mcp_context)
        wrapper = _registered_wrappers(mcp)["get_element_settings"]

        result = await wrapper(post_id=page_id, element_id="w100001")

        assert result.structured_content["widgetType"] == "heading"

    @pytest.mark.asyncio
    async def test_wrapper_raises_tool_error(self, mcp_context, page_id):
        mcp = MagicMock()
        register_fastmcp_tools(mcp, {"remove_element"}, lambda: mcp_context)
        wrapper = _registered_wrappers(mcp)["remove_element"]

        with pytest.raises(ToolError):
            await wrapper(post_id=page_id, element_id="missing")



class TestFastMCPClientErrors:
    """Errors reach a connected client with their code and field."""

    @pytest.mark.asyncio
    async def test_not_found_code(self, mcp_context, page_id):
        server = ElementorMCPServer(mcp_context).get_fastmcp_server()

        async with Client(server) as client:
            result = await client.call_tool(
                "remove_element",
                {"post_id": page_id, "element_id": "nope"},
                raise_on_error=False,
            )

        assert result.is_error is True
        assert json.loads(result.content[0].text) == {
            "error": "Element not found: nope",
            "code": "not_found",
        }

    @pytest.mark.asyncio
    async def test_invalid_input_field(self, mcp_context, page_id):
        server = ElementorMCPServer(mcp_context).get_fastmcp_server()

        async with Client(server) as client:
            result = await client.call_tool(
                "update_widget",
                {"post_id": page_id, "element_id": "w100001", "settings": {"bogus": 1}},
                raise_on_error=False,
            )

        assert result.is_error is True
        payload = json.loads(result.content[0].text)
        assert payload["code"] == "invalid_input"
        assert payload["field"] == "bogus"

    @pytest.mark.asyncio
    async def test_success_passes_through(self, mcp_context, page_id):
        server = ElementorMCPServer(mcp_context).get_fastmcp_server()

        async with Client(server) as client:
            result = await client.call_tool(
                "get_element_settings",
                {"post_id": page_id, "element_id": "w100001"},
            )

        assert result.is_error is False
        assert result.structured_content["widgetType"] == "heading"


class TestSDKGenerator:
    def test_creates_enabled_tools(self, mcp_context):
        tools = create_sdk_tools(mcp_context, {"list_widgets", "build_page"})

        assert {t.name for t in tools} == {"list_widgets", "build_page"}

    @pytest.mark.asyncio
    async def test_handler_filters_arguments(self, mcp_context, page_id):
        tools = {t.name: t for t in create_sdk_tools(mcp_context, {"get_page_structure"})}

        response = await tools["get_page_structure"].handler(
            {"post_id": page_id, "unexpected": True}
        )

        assert "is_error" not in response
        assert response["content"][0]["type"] == "text"

    @pytest.mark.asyncio
    async def test_handler_reports_errors(self, mcp_context):
        tools = {t.name: t for t in create_sdk_tools(mcp_context, {"get_widget_schema"})}

        response = await tools["get_widget_schema"].handler({"widget_type": "carousel"})

        assert response["is_error"] is True
        assert json.loads(response["content"][0]["text"])["code"] == "not_found"
