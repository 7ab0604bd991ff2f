"""
Unit tests for the media MCP tools.
"""

import httpx
import pytest

from elementor_mcp.services.backend import EditorBackend
from elementor_mcp.services.mcp_server.server import MCPContext
from elementor_mcp.services.mcp_server.tool_registry import (
    ToolCategory,
    get_system_tool,
    get_tools_by_category,
)
from elementor_mcp.services.openverse_client import OpenverseClient
from elementor_mcp.services.widget_registry import load_widget_registry

IMAGE = {
    "id": "img-0",
    "title": "Harbor",
    "url": "https://images.example.com/harbor.jpg",
    "attribution": '"Harbor" by Sam is marked with CC0 1.0.',
    "foreign_landing_url": "https://www.flickr.com/photos/sam/1",
}


def _handle(request: httpx.Request) -> httpx.Response:
    if request.url.host == "api.openverse.org":
        if request.url.params["q"] == "nothing":
            return httpx.Response(200, json={"result_count": 0, "results": []})
        return httpx.Response(200, json={"result_count": 1, "page": 1, "page_count": 1, "results": [IMAGE]})
    if request.url.host == "images.example.com":
        return httpx.Response(200, content=b"\xff\xd8\xff", headers={"content-type": "image/jpeg"})
    return httpx.Response(503)


@pytest.fixture
def media_context(document_store, token_store) -> MCPContext:
    transport = httpx.MockTransport(_handle)
    backend = EditorBackend(
        documents=document_store,
        widgets=load_widget_registry(),
        tokens=token_store,
        images=OpenverseClient(transport=transport),
        http_transport=transport,
    )
    return MCPContext(user_id="test-user", backend=backend)


async def _call(tool_id: str, context: MCPContext, **kwargs):
    return await get_system_tool(tool_id).implementation(context, **kwargs)


class TestRegistration:
    def test_media_category(self):
        assert {t.id for t in get_tools_by_category(ToolCategory.MEDIA)} == {
            "search_images",
            "sideload_image",
            "add_stock_image",
            "upload_svg_icon",
        }


class TestMediaTools:
    @pytest.mark.asyncio
    async def test_search_images(self, media_context):
        result = await _call("search_images", media_context, query="harbor")

        assert result.isError is False
        assert result.content[0].text == "Found 1 image(s) for 'harbor' (showing 1, page 1)"
        assert result.structuredContent["results"][0]["attribution"] == IMAGE["attribution"]

    @pytest.mark.asyncio
    async def test_sideload_image(self, media_context):
        result = await _call(
            "sideload_image", media_context, url="https://images.example.com/harbor.jpg"
        )

        assert result.isError is False
        assert result.structuredContent["attachment_id"] == 1
        assert result.structuredContent["title"] == "harbor"

    @pytest.mark.asyncio
    async def test_sideload_upstream_failure(self, media_context):
        result = await _call("sideload_image", media_context, url="https://down.example.com/a.jpg")

        assert result.isError is True
        assert result.structuredContent["code"] == "upstream_failure"

    @pytest.mark.asyncio
    async def test_add_stock_image(self, media_context, page_id):
        result = await _call(
            "add_stock_image", media_context, post_id=page_id, parent_id="c100003", query="harbor"
        )

        assert result.isError is False
        element_id = result.structuredContent["element_id"]
        assert result.content[0].text == (
            f"Added stock image {element_id} (attachment 1) to page {page_id}"
        )

    @pytest.mark.asyncio
    async def test_add_stock_image_no_results(self, media_context, page_id):
        result = await _call(
            "add_stock_image", media_context, post_id=page_id, parent_id="c100003", query="nothing"
        )

        assert result.isError is True
        assert result.structuredContent == {
            "error": 'No images found for "nothing". Try different keywords.',
            "code": "not_found",
        }

    @pytest.mark.asyncio
    async def test_upload_svg_icon(self, media_context):
        result = await _call(
            "upload_svg_icon", media_context, svg_content="<svg><path/></svg>", title="Dot"
        )

        assert result.isError is False
        assert result.structuredContent["icon_object"]["library"] == "svg"

    @pytest.mark.asyncio
    async def test_upload_svg_icon_needs_source(self, media_context):
        result = await _call("upload_svg_icon", media_context)

        assert result.isError is True
        assert result.structuredContent["code"] == "invalid_input"
        assert result.structuredContent["field"] == "svg_content"
