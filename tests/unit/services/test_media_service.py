"""
Unit tests for MediaService: image search, sideloading, stock images on a
page and SVG icon uploads.

Openverse and image downloads are served by one httpx.MockTransport.
"""

import httpx
import pytest

from elementor_mcp.core.exceptions import (
    InvalidInputError,
    NotFoundError,
    UpstreamFailureError,
)
from elementor_mcp.models.contracts.elements import elements_from_data
from elementor_mcp.services.backend import EditorBackend
from elementor_mcp.services.element_tree import find_element
from elementor_mcp.services.media_library import InMemoryMediaLibrary
from elementor_mcp.services.media_service import MediaService, image_filename, sanitize_svg
from elementor_mcp.services.openverse_client import OpenverseClient
from elementor_mcp.services.widget_registry import load_widget_registry

PNG = b"\x89PNG\r\n\x1a\n"
SVG = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24"><path d="M0 0h24v24H0z"/></svg>'


def _image(n: int) -> dict:
    return {
        "id": f"img-{n}",
        "title": f"Sunset {n}",
        "url": f"https://images.example.com/sunset-{n}.png",
        "attribution": f'"Sunset {n}" by Jane is licensed under CC BY 4.0.',
        "foreign_landing_url": f"https://www.flickr.com/photos/jane/{n}",
    }


class FakeWeb:
    """Routes Openverse searches and file downloads; records every request."""

    def __init__(self, images=None):
        self.images = [_image(0), _image(1)] if images is None else images
        self.files: dict[str, httpx.Response] = {}
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "api.openverse.org":
            return httpx.Response(
                200,
                json={"result_count": len(self.images), "page": 1, "page_count": 1, "results": self.images},
            )
        response = self.files.get(str(request.url))
        if response is not None:
            return response
        if request.url.host == "images.example.com":
            return httpx.Response(200, content=PNG, headers={"content-type": "image/png"})
        return httpx.Response(404)


@pytest.fixture
def web() -> FakeWeb:
    return FakeWeb()


@pytest.fixture
def media() -> InMemoryMediaLibrary:
    return InMemoryMediaLibrary()


@pytest.fixture
def service(document_store, token_store, media, web) -> MediaService:
    backend = EditorBackend(
        documents=document_store,
        widgets=load_widget_registry(),
        tokens=token_store,
        media=media,
        images=OpenverseClient(transport=web.transport),
        http_transport=web.transport,
    )
    return MediaService(backend)


class TestHelpers:
    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://example.com/a/photo.png", "photo.png"),
            ("https://example.com/a/photo", "photo.jpg"),
            ("https://example.com/", "image.jpg"),
        ],
    )
    def test_image_filename(self, url, expected):
        assert image_filename(httpx.URL(url)) == expected

    def test_sanitize_strips_handlers_and_php(self):
        dirty = '<svg onload="alert(1)"><?php echo 1; ?><a href="javascript:go()">x</a></svg>'

        clean = sanitize_svg(dirty, "svg_content")

        assert "onload" not in clean
        assert "<?php" not in clean
        assert "javascript:" not in clean
        assert clean.startswith("<svg>")

    @pytest.mark.parametrize(
        "content,message",
        [
            ("", "empty"),
            ("<div>hi</div>", "<svg>"),
            ("<svg><script>alert(1)</script></svg>", "script"),
        ],
    )
    def test_sanitize_rejects(self, content, message):
        with pytest.raises(InvalidInputError, match=message) as exc_info:
            sanitize_svg(content, "svg_content")

        assert exc_info.value.field == "svg_content"


class TestSearchImages:
    @pytest.mark.asyncio
    async def test_plain_data(self, service):
        result = await service.search_images("sunset", aspect_ratio="wide")

        assert result["result_count"] == 2
        assert result["results"][0]["id"] == "img-0"

    @pytest.mark.asyncio
    async def test_query_required(self, service, web):
        with pytest.raises(InvalidInputError):
            await service.search_images("")

        assert web.requests == []


class TestSideloadImage:
    @pytest.mark.asyncio
    async def test_sideload(self, service, media):
        result = await service.sideload_image(
            "https://images.example.com/sunset-0.png", alt_text="Sunset", attribution="By Jane"
        )

        attachment = await media.get(result["attachment_id"])
        assert result["url"] == attachment.url
        assert result["title"] == "sunset-0"
        assert attachment.mime_type == "image/png"
        assert attachment.caption == "By Jane"
        assert attachment.alt_text == "Sunset"
        assert await media.read(attachment.id) == PNG

    @pytest.mark.asyncio
    async def test_caption_wins_over_attribution(self, service, media):
        result = await service.sideload_image(
            "https://images.example.com/a.png", caption="Mine", attribution="By Jane"
        )

        assert (await media.get(result["attachment_id"])).caption == "Mine"

    @pytest.mark.asyncio
    async def test_type_guessed_from_extension(self, service, web, media):
        web.files["https://files.example.com/b.png"] = httpx.Response(200, content=PNG)

        result = await service.sideload_image("https://files.example.com/b.png")

        assert (await media.get(result["attachment_id"])).mime_type == "image/png"

    @pytest.mark.asyncio
    async def test_not_an_image(self, service, web):
        web.files["https://files.example.com/page"] = httpx.Response(
            200, text="<html></html>", headers={"content-type": "text/html; charset=utf-8"}
        )

        with pytest.raises(InvalidInputError) as exc_info:
            await service.sideload_image("https://files.example.com/page")

        assert exc_info.value.field == "url"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("url", ["ftp://example.com/a.png", "not a url", "file:///etc/passwd"])
    async def test_rejects_non_http_urls(self, service, web, url):
        with pytest.raises(InvalidInputError) as exc_info:
            await service.sideload_image(url)

        assert exc_info.value.field == "url"
        assert web.requests == []

    @pytest.mark.asyncio
    async def test_download_failure(self, service):
        with pytest.raises(UpstreamFailureError, match="Failed to download"):
            await service.sideload_image("https://missing.example.com/a.png")


class TestAddStockImage:
    async def _tree(self, service, post_id):
        return elements_from_data(await service.backend.documents.load_tree(post_id))

    @pytest.mark.asyncio
    async def test_adds_image_widget(self, service, web, page_id):
        result = await service.add_stock_image(page_id, "c100003", "sunset", align="center")

        assert result["original_url"] == "https://images.example.com/sunset-0.png"
        assert result["attribution"] == '"Sunset 0" by Jane is licensed under CC BY 4.0.'
        widget = find_element(await self._tree(service, page_id), result["element_id"])
        assert widget.widget_type == "image"
        assert widget.settings == {
            "image": {"url": result["image_url"], "id": result["attachment_id"]},
            "image_size": "full",
            "align": "center",
            "caption_source": "custom",
            "caption": result["attribution"],
            "link_to": "none",
        }
        search = web.requests[0]
        assert search.url.params["page_size"] == "3"
        assert search.url.params["aspect_ratio"] == "wide"

    @pytest.mark.asyncio
    async def test_index_and_custom_link(self, service, web, page_id):
        result = await service.add_stock_image(
            page_id, "c100003", "sunset", index=1, aspect_ratio="any", link_to="custom", caption="Dusk"
        )

        widget = find_element(await self._tree(service, page_id), result["element_id"])
        assert widget.settings["link_to"] == "custom"
        assert widget.settings["link"] == {"url": "https://www.flickr.com/photos/jane/1"}
        assert widget.settings["caption"] == "Dusk"
        assert "aspect_ratio" not in web.requests[0].url.params
        assert web.requests[0].url.params["page_size"] == "4"

    @pytest.mark.asyncio
    async def test_no_results(self, service, web, page_id):
        web.images = []

        with pytest.raises(NotFoundError, match='No images found for "sunset"'):
            await service.add_stock_image(page_id, "c100003", "sunset")

    @pytest.mark.asyncio
    async def test_index_out_of_range(self, service, media, page_id):
        with pytest.raises(InvalidInputError) as exc_info:
            await service.add_stock_image(page_id, "c100003", "sunset", index=5)

        assert exc_info.value.field == "index"
        with pytest.raises(NotFoundError):
            await media.get(1)

    @pytest.mark.asyncio
    async def test_missing_document_checked_first(self, service, web):
        with pytest.raises(NotFoundError):
            await service.add_stock_image(999, "c100003", "sunset")

        assert web.requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["post_id", "parent_id", "query"])
    async def test_required(self, service, page_id, missing):
        kwargs = {"post_id": page_id, "parent_id": "c100003", "query": "sunset", missing: None}

        with pytest.raises(InvalidInputError) as exc_info:
            await service.add_stock_image(**kwargs)

        assert exc_info.value.field == missing


class TestUploadSvgIcon:
    @pytest.mark.asyncio
    async def test_from_content(self, service, media):
        result = await service.upload_svg_icon(svg_content=SVG, title="Brand Mark")

        attachment = await media.get(result["attachment_id"])
        assert attachment.filename == "brand-mark.svg"
        assert attachment.mime_type == "image/svg+xml"
        assert result["icon_object"] == {
            "value": {"id": attachment.id, "url": attachment.url},
            "library": "svg",
        }

    @pytest.mark.asyncio
    async def test_from_url(self, service, web, media):
        web.files["https://icons.example.com/star.svg"] = httpx.Response(
            200, text='<svg onclick="x()"><path/></svg>'
        )

        result = await service.upload_svg_icon(svg_url="https://icons.example.com/star.svg")

        attachment = await media.get(result["attachment_id"])
        assert attachment.filename == "star.svg"
        assert await media.read(attachment.id) == b"<svg><path/></svg>"

    @pytest.mark.asyncio
    async def test_url_without_svg_extension(self, service, web, media):
        web.files["https://icons.example.com/icon?id=3"] = httpx.Response(200, text=SVG)

        result = await service.upload_svg_icon(svg_url="https://icons.example.com/icon?id=3")

        assert (await media.get(result["attachment_id"])).filename == "icon.svg"

    @pytest.mark.asyncio
    async def test_default_name(self, service, media):
        result = await service.upload_svg_icon(svg_content=SVG)

        assert (await media.get(result["attachment_id"])).filename == "custom-icon.svg"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "kwargs",
        [{}, {"svg_url": "https://icons.example.com/a.svg", "svg_content": SVG}],
    )
    async def test_exactly_one_source(self, service, kwargs):
        with pytest.raises(InvalidInputError):
            await service.upload_svg_icon(**kwargs)

    @pytest.mark.asyncio
    async def test_script_rejected(self, service, media):
        with pytest.raises(InvalidInputError, match="script"):
            await service.upload_svg_icon(svg_content="<svg><script>alert(1)</script></svg>")

        with pytest.raises(NotFoundError):
            await media.get(1)
