"""
Media Service

Stock image search, sideloading remote images into the media library,
placing a stock image on a page in one step, and SVG icon uploads.

Remote files are fetched with httpx; search goes through the backend's
Openverse client. Attachments live in the backend's media library.
"""

import logging
import mimetypes
import re
from pathlib import PurePosixPath
from typing import Any

import httpx

from elementor_mcp.core.exceptions import InvalidInputError, NotFoundError, UpstreamFailureError
from elementor_mcp.services.backend import EditorBackend
from elementor_mcp.services.page_editor_service import (
    PageEditorService,
    collaborator_errors,
)

logger = logging.getLogger(__name__)

SVG_MIME_TYPE = "image/svg+xml"

# add_stock_image fetches a few results past the requested index
EXTRA_SEARCH_RESULTS = 3

PHP_TAG_RE = re.compile(r"<\?(=|php)(.+?)\?>", re.IGNORECASE | re.DOTALL)
SCRIPT_TAG_RE = re.compile(r"<script", re.IGNORECASE)
EVENT_HANDLER_RE = re.compile(r"""\s+on\w+\s*=\s*(["']).*?\1""", re.IGNORECASE | re.DOTALL)
JAVASCRIPT_URL_RE = re.compile(r"javascript\s*:", re.IGNORECASE)


def _require(value: Any, field: str) -> None:
    if not value:
        raise InvalidInputError(f"The {field} parameter is required.", field=field)


def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


def _http_url(url: str, field: str) -> httpx.URL:
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise InvalidInputError(f"Invalid URL: {url}", field=field) from e
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise InvalidInputError(f"Only http(s) URLs are supported: {url}", field=field)
    return parsed


def image_filename(url: httpx.URL) -> str:
    """File name from the URL path, with a .jpg extension when it has none."""
    name = PurePosixPath(url.path).name or "image.jpg"
    if not PurePosixPath(name).suffix:
        name += ".jpg"
    return name


def sanitize_svg(content: str, field: str) -> str:
    """
    Strip PHP tags, event handler attributes and javascript: URLs.

    Raises:
        InvalidInputError: If the markup is not SVG or contains a script tag
    """
    if not content.strip():
        raise InvalidInputError("The SVG content is empty.", field=field)
    if "<svg" not in content.lower():
        raise InvalidInputError("The content does not contain an <svg> element.", field=field)

    content = PHP_TAG_RE.sub("", content)
    if SCRIPT_TAG_RE.search(content):
        raise InvalidInputError("SVG files with <script> tags are not allowed.", field=field)
    content = EVENT_HANDLER_RE.sub("", content)
    return JAVASCRIPT_URL_RE.sub("", content)


class MediaService:
    """Media operations over one editor backend."""

    def __init__(self, backend: EditorBackend):
        self.backend = backend

    # ==================== Search ====================

    async def search_images(
        self,
        query: str,
        page: int = 1,
        page_size: int = 5,
        license: str | None = None,
        source: str | None = None,
        aspect_ratio: str | None = None,
        size: str | None = None,
        category: str | None = None,
    ) -> dict[str, Any]:
        """Openverse search results as plain data."""
        _require(query, "query")
        result = await self.backend.images.search_images(
            query,
            page,
            page_size,
            license=license,
            source=source,
            aspect_ratio=aspect_ratio,
            size=size,
            category=category,
        )
        return result.model_dump()

    # ==================== Sideload ====================

    async def _download(self, url: httpx.URL) -> tuple[bytes, str]:
        """Body and content type of a remote file."""
        async with httpx.AsyncClient(
            timeout=self.backend.download_timeout,
            transport=self.backend.http_transport,
            follow_redirects=True,
        ) as client:
            try:
                response = await client.get(url)
                response.raise_for_status()
            except httpx.HTTPError as e:
                logger.error(f"Download of {url} failed: {e}")
                raise UpstreamFailureError(f"Failed to download {url}: {e}") from e

        content_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
        return response.content, content_type

    async def sideload_image(
        self,
        url: str,
        title: str | None = None,
        alt_text: str | None = None,
        caption: str | None = None,
        attribution: str | None = None,
    ) -> dict[str, Any]:
        """
        Download an external image into the media library.

        The caption falls back to the attribution text; the title falls back
        to the file name.
        """
        _require(url, "url")
        parsed = _http_url(url, "url")
        filename = image_filename(parsed)

        content, mime_type = await self._download(parsed)
        if mime_type in ("", "application/octet-stream"):
            mime_type = mimetypes.guess_type(filename)[0] or mime_type
        if not mime_type.startswith("image/"):
            raise InvalidInputError(
                f"The URL does not point to an image (content type '{mime_type or 'unknown'}').",
                field="url",
            )

        with collaborator_errors("store media"):
            attachment = await self.backend.media.add(
                content,
                filename,
                mime_type,
                title=title or PurePosixPath(filename).stem,
                alt_text=alt_text or "",
                caption=caption or attribution or "",
            )
        logger.info(f"Sideloaded {url} as attachment {attachment.id}")
        return {"attachment_id": attachment.id, "url": attachment.url, "title": attachment.title}

    # ==================== Stock image on a page ====================

    async def add_stock_image(
        self,
        post_id: int,
        parent_id: str,
        query: str,
        index: int = 0,
        position: int = -1,
        image_size: str = "full",
        align: str | None = None,
        caption: str | None = None,
        aspect_ratio: str = "wide",
        alt_text: str | None = None,
        link_to: str = "none",
    ) -> dict[str, Any]:
        """
        Search, sideload the chosen result and add it as an image widget.

        The attribution becomes the caption unless one is given. ``link_to``
        "custom" links to the image's Openverse landing page.
        """
        _require(post_id, "post_id")
        _require(parent_id, "parent_id")
        _require(query, "query")
        if index < 0:
            raise InvalidInputError("The index parameter must not be negative.", field="index")

        with collaborator_errors("load document"):
            await self.backend.documents.get_document(post_id)

        filters: dict[str, Any] = {}
        if aspect_ratio and aspect_ratio != "any":
            filters["aspect_ratio"] = aspect_ratio
        search = await self.search_images(
            query, page_size=min(index + EXTRA_SEARCH_RESULTS, 20), **filters
        )
        results = search["results"]
        if not results:
            raise NotFoundError(f'No images found for "{query}". Try different keywords.')
        if index >= len(results):
            raise InvalidInputError(
                f"Requested image index {index} but only {len(results)} results were returned.",
                field="index",
            )

        image = results[index]
        attribution = image["attribution"]
        sideloaded = await self.sideload_image(
            image["url"],
            title=image["title"] or query,
            alt_text=alt_text or image["title"] or query,
            caption=caption,
            attribution=attribution,
        )

        settings: dict[str, Any] = {
            "image": {"url": sideloaded["url"], "id": sideloaded["attachment_id"]},
            "image_size": image_size or "full",
        }
        if align:
            settings["align"] = align
        if caption or attribution:
            settings["caption_source"] = "custom"
            settings["caption"] = caption or attribution

        if link_to == "file":
            settings["link_to"] = "file"
        elif link_to == "custom" and image["foreign_landing_url"]:
            settings["link_to"] = "custom"
            settings["link"] = {"url": image["foreign_landing_url"]}
        else:
            settings["link_to"] = "none"

        added = await PageEditorService(self.backend).add_widget(
            post_id, parent_id, "image", settings, position
        )
        return {
            "attachment_id": sideloaded["attachment_id"],
            "image_url": sideloaded["url"],
            "element_id": added["element_id"],
            "original_url": image["url"],
            "attribution": attribution,
        }

    # ==================== SVG icons ====================

    async def upload_svg_icon(
        self,
        svg_url: str | None = None,
        svg_content: str | None = None,
        title: str | None = None,
    ) -> dict[str, Any]:
        """
        Store an SVG icon and return the icon object widgets use.

        Exactly one of ``svg_url`` or ``svg_content`` must be given. The
        icon object is ``{"value": {"id", "url"}, "library": "svg"}``.
        """
        if not svg_url and not svg_content:
            raise InvalidInputError(
                "Either svg_url or svg_content is required.", field="svg_content"
            )
        if svg_url and svg_content:
            raise InvalidInputError(
                "Provide either svg_url or svg_content, not both.", field="svg_content"
            )

        if svg_url:
            parsed = _http_url(svg_url, "svg_url")
            raw, _ = await self._download(parsed)
            markup = sanitize_svg(raw.decode("utf-8", errors="replace"), "svg_url")
            filename = PurePosixPath(parsed.path).name
            if not filename.lower().endswith(".svg"):
                filename = f"{_slug(title or '') or 'icon'}.svg"
        else:
            markup = sanitize_svg(svg_content or "", "svg_content")
            filename = f"{_slug(title or '') or 'custom-icon'}.svg"

        with collaborator_errors("store media"):
            attachment = await self.backend.media.add(
                markup.encode("utf-8"),
                filename,
                SVG_MIME_TYPE,
                title=title or PurePosixPath(filename).stem,
            )
        logger.info(f"Uploaded SVG icon as attachment {attachment.id}")
        return {
            "attachment_id": attachment.id,
            "url": attachment.url,
            "icon_object": {
                "value": {"id": attachment.id, "url": attachment.url},
                "library": "svg",
            },
        }
