"""
Media MCP Tools

Stock image search (Openverse), sideloading images into the media library,
one-step stock image placement and SVG icon uploads.
"""

import logging
from typing import Any

from mcp.types import CallToolResult

from elementor_mcp.core.exceptions import ElementorMCPError
from elementor_mcp.services.mcp_server.tool_decorator import system_tool
from elementor_mcp.services.mcp_server.tool_registry import ToolCategory
from elementor_mcp.services.mcp_server.tool_result import (
    exception_result,
    success_result,
    unexpected_error_result,
)
from elementor_mcp.services.media_service import MediaService

logger = logging.getLogger(__name__)


@system_tool(
    id="search_images",
    name="Search Images",
    description="Search Openverse for Creative Commons images. Returns image URLs, dimensions, license and attribution. Use sideload_image to import a result into the media library.",
    category=ToolCategory.MEDIA,
    input_schema={
        "type": "object",
        "properties": {
            "query": {"type": "string", "description": "Search keywords (e.g. 'mountain sunset')"},
            "page": {"type": "integer", "description": "Page number", "default": 1},
            "page_size": {
                "type": "integer",
                "description": "Results per page (max 20)",
                "default": 5,
            },
            "license": {
                "type": "string",
                "description": "License filter, comma separated (e.g. 'cc0,by')",
            },
            "source": {"type": "string", "description": "Source filter (e.g. 'flickr,wikimedia')"},
            "aspect_ratio": {
                "type": "string",
                "enum": ["tall", "wide", "square"],
                "description": "Aspect ratio filter",
            },
            "size": {
                "type": "string",
                "enum": ["small", "medium", "large"],
                "description": "Image size filter",
            },
            "category": {
                "type": "string",
                "enum": ["photograph", "illustration", "digitized_artwork"],
                "description": "Image category filter",
            },
        },
        "required": ["query"],
    },
)
async def search_images(
    context: Any,
    query: str,
    page: int = 1,
    page_size: int = 5,
    license: str | None = None,
    source: str | None = None,
    aspect_ratio: str | None = None,
    size: str | None = None,
    category: str | None = None,
) -> CallToolResult:
    """Search Openverse images."""
    logger.info(f"MCP search_images called with query={query}, page={page}, page_size={page_size}")

    try:
        result = await MediaService(context.get_backend()).search_images(
            query, page, page_size, license, source, aspect_ratio, size, category
        )
        return success_result(
            f"Found {result['result_count']} image(s) for '{query}' "
            f"(showing {len(result['results'])}, page {result['page']})",
            result,
        )
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error searching images via MCP: {e}")
        return unexpected_error_result("searching images", e)


@system_tool(
    id="sideload_image",
    name="Sideload Image",
    description="Download an external image URL into the media library. Returns the attachment ID and URL for use in image widget settings.",
    category=ToolCategory.MEDIA,
    input_schema={
        "type": "object",
        "properties": {
            "url": {"type": "string", "description": "Image URL to download"},
            "title": {"type": "string", "description": "Attachment title"},
            "alt_text": {"type": "string", "description": "Alt text"},
            "caption": {"type": "string", "description": "Caption"},
            "attribution": {
                "type": "string",
                "description": "Attribution text, used as the caption when none is given",
            },
        },
        "required": ["url"],
    },
)
async def sideload_image(
    context: Any,
    url: str,
    title: str | None = None,
    alt_text: str | None = None,
    caption: str | None = None,
    attribution: str | None = None,
) -> CallToolResult:
    logger.info(f"MCP sideload_image called with url={url}")

    try:
        result = await MediaService(context.get_backend()).sideload_image(
            url, title, alt_text, caption, attribution
        )
        return success_result(
            f"Imported image as attachment {result['attachment_id']}: {result['url']}",
            result,
        )
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error sideloading image via MCP: {e}")
        return unexpected_error_result("sideloading image", e)


@system_tool(
    id="add_stock_image",
    name="Add Stock Image",
    description="Search Openverse, import the chosen image and add it as an image widget in one step. The license attribution becomes the caption unless one is given.",
    category=ToolCategory.MEDIA,
    input_schema={
        "type": "object",
        "properties": {
            "post_id": {"type": "integer", "description": "Page/post ID"},
            "parent_id": {"type": "string", "description": "Parent container ID"},
            "query": {"type": "string", "description": "Image search keywords"},
            "index": {
                "type": "integer",
                "description": "Which search result to use (0 = first)",
                "default": 0,
            },
            "position": {
                "type": "integer",
                "description": "Insert position (-1 = append)",
                "default": -1,
            },
            "image_size": {
                "type": "string",
                "enum": ["thumbnail", "medium", "medium_large", "large", "full"],
                "description": "Image size",
                "default": "full",
            },
            "align": {
                "type": "string",
                "enum": ["left", "center", "right"],
                "description": "Alignment",
            },
            "caption": {"type": "string", "description": "Caption (defaults to the attribution)"},
            "aspect_ratio": {
                "type": "string",
                "enum": ["tall", "wide", "square", "any"],
                "description": "Preferred aspect ratio",
                "default": "wide",
            },
            "alt_text": {"type": "string", "description": "Alt text (defaults to the image title)"},
            "link_to": {
                "type": "string",
                "enum": ["none", "file", "custom"],
                "description": "Link target ('custom' links to the image's source page)",
                "default": "none",
            },
        },
        "required": ["post_id", "parent_id", "query"],
    },
)
async def add_stock_image(
    context: Any,
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
) -> CallToolResult:
    logger.info(
        f"MCP add_stock_image called with post_id={post_id}, parent_id={parent_id}, "
        f"query={query}, index={index}"
    )

    try:
        result = await MediaService(context.get_backend()).add_stock_image(
            post_id,
            parent_id,
            query,
            index=index,
            position=position,
            image_size=image_size,
            align=align,
            caption=caption,
            aspect_ratio=aspect_ratio,
            alt_text=alt_text,
            link_to=link_to,
        )
        return success_result(
            f"Added stock image {result['element_id']} (attachment {result['attachment_id']}) "
            f"to page {post_id}",
            result,
        )
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error adding stock image via MCP: {e}")
        return unexpected_error_result("adding stock image", e)


@system_tool(
    id="upload_svg_icon",
    name="Upload SVG Icon",
    description="Upload an SVG icon from a URL or raw markup. Scripts are rejected and event handlers stripped. Returns an icon object for the 'selected_icon' setting of icon widgets.",
    category=ToolCategory.MEDIA,
    input_schema={
        "type": "object",
        "properties": {
            "svg_url": {"type": "string", "description": "URL of an SVG file"},
            "svg_content": {"type": "string", "description": "Raw SVG markup"},
            "title": {"type": "string", "description": "Icon title"},
        },
        "required": [],
    },
)
async def upload_svg_icon(
    context: Any,
    svg_url: str | None = None,
    svg_content: str | None = None,
    title: str | None = None,
) -> CallToolResult:
    logger.info(f"MCP upload_svg_icon called with svg_url={svg_url}, title={title}")

    try:
        result = await MediaService(context.get_backend()).upload_svg_icon(
            svg_url, svg_content, title
        )
        return success_result(
            f"Uploaded SVG icon as attachment {result['attachment_id']}",
            result,
        )
    except ElementorMCPError as e:
        return exception_result(e)
    except Exception as e:
        logger.exception(f"Error uploading SVG icon via MCP: {e}")
        return unexpected_error_result("uploading SVG icon", e)
