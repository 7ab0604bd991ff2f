"""
Pytest fixtures for Elementor MCP tests.

This module provides:
1. A small static widget registry (heading, image, button)
2. In-memory document and global token stores
3. An EditorBackend and MCPContext wired to them
4. A sample document tree, as wire data and as Elements
"""

import copy
from typing import Any

import pytest
import pytest_asyncio

from elementor_mcp.models.contracts.elements import Element, elements_from_data
from elementor_mcp.services.backend import EditorBackend
from elementor_mcp.services.document_store import InMemoryDocumentStore
from elementor_mcp.services.global_tokens import InMemoryGlobalTokenStore
from elementor_mcp.services.mcp_server.server import MCPContext
from elementor_mcp.services.widget_registry import StaticWidgetRegistry


# ==================== TEST DATA ====================

WIDGET_CATALOG: dict[str, Any] = {
    "widgets": {
        "heading": {
            "title": "Heading",
            "icon": "eicon-t-letter",
            "categories": ["basic"],
            "keywords": ["heading", "title", "text"],
            "controls": [
                {"name": "section_title", "type": "section", "label": "Title"},
                {
                    "name": "title",
                    "type": "textarea",
                    "label": "Title",
                    "default": "Add Your Heading Text Here",
                },
                {"name": "link", "type": "url", "label": "Link"},
                {
                    "name": "header_size",
                    "type": "select",
                    "label": "HTML Tag",
                    "default": "h2",
                    "options": {"h1": "H1", "h2": "H2", "h3": "H3"},
                },
                {
                    "name": "align",
                    "type": "choose",
                    "label": "Alignment",
                    "options": {"left": "Left", "center": "Center", "right": "Right"},
                },
                {"name": "title_color", "type": "color", "label": "Text Color"},
            ],
        },
        "image": {
            "title": "Image",
            "icon": "eicon-image",
            "categories": ["basic"],
            "keywords": ["image", "photo"],
            "controls": [
                {"name": "image", "type": "media", "label": "Choose Image"},
                {"name": "width", "type": "slider", "label": "Width"},
                {"name": "caption", "type": "text", "label": "Caption"},
            ],
        },
        "button": {
            "title": "Button",
            "icon": "eicon-button",
            "categories": ["basic", "general"],
            "keywords": ["button", "link"],
            "controls": [
                {"name": "text", "type": "text", "label": "Text", "default": "Click here"},
                {"name": "link", "type": "url", "label": "Link"},
                {
                    "name": "size",
                    "type": "select",
                    "options": {"sm": "Small", "md": "Medium"},
                },
            ],
        },
    }
}

SAMPLE_TREE: list[dict[str, Any]] = [
    {
        "id": "c100001",
        "elType": "container",
        "isInner": False,
        "settings": {"flex_direction": "column"},
        "elements": [
            {
                "id": "w100001",
                "elType": "widget",
                "widgetType": "heading",
                "isInner": False,
                "settings": {"title": "Hello", "header_size": "h1"},
                "elements": [],
            },
            {
                "id": "c100002",
                "elType": "container",
                "isInner": True,
                "settings": {},
                "elements": [
                    {
                        "id": "w100002",
                        "elType": "widget",
                        "widgetType": "image",
                        "isInner": False,
                        "settings": {"image": {"url": "https://example.com/a.png", "id": 7}},
                        "elements": [],
                    }
                ],
            },
        ],
    },
    {
        "id": "c100003",
        "elType": "container",
        "isInner": False,
        "settings": {},
        "elements": [],
    },
]


# ==================== COLLABORATORS ====================


@pytest.fixture
def widget_registry() -> StaticWidgetRegistry:
    """Static registry with heading, image and button widgets."""
    return StaticWidgetRegistry(copy.deepcopy(WIDGET_CATALOG))


@pytest.fixture
def document_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def token_store() -> InMemoryGlobalTokenStore:
    return InMemoryGlobalTokenStore()


@pytest.fixture
def backend(widget_registry, document_store, token_store) -> EditorBackend:
    """Backend over the in-memory collaborators."""
    return EditorBackend(
        documents=document_store,
        widgets=widget_registry,
        tokens=token_store,
    )


@pytest.fixture
def mcp_context(backend) -> MCPContext:
    """MCP context bound to the test backend."""
    return MCPContext(
        user_id="test-user",
        user_email="editor@example.com",
        user_name="Test Editor",
        backend=backend,
    )


# ==================== DOCUMENTS ====================


@pytest.fixture
def sample_tree() -> list[dict[str, Any]]:
    """Wire-format tree: two root containers, nested widgets."""
    return copy.deepcopy(SAMPLE_TREE)


@pytest.fixture
def sample_elements(sample_tree) -> list[Element]:
    return elements_from_data(sample_tree)


@pytest_asyncio.fixture
async def page_id(document_store, sample_tree) -> int:
    """A stored page holding the sample tree."""
    post_id = await document_store.create_document("Sample Page")
    await document_store.save_tree(post_id, sample_tree)
    return post_id


@pytest_asyncio.fixture
async def empty_page_id(document_store) -> int:
    post_id = await document_store.create_document("Empty Page")
    await document_store.save_tree(post_id, [])
    return post_id
