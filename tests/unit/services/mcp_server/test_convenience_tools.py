"""
Unit tests for the generated add_<widget> convenience tools.
"""

import inspect

import pytest

from elementor_mcp.core.exceptions import InvalidInputError
from elementor_mcp.models.contracts.elements import elements_from_data
from elementor_mcp.services.backend import EditorBackend
from elementor_mcp.services.element_tree import find_element
from elementor_mcp.services.mcp_server.server import MCPContext
from elementor_mcp.services.mcp_server.tool_registry import ToolCategory, get_system_tool
from elementor_mcp.services.mcp_server.tools.convenience import (
    CONVENIENCE_WIDGETS,
    PRO_TOOL_IDS,
    STAR_ICON,
    build_input_schema,
    build_settings,
    build_signature,
)
from elementor_mcp.services.widget_registry import load_widget_registry

WIDGETS = {widget.tool_id: widget for widget in CONVENIENCE_WIDGETS}


@pytest.fixture
def catalog_context(document_store, token_store) -> MCPContext:
    """Context whose backend uses the bundled widget catalog."""
    backend = EditorBackend(
        documents=document_store,
        widgets=load_widget_registry(),
        tokens=token_store,
    )
    return MCPContext(user_id="test-user", backend=backend)


async def _call(tool_id: str, context: MCPContext, **kwargs):
    return await get_system_tool(tool_id).implementation(context, **kwargs)


class TestBuildSettings:
    def test_defaults_overlaid(self):
        settings = build_settings(WIDGETS["add_heading"], {"title": "Hi", "header_size": "h1"})
        assert settings == {"title": "Hi", "header_size": "h1"}

    def test_none_values_dropped(self):
        settings = build_settings(WIDGETS["add_heading"], {"title": "Hi", "align": None})
        assert settings == {"title": "Hi", "header_size": "h2"}

    def test_unknown_keys_ignored(self):
        settings = build_settings(WIDGETS["add_spacer"], {"color": "#000"})
        assert settings == {"space": {"size": 50, "unit": "px"}}

    def test_defaults_not_shared(self):
        settings = build_settings(WIDGETS["add_icon"], {})
        settings["selected_icon"]["value"] = "fas fa-heart"

        assert WIDGETS["add_icon"].defaults["selected_icon"] == STAR_ICON
        assert STAR_ICON["value"] == "fas fa-star"

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_required(self, value):
        with pytest.raises(InvalidInputError) as exc_info:
            build_settings(WIDGETS["add_heading"], {"title": value})

        assert exc_info.value.field == "title"
        assert exc_info.value.message == "The title parameter is required."


class TestGeneratedSignatures:
    def test_heading_signature(self):
        params = build_signature(WIDGETS["add_heading"]).parameters

        assert list(params) == [
            "context",
            "post_id",
            "parent_id",
            "title",
            "position",
            "header_size",
            "size",
            "align",
            "title_color",
            "link",
        ]
        assert params["title"].default is inspect.Parameter.empty
        assert params["position"].default == -1
        assert params["align"].default is None

    def test_registered_implementation_carries_signature(self):
        impl = get_system_tool("add_button").implementation

        assert impl.__name__ == "add_button"
        assert "text" in inspect.signature(impl).parameters

    def test_input_schema(self):
        schema = build_input_schema(WIDGETS["add_image"])

        assert schema["required"] == ["post_id", "parent_id", "image"]
        assert {"post_id", "parent_id", "position", "image", "caption"} <= set(schema["properties"])

    def test_all_registered_as_widget_tools(self):
        for widget in CONVENIENCE_WIDGETS:
            metadata = get_system_tool(widget.tool_id)
            assert metadata is not None, widget.tool_id
            assert metadata.category == ToolCategory.WIDGET
            assert f"widget_type='{widget.widget_type}'" in metadata.description

    def test_pro_tools_marked(self):
        assert len(CONVENIENCE_WIDGETS) == 39
        assert {"add_form", "add_posts_grid", "add_hotspot"} <= PRO_TOOL_IDS
        assert "add_heading" not in PRO_TOOL_IDS
        for widget in CONVENIENCE_WIDGETS:
            description = get_system_tool(widget.tool_id).description
            assert description.endswith("Requires Elementor Pro.") == widget.pro, widget.tool_id


class TestCatalogCoverage:
    """Every exposed key and default must be a control of the bundled widget."""

    @pytest.mark.parametrize("widget", CONVENIENCE_WIDGETS, ids=lambda w: w.tool_id)
    def test_keys_are_valid_controls(self, widget, catalog_context):
        backend = catalog_context.get_backend()
        keys = {**widget.defaults, **{key: "x" for key in widget.properties}}

        backend.validator.validate(widget.widget_type, keys)


class TestConvenienceToolCalls:
    @pytest.mark.asyncio
    async def test_add_heading(self, catalog_context, document_store, page_id):
        result = await _call(
            "add_heading", catalog_context, post_id=page_id, parent_id="c100003", title="Welcome"
        )

        assert result.isError is False
        element_id = result.structuredContent["element_id"]
        assert result.content[0].text == f"Added heading widget {element_id} to c100003"
        widget = find_element(elements_from_data(await document_store.load_tree(page_id)), element_id)
        assert widget.widget_type == "heading"
        assert widget.settings == {"title": "Welcome", "header_size": "h2"}

    @pytest.mark.asyncio
    async def test_add_button_defaults(self, catalog_context, document_store, page_id):
        result = await _call("add_button", catalog_context, post_id=page_id, parent_id="c100003")

        tree = elements_from_data(await document_store.load_tree(page_id))
        widget = find_element(tree, result.structuredContent["element_id"])
        assert widget.settings == {"text": "Click here", "size": "sm"}

    @pytest.mark.asyncio
    async def test_position(self, catalog_context, document_store, page_id):
        result = await _call(
            "add_spacer", catalog_context, post_id=page_id, parent_id="c100001", position=0
        )

        tree = elements_from_data(await document_store.load_tree(page_id))
        assert tree[0].children[0].id == result.structuredContent["element_id"]

    @pytest.mark.asyncio
    async def test_missing_required_setting(self, catalog_context, document_store, page_id, sample_tree):
        result = await _call("add_image", catalog_context, post_id=page_id, parent_id="c100003")

        assert result.isError is True
        assert result.structuredContent["code"] == "invalid_input"
        assert result.structuredContent["field"] == "image"
        assert await document_store.load_tree(page_id) == sample_tree

    @pytest.mark.asyncio
    async def test_missing_parent_id(self, catalog_context, page_id):
        result = await _call("add_divider", catalog_context, post_id=page_id)

        assert result.structuredContent["field"] == "parent_id"

    @pytest.mark.asyncio
    async def test_widget_parent_is_conflict(self, catalog_context, page_id):
        result = await _call(
            "add_alert", catalog_context, post_id=page_id, parent_id="w100001"
        )

        assert result.structuredContent["code"] == "structural_conflict"
