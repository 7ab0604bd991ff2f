"""
Unit tests for the server entry point helpers.
"""

from elementor_mcp.config import Settings
from elementor_mcp.main import disabled_tool_ids
from elementor_mcp.services.mcp_server.tools.convenience import PRO_TOOL_IDS


class TestDisabledToolIds:
    def test_pro_enabled_keeps_configured_list(self):
        settings = Settings(_env_file=None, disabled_tools=["build_page"], pro_widgets=True)

        assert disabled_tool_ids(settings) == ["build_page"]

    def test_pro_disabled_adds_pro_tools(self):
        settings = Settings(_env_file=None, disabled_tools=["build_page"], pro_widgets=False)

        disabled = disabled_tool_ids(settings)

        assert disabled[0] == "build_page"
        assert set(disabled) == {"build_page"} | PRO_TOOL_IDS
        assert "add_heading" not in disabled

    def test_no_duplicates(self):
        settings = Settings(_env_file=None, disabled_tools=["add_form"], pro_widgets=False)

        disabled = disabled_tool_ids(settings)

        assert disabled.count("add_form") == 1
