"""Elementor page editing over MCP."""
