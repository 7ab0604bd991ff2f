"""
Widget settings schema generation.

Folds the controls a widget type declares into one JSON Schema object,
keyed by control name in registry declaration order.
"""

import logging
from typing import Any

from elementor_mcp.core.exceptions import (
    ElementorMCPError,
    NotFoundError,
    UpstreamFailureError,
)
from elementor_mcp.services.schemas.control_mapper import map_control
from elementor_mcp.services.widget_registry import WidgetRegistry

logger = logging.getLogger(__name__)


class SchemaGenerator:
    """
    Generates settings schemas from a widget registry.

    The registry is treated as static for the lifetime of the generator,
    so schemas are memoized per widget type.
    """

    def __init__(self, registry: WidgetRegistry):
        self.registry = registry
        self._cache: dict[str, dict[str, Any]] = {}

    def generate(self, widget_type: str) -> dict[str, Any]:
        """
        Build the settings schema for one widget type.

        Raises:
            NotFoundError: If the registry does not know the widget type
            UpstreamFailureError: If the registry fails
        """
        if widget_type in self._cache:
            return self._cache[widget_type]

        try:
            types = self.registry.list_types()
            if widget_type not in types:
                raise NotFoundError(f"Widget type '{widget_type}' not found")
            controls = self.registry.get_controls(widget_type)
        except ElementorMCPError:
            raise
        except Exception as e:
            logger.exception(f"Widget registry failed for '{widget_type}'")
            raise UpstreamFailureError(f"Widget registry error: {e}") from e

        properties: dict[str, Any] = {}
        for control in controls:
            if not control.name:
                continue
            fragment = map_control(control)
            if fragment:
                properties[control.name] = fragment

        title = types[widget_type].title or widget_type
        schema = {
            "type": "object",
            "description": f"Settings for the {title} widget.",
            "properties": properties,
        }
        self._cache[widget_type] = schema
        return schema

    def generate_all(self) -> dict[str, dict[str, Any]]:
        """Schemas for every registered widget type."""
        return {name: self.generate(name) for name in self.registry.list_types()}

    def clear_cache(self) -> None:
        self._cache.clear()
