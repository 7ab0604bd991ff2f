"""
Widget Type Registry

The registry tells the schema layer which widget types exist and which
controls each declares. Anything implementing WidgetRegistry can be
injected; StaticWidgetRegistry serves a fixed catalog, normally loaded from
YAML:

    widgets:
      heading:
        title: Heading
        categories: [basic]
        controls:
          - {name: title, type: textarea, label: Title}
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from elementor_mcp.core.exceptions import NotFoundError, UpstreamFailureError
from elementor_mcp.models.contracts.widgets import ControlDescriptor, WidgetTypeInfo

logger = logging.getLogger(__name__)

BUNDLED_CATALOG = Path(__file__).resolve().parent.parent / "data" / "widgets.yaml"


class WidgetRegistry(ABC):
    """Read-only source of widget types and their controls."""

    @abstractmethod
    def list_types(self) -> dict[str, WidgetTypeInfo]:
        """All registered widget types keyed by name."""
        ...

    @abstractmethod
    def get_controls(self, widget_type: str) -> list[ControlDescriptor]:
        """Controls in declaration order. Raises NotFoundError for unknown types."""
        ...


# =============================================================================
# Catalog models
# =============================================================================


class WidgetCatalogEntry(BaseModel):
    title: str = ""
    icon: str = ""
    categories: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    controls: list[ControlDescriptor] = Field(default_factory=list)


class WidgetCatalog(BaseModel):
    widgets: dict[str, WidgetCatalogEntry] = Field(default_factory=dict)


# =============================================================================
# Static registry
# =============================================================================


class StaticWidgetRegistry(WidgetRegistry):
    """Registry over an in-memory catalog; the catalog never changes."""

    def __init__(self, catalog: WidgetCatalog | dict[str, Any]):
        if not isinstance(catalog, WidgetCatalog):
            catalog = WidgetCatalog.model_validate(catalog)
        self._catalog = catalog

    def list_types(self) -> dict[str, WidgetTypeInfo]:
        return {
            name: WidgetTypeInfo(
                name=name,
                title=entry.title or name,
                icon=entry.icon,
                categories=list(entry.categories),
                keywords=list(entry.keywords),
            )
            for name, entry in self._catalog.widgets.items()
        }

    def get_controls(self, widget_type: str) -> list[ControlDescriptor]:
        entry = self._catalog.widgets.get(widget_type)
        if entry is None:
            raise NotFoundError(f"Widget type '{widget_type}' not found")
        return [control.model_copy(deep=True) for control in entry.controls]


def parse_widget_catalog(yaml_str: str) -> WidgetCatalog:
    """Parse a YAML string into a WidgetCatalog."""
    if not yaml_str or not yaml_str.strip():
        return WidgetCatalog()

    data = yaml.safe_load(yaml_str)
    if not data or not isinstance(data, dict):
        return WidgetCatalog()

    return WidgetCatalog(**data)


def load_widget_registry(path: str | Path | None = None) -> StaticWidgetRegistry:
    """
    Load a registry from a YAML catalog file (the bundled catalog by default).

    Raises:
        UpstreamFailureError: If the file cannot be read or parsed
    """
    catalog_path = Path(path) if path else BUNDLED_CATALOG
    try:
        catalog = parse_widget_catalog(catalog_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError, ValueError) as e:
        raise UpstreamFailureError(f"Cannot load widget catalog {catalog_path}: {e}") from e

    logger.info(f"Loaded {len(catalog.widgets)} widget types from {catalog_path}")
    return StaticWidgetRegistry(catalog)
