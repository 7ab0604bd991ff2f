"""
Global Token Store

Site-wide design tokens live in the active kit's settings:
system_colors / custom_colors and system_typography / custom_typography,
each a list of entries keyed by ``_id``.
"""

import copy
from abc import ABC, abstractmethod
from typing import Any

DEFAULT_KIT_SETTINGS: dict[str, Any] = {
    "system_colors": [
        {"_id": "primary", "title": "Primary", "color": "#6EC1E4"},
        {"_id": "secondary", "title": "Secondary", "color": "#54595F"},
        {"_id": "text", "title": "Text", "color": "#7A7A7A"},
        {"_id": "accent", "title": "Accent", "color": "#61CE70"},
    ],
    "custom_colors": [],
    "system_typography": [
        {
            "_id": "primary",
            "title": "Primary",
            "typography_typography": "custom",
            "typography_font_family": "Roboto",
            "typography_font_weight": "600",
        },
        {
            "_id": "secondary",
            "title": "Secondary",
            "typography_typography": "custom",
            "typography_font_family": "Roboto Slab",
            "typography_font_weight": "400",
        },
        {
            "_id": "text",
            "title": "Text",
            "typography_typography": "custom",
            "typography_font_family": "Roboto",
            "typography_font_weight": "400",
        },
        {
            "_id": "accent",
            "title": "Accent",
            "typography_typography": "custom",
            "typography_font_family": "Roboto",
            "typography_font_weight": "500",
        },
    ],
    "custom_typography": [],
}


class GlobalTokenStore(ABC):
    """Abstract store for the active kit's settings."""

    @abstractmethod
    async def get_active_tokens(self) -> dict[str, Any]:
        """All kit settings, token lists included."""
        ...

    @abstractmethod
    async def update_tokens(self, partial: dict[str, Any]) -> None:
        """Replace the given top-level kit settings keys."""
        ...


class InMemoryGlobalTokenStore(GlobalTokenStore):
    def __init__(self, settings: dict[str, Any] | None = None):
        self._settings = copy.deepcopy(settings if settings is not None else DEFAULT_KIT_SETTINGS)

    async def get_active_tokens(self) -> dict[str, Any]:
        return copy.deepcopy(self._settings)

    async def update_tokens(self, partial: dict[str, Any]) -> None:
        self._settings.update(copy.deepcopy(partial))
