"""
Global Settings Service

Upserts site-wide colors and typography in the active kit. Entries are
matched by ``_id``; entries without one are skipped.
"""

import logging
import re
from typing import Any

from elementor_mcp.core.exceptions import InvalidInputError
from elementor_mcp.services.backend import EditorBackend
from elementor_mcp.services.page_editor_service import collaborator_errors

logger = logging.getLogger(__name__)

HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")

TYPOGRAPHY_KEYS = (
    "_id",
    "title",
    "typography_typography",
    "typography_font_family",
    "typography_font_size",
    "typography_font_weight",
    "typography_text_transform",
    "typography_font_style",
    "typography_text_decoration",
    "typography_line_height",
    "typography_letter_spacing",
    "typography_word_spacing",
)


def _index_by_id(entries: list[dict[str, Any]]) -> dict[str, int]:
    return {entry["_id"]: index for index, entry in enumerate(entries) if entry.get("_id")}


class GlobalSettingsService:
    """Reads and updates the kit's global colors and typography."""

    def __init__(self, backend: EditorBackend):
        self.tokens = backend.tokens

    async def get_global_settings(self) -> dict[str, Any]:
        with collaborator_errors("read global settings"):
            settings = await self.tokens.get_active_tokens()
        return {
            "colors": settings.get("system_colors") or settings.get("custom_colors") or [],
            "typography": settings.get("system_typography")
            or settings.get("custom_typography")
            or [],
            "settings": settings,
        }

    async def update_global_colors(self, colors: list[dict[str, Any]]) -> dict[str, Any]:
        """
        Upsert custom colors.

        Raises:
            InvalidInputError: If colors is empty or an entry's color is not hex
        """
        if not colors or not isinstance(colors, list):
            raise InvalidInputError(
                "The colors parameter is required and must be an array.", field="colors"
            )

        entries: list[dict[str, Any]] = []
        for index, color in enumerate(colors):
            if not isinstance(color, dict):
                continue
            color_id = str(color.get("_id") or "").strip()
            if not color_id:
                continue
            value = str(color.get("color") or "")
            if not HEX_COLOR_RE.match(value):
                raise InvalidInputError(
                    f"Color '{value}' for '{color_id}' is not a hex color",
                    field=f"colors[{index}].color",
                )
            entries.append({"_id": color_id, "title": str(color.get("title") or ""), "color": value})

        with collaborator_errors("read global settings"):
            settings = await self.tokens.get_active_tokens()
        existing = list(settings.get("custom_colors") or [])
        positions = _index_by_id(existing)
        for entry in entries:
            if entry["_id"] in positions:
                existing[positions[entry["_id"]]] = entry
            else:
                positions[entry["_id"]] = len(existing)
                existing.append(entry)

        with collaborator_errors("update global colors"):
            await self.tokens.update_tokens({"custom_colors": existing})

        logger.info(f"Updated {len(entries)} global colors")
        return {"success": True, "updated": [entry["_id"] for entry in entries]}

    async def update_global_typography(self, typography: list[dict[str, Any]]) -> dict[str, Any]:
        """Upsert custom typography, keeping only typography keys."""
        if not typography or not isinstance(typography, list):
            raise InvalidInputError(
                "The typography parameter is required and must be an array.",
                field="typography",
            )

        entries: list[dict[str, Any]] = []
        for typo in typography:
            if not isinstance(typo, dict):
                continue
            typo_id = str(typo.get("_id") or "").strip()
            if not typo_id:
                continue
            entry = {key: typo[key] for key in TYPOGRAPHY_KEYS if typo.get(key) is not None}
            entry["_id"] = typo_id
            # Overrides only apply when the group is switched to custom
            entry["typography_typography"] = "custom"
            entries.append(entry)

        with collaborator_errors("read global settings"):
            settings = await self.tokens.get_active_tokens()
        existing = list(settings.get("custom_typography") or [])
        positions = _index_by_id(existing)
        for entry in entries:
            if entry["_id"] in positions:
                position = positions[entry["_id"]]
                existing[position] = {**existing[position], **entry}
            else:
                positions[entry["_id"]] = len(existing)
                existing.append(entry)

        with collaborator_errors("update global typography"):
            await self.tokens.update_tokens({"custom_typography": existing})

        logger.info(f"Updated {len(entries)} global typography entries")
        return {"success": True, "updated": [entry["_id"] for entry in entries]}
