"""
Widget registry and document contracts.

Shapes exchanged with the external collaborators: control descriptors and
widget type metadata from the widget registry, document metadata from the
document store.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ControlDescriptor(BaseModel):
    """A single control declared by a widget type."""

    model_config = ConfigDict(extra="allow")

    name: str = ""
    type: str = "text"
    label: str | None = None
    default: Any = None
    options: dict[str, Any] = Field(default_factory=dict)
    fields: list[ControlDescriptor] = Field(default_factory=list)

    @field_validator("options", mode="before")
    @classmethod
    def options_as_mapping(cls, value: Any) -> Any:
        if value is None or value == []:
            return {}
        if isinstance(value, list):
            return {str(item): item for item in value}
        return value

    @field_validator("fields", mode="before")
    @classmethod
    def fields_as_list(cls, value: Any) -> Any:
        if value is None:
            return []
        # Elementor keys repeater fields by name
        if isinstance(value, dict):
            return [
                {"name": key, **field} if isinstance(field, dict) else field
                for key, field in value.items()
            ]
        return value


class WidgetTypeInfo(BaseModel):
    """Widget type metadata as listed by the registry."""

    name: str
    title: str = ""
    icon: str = ""
    categories: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)


class DocumentInfo(BaseModel):
    """Document metadata owned by the document store."""

    id: int
    title: str
    status: str = "draft"
    kind: str = "page"
    template_type: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)
    modified_at: datetime = Field(default_factory=datetime.now)
