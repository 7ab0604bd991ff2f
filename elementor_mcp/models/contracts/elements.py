"""
Element Tree Definitions

Pydantic models for the Elementor document tree and for the declarative
structure consumed by build_page.

Wire names (what the document store persists) are kept as aliases:
    id, elType, widgetType, isInner, settings, elements

    element = Element.model_validate(raw)
    raw == element.model_dump(by_alias=True, exclude_none=True)
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from elementor_mcp.core.exceptions import MalformedElementError


# -----------------------------------------------------------------------------
# Literal Types
# -----------------------------------------------------------------------------

ElementKind = Literal["container", "widget", "section", "column"]

StructureItemType = Literal["container", "widget"]


# -----------------------------------------------------------------------------
# Tree nodes
# -----------------------------------------------------------------------------


class Element(BaseModel):
    """
    One node of a document tree.

    Settings are an open key/value bag. Unknown top-level wire keys are kept
    as extras so a load/save round trip never drops data.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(min_length=1)
    kind: ElementKind = Field(alias="elType")
    widget_type: str | None = Field(default=None, alias="widgetType")
    is_inner: bool = Field(default=False, alias="isInner")
    settings: dict[str, Any] = Field(default_factory=dict)
    children: list[Element] = Field(default_factory=list, alias="elements")

    @field_validator("settings", mode="before")
    @classmethod
    def empty_list_as_empty_settings(cls, value: Any) -> Any:
        # PHP-encoded documents serialize an empty settings map as []
        if value is None or value == []:
            return {}
        return value

    @model_validator(mode="after")
    def check_widget_type(self) -> Element:
        if self.kind == "widget":
            if not self.widget_type:
                raise ValueError(f"Widget element '{self.id}' has no widgetType")
        elif self.widget_type:
            raise ValueError(
                f"Element '{self.id}' of kind '{self.kind}' must not carry a widgetType"
            )
        else:
            self.widget_type = None
        return self

    def to_data(self) -> dict[str, Any]:
        """Dump to the wire format used by document stores."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


def elements_from_data(data: Any) -> list[Element]:
    """
    Parse a raw root sequence into Elements.

    Raises:
        MalformedElementError: If any node breaks the node contract
    """
    if data is None:
        return []
    if not isinstance(data, list):
        raise MalformedElementError(
            f"Element tree must be a list, got {type(data).__name__}"
        )
    try:
        return [Element.model_validate(item) for item in data]
    except ValidationError as e:
        raise MalformedElementError(f"Malformed element data: {e}") from e


def elements_to_data(elements: list[Element]) -> list[dict[str, Any]]:
    """Dump a root sequence back to wire format."""
    return [element.to_data() for element in elements]


# -----------------------------------------------------------------------------
# Declarative structure (build_page input)
# -----------------------------------------------------------------------------


class StructureItem(BaseModel):
    """
    One item of a build_page structure.

    Children stay raw so each nested item is parsed (and possibly skipped)
    on its own.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: str
    widget_type: str | None = Field(
        default=None,
        validation_alias=AliasChoices("widget_type", "widgetType"),
    )
    settings: dict[str, Any] = Field(default_factory=dict)
    children: list[Any] = Field(default_factory=list)

    @field_validator("settings", mode="before")
    @classmethod
    def empty_list_as_empty_settings(cls, value: Any) -> Any:
        if value is None or value == []:
            return {}
        return value

    @field_validator("children", mode="before")
    @classmethod
    def missing_children(cls, value: Any) -> Any:
        return [] if value is None else value
