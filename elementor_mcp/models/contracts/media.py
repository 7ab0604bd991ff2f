"""
Media contracts: stock image search results and media library attachments.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StockImage(BaseModel):
    """One Openverse image, reduced to the fields the editor tools use."""

    model_config = ConfigDict(extra="ignore")

    id: str = ""
    title: str = ""
    url: str = ""
    thumbnail: str = ""
    width: int = 0
    height: int = 0
    creator: str = ""
    creator_url: str = ""
    license: str = ""
    license_url: str = ""
    attribution: str = ""
    source: str = ""
    foreign_landing_url: str = ""

    @field_validator("width", "height", mode="before")
    @classmethod
    def int_or_zero(cls, value: Any) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return 0

    @field_validator(
        "id", "title", "url", "thumbnail", "creator", "creator_url", "license",
        "license_url", "attribution", "source", "foreign_landing_url",
        mode="before",
    )
    @classmethod
    def str_or_empty(cls, value: Any) -> str:
        return "" if value is None else str(value)


class ImageSearchPage(BaseModel):
    """One page of image search results."""

    result_count: int = 0
    page: int = 1
    page_count: int = 0
    results: list[StockImage] = Field(default_factory=list)


class MediaAttachment(BaseModel):
    """A file held by the media library."""

    id: int
    url: str
    filename: str
    mime_type: str
    title: str = ""
    alt_text: str = ""
    caption: str = ""
    created_at: datetime = Field(default_factory=datetime.now)
