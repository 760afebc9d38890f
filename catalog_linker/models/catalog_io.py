"""
Typed Pydantic models for the documents handed to a rendering layer.

Covers annotated text (segments + blocks), search results and the detail
document of one record. The browse layer builds these and dumps them to
plain dicts; the JSON schemas in config/schemas.py describe the same shapes.
"""
from __future__ import annotations

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# Inline segments
# =============================================================================


class TextSegmentOut(BaseModel):
    type: Literal["text"] = "text"
    text: str


class EntitySegmentOut(BaseModel):
    """Clickable reference to another record (routes by library)."""

    type: Literal["entity"] = "entity"
    text: str = Field(..., min_length=1, description="Matched span, original casing.")
    id: str = Field(..., description="Target record id.")
    library: str = Field(..., description="'Activities' | 'Tools' discriminator of the target.")
    href: str = Field(..., description="Detail route of the target record.")

    @field_validator("href")
    @classmethod
    def validate_href(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("entity href must be an absolute route")
        return v


class UrlSegmentOut(BaseModel):
    type: Literal["url"] = "url"
    text: str
    href: str

    @field_validator("href")
    @classmethod
    def validate_href(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("url href must start with http:// or https://")
        return v


SegmentOut = Annotated[
    Union[TextSegmentOut, EntitySegmentOut, UrlSegmentOut],
    Field(discriminator="type"),
]


# =============================================================================
# Blocks
# =============================================================================


class ParagraphOut(BaseModel):
    type: Literal["paragraph"] = "paragraph"
    segments: List[SegmentOut]


class BulletListOut(BaseModel):
    type: Literal["list"] = "list"
    items: List[List[SegmentOut]] = Field(..., min_length=1)


class SpacerOut(BaseModel):
    type: Literal["spacer"] = "spacer"


BlockOut = Annotated[
    Union[ParagraphOut, BulletListOut, SpacerOut],
    Field(discriminator="type"),
]


# =============================================================================
# Documents
# =============================================================================


class RecordSummary(BaseModel):
    """One card in a result list."""

    id: str
    library: str
    name: str
    href: str
    starred: bool = False
    score: Optional[int] = Field(None, ge=0, description="Relevance score; None when browsing all.")
    fields: Dict[str, str] = Field(default_factory=dict)


class SearchResponse(BaseModel):
    query: str
    total: int = Field(..., ge=0, description="Records considered before filters.")
    matched: int = Field(..., ge=0)
    starred: List[RecordSummary]
    results: List[RecordSummary]


class RecordDetail(BaseModel):
    """Detail view of one record with every text field annotated."""

    id: str
    library: str
    name: str
    href: str
    blocks: Dict[str, List[BlockOut]] = Field(default_factory=dict)
    inline: Dict[str, List[SegmentOut]] = Field(default_factory=dict)
