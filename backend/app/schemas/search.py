from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


class SearchRequest(BaseModel):
    prompt: StrictStr

    @field_validator("prompt")
    @classmethod
    def strip_and_require_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("prompt must not be empty")
        return value


class ModerationResult(BaseModel):
    flagged: bool
    categories: dict[str, bool] = Field(default_factory=dict)


class PageSection(BaseModel):
    """A documentation section returned by ``match_page_sections``."""

    model_config = ConfigDict(extra="allow")

    id: int | None = None
    page_id: int | None = None
    slug: str | None = None
    heading: str | None = None
    content: str
    similarity: float


class ErrorResponse(BaseModel):
    error: str
    data: dict[str, Any] | None = None
