"""
Request models accepted by the catalog services.

Validated with pydantic so malformed input is rejected before any
aggregate is read or written.
"""

from __future__ import annotations

from typing import Dict, Optional, Set

from pydantic import BaseModel, Field, field_validator


def _clean_title(value: str) -> str:
    cleaned = " ".join(value.split())
    if not cleaned:
        raise ValueError("Title cannot be empty.")
    return cleaned


class CatalogueRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    parent_id: Optional[str] = None

    @field_validator("title")
    @classmethod
    def clean_title(cls, value: str) -> str:
        return _clean_title(value)


class ArticleRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    catalogues: Set[str] = Field(default_factory=set)

    @field_validator("title")
    @classmethod
    def clean_title(cls, value: str) -> str:
        return _clean_title(value)


class EntryRequest(BaseModel):
    content: str = Field(..., min_length=1)
    article_id: Optional[str] = None
    explicit_links: Dict[str, str] = Field(default_factory=dict)

    @field_validator("content")
    @classmethod
    def check_content(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Entry content cannot be empty.")
        return value

    @field_validator("explicit_links")
    @classmethod
    def drop_blank_phrases(cls, value: Dict[str, str]) -> Dict[str, str]:
        # Empty phrases cannot be located in content
        return {phrase: target for phrase, target in value.items() if phrase.strip()}
