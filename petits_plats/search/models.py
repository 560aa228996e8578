from __future__ import annotations

from pydantic import BaseModel, Field

from .indexer import Category


class FilterResult(BaseModel):
    query: str = ""
    selected: dict[Category, list[str]] = Field(default_factory=dict)
    visible_ids: list[int]
    options: dict[Category, list[str]] = Field(default_factory=dict)


class SearchRequest(BaseModel):
    query: str = Field(default="", max_length=200)


class TagRequest(BaseModel):
    token: str = Field(..., min_length=1, max_length=100)


class FilterState(BaseModel):
    """Per-session engine state, as stored in the session cookie."""

    query: str = ""
    selected: dict[Category, list[str]] = Field(default_factory=dict)
