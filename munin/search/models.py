"""Pydantic models for search.

This module defines the parsed query, the search options record and
the scored results returned by the ranking engine.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from munin.notes.models import Note


class DateRange(BaseModel):
    """Bounds on a note's ``modified`` timestamp.

    Attributes:
        before: Notes modified after this instant are dropped
        after: Notes modified before this instant are dropped
        invalid_tokens: ``before:``/``after:`` values that did not parse as dates
    """

    before: datetime | None = Field(default=None, description="Upper bound")
    after: datetime | None = Field(default=None, description="Lower bound")
    invalid_tokens: list[str] = Field(default_factory=list, description="Unparseable date tokens")


class ParsedQuery(BaseModel):
    """Structured form of a raw search query.

    All strings are lowercased by the parser.

    Attributes:
        terms: Free-text tokens, in query order
        exact_phrases: Quoted phrases that must appear verbatim
        tags: Tag filters (``tag:x`` or ``#x``)
        folders: Folder filters (``folder:x``)
        excluded_terms: Terms that disqualify a note (``-x``)
        date_range: Optional modified-date bounds (``before:``/``after:``)
    """

    terms: list[str] = Field(default_factory=list, description="Free-text terms")
    exact_phrases: list[str] = Field(default_factory=list, description="Quoted phrases")
    tags: list[str] = Field(default_factory=list, description="Tag filters")
    folders: list[str] = Field(default_factory=list, description="Folder filters")
    excluded_terms: list[str] = Field(default_factory=list, description="Excluded terms")
    date_range: DateRange | None = Field(default=None, description="Modified-date bounds")

    @property
    def has_criteria(self) -> bool:
        """Whether the query constrains ranking.

        Exclusions and date bounds alone do not count.
        """
        return bool(self.terms or self.exact_phrases or self.tags or self.folders)


class SearchOptions(BaseModel):
    """Tuning knobs for the ranking engine.

    Attributes:
        fuzzy_threshold: Minimum similarity for a fuzzy tag or word match
        max_results: Result list is truncated to this size after sorting
        sort_by: 'relevance' (score, descending) or 'date' (modified, descending)
    """

    fuzzy_threshold: float = Field(default=0.6, ge=0.0, le=1.0, description="Fuzzy cutoff")
    max_results: int = Field(default=100, ge=1, description="Maximum results")
    sort_by: Literal["relevance", "date"] = Field(default="relevance", description="Sort order")


class SearchResult(BaseModel):
    """A single scored note.

    Attributes:
        note: The matching note
        score: Relevance score; larger is more relevant, 0 is valid
    """

    note: Note = Field(..., description="Matching note")
    score: float = Field(default=0.0, ge=0.0, description="Relevance score")


class SearchResponse(BaseModel):
    """Ranked results for one query, as returned by the API."""

    query: str = Field(default="", description="Raw query text")
    total: int = Field(default=0, ge=0, description="Number of results returned")
    results: list[SearchResult] = Field(default_factory=list, description="Scored notes")


class HighlightRequest(BaseModel):
    """Request body for highlighting."""

    text: str = Field(..., description="Text to mark up")
    query: str = Field(default="", description="Query whose terms are highlighted")


class HighlightResponse(BaseModel):
    """Highlighted text."""

    text: str
