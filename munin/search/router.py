"""FastAPI router for /v1/search endpoints."""

from typing import Literal

from fastapi import APIRouter, Depends, Query

from munin.config import Settings, get_settings
from munin.dependencies import logger
from munin.notes.models import Note
from munin.notes.tools import get_notes
from munin.search.models import (
    HighlightRequest,
    HighlightResponse,
    ParsedQuery,
    SearchOptions,
    SearchResponse,
)
from munin.search.query import parse_query
from munin.search.tools import get_search_suggestions, highlight_search_terms, search

router = APIRouter(prefix="/v1/search", tags=["search"])


@router.get("", response_model=SearchResponse)
async def search_notes(
    q: str = Query(default="", description="Search query"),
    fuzzy_threshold: float | None = Query(default=None, ge=0.0, le=1.0),
    max_results: int | None = Query(default=None, ge=1),
    sort_by: Literal["relevance", "date"] = "relevance",
    notes: list[Note] = Depends(get_notes),
    settings: Settings = Depends(get_settings),
) -> SearchResponse:
    """Rank the vault's notes against a query.

    Threshold and result cap default to the configured values.
    """
    options = SearchOptions(
        fuzzy_threshold=settings.fuzzy_threshold if fuzzy_threshold is None else fuzzy_threshold,
        max_results=max_results or settings.max_results,
        sort_by=sort_by,
    )
    results = search(notes, q, options)

    logger.info(
        "search_request_completed",
        extra={"query": q, "result_count": len(results), "sort_by": sort_by},
    )

    return SearchResponse(query=q, total=len(results), results=results)


@router.get("/parse", response_model=ParsedQuery)
async def parse(q: str = Query(default="", description="Search query")) -> ParsedQuery:
    """Show how a query is interpreted."""
    return parse_query(q)


@router.get("/suggest", response_model=list[str])
async def suggest(
    partial: str = Query(default="", description="Partially typed query"),
    limit: int | None = Query(default=None, ge=1),
    notes: list[Note] = Depends(get_notes),
    settings: Settings = Depends(get_settings),
) -> list[str]:
    """Type-ahead suggestions for the search box."""
    return get_search_suggestions(notes, partial, limit or settings.suggestion_limit)


@router.post("/highlight", response_model=HighlightResponse)
async def highlight(
    request: HighlightRequest,
    settings: Settings = Depends(get_settings),
) -> HighlightResponse:
    """Mark every query term in a piece of text."""
    return HighlightResponse(
        text=highlight_search_terms(request.text, request.query, settings.highlight_class)
    )
