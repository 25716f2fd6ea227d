"""Search over an in-memory note collection.

This module implements the ranking engine plus the two helpers the search
box needs: type-ahead suggestions and match highlighting. Every function is
pure; callers load notes once and pass the collection in.

The query language is handled by ``munin.search.query.parse_query``:

    search(notes, "cake")                          # free-text term
    search(notes, '"chocolate chip" -nuts')        # phrase plus exclusion
    search(notes, "tag:recipe folder:food bake")   # filters plus term
    search(notes, "after:2025-01-01", SearchOptions(sort_by="date"))

Scores are additive. Filters (phrases, tags, folders, dates, exclusions)
either contribute a fixed weight or drop the note outright. Free-text terms
never drop a note unless the query has exactly one term and it misses
completely, even fuzzily.
"""

import re
from collections.abc import Iterable, Sequence

from munin.dependencies import logger
from munin.notes.models import Note
from munin.search.models import ParsedQuery, SearchOptions, SearchResult
from munin.search.query import parse_query
from munin.search.similarity import similarity

PHRASE_WEIGHT = 10
TAG_EXACT_WEIGHT = 8
TAG_FUZZY_WEIGHT = 6
FOLDER_WEIGHT = 8
TERM_TITLE_WEIGHT = 5
TERM_TEXT_WEIGHT = 3
FUZZY_TITLE_WEIGHT = 4
FUZZY_CONTENT_WEIGHT = 2

DEFAULT_HIGHLIGHT_CLASS = "search-highlight"


# =============================================================================
# Helper Functions
# =============================================================================


def _first_fuzzy_hit(term: str, words: Iterable[str], threshold: float) -> float | None:
    """Return the similarity of the first word at or above threshold, if any."""
    for word in words:
        score = similarity(word, term)
        if score >= threshold:
            return score
    return None


def _score_term(term: str, note: Note, text: str, title: str, threshold: float) -> float | None:
    """Score one free-text term against a note.

    Checks run in priority order and the first hit wins: substring of the
    title, substring of title plus content, fuzzy title word, fuzzy content
    word.

    Returns:
        The term's contribution, or None when nothing matched
    """
    if term in title:
        return TERM_TITLE_WEIGHT
    if term in text:
        return TERM_TEXT_WEIGHT

    hit = _first_fuzzy_hit(term, title.split(), threshold)
    if hit is not None:
        return FUZZY_TITLE_WEIGHT * hit

    hit = _first_fuzzy_hit(term, note.content.lower().split(), threshold)
    if hit is not None:
        return FUZZY_CONTENT_WEIGHT * hit

    return None


def score_note(note: Note, parsed: ParsedQuery, fuzzy_threshold: float = 0.6) -> float | None:
    """Score a single note against a parsed query.

    Args:
        note: Note to score
        parsed: Query produced by ``parse_query``
        fuzzy_threshold: Minimum similarity for fuzzy tag and word matches

    Returns:
        The accumulated score, or None if the note is filtered out

    Examples:
        >>> score_note(Note(id=1, title="Cake", content=""), parse_query("cake"))
        5.0
    """
    text = f"{note.title} {note.content}".lower()
    title = note.title.lower()
    folder = (note.folder or "").lower()
    tags = [t.lower() for t in note.tags]

    if any(excluded in text for excluded in parsed.excluded_terms):
        return None

    score = 0.0

    for phrase in parsed.exact_phrases:
        if phrase not in text:
            return None
        score += PHRASE_WEIGHT

    for tag in parsed.tags:
        if tag in tags:
            score += TAG_EXACT_WEIGHT
        elif any(similarity(note_tag, tag) >= fuzzy_threshold for note_tag in tags):
            score += TAG_FUZZY_WEIGHT
        else:
            return None

    for wanted in parsed.folders:
        if wanted not in folder:
            return None
        score += FOLDER_WEIGHT

    date_range = parsed.date_range
    if date_range is not None:
        if date_range.before is not None and note.modified > date_range.before:
            return None
        if date_range.after is not None and note.modified < date_range.after:
            return None

    single_term = len(parsed.terms) == 1
    for term in parsed.terms:
        contribution = _score_term(term, note, text, title, fuzzy_threshold)
        if contribution is None:
            if single_term:
                return None
            continue
        score += contribution

    return score


# =============================================================================
# Public API
# =============================================================================


def search(
    notes: Sequence[Note],
    query: str | None,
    options: SearchOptions | None = None,
) -> list[SearchResult]:
    """Rank notes against a query string.

    A query with no terms, phrases, tags or folders short-circuits: every
    note comes back with score 0 in collection order, untruncated.

    Args:
        notes: Note collection to search
        query: Raw query text
        options: Threshold, result cap and sort order (defaults if None)

    Returns:
        Matching notes with positive scores, sorted and truncated

    Examples:
        >>> results = search(notes, "tag:recipe chocolate")
        >>> [r.note.title for r in results]
        ['Chocolate Cake', 'Brownies']
    """
    options = options or SearchOptions()
    parsed = parse_query(query)

    if not parsed.has_criteria:
        return [SearchResult(note=note, score=0) for note in notes]

    results: list[SearchResult] = []
    for note in notes:
        score = score_note(note, parsed, options.fuzzy_threshold)
        if score is not None and score > 0:
            results.append(SearchResult(note=note, score=score))

    if options.sort_by == "date":
        results.sort(key=lambda r: r.note.modified, reverse=True)
    else:
        results.sort(key=lambda r: r.score, reverse=True)

    logger.debug(
        "search_completed",
        extra={
            "query": query,
            "sort_by": options.sort_by,
            "match_count": len(results),
            "note_count": len(notes),
        },
    )

    return results[: options.max_results]


def get_search_suggestions(
    notes: Sequence[Note],
    partial: str | None,
    limit: int = 5,
) -> list[str]:
    """Type-ahead suggestions for a partially typed query.

    Titles containing the text come first, then ``tag:<tag>`` entries, then
    ``folder:<folder>`` entries. Matching is case-insensitive; suggestions
    keep their original casing.

    Args:
        notes: Note collection
        partial: Text typed so far
        limit: Maximum number of suggestions

    Returns:
        De-duplicated suggestions in first-seen order

    Examples:
        >>> get_search_suggestions(notes, "rec")
        ['Recipe Index', 'tag:recipe', 'folder:Recipes']
    """
    if not partial or not partial.strip():
        return []

    needle = partial.lower()
    # dict preserves insertion order, which makes it an ordered set
    suggestions: dict[str, None] = {}

    for note in notes:
        if needle in note.title.lower():
            suggestions[note.title] = None

    for note in notes:
        for tag in note.tags:
            if needle in tag.lower():
                suggestions[f"tag:{tag}"] = None

    for note in notes:
        if note.folder and needle in note.folder.lower():
            suggestions[f"folder:{note.folder}"] = None

    return list(suggestions)[:limit]


def highlight_search_terms(
    text: str,
    query: str | None,
    css_class: str = DEFAULT_HIGHLIGHT_CLASS,
) -> str:
    """Wrap every occurrence of the query's terms and phrases in ``<mark>``.

    All terms are matched in a single pass, longest first, so inserted
    markup is never matched again and overlapping terms prefer the longer
    one.

    Examples:
        >>> highlight_search_terms("Bake the Cake", "cake")
        'Bake the <mark class="search-highlight">Cake</mark>'
    """
    parsed = parse_query(query)
    needles = sorted({*parsed.terms, *parsed.exact_phrases}, key=len, reverse=True)
    if not needles:
        return text

    pattern = re.compile("|".join(re.escape(n) for n in needles), re.IGNORECASE)
    return pattern.sub(lambda m: f'<mark class="{css_class}">{m.group(0)}</mark>', text)
