"""Search query parser.

Turns a raw query such as::

    tag:recipe folder:Food "chocolate chip" -nuts after:2024-01-01 baking

into a ``ParsedQuery``. Parsing is a fixed sequence of extraction steps over
a residual string: each step pulls its matches out of the residual before
the next step runs, so a fragment is claimed by the first step that matches
it. ``-tag:recipe`` therefore becomes a tag filter (tags are extracted before
exclusions) and the orphaned ``-`` is discarded.

The parser never raises. Anything it does not recognise ends up as a
free-text term, and unparseable dates are recorded rather than rejected.
"""

import re
from collections.abc import Callable
from datetime import UTC, datetime

from munin.dependencies import logger
from munin.search.models import DateRange, ParsedQuery

PHRASE_PATTERN = re.compile(r'"([^"]+)"')
TAG_PATTERN = re.compile(r"(?:tag:|#)(\S+)")
FOLDER_PATTERN = re.compile(r"folder:(\S+)")
BEFORE_PATTERN = re.compile(r"before:(\S+)")
AFTER_PATTERN = re.compile(r"after:(\S+)")
EXCLUDED_PATTERN = re.compile(r"-(\S+)")
# A dash with nothing after it, e.g. what remains of "-tag:x" once the tag is taken
ORPHAN_DASH_PATTERN = re.compile(r"(?<!\S)-(?!\S)")

# A step receives the residual query and the query being built, and returns
# the residual with its own matches removed.
ExtractionStep = Callable[[str, ParsedQuery], str]


def parse_date_token(token: str) -> datetime | None:
    """Parse a ``before:``/``after:`` value as an ISO-8601 date or datetime.

    Naive values are interpreted as UTC.

    Returns:
        The parsed instant, or None if the token is not a valid date

    Examples:
        >>> parse_date_token("2024-12-31")
        datetime.datetime(2024, 12, 31, 0, 0, tzinfo=datetime.timezone.utc)
        >>> parse_date_token("someday") is None
        True
    """
    try:
        parsed = datetime.fromisoformat(token)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _extract_all(pattern: re.Pattern[str], residual: str, into: list[str]) -> str:
    into.extend(m.lower() for m in pattern.findall(residual))
    return pattern.sub("", residual)


def _extract_phrases(residual: str, query: ParsedQuery) -> str:
    return _extract_all(PHRASE_PATTERN, residual, query.exact_phrases)


def _extract_tags(residual: str, query: ParsedQuery) -> str:
    return _extract_all(TAG_PATTERN, residual, query.tags)


def _extract_folders(residual: str, query: ParsedQuery) -> str:
    return _extract_all(FOLDER_PATTERN, residual, query.folders)


def _extract_date_range(residual: str, query: ParsedQuery) -> str:
    """Take at most one ``before:`` and one ``after:`` bound."""
    before_match = BEFORE_PATTERN.search(residual)
    after_match = AFTER_PATTERN.search(residual)
    if not before_match and not after_match:
        return residual

    date_range = DateRange()
    for match, bound in ((before_match, "before"), (after_match, "after")):
        if match is None:
            continue
        token = match.group(1)
        parsed = parse_date_token(token)
        if parsed is None:
            date_range.invalid_tokens.append(token)
            logger.warning("invalid_date_token", extra={"bound": bound, "token": token})
        else:
            setattr(date_range, bound, parsed)

    query.date_range = date_range
    residual = BEFORE_PATTERN.sub("", residual, count=1)
    return AFTER_PATTERN.sub("", residual, count=1)


def _extract_exclusions(residual: str, query: ParsedQuery) -> str:
    residual = _extract_all(EXCLUDED_PATTERN, residual, query.excluded_terms)
    return ORPHAN_DASH_PATTERN.sub("", residual)


EXTRACTION_STEPS: tuple[ExtractionStep, ...] = (
    _extract_phrases,
    _extract_tags,
    _extract_folders,
    _extract_date_range,
    _extract_exclusions,
)


def parse_query(query: str | None) -> ParsedQuery:
    """Parse a raw search query into its components.

    Args:
        query: Raw query text; None or blank yields an empty query

    Returns:
        ParsedQuery with every recognised operator extracted

    Examples:
        >>> parse_query("recipe -dessert").excluded_terms
        ['dessert']
        >>> parse_query("#recipe").tags
        ['recipe']
    """
    parsed = ParsedQuery()
    if not query or not query.strip():
        return parsed

    residual = query
    for step in EXTRACTION_STEPS:
        residual = step(residual, parsed)

    parsed.terms = [t.lower() for t in residual.split()]
    return parsed
