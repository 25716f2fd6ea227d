"""Query parsing, ranking, suggestions and highlighting."""

from munin.search.query import parse_query
from munin.search.tools import get_search_suggestions, highlight_search_terms, search

__all__ = ["get_search_suggestions", "highlight_search_terms", "parse_query", "search"]
