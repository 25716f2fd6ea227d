"""Link extraction, backlinks and the link graph."""

from munin.links.tools import build_backlink_index, extract_note_links

__all__ = ["build_backlink_index", "extract_note_links"]
