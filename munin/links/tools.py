"""Note linking: link extraction, backlinks and the link graph.

Two link syntaxes are recognised in note content:

    [[Chocolate Cake]]                  # wiki link, resolved by title
    [Chocolate Cake](app://note/42)     # explicit link, names its target id

Wiki titles resolve case-insensitively against the collection; when two
notes share a title the later one wins. Wiki links that resolve to nothing
are skipped. Explicit links are taken at their word even if the id is not
in the collection. A note linking to itself contributes neither a backlink
nor an edge.

Example usage:
    links = extract_note_links(note.content)
    index = build_backlink_index(notes)
    incoming = get_backlinks(index, "42")
"""

import re
from collections.abc import Sequence

from munin.dependencies import NoteNotFoundError, logger
from munin.links.models import (
    BacklinkEntry,
    BacklinkIndex,
    GraphEdge,
    GraphNode,
    LinkDescriptor,
    LinkGraph,
    LinkType,
    OutboundLink,
)
from munin.notes.models import Note

WIKI_LINK_PATTERN = re.compile(r"\[\[([^\]]+)\]\]")
EXPLICIT_LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(app://note/([^)]+)\)")


# =============================================================================
# Helper Functions
# =============================================================================


def build_title_lookup(notes: Sequence[Note]) -> dict[str, str]:
    """Map lowercased titles to note keys; later notes win on collisions.

    Examples:
        >>> build_title_lookup([Note(id=1, title="Cake", content="")])
        {'cake': '1'}
    """
    return {note.title.lower(): note.key for note in notes}


def resolve_link(link: LinkDescriptor, title_lookup: dict[str, str]) -> str | None:
    """Return the target key of a link, or None if it cannot be resolved."""
    if link.type is LinkType.EXPLICIT_ID:
        return link.id or None
    return title_lookup.get(link.title.lower())


def _resolved_links(note: Note, title_lookup: dict[str, str]) -> list[tuple[LinkDescriptor, str]]:
    """Links of a note paired with their targets, minus unresolved and self-links."""
    resolved = []
    for link in extract_note_links(note.content):
        target = resolve_link(link, title_lookup)
        if target is None or target == note.key:
            continue
        resolved.append((link, target))
    return resolved


# =============================================================================
# Extraction
# =============================================================================


def extract_note_links(content: str) -> list[LinkDescriptor]:
    """Find every wiki and explicit link in a note's content.

    Args:
        content: Markdown source

    Returns:
        Links ordered by their position in the content

    Examples:
        >>> [l.title for l in extract_note_links("[B](app://note/2) then [[A]]")]
        ['B', 'A']
    """
    links = [
        LinkDescriptor(
            type=LinkType.WIKI,
            title=match.group(1).strip(),
            raw_text=match.group(0),
            position=match.start(),
        )
        for match in WIKI_LINK_PATTERN.finditer(content)
    ]
    links.extend(
        LinkDescriptor(
            type=LinkType.EXPLICIT_ID,
            title=match.group(1).strip(),
            id=match.group(2).strip(),
            raw_text=match.group(0),
            position=match.start(),
        )
        for match in EXPLICIT_LINK_PATTERN.finditer(content)
    )
    links.sort(key=lambda link: link.position)
    return links


def convert_wiki_links_to_markdown(content: str, notes: Sequence[Note]) -> str:
    """Rewrite resolvable ``[[Title]]`` links as ``[Title](app://note/ID)``.

    Links whose title matches no note are left untouched.

    Examples:
        >>> convert_wiki_links_to_markdown("See [[cake]]", [Note(id=7, title="Cake", content="")])
        'See [cake](app://note/7)'
    """
    title_lookup = build_title_lookup(notes)

    def replace(match: re.Match[str]) -> str:
        title = match.group(1).strip()
        target = title_lookup.get(title.lower())
        if target is None:
            return match.group(0)
        return f"[{title}](app://note/{target})"

    return WIKI_LINK_PATTERN.sub(replace, content)


# =============================================================================
# Backlinks and Graph
# =============================================================================


def build_backlinks_map(notes: Sequence[Note]) -> dict[str, list[BacklinkEntry]]:
    """Map each linked note's key to the links pointing at it.

    Every link produces its own entry, so a note linking twice to the same
    target appears twice in that target's list.
    """
    title_lookup = build_title_lookup(notes)
    backlinks: dict[str, list[BacklinkEntry]] = {}

    for note in notes:
        for link, target in _resolved_links(note, title_lookup):
            backlinks.setdefault(target, []).append(
                BacklinkEntry(
                    source_id=note.key,
                    source_title=note.title,
                    link_text=link.title,
                    type=link.type,
                )
            )

    return backlinks


def get_note_link_graph(notes: Sequence[Note]) -> LinkGraph:
    """Build the node and edge lists for a graph view.

    Every note is a node. Edges are unique per (source, target) pair.
    """
    title_lookup = build_title_lookup(notes)
    nodes = [GraphNode(id=note.key, title=note.title, folder=note.folder) for note in notes]

    edges: list[GraphEdge] = []
    seen: set[tuple[str, str]] = set()
    for note in notes:
        for _, target in _resolved_links(note, title_lookup):
            pair = (note.key, target)
            if pair in seen:
                continue
            seen.add(pair)
            edges.append(GraphEdge(source=note.key, target=target))

    return LinkGraph(nodes=nodes, edges=edges)


def build_backlink_index(notes: Sequence[Note] | None) -> BacklinkIndex:
    """Build backlinks and the link graph for a whole collection.

    Args:
        notes: Note collection; None is treated as empty

    Returns:
        BacklinkIndex with the backlink map and graph

    Examples:
        >>> notes = [Note(id=1, title="A", content="[[B]]"), Note(id=2, title="B", content="")]
        >>> build_backlink_index(notes).backlinks["2"][0].source_title
        'A'
    """
    notes = notes or []
    index = BacklinkIndex(
        backlinks=build_backlinks_map(notes),
        graph=get_note_link_graph(notes),
    )

    logger.info(
        "backlink_index_built",
        extra={
            "note_count": len(notes),
            "linked_notes": len(index.backlinks),
            "edge_count": len(index.graph.edges),
        },
    )

    return index


def get_backlinks(index: BacklinkIndex, note_id: int | str) -> list[BacklinkEntry]:
    """Incoming links for one note, or an empty list if it has none."""
    return index.backlinks.get(str(note_id), [])


def get_outbound_links(notes: Sequence[Note], note_id: int | str) -> list[OutboundLink]:
    """Resolve the links going out of one note.

    Unlike the backlink map, unresolved wiki links are reported here with a
    None ``target_id`` so callers can show them as missing notes.

    Raises:
        NoteNotFoundError: If no note has the given id
    """
    key = str(note_id)
    by_key = {note.key: note for note in notes}
    source = by_key.get(key)
    if source is None:
        raise NoteNotFoundError(f"Note not found: {key}")

    title_lookup = build_title_lookup(notes)
    outbound = []
    for link in extract_note_links(source.content):
        target = resolve_link(link, title_lookup)
        target_note = by_key.get(target) if target is not None else None
        outbound.append(
            OutboundLink(
                link_text=link.title,
                type=link.type,
                target_id=target,
                target_title=target_note.title if target_note else None,
            )
        )
    return outbound
