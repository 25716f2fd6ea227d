"""Pydantic models for note links, backlinks and the link graph."""

from enum import Enum

from pydantic import BaseModel, Field


class LinkType(str, Enum):
    """Link syntaxes recognised in note content.

    WIKI is ``[[Title]]`` and is resolved by title. EXPLICIT_ID is
    ``[Title](app://note/ID)`` and names its target directly.
    """

    WIKI = "wiki"
    EXPLICIT_ID = "app"


class LinkDescriptor(BaseModel):
    """A link found in a note's content.

    Attributes:
        type: Which syntax produced the link
        title: Display or target title, trimmed
        id: Target id for explicit links, None for wiki links
        raw_text: The full matched source text
        position: Character offset of the match in the content
    """

    type: LinkType = Field(..., description="Link syntax")
    title: str = Field(..., description="Link title")
    id: str | None = Field(default=None, description="Explicit target id")
    raw_text: str = Field(..., description="Matched source text")
    position: int = Field(..., ge=0, description="Offset in content")


class BacklinkEntry(BaseModel):
    """One incoming link to a note.

    Attributes:
        source_id: Id of the linking note
        source_title: Title of the linking note
        link_text: Title text used in the link
        type: Syntax of the link
    """

    source_id: str = Field(..., description="Linking note id")
    source_title: str = Field(..., description="Linking note title")
    link_text: str = Field(..., description="Text of the link")
    type: LinkType = Field(..., description="Link syntax")


class OutboundLink(BaseModel):
    """One outgoing link from a note, resolved when possible.

    Attributes:
        link_text: Title text used in the link
        type: Syntax of the link
        target_id: Resolved target id, None if a wiki title matched nothing
        target_title: Title of the resolved target, None if it is not in the collection
    """

    link_text: str = Field(..., description="Text of the link")
    type: LinkType = Field(..., description="Link syntax")
    target_id: str | None = Field(default=None, description="Resolved target id")
    target_title: str | None = Field(default=None, description="Resolved target title")


class GraphNode(BaseModel):
    """A note in the link graph."""

    id: str = Field(..., description="Note id")
    title: str = Field(..., description="Note title")
    folder: str | None = Field(default=None, description="Note folder")


class GraphEdge(BaseModel):
    """A directed link between two notes."""

    source: str = Field(..., description="Linking note id")
    target: str = Field(..., description="Linked note id")


class LinkGraph(BaseModel):
    """Node and edge lists for a graph view.

    Edges are unique per (source, target) pair and never self-loops.
    """

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)


class BacklinkIndex(BaseModel):
    """Backlinks for every linked note, plus the link graph.

    Attributes:
        backlinks: Note id to its incoming links, in note then position order
        graph: Deduplicated link graph over the same collection
    """

    backlinks: dict[str, list[BacklinkEntry]] = Field(default_factory=dict)
    graph: LinkGraph = Field(default_factory=LinkGraph)


class ExtractLinksRequest(BaseModel):
    """Request body for link extraction."""

    content: str = Field(..., description="Markdown content to scan")


class ConvertLinksRequest(BaseModel):
    """Request body for wiki-link conversion."""

    content: str = Field(..., description="Markdown content to rewrite")


class ConvertLinksResponse(BaseModel):
    """Rewritten content."""

    content: str
