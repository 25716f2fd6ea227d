"""FastAPI router for /v1/links endpoints."""

from fastapi import APIRouter, Depends, status

from munin.dependencies import NoteNotFoundError
from munin.links.models import (
    BacklinkEntry,
    BacklinkIndex,
    ConvertLinksRequest,
    ConvertLinksResponse,
    ExtractLinksRequest,
    LinkDescriptor,
    LinkGraph,
    OutboundLink,
)
from munin.links.tools import (
    build_backlink_index,
    convert_wiki_links_to_markdown,
    extract_note_links,
    get_backlinks,
    get_note_link_graph,
    get_outbound_links,
)
from munin.models import http_error
from munin.notes.models import Note
from munin.notes.tools import get_notes

router = APIRouter(prefix="/v1/links", tags=["links"])


@router.post("/extract", response_model=list[LinkDescriptor])
async def extract(request: ExtractLinksRequest) -> list[LinkDescriptor]:
    """List the links in a piece of markdown."""
    return extract_note_links(request.content)


@router.post("/convert", response_model=ConvertLinksResponse)
async def convert(
    request: ConvertLinksRequest,
    notes: list[Note] = Depends(get_notes),
) -> ConvertLinksResponse:
    """Rewrite wiki links as explicit note links where the title resolves."""
    return ConvertLinksResponse(content=convert_wiki_links_to_markdown(request.content, notes))


@router.get("/backlinks", response_model=BacklinkIndex)
async def backlink_index(notes: list[Note] = Depends(get_notes)) -> BacklinkIndex:
    """Backlinks for every note, plus the link graph."""
    return build_backlink_index(notes)


@router.get("/backlinks/{note_id:path}", response_model=list[BacklinkEntry])
async def backlinks_for_note(
    note_id: str,
    notes: list[Note] = Depends(get_notes),
) -> list[BacklinkEntry]:
    """Incoming links for one note; empty when nothing links to it."""
    return get_backlinks(build_backlink_index(notes), note_id)


@router.get("/outbound/{note_id:path}", response_model=list[OutboundLink])
async def outbound_for_note(
    note_id: str,
    notes: list[Note] = Depends(get_notes),
) -> list[OutboundLink]:
    """Outgoing links for one note, resolved against the vault."""
    try:
        return get_outbound_links(notes, note_id)
    except NoteNotFoundError as e:
        raise http_error(
            str(e),
            "note_not_found",
            status_code=status.HTTP_404_NOT_FOUND,
            error_type="not_found_error",
        ) from e


@router.get("/graph", response_model=LinkGraph)
async def graph(notes: list[Note] = Depends(get_notes)) -> LinkGraph:
    """Node and edge lists for the graph view."""
    return get_note_link_graph(notes)
