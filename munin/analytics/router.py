"""FastAPI router for /v1/analytics endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from munin.analytics.models import AnalyticsSnapshot
from munin.analytics.tools import compute_analytics, export_analytics
from munin.notes.models import Note
from munin.notes.tools import get_notes

router = APIRouter(prefix="/v1/analytics", tags=["analytics"])


@router.get("", response_model=AnalyticsSnapshot)
async def analytics(notes: list[Note] = Depends(get_notes)) -> AnalyticsSnapshot:
    """Statistics for the whole vault."""
    return compute_analytics(notes)


@router.get("/export")
async def export(notes: list[Note] = Depends(get_notes)) -> Response:
    """Statistics as a downloadable JSON document."""
    return Response(
        content=export_analytics(compute_analytics(notes)),
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="munin-analytics.json"'},
    )
