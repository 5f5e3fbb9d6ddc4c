"""Attendance snapshot and call-up list for an open match."""

from fastapi import APIRouter, Depends

from app.api.deps import get_lang, get_registry, http_error
from app.api.matches.serializers import build_lineup, build_player
from app.schemas.lineup import (
    AttendanceSyncResponse,
    AttendanceUpdateRequest,
    CallupCounts,
    CallupResponse,
)
from app.services.attendance import categorize_callup
from app.services.exceptions import LineupError
from app.services.match_context import MatchContextRegistry

router = APIRouter(prefix="/matches", tags=["attendance"])


@router.put("/{match_id}/attendance", response_model=AttendanceSyncResponse)
async def update_attendance(
    match_id: str,
    body: AttendanceUpdateRequest,
    lang: str = Depends(get_lang),
    registry: MatchContextRegistry = Depends(get_registry),
):
    """
    Replace the attendance snapshot for a match.

    Players that became confirmed are auto-assigned if not already placed;
    players that became absent leave the lineup.
    """
    try:
        sheet = registry.get(match_id)
    except LineupError as exc:
        raise http_error(exc, lang)

    result = sheet.update_attendance(body.attendance)
    return AttendanceSyncResponse(
        auto_assigned=result.auto_assigned,
        removed=result.removed,
        lineup=build_lineup(sheet),
    )


@router.get("/{match_id}/callup", response_model=CallupResponse)
async def get_callup(
    match_id: str,
    search: str = "",
    lang: str = Depends(get_lang),
    registry: MatchContextRegistry = Depends(get_registry),
):
    """Squad split by attendance status, searchable by name or shirt number."""
    try:
        sheet = registry.get(match_id)
    except LineupError as exc:
        raise http_error(exc, lang)

    summary = categorize_callup(sheet.roster, sheet.attendance, search)
    return CallupResponse(
        match_id=match_id,
        confirmed=[build_player(p) for p in summary.confirmed],
        pending=[build_player(p) for p in summary.pending],
        absent=[build_player(p) for p in summary.absent],
        counts=CallupCounts(**summary.counts()),
    )
