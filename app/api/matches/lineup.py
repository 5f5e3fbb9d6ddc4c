"""Match lineup endpoints: open a match sheet and run lineup operations on it."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import ensure_ok, get_lang, get_registry, http_error
from app.api.matches.serializers import build_lineup, build_player
from app.config import get_settings
from app.schemas.lineup import (
    AssignRequest,
    FormationChangeRequest,
    GameModeRequest,
    LineupResponse,
    OccupancyResponse,
    OkResponse,
    OpenLineupRequest,
    OperationResponse,
    PlayerActionRequest,
    PlayerPositionResponse,
    PlayerRefResponse,
    StrictModeRequest,
    SwapRequest,
)
from app.services.exceptions import LineupError, MatchNotFoundError
from app.services.match_context import MatchContextRegistry, MatchSheet
from app.utils.error_messages import get_error_message
from app.utils.formations import FormationShape, get_formation
from app.utils.positions import LineType, parse_line

settings = get_settings()

router = APIRouter(prefix="/matches", tags=["lineups"])


def _get_sheet(registry: MatchContextRegistry, match_id: str, lang: str) -> MatchSheet:
    try:
        return registry.get(match_id)
    except LineupError as exc:
        raise http_error(exc, lang)


def _parse_line_or_422(value: str, lang: str) -> LineType:
    try:
        return parse_line(value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=get_error_message("invalid_line", lang),
        )


def _operation_response(sheet: MatchSheet, changed: bool) -> OperationResponse:
    return OperationResponse(ok=True, changed=changed, lineup=build_lineup(sheet))


@router.post("/{match_id}/lineup", response_model=LineupResponse, status_code=status.HTTP_201_CREATED)
async def open_lineup(
    match_id: str,
    body: OpenLineupRequest,
    lang: str = Depends(get_lang),
    registry: MatchContextRegistry = Depends(get_registry),
):
    """
    Open (or re-open) the lineup for a match.

    Re-opening resets the lineup and re-seeds it: every confirmed roster
    player is auto-assigned to their natural line or the bench.
    """
    try:
        sheet = registry.open(
            match_id,
            body.roster,
            body.attendance,
            game_mode=body.game_mode or settings.default_game_mode,
            formation_id=body.formation_id,
            strict=body.strict,
        )
    except LineupError as exc:
        raise http_error(exc, lang)
    return build_lineup(sheet)


@router.get("/{match_id}/lineup", response_model=LineupResponse)
async def get_lineup(
    match_id: str,
    lang: str = Depends(get_lang),
    registry: MatchContextRegistry = Depends(get_registry),
):
    return build_lineup(_get_sheet(registry, match_id, lang))


@router.delete("/{match_id}/lineup", response_model=OkResponse)
async def close_lineup(
    match_id: str,
    lang: str = Depends(get_lang),
    registry: MatchContextRegistry = Depends(get_registry),
):
    if not registry.close(match_id):
        raise http_error(MatchNotFoundError(match_id), lang)
    return OkResponse(ok=True)


@router.post("/{match_id}/lineup/assign", response_model=OperationResponse)
async def assign_player(
    match_id: str,
    body: AssignRequest,
    lang: str = Depends(get_lang),
    registry: MatchContextRegistry = Depends(get_registry),
):
    """Place a roster player in a slot. A previous occupant goes to the bench."""
    sheet = _get_sheet(registry, match_id, lang)
    line = _parse_line_or_422(body.line, lang)
    try:
        player = sheet.player(body.player_id)
    except LineupError as exc:
        raise http_error(exc, lang)

    result = sheet.operations().assign_player_to_slot(
        player,
        line,
        body.slot_index,
        game_mode=body.game_mode.value if body.game_mode else None,
    )
    ensure_ok(result, lang)
    return _operation_response(sheet, result.changed)


@router.post("/{match_id}/lineup/bench", response_model=OperationResponse)
async def move_player_to_bench(
    match_id: str,
    body: PlayerActionRequest,
    lang: str = Depends(get_lang),
    registry: MatchContextRegistry = Depends(get_registry),
):
    sheet = _get_sheet(registry, match_id, lang)
    result = sheet.operations().move_to_bench(body.player_id)
    ensure_ok(result, lang)
    return _operation_response(sheet, result.changed)


@router.post("/{match_id}/lineup/swap", response_model=OperationResponse)
async def swap_with_bench(
    match_id: str,
    body: SwapRequest,
    lang: str = Depends(get_lang),
    registry: MatchContextRegistry = Depends(get_registry),
):
    """Substitute a field player with a bench player."""
    sheet = _get_sheet(registry, match_id, lang)
    result = sheet.operations().swap_player_with_bench(body.field_player_id, body.bench_player_id)
    ensure_ok(result, lang)
    return _operation_response(sheet, result.changed)


@router.post("/{match_id}/lineup/auto-assign", response_model=OperationResponse)
async def auto_assign(
    match_id: str,
    body: PlayerActionRequest,
    lang: str = Depends(get_lang),
    registry: MatchContextRegistry = Depends(get_registry),
):
    sheet = _get_sheet(registry, match_id, lang)
    try:
        player = sheet.player(body.player_id)
    except LineupError as exc:
        raise http_error(exc, lang)
    result = sheet.operations().auto_assign_player(player)
    ensure_ok(result, lang)
    return _operation_response(sheet, result.changed)


@router.put("/{match_id}/lineup/formation", response_model=OperationResponse)
async def change_formation(
    match_id: str,
    body: FormationChangeRequest,
    lang: str = Depends(get_lang),
    registry: MatchContextRegistry = Depends(get_registry),
):
    """Switch formation by catalog id, or by explicit line counts."""
    sheet = _get_sheet(registry, match_id, lang)
    if body.formation_id:
        try:
            formation = get_formation(body.formation_id, sheet.game_mode)
        except LineupError as exc:
            raise http_error(exc, lang)
    else:
        counts = (body.defenders, body.midfielders, body.forwards)
        if any(c is None for c in counts):
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=get_error_message("invalid_formation", lang),
            )
        formation = FormationShape(*counts)

    result = sheet.operations().set_formation(formation)
    ensure_ok(result, lang)
    return _operation_response(sheet, result.changed)


@router.put("/{match_id}/lineup/game-mode", response_model=OperationResponse)
async def change_game_mode(
    match_id: str,
    body: GameModeRequest,
    lang: str = Depends(get_lang),
    registry: MatchContextRegistry = Depends(get_registry),
):
    """Switch between 11 and 7-a-side; the lineup is rebuilt for the new mode."""
    sheet = _get_sheet(registry, match_id, lang)
    changed = sheet.change_game_mode(body.game_mode)
    return _operation_response(sheet, changed)


@router.post("/{match_id}/lineup/reset", response_model=OperationResponse)
async def reset_lineup(
    match_id: str,
    lang: str = Depends(get_lang),
    registry: MatchContextRegistry = Depends(get_registry),
):
    """Empty every slot and the bench. Attendance is kept."""
    sheet = _get_sheet(registry, match_id, lang)
    result = sheet.operations().reset_lineup()
    return _operation_response(sheet, result.changed)


@router.put("/{match_id}/lineup/strict", response_model=LineupResponse)
async def set_strict_mode(
    match_id: str,
    body: StrictModeRequest,
    lang: str = Depends(get_lang),
    registry: MatchContextRegistry = Depends(get_registry),
):
    sheet = _get_sheet(registry, match_id, lang)
    sheet.set_strict(body.enabled)
    return build_lineup(sheet)


@router.get("/{match_id}/lineup/bench", response_model=list[PlayerRefResponse])
async def get_available_bench(
    match_id: str,
    line: str | None = None,
    strict: bool | None = None,
    confirmed_only: bool = False,
    lang: str = Depends(get_lang),
    registry: MatchContextRegistry = Depends(get_registry),
):
    """Bench players available for a slot, optionally filtered by position and attendance."""
    sheet = _get_sheet(registry, match_id, lang)
    target = _parse_line_or_422(line, lang) if line else None
    players = sheet.lineup.get_available_bench_players(
        target,
        strict=sheet.strict if strict is None else strict,
        attendance=sheet.attendance if confirmed_only else None,
    )
    return [build_player(p) for p in players]


@router.get("/{match_id}/lineup/candidates", response_model=list[PlayerRefResponse])
async def get_slot_candidates(
    match_id: str,
    line: str,
    slot_index: int = Query(default=0, ge=0),
    lang: str = Depends(get_lang),
    registry: MatchContextRegistry = Depends(get_registry),
):
    """
    Players to offer in the selection list for a slot.

    An occupied slot lists bench players for a substitution, an empty slot
    lists available roster players. Strict mode filters both by position.
    """
    sheet = _get_sheet(registry, match_id, lang)
    candidates = sheet.slot_candidates(_parse_line_or_422(line, lang), slot_index)
    if candidates is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=get_error_message("slot_not_found", lang),
        )
    return [build_player(p) for p in candidates]


@router.get("/{match_id}/lineup/occupancy", response_model=OccupancyResponse)
async def get_occupancy(
    match_id: str,
    line: str | None = Query(default=None),
    lang: str = Depends(get_lang),
    registry: MatchContextRegistry = Depends(get_registry),
):
    sheet = _get_sheet(registry, match_id, lang)
    target = _parse_line_or_422(line, lang) if line else None
    occupancy = sheet.lineup.get_slot_occupancy(target)
    return OccupancyResponse(filled=occupancy.filled, total=occupancy.total, free=occupancy.free)


@router.get("/{match_id}/players/{player_id}/position", response_model=PlayerPositionResponse)
async def get_player_position(
    match_id: str,
    player_id: str,
    lang: str = Depends(get_lang),
    registry: MatchContextRegistry = Depends(get_registry),
):
    sheet = _get_sheet(registry, match_id, lang)
    location = sheet.lineup.find_player_position(player_id)
    if location is None:
        return PlayerPositionResponse(player_id=player_id, placed=False)
    return PlayerPositionResponse(
        player_id=player_id,
        placed=True,
        line=location.line.value,
        index=location.index,
    )
