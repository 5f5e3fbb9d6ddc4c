"""Formation catalog endpoints."""

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_lang, http_error
from app.config import get_settings
from app.schemas.lineup import FormationListResponse, FormationResponse
from app.services.exceptions import FormationNotFoundError
from app.utils.formations import (
    DEFAULT_FORMATION_IDS,
    Formation,
    GameMode,
    get_formation,
    get_formations_by_game_mode,
)

settings = get_settings()

router = APIRouter(prefix="/formations", tags=["formations"])


def build_formation(formation: Formation) -> FormationResponse:
    return FormationResponse(
        id=formation.id,
        name=formation.name,
        game_mode=formation.game_mode,
        defenders=formation.shape.defenders,
        midfielders=formation.shape.midfielders,
        forwards=formation.shape.forwards,
        total_slots=formation.shape.total_slots,
        description=formation.description,
    )


@router.get("", response_model=FormationListResponse)
async def list_formations(
    game_mode: GameMode = Query(default=GameMode(settings.default_game_mode)),
):
    """Formations available for 11-a-side or 7-a-side."""
    return FormationListResponse(
        game_mode=game_mode,
        default_id=DEFAULT_FORMATION_IDS[game_mode],
        items=[build_formation(f) for f in get_formations_by_game_mode(game_mode)],
    )


@router.get("/{formation_id}", response_model=FormationResponse)
async def get_formation_detail(
    formation_id: str,
    game_mode: GameMode | None = None,
    lang: str = Depends(get_lang),
):
    try:
        return build_formation(get_formation(formation_id, game_mode))
    except FormationNotFoundError as exc:
        raise http_error(exc, lang)
