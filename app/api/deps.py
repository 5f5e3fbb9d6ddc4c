from fastapi import HTTPException, Query, status

from app.config import get_settings
from app.services.exceptions import InvalidRosterRecordError, LineupError
from app.services.lineup_operations import OperationResult
from app.services.match_context import MatchContextRegistry, get_match_registry
from app.utils.error_messages import get_error_message

settings = get_settings()


def get_registry() -> MatchContextRegistry:
    return get_match_registry()


def get_lang(
    lang: str = Query(default=settings.default_language, pattern="^(es|en)$"),
) -> str:
    return lang


def http_error(exc: LineupError, lang: str) -> HTTPException:
    code = (
        status.HTTP_422_UNPROCESSABLE_ENTITY
        if isinstance(exc, InvalidRosterRecordError)
        else status.HTTP_404_NOT_FOUND
    )
    return HTTPException(status_code=code, detail=get_error_message(exc.error_key, lang))


def ensure_ok(result: OperationResult, lang: str) -> None:
    """Turn a rejected lineup operation into a 409 with a localized message."""
    if not result.ok:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=get_error_message(result.reason, lang),
        )
