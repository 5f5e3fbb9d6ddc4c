from app.schemas.lineup import (
    OkResponse,
    FormationResponse,
    FormationListResponse,
    LineupResponse,
    OperationResponse,
    AttendanceSyncResponse,
    PlayerPositionResponse,
    CallupResponse,
)

__all__ = [
    "OkResponse",
    "FormationResponse",
    "FormationListResponse",
    "LineupResponse",
    "OperationResponse",
    "AttendanceSyncResponse",
    "PlayerPositionResponse",
    "CallupResponse",
]
