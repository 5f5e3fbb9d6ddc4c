from fastapi import APIRouter

from app.api.matches.lineup import router as _router_lineup
from app.api.matches.attendance import router as _router_attendance

router = APIRouter()
router.include_router(_router_lineup)
router.include_router(_router_attendance)
