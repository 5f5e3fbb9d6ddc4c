from fastapi import APIRouter

from app.api.formations import router as formations_router
from app.api.matches import router as matches_router

api_router = APIRouter()

# Formation catalog
api_router.include_router(formations_router)

# Match lineups and attendance
api_router.include_router(matches_router)
