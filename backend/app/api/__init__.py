from fastapi import APIRouter

from app.api.routes import calendar_router, proposals_router, timeline_router

router = APIRouter()
router.include_router(timeline_router)
router.include_router(calendar_router)
router.include_router(proposals_router)

__all__ = ["router"]
