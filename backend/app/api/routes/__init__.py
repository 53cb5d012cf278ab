"""Coleccion de routers de la API."""

from app.api.routes.calendar import router as calendar_router
from app.api.routes.proposals import router as proposals_router
from app.api.routes.timeline import router as timeline_router

__all__ = ["calendar_router", "proposals_router", "timeline_router"]
