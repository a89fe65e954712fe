from __future__ import annotations

from fastapi import APIRouter

from app.api.health import router as health_router
from app.api.vector_search import router as vector_search_router

api_router = APIRouter(prefix="/api")
api_router.include_router(health_router, tags=["health"])
api_router.include_router(vector_search_router)
