from __future__ import annotations

import httpx
import structlog
from fastapi import APIRouter

from app.clients import get_openai_client, get_supabase_client
from app.schemas.health import HealthResponse, ServiceStatus

logger = structlog.get_logger()
router = APIRouter()


async def _check_llm() -> ServiceStatus:
    try:
        resp = await get_openai_client().get("/models", timeout=5)
        if resp.status_code == 200:
            return ServiceStatus(status="healthy")
        return ServiceStatus(status="unhealthy", detail=f"HTTP {resp.status_code}")
    except httpx.HTTPError as e:
        logger.error("health_check_llm_failed", error=str(e))
        return ServiceStatus(status="unhealthy", detail=str(e))


async def _check_vector_store() -> ServiceStatus:
    try:
        resp = await get_supabase_client().get("/", timeout=5)
        if resp.status_code == 200:
            return ServiceStatus(status="healthy")
        return ServiceStatus(status="unhealthy", detail=f"HTTP {resp.status_code}")
    except httpx.HTTPError as e:
        logger.error("health_check_vector_store_failed", error=str(e))
        return ServiceStatus(status="unhealthy", detail=str(e))


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check reachability of the language-model API and the vector store."""
    llm = await _check_llm()
    vector_store = await _check_vector_store()

    all_healthy = all(s.status == "healthy" for s in [llm, vector_store])

    return HealthResponse(
        status="healthy" if all_healthy else "degraded",
        llm=llm,
        vector_store=vector_store,
    )
