from app.schemas.health import HealthResponse, ServiceStatus
from app.schemas.search import ErrorResponse, ModerationResult, PageSection, SearchRequest

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "ModerationResult",
    "PageSection",
    "SearchRequest",
    "ServiceStatus",
]
