"""System prompt preview web API."""

from libreclaw.interfaces.web.api.routes import router
from libreclaw.interfaces.web.api.schemas import (
    HealthResponse,
    PreviewRequest,
    PreviewResponse,
    SectionResponse,
    SectionsResponse,
)

__all__ = [
    "router",
    "HealthResponse",
    "PreviewRequest",
    "PreviewResponse",
    "SectionResponse",
    "SectionsResponse",
]
