"""Web API for a knowledge document."""

from knowledgedoc.web.app import create_app, create_app_from_settings
from knowledgedoc.web.models import (
    HealthResponse,
    SearchResponse,
    SectionCreate,
    SectionResponse,
    SectionUpdate,
    TitlesResponse,
)

__all__ = [
    "create_app",
    "create_app_from_settings",
    "HealthResponse",
    "SearchResponse",
    "SectionCreate",
    "SectionResponse",
    "SectionUpdate",
    "TitlesResponse",
]
