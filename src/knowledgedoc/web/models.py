"""Pydantic models for the web API."""

from pydantic import BaseModel, Field

from knowledgedoc import __version__


class SectionCreate(BaseModel):
    """Request body for adding a section."""

    title: str = Field(..., min_length=1, description="Unique section title")
    body: str = Field(default="", description="Section text")


class SectionUpdate(BaseModel):
    """Request body for replacing a section's text."""

    body: str = Field(..., description="New section text")


class SectionResponse(BaseModel):
    """A section and its position in the document."""

    title: str
    body: str
    position: int


class TitlesResponse(BaseModel):
    """Section titles in display order."""

    titles: list[str]


class SearchResponse(BaseModel):
    """Sections matching a search query."""

    query: str
    results: list[SectionResponse]


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str = "ok"
    version: str = __version__
    total_sections: int = 0
