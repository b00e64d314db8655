"""FastAPI application exposing a knowledge document over HTTP."""

import logging
from pathlib import Path
from threading import Lock

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from knowledgedoc import __version__
from knowledgedoc.config import load_settings
from knowledgedoc.core import (
    DocumentStore,
    DuplicateTitle,
    InvalidTitle,
    NotFound,
    Section,
    SerializeError,
)
from knowledgedoc.markdown import DEFAULT_SECTION_LEVEL, dump, dumps, load
from knowledgedoc.web.models import (
    HealthResponse,
    SearchResponse,
    SectionCreate,
    SectionResponse,
    SectionUpdate,
    TitlesResponse,
)

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    NotFound: 404,
    DuplicateTitle: 409,
    InvalidTitle: 422,
    SerializeError: 422,
}


def _to_response(section: Section) -> SectionResponse:
    return SectionResponse(title=section.title, body=section.body, position=section.position)


def create_app(
    store: DocumentStore,
    path: Path | None = None,
    level: int = DEFAULT_SECTION_LEVEL,
) -> FastAPI:
    """Build the API around a store.

    Args:
        store: The document store to serve
        path: If given, every successful change is written back to this file
        level: Heading level used when writing the file

    Returns:
        The FastAPI application
    """
    app = FastAPI(
        title="Knowledge Document API",
        description="Read and edit the sections of a markdown knowledge file",
        version=__version__,
    )
    app.state.store = store
    # Serializes write-then-apply so the file and the store change together
    write_lock = Lock()

    def mutate(name: str, *args) -> Section:
        with write_lock:
            if path is not None:
                # Apply to a copy and write that first; the served store only
                # changes once the file holds the new state
                trial = store.copy()
                getattr(trial, name)(*args)
                dump(trial, path, level=level)
            return getattr(store, name)(*args)

    for exc_type, status_code in ERROR_STATUS.items():
        async def handler(request: Request, exc: Exception, status_code: int = status_code):
            return JSONResponse(status_code=status_code, content={"detail": str(exc)})

        app.add_exception_handler(exc_type, handler)

    @app.get("/api/health", response_model=HealthResponse)
    def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(total_sections=len(store))

    @app.get("/api/sections", response_model=TitlesResponse)
    def list_sections() -> TitlesResponse:
        """List section titles in display order."""
        return TitlesResponse(titles=list(store.list_titles()))

    @app.post("/api/sections", response_model=SectionResponse, status_code=201)
    def add_section(request: SectionCreate) -> SectionResponse:
        """Append a new section."""
        return _to_response(mutate("add_section", request.title, request.body))

    @app.get("/api/sections/{title:path}", response_model=SectionResponse)
    def get_section(title: str) -> SectionResponse:
        """Get a section by title."""
        return _to_response(store.get_section(title))

    @app.put("/api/sections/{title:path}", response_model=SectionResponse)
    def update_section(title: str, request: SectionUpdate) -> SectionResponse:
        """Replace the text of a section."""
        return _to_response(mutate("update_section", title, request.body))

    @app.delete("/api/sections/{title:path}", response_model=SectionResponse)
    def remove_section(title: str) -> SectionResponse:
        """Remove a section and return it."""
        return _to_response(mutate("remove_section", title))

    @app.get("/api/search", response_model=SearchResponse)
    def search(q: str = Query(..., min_length=1, description="Text to search for")) -> SearchResponse:
        """Find sections whose title or body contains the query."""
        return SearchResponse(query=q, results=[_to_response(s) for s in store.search(q)])

    @app.get("/api/document", response_class=PlainTextResponse)
    def document() -> PlainTextResponse:
        """Return the whole document as markdown."""
        return PlainTextResponse(dumps(store, level=level), media_type="text/markdown")

    return app


def create_app_from_settings() -> FastAPI:
    """Load the configured knowledge file and build the API for it.

    Used as a uvicorn application factory.
    """
    settings = load_settings()
    path = settings.document
    if path.exists():
        store = load(path, level=settings.section_level)
    else:
        logger.warning("Knowledge file %s does not exist, starting empty", path)
        store = DocumentStore()
    return create_app(store, path=path, level=settings.section_level)
