"""FastAPI application entry point."""

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware

from noteorganizer import __version__
from noteorganizer.api.dependencies import get_session, get_settings, get_state_store
from noteorganizer.api.draft import router as draft_router
from noteorganizer.api.process import router as process_router
from noteorganizer.api.settings import router as settings_router

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Log resolved configuration at startup; persist the draft at shutdown."""
    s = get_settings()
    has_key = bool(s.api_key or get_state_store().get_credential())
    logger.info(
        "NoteOrganizer starting: data_path=%s, provider=%s, api_key=%s",
        s.data_path,
        s.llm_provider,
        "present" if has_key else "missing (local processing only)",
    )
    yield
    await get_session().flush()


app = FastAPI(
    title="NoteOrganizer",
    description="Turn freeform notes into structured markdown or diagrams",
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=500)

# Include API routers
app.include_router(process_router)
app.include_router(draft_router)
app.include_router(settings_router)


@app.get("/")
async def root() -> dict[str, str]:
    """Return project information."""
    return {
        "name": "NoteOrganizer",
        "version": __version__,
        "description": "Turn freeform notes into structured markdown or diagrams",
    }


@app.get("/health")
@app.get("/api/v1/health")
async def health() -> dict[str, Any]:
    """Health check endpoint with storage and credential status."""
    s = get_settings()

    checks: dict[str, Any] = {"status": "ok", "provider": s.llm_provider}

    # Remote delegate: without a key everything is processed locally
    checks["api_key"] = "present" if (s.api_key or get_state_store().get_credential()) else "missing"

    # Data directory must be writable for draft autosave
    data_path = s.data_path
    if data_path.exists() and not os.access(data_path, os.W_OK):
        checks["status"] = "warning"
        checks["storage"] = "not writable"
    else:
        checks["storage"] = "ok"

    return checks
