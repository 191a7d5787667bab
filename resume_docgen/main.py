"""Resume DocGen API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map DocGenError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Every serverless mount prefix reaches the same routes via PathPrefixMiddleware
    - No startup state: nothing is loaded or cached before the first request
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from resume_docgen.api.error_handlers import register_error_handlers
from resume_docgen.api.routes import diagnostics, generate, health
from resume_docgen.config import get_settings
from resume_docgen.infrastructure.observability import setup_logging
from resume_docgen.infrastructure.path_prefix import PathPrefixMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"Resume DocGen API started ({settings.environment})")
    yield
    logger.info("Resume DocGen API shutting down")


app = FastAPI(
    title="Resume DocGen API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
    expose_headers=["Content-Disposition"],
)
# Added last so it runs first: prefixes are gone before CORS and routing.
app.add_middleware(PathPrefixMiddleware, prefixes=settings.route_prefixes)

app.include_router(health.router)
app.include_router(diagnostics.router)
app.include_router(generate.router)

register_error_handlers(app)


def run() -> None:
    """Local development server."""
    uvicorn.run("resume_docgen.main:app", host="127.0.0.1", port=8000)
