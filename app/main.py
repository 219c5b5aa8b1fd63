"""
SID Rewriter API - Main Application
Serves the SID preprocessor and the run-time hash lookup over HTTP.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import settings
from app.routers import sid
from sid_rewriter import PACKAGE_NAME, REWRITER_VERSION, SCHEMA_VERSION
from sid_rewriter.core.hashing import HASH_FUNCTIONS

_log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log where sources are served from; nothing to open or close."""
    _log.info(
        "%s %s serving sources under %s (hashes: %s)",
        PACKAGE_NAME, REWRITER_VERSION, settings.SOURCES_ROOT,
        ", ".join(sorted(HASH_FUNCTIONS)),
    )
    yield


def create_app() -> FastAPI:
    """Build the FastAPI application with the /sid router mounted."""
    application = FastAPI(
        title=settings.API_TITLE,
        description="Rewrite SID(\"...\") invocations into hashed constants",
        version=settings.API_VERSION,
        lifespan=lifespan,
    )

    @application.get("/health")
    async def health_check():
        """Liveness plus the rewriter contract this service speaks."""
        return {
            "status": "healthy",
            "service": "sid-rewriter-api",
            "version": settings.API_VERSION,
            "rewriter_version": REWRITER_VERSION,
            "schema_version": SCHEMA_VERSION,
            "hashes": sorted(HASH_FUNCTIONS),
        }

    application.include_router(sid.router, prefix="/sid", tags=["sid"])
    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT)
