"""
FastAPI entrypoint for VibeCheck backend application.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError
from vibecheck.core.config import settings
from vibecheck.core.exceptions import TransientIO, VibeCheckError
from vibecheck.core.utils import format_error
from vibecheck.api.router import api_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="VibeCheck API",
    description="Backend API for paired daily mood check-ins",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(error: VibeCheckError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content=format_error(error.message, {"code": error.code}),
    )


@app.exception_handler(VibeCheckError)
async def vibecheck_error_handler(request: Request, exc: VibeCheckError):
    """Render domain errors as human-readable messages with a stable code."""
    logger.info(f"{request.method} {request.url.path} failed: {exc.code} ({exc.message})")
    return _error_response(exc)


@app.exception_handler(OperationalError)
async def store_unavailable_handler(request: Request, exc: OperationalError):
    """The store could not be reached; the client may retry later."""
    logger.error(f"Database unavailable during {request.method} {request.url.path}: {exc}")
    return _error_response(TransientIO())


# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "VibeCheck API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
