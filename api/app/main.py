"""FastAPI application entrypoint, error mapping, and health reporting.

Invariants:
- Every error response body carries an ``error`` key.
- Unexpected failures never leak internals to the client.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.router import api_router
from app.core.config import settings
from app.core.logging import configure_logging
from app.db.session import init_models
from app.llm import LLMError
from app.services.recommendation_engine import ProfileNotFoundError
from app.utils.redaction import redact_secrets

logger = logging.getLogger("app.main")

LLM_UNAVAILABLE_MESSAGE = (
    "The recommendation model is unavailable. Check that GEMINI_API_KEY is set and valid."
)

app = FastAPI(title=settings.app_name, version=settings.app_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(api_router, prefix=settings.api_prefix)


@app.on_event("startup")
async def _startup() -> None:
    """Configure logging and, in development, create missing tables."""
    configure_logging()
    if settings.is_development:
        await init_models()
    logger.info("%s %s started (%s)", settings.app_name, settings.app_version, settings.environment)


@app.exception_handler(StarletteHTTPException)
async def _http_error(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected %s %s: %d validation errors", request.method, request.url.path, len(exc.errors()))
    return JSONResponse(
        status_code=422,
        content={"error": "validation_error", "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(ProfileNotFoundError)
async def _profile_missing(_request: Request, exc: ProfileNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": exc.message})


@app.exception_handler(LLMError)
async def _llm_error(request: Request, exc: LLMError) -> JSONResponse:
    logger.error("Model call failed for %s: %s", request.url.path, redact_secrets(str(exc)))
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"error": LLM_UNAVAILABLE_MESSAGE},
    )


@app.exception_handler(Exception)
async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


@app.get("/", tags=["internal"])
async def root() -> dict[str, Any]:
    return {"name": settings.app_name, "version": settings.app_version, "docs": "/docs"}


@app.get("/health", tags=["internal"])
@app.get(f"{settings.api_prefix}/health", tags=["internal"])
async def health() -> dict[str, Any]:
    """Liveness check."""
    return {"status": "ok", "environment": settings.environment}


def run() -> None:
    """Serve the API with uvicorn using host and port from settings."""
    import uvicorn

    configure_logging()
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, reload=settings.is_development)
