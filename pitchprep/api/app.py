"""
FastAPI application for the pitch pipeline.

Maps the pipeline's error taxonomy onto HTTP responses:
- ValidationFailure, ProfileIncomplete, malformed request bodies -> 400
- NotFound -> 404
- GenerationFailure -> 502
- anything else -> 500

Run with:
    uvicorn pitchprep.api.app:app --port 8000
"""

import logging
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pitchprep import __version__
from pitchprep.common.config import Config
from pitchprep.common.error_handling import (
    GenerationFailure,
    NotFound,
    ProfileIncomplete,
    ValidationFailure,
)
from pitchprep.common.logger import setup_logging

from .models import HealthResponse
from .routes import router

setup_logging(Config.LOG_LEVEL, Config.LOG_FORMAT)
logger = logging.getLogger(__name__)

app = FastAPI(title="PitchPrep", version=__version__)
app.include_router(router)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(ValidationFailure)
async def validation_failure_handler(request: Request, exc: ValidationFailure) -> JSONResponse:
    return _error_response(400, str(exc))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = ", ".join(
        ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        for error in exc.errors()
    )
    return _error_response(400, f"Invalid request: {fields or 'body'}")


@app.exception_handler(ProfileIncomplete)
async def profile_incomplete_handler(request: Request, exc: ProfileIncomplete) -> JSONResponse:
    return _error_response(400, str(exc))


@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound) -> JSONResponse:
    return _error_response(404, str(exc))


@app.exception_handler(GenerationFailure)
async def generation_failure_handler(request: Request, exc: GenerationFailure) -> JSONResponse:
    logger.warning(f"Generation failed on {request.url.path}: {exc}")
    return _error_response(502, str(exc))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.url.path}: {exc}")
    return _error_response(500, "Internal server error")


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe; does not touch MongoDB or the LLM provider."""
    return HealthResponse(status="healthy", timestamp=datetime.utcnow())
