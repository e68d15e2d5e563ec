"""Domain errors and their translation into JSON error responses."""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = structlog.get_logger("materiality.errors")


class DomainError(Exception):
    """Base class for domain-level errors."""

    status_code: int = 400
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class NotFoundError(DomainError):
    """Unknown session, saved assessment or topic."""

    status_code = 404
    error_code = "NOT_FOUND"


class ConfigurationError(DomainError):
    """Threshold configuration violates its ordering invariants."""

    status_code = 422
    error_code = "INVALID_CONFIGURATION"


class InvalidTransitionError(DomainError):
    """Requested status change is not allowed from the current status."""

    status_code = 409
    error_code = "INVALID_TRANSITION"


class AssessmentLockedError(DomainError):
    """Edit attempted on a finalized assessment."""

    status_code = 409
    error_code = "ASSESSMENT_LOCKED"


def _error_body(code: str, message: str, details: dict | None = None) -> dict:
    return {"error": {"code": code, "message": message, "details": details or None}}


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        logger.info(
            "domain_error",
            code=exc.error_code,
            error=exc.message,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.error_code, exc.message, exc.details),
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        logger.warning("validation_error", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=422,
            content=_error_body("VALIDATION_ERROR", str(exc)),
        )
