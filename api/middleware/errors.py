"""
Error envelope for the PourCost API.

Every failure leaves the service as

    {"error": {"code", "message", "details"}, "request_id", "timestamp"}

Engine errors (PourCostError) are caller mistakes and map to 400 with the
engine's own code. APIError covers failures that only exist at the HTTP edge.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pourcost.errors import PourCostError

logger = logging.getLogger("pourcost.api")


class APIError(Exception):
    """Failure raised by a router rather than the engine."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Dict[str, Any] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class UnparseableInputError(APIError):
    """Free-text input could not be read as an amount or volume."""

    def __init__(self, kind: str, text: str):
        super().__init__(
            code="UNPARSEABLE_INPUT",
            message=f"Could not parse {kind} from '{text}'",
            status_code=422,
            details={"kind": kind, "text": text}
        )


def error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: Dict[str, Any] = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {"code": code, "message": message, "details": details or {}},
            "request_id": getattr(request.state, "request_id", "unknown"),
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
    )


async def handle_api_error(request: Request, exc: APIError) -> JSONResponse:
    logger.warning(f"{exc.code} on {request.url.path}: {exc.message}")
    return error_response(request, exc.status_code, exc.code, exc.message, exc.details)


async def handle_engine_error(request: Request, exc: PourCostError) -> JSONResponse:
    logger.warning(f"{exc.code} on {request.url.path}: {exc.message}")
    return error_response(
        request, status.HTTP_400_BAD_REQUEST, exc.code, exc.message, exc.details
    )


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Flatten pydantic errors to field/message/type triples."""
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning(f"VALIDATION_ERROR on {request.url.path}: {len(errors)} field(s)")
    return error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR",
        "Request validation failed",
        {"errors": errors},
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled {type(exc).__name__} on {request.url.path}")
    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "An unexpected error occurred",
        {"type": type(exc).__name__},
    )


EXCEPTION_HANDLERS = (
    (APIError, handle_api_error),
    (PourCostError, handle_engine_error),
    (RequestValidationError, handle_validation_error),
    (Exception, handle_unexpected_error),
)


def setup_exception_handlers(app: FastAPI):
    for exc_class, handler in EXCEPTION_HANDLERS:
        app.add_exception_handler(exc_class, handler)
