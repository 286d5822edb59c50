"""
Mapping of domain errors and framework errors to JSON responses.

Every handler logs the error with the redacted request context before
building the response. Internal details (the error context, exception class)
are only exposed when running in development.
"""
from typing import Any, Dict
import logging
import secrets
import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .exceptions import DomainError, ValidationError
from .utils.logging_config import log_error, redact

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An internal error occurred"


def generate_request_id() -> str:
    return f"REQ_{secrets.token_hex(8)}_{int(time.time())}"


def _request_context(request: Request) -> Dict[str, Any]:
    return {
        "method": request.method,
        "path": request.url.path,
        "query": dict(request.query_params),
    }


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    log_error(logger, exc, _request_context(request))
    body = exc.to_dict()

    if exc.status_code >= 500:
        body["request_id"] = generate_request_id()
        if not settings.is_development:
            body["error"] = GENERIC_ERROR_MESSAGE
    if settings.is_development:
        body["details"] = redact(exc.context)

    return JSONResponse(status_code=exc.status_code, content=body)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    log_error(logger, exc, _request_context(request))
    body = exc.to_dict()
    body["details"] = exc.field_errors
    return JSONResponse(status_code=exc.status_code, content=body)


def _field_name(loc) -> str:
    # Drop the leading "body"/"query" segment FastAPI puts in front of the field path
    parts = [str(part) for part in loc[1:]] if len(loc) > 1 else [str(part) for part in loc]
    return ".".join(parts)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    field_errors: Dict[str, str] = {}
    for error in exc.errors():
        field = _field_name(error.get("loc", ())) or "body"
        message = str(error.get("msg", "Invalid value"))
        field_errors.setdefault(field, message.removeprefix("Value error, "))

    wrapped = ValidationError(field_errors)
    log_error(logger, wrapped, _request_context(request))
    body = wrapped.to_dict()
    body["details"] = field_errors
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning(
        "HTTP %s on %s %s: %s",
        exc.status_code, request.method, request.url.path, exc.detail
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log_error(logger, exc, _request_context(request))
    body: Dict[str, Any] = {
        "error": GENERIC_ERROR_MESSAGE,
        "error_type": "internal_error",
        "request_id": generate_request_id(),
    }
    if settings.is_development:
        body["details"] = {
            "exception_class": exc.__class__.__name__,
            "message": str(exc),
        }
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
