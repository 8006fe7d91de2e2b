"""
Exception handlers for the HTTP layer.

Translate domain exceptions into the JSON error envelope
`{success: false, error: {message, statusCode}, timestamp}`.

Dependencies: fastapi, backend.core.exceptions
System role: Centralized HTTP error mapping
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.core.exceptions import (
    BackendUnavailableError,
    DocumentNotFoundError,
    DocumentProcessingError,
    ProviderError,
    RagChatException,
    UnsupportedMediaTypeError,
    ValidationError,
    VectorStoreError,
)
from backend.models.common import ErrorBody, ErrorResponse
from backend.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

# Checked in order; subclasses before their bases.
STATUS_CODES: list[tuple[type[RagChatException], int]] = [
    (DocumentNotFoundError, 404),
    (UnsupportedMediaTypeError, 415),
    (DocumentProcessingError, 422),
    (ValidationError, 400),
    (ProviderError, 502),
    (BackendUnavailableError, 503),
    (VectorStoreError, 503),
]


def status_code_for(exc: RagChatException) -> int:
    for exc_type, status_code in STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return 500


def error_response(message: str, status_code: int) -> JSONResponse:
    body = ErrorResponse(error=ErrorBody(message=message, status_code=status_code))
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body, by_alias=True),
    )


async def rag_chat_exception_handler(request: Request, exc: RagChatException) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code >= 500:
        log_exception_with_context(
            logger,
            f"{request.method} {request.url.path} - {type(exc).__name__}",
            exc,
            status_code=status_code,
        )
    else:
        logger.info(
            f"{request.method} {request.url.path} - {status_code} {exc.message}",
            extra={"status_code": status_code},
        )
    return error_response(exc.message, status_code)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ())[1:])
        message = f"Validation failed: {field + ': ' if field else ''}{first.get('msg', 'invalid')}"
    else:
        message = "Validation failed"
    return error_response(message, 400)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(str(exc.detail), exc.status_code)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log_exception_with_context(logger, f"{request.method} {request.url.path} - Unhandled", exc)
    return error_response("Internal server error", 500)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RagChatException, rag_chat_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
