"""Error Handlers — every 4xx/5xx leaves the API in the {"error": {...}} envelope.

Invariants:
    - UsersApiError → its own status and to_response() body
    - RequestValidationError (malformed JSON, wrong types, out-of-range age) → 400 with field details
    - Starlette HTTPException (unknown route 404, wrong method 405, undecodable body 400)
      → same envelope, original status and headers (Allow on 405) preserved
    - Exception (catch-all) → 500, never leaks internal details
    - Store failures logged with operation/timeout, not-found with user_name

Design Decisions:
    - Four layers: domain, validation, framework HTTP, catch-all
    - 400 (not FastAPI's default 422) for body errors: clients get one status for "bad input"
    - Framework messages replaced with fixed ones: Starlette's detail text is not part of the contract
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from users_api.core.errors import (
    ErrorCategory, ErrorSeverity, StoreOperationError, UsersApiError,
)

logger = logging.getLogger(__name__)

# status → (code, category, message) for errors raised by FastAPI/Starlette itself
_HTTP_ERRORS = {
    status.HTTP_400_BAD_REQUEST: (
        "VALIDATION_ERROR", ErrorCategory.VALIDATION, "Invalid request data",
    ),
    status.HTTP_404_NOT_FOUND: (
        "ROUTE_NOT_FOUND", ErrorCategory.ROUTING, "Route not found",
    ),
    status.HTTP_405_METHOD_NOT_ALLOWED: (
        "METHOD_NOT_ALLOWED", ErrorCategory.ROUTING, "Method not allowed",
    ),
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(UsersApiError, handle_users_api_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


def error_envelope(
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity = ErrorSeverity.ERROR,
    details: list[dict] | None = None,
) -> dict:
    body = {
        "code": code,
        "message": message,
        "category": category.value,
        "severity": severity.value,
    }
    if details is not None:
        body["details"] = details
    return {"error": body}


async def handle_users_api_error(request: Request, exc: UsersApiError):
    extra = {"error_code": exc.code, "path": request.url.path}
    if isinstance(exc, StoreOperationError):
        extra["operation"] = exc.operation.value
        extra["timeout"] = exc.timed_out
    if exc.context.user_name is not None:
        extra["user_name"] = exc.context.user_name
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(f"{exc.code} on {request.method} {request.url.path}: {exc.message}", extra=extra)
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"Validation error on {request.url.path}: {details}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, details=details,
        ),
    )


async def handle_http_error(request: Request, exc: StarletteHTTPException):
    code, category, message = _HTTP_ERRORS.get(
        exc.status_code, ("HTTP_ERROR", ErrorCategory.ROUTING, str(exc.detail)),
    )
    logger.warning(
        f"{code} on {request.method} {request.url.path}",
        extra={"error_code": code, "path": request.url.path},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(code, message, category),
        headers=exc.headers,
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    """Catch-all — never leaks internal details."""
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )
