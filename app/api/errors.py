"""
API error handling and exception mapping.

This module provides the exception handlers that convert domain and
framework errors into the ``ErrorResponse`` envelope with the matching
HTTP status.
"""

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.schemas.base import ErrorResponse
from app.domain_core.exceptions import DomainError
from app.infra.config.logging_config import get_logger


logger = get_logger("api.errors")

# Map domain error codes to HTTP status codes
STATUS_CODE_MAPPING = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "BAD_REQUEST": status.HTTP_400_BAD_REQUEST,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "EXTERNAL_SERVICE_DEGRADED": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "PERSISTENCE_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Codes whose message may leak internals; the client gets a generic text.
OPAQUE_CODES = {"PERSISTENCE_ERROR"}


def _error_json(status_code: int, error: str, detail: str) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


# Exception handler functions
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """
    Handle domain-specific errors.

    Args:
        request: The HTTP request
        exc: The domain error

    Returns:
        JSONResponse: Formatted error response
    """
    status_code = STATUS_CODE_MAPPING.get(
        exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR
    )

    if status_code >= 500:
        logger.error("domain_error", code=exc.code, message=exc.message)
    else:
        logger.warning("domain_error", code=exc.code, message=exc.message)

    detail = (
        "Server error while processing the request."
        if exc.code in OPAQUE_CODES
        else exc.message
    )
    return _error_json(status_code, exc.code, detail)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    Malformed bodies and parameters are reported as 400, like the domain's own
    validation failures.
    """
    logger.warning("request_validation_error", errors=str(exc.errors()))

    # Format validation errors for better readability
    formatted_errors = []
    for error in exc.errors():
        location = " -> ".join(str(loc) for loc in error["loc"])
        formatted_errors.append(f"{location}: {error['msg']}")

    error_detail = "Validation failed: " + "; ".join(formatted_errors)
    return _error_json(status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", error_detail)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """
    Handle HTTP exceptions.

    Args:
        request: The HTTP request
        exc: The HTTP exception

    Returns:
        JSONResponse: Formatted error response
    """
    logger.warning("http_exception", status_code=exc.status_code, detail=str(exc.detail))

    response = _error_json(exc.status_code, f"HTTP_{exc.status_code}", str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions.

    The stack is logged; the client only sees a generic message.
    """
    logger.exception("unexpected_error", error_type=type(exc).__name__, error=str(exc))

    return _error_json(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred. Please try again later.",
    )


def setup_error_handlers(app) -> None:
    """
    Setup error handlers for the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
