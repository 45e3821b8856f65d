"""API error types and the exception handlers that render them.

Every failure ends in one of the handlers below and is answered with a
plain-text body:
    - unmatched route (or method) -> 404 "not found"
    - schema validation -> 400 with the first error's text
    - ApiError subclasses -> their own status and message
    - anything else -> attached status or 500
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from utils.logger import setup_logger

logger = setup_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error"
NOT_FOUND_MESSAGE = "not found"
# pydantic prepends this to messages raised by validators
VALUE_ERROR_PREFIX = "Value error, "


class ApiError(Exception):
    """Base class for errors with a fixed HTTP status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(ApiError):
    """Malformed or missing request parameter."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ApiError):
    """Referenced resource does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


def first_error_message(errors: list) -> str:
    """Render the first pydantic error as '<field>: <message>'."""
    if not errors:
        return "Validation failed"
    error = errors[0]
    loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query")]
    field = ".".join(loc)
    message = error["msg"]
    if message.startswith(VALUE_ERROR_PREFIX):
        message = message[len(VALUE_ERROR_PREFIX):]
    return f"{field}: {message}" if field else message


def internal_error_response(request: Request, exc: Exception) -> PlainTextResponse:
    """Plain-text response for an unhandled exception, logged with its traceback."""
    status_code = getattr(exc, "status_code", None) or getattr(exc, "status", None)
    if not isinstance(status_code, int):
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=exc)
    return PlainTextResponse(str(exc) or INTERNAL_ERROR_MESSAGE, status_code=status_code)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # Unknown methods on known paths are reported like unknown paths
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            logger.warning(f"No route for {request.method} {request.url.path}")
            return PlainTextResponse(NOT_FOUND_MESSAGE, status_code=status.HTTP_404_NOT_FOUND)
        logger.warning(f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}")
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.exception_handler(ValidationError)
    async def schema_error_handler(request: Request, exc: ValidationError):
        message = first_error_message(exc.errors())
        logger.warning(f"Validation error on {request.url.path}: {message}")
        return PlainTextResponse(message, status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(RequestValidationError)
    async def request_error_handler(request: Request, exc: RequestValidationError):
        message = first_error_message(list(exc.errors()))
        logger.warning(f"Request validation error on {request.url.path}: {message}")
        return PlainTextResponse(message, status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        return internal_error_response(request, exc)
