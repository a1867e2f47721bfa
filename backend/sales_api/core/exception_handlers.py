"""
Exception handlers that render every error as problem details.

- HTTPException (AppException included): status and detail of the exception;
  boundary ValidationError adds its field-keyed errors
- RequestValidationError (bad query/path/body shape): 400 with errors keyed
  by the offending field
- Anything else: 500, logged with traceback
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from sales_api.routers._common import problem_response
from shared.config.logging import get_logger
from shared.utils.exceptions import AppException, ValidationError

logger = get_logger(__name__)

# Titles for HTTP errors raised outside the services (routing, 405, ...)
STATUS_TITLES = {
    400: "Validation Error",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
    415: "Unsupported Media Type",
    500: "Internal Server Error",
}


def _field_name(loc: tuple) -> str:
    """("query", "pageSize") → "pageSize"; ("body", "items", 0, "quantity") → "items[0].quantity"."""
    parts = [p for p in loc if p not in ("body", "query", "path", "header")]
    name = ""
    for part in parts:
        if isinstance(part, int):
            name += f"[{part}]"
        else:
            name += f".{part}" if name else str(part)
    return name or "request"


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc, AppException):
        title = exc.title
    else:
        title = STATUS_TITLES.get(exc.status_code, "Error")

    errors = exc.errors if isinstance(exc, ValidationError) else None
    detail = exc.detail if isinstance(exc.detail, str) else None

    return problem_response(
        request,
        exc.status_code,
        title,
        detail=detail,
        errors=errors,
        headers=getattr(exc, "headers", None),
    )


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        errors.setdefault(_field_name(tuple(error.get("loc", ()))), []).append(error.get("msg", "Invalid value"))

    logger.warning("Request validation failed", path=request.url.path, fields=sorted(errors))

    return problem_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "Validation Error",
        detail=ValidationError.DEFAULT_DETAIL,
        errors=errors,
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        exc_info=exc,
    )
    return problem_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal Server Error",
        detail="unexpected error processing the request",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the problem details handlers on the application."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
