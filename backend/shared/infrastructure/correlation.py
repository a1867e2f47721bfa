"""
Request correlation IDs.

Each request gets an ID, taken from the X-Request-ID header when the
client sends a usable one and generated otherwise. The ID is bound to a
context variable for the duration of the request, added to every log
record by CorrelationIdFilter and echoed in the response header.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"

# Client supplied IDs are echoed back and logged; anything else is replaced
VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def get_request_id() -> str:
    """ID of the request being handled, or "" outside a request."""
    return request_id_var.get()


def resolve_request_id(header_value: str | None) -> str:
    """Keep a well-formed client ID, otherwise generate a UUID4."""
    if header_value and VALID_REQUEST_ID.match(header_value):
        return header_value
    return str(uuid.uuid4())


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Bind the request ID for the request and return it in the response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id

        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class CorrelationIdFilter:
    """Logging filter that sets record.request_id ("-" outside a request)."""

    def filter(self, record) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True
