"""
HTTP middlewares: security headers, JSON-only request bodies and request
correlation.
"""

from fastapi import FastAPI, Request, status
from starlette.middleware.base import BaseHTTPMiddleware

from sales_api.routers._common import problem_response
from shared.config.settings import settings
from shared.infrastructure.correlation import CorrelationIdMiddleware

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}

HSTS_VALUE = "max-age=31536000; includeSubDomains"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Set SECURITY_HEADERS on every response, plus HSTS in production."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)

        if settings.environment == "production":
            response.headers["Strict-Transport-Security"] = HSTS_VALUE

        return response


class ContentTypeValidationMiddleware(BaseHTTPMiddleware):
    """
    Reject POST/PUT/PATCH bodies that are not JSON with a 415 problem.

    Requests without a Content-Type header pass through; an empty body then
    fails request validation instead.
    """

    METHODS_WITH_BODY = frozenset({"POST", "PUT", "PATCH"})

    async def dispatch(self, request: Request, call_next):
        if request.method in self.METHODS_WITH_BODY:
            content_type = request.headers.get("content-type", "")
            if content_type and not content_type.lower().startswith("application/json"):
                return problem_response(
                    request,
                    status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
                    "Unsupported Media Type",
                    detail="Request bodies must be application/json",
                )
        return await call_next(request)


def register_middlewares(app: FastAPI) -> None:
    """
    Register the middlewares. The last one added runs first, so the
    correlation ID is bound before the others run.
    """
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(ContentTypeValidationMiddleware)
    app.add_middleware(CorrelationIdMiddleware)
