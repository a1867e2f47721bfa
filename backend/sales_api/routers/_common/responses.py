"""
Response helpers shared by the routers.

- envelope() / paged_envelope(): success bodies ({data} and {data, meta})
- problem_response(): RFC 7807 style error body
- failure_response(): service Response failure → HTTP status + problem body
"""

from typing import Any, Callable, TypeVar

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from sales_api.schemas import (
    DataResponse,
    ListMeta,
    ListResponse,
    PaginationMeta,
    ProblemDetails,
)
from sales_api.services.communication import ErrorKind, PagedResult, Response
from shared.config.logging import get_logger

logger = get_logger(__name__)

EntityT = TypeVar("EntityT")
OutputT = TypeVar("OutputT")

# ErrorKind → (status code, problem title)
ERROR_STATUS: dict[ErrorKind, tuple[int, str]] = {
    ErrorKind.NOT_FOUND: (status.HTTP_404_NOT_FOUND, "Not Found"),
    ErrorKind.VALIDATION_ERROR: (status.HTTP_400_BAD_REQUEST, "Validation Error"),
    ErrorKind.CONFLICT: (status.HTTP_409_CONFLICT, "Conflict"),
    ErrorKind.DATABASE_ERROR: (status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"),
    ErrorKind.UNKNOWN: (status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"),
}


def envelope(data: OutputT) -> DataResponse[OutputT]:
    return DataResponse(data=data)


def paged_envelope(
    result: PagedResult[EntityT],
    to_output: Callable[[EntityT], OutputT],
) -> ListResponse[OutputT]:
    """Map a page of entities and attach the pagination meta."""
    data = [to_output(item) for item in result.data]
    return ListResponse(
        data=data,
        meta=ListMeta(
            pagination=PaginationMeta(
                page=result.page,
                page_size=result.page_size,
                total_count=result.total_count,
                total_pages=result.total_pages,
                current_count=len(data),
                has_next_page=result.has_next_page,
                has_previous_page=result.has_previous_page,
            )
        ),
    )


def request_instance(request: Request) -> str:
    """Path plus query string of the failing request."""
    if request.url.query:
        return f"{request.url.path}?{request.url.query}"
    return request.url.path


def problem_response(
    request: Request,
    status_code: int,
    title: str,
    detail: str | None = None,
    errors: dict[str, list[str]] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ProblemDetails(
        title=title,
        status=status_code,
        detail=detail,
        instance=request_instance(request),
        errors=errors,
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body, exclude_none=True),
        headers=headers,
    )


def failure_response(result: Response[Any], request: Request) -> JSONResponse:
    """Translate a failed service Response into a problem details response."""
    kind = result.error or ErrorKind.UNKNOWN
    status_code, title = ERROR_STATUS[kind]

    if status_code >= 500:
        logger.error("Request failed", path=request.url.path, error=kind.value, message=result.message)

    return problem_response(request, status_code, title, detail=result.message)
