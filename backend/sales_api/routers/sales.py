"""
Sale endpoints.

Sales are written together with their items; an update replaces the item
list. Responses include the customer name and each item's product name.
"""

from fastapi import APIRouter, Depends, Request, Response, status

from sales_api.core.dependencies import get_sale_service
from sales_api.mapping import sale_from_input, sale_to_output
from sales_api.repositories import SaleRepository
from sales_api.routers._common import (
    envelope,
    failure_response,
    paged_envelope,
    paged_request_dependency,
)
from sales_api.schemas import (
    DataResponse,
    ListResponse,
    ProblemDetails,
    SaleOutput,
    SaveSaleInput,
)
from sales_api.services.communication import PagedRequest
from sales_api.services.domain import SaleService
from sales_api.validation import validate_sale
from shared.utils.exceptions import ValidationError


router = APIRouter(prefix="/sales", tags=["sales"])

sale_paging = paged_request_dependency(SaleRepository)

ERROR_RESPONSES = {
    400: {"model": ProblemDetails},
    404: {"model": ProblemDetails},
    500: {"model": ProblemDetails},
}


@router.get("", response_model=ListResponse[SaleOutput], responses=ERROR_RESPONSES)
def list_sales(
    request: Request,
    paged: PagedRequest = Depends(sale_paging),
    service: SaleService = Depends(get_sale_service),
):
    """List sales with their items, paged and sorted."""
    result = service.list_paged(paged)
    if not result.success:
        return failure_response(result, request)
    return paged_envelope(result.model, sale_to_output)


@router.get("/{sale_id}", response_model=DataResponse[SaleOutput], responses=ERROR_RESPONSES)
def get_sale(
    sale_id: int,
    request: Request,
    service: SaleService = Depends(get_sale_service),
):
    """Get a specific sale."""
    result = service.find_by_id(sale_id)
    if not result.success:
        return failure_response(result, request)
    return envelope(sale_to_output(result.model))


@router.post(
    "",
    response_model=DataResponse[SaleOutput],
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
def create_sale(
    body: SaveSaleInput,
    request: Request,
    response: Response,
    service: SaleService = Depends(get_sale_service),
):
    """Create a sale with its items."""
    errors = validate_sale(body)
    if errors:
        raise ValidationError(errors=errors)

    result = service.add(sale_from_input(body))
    if not result.success:
        return failure_response(result, request)

    response.headers["Location"] = str(request.url_for("get_sale", sale_id=result.model.id))
    return envelope(sale_to_output(result.model))


@router.put("/{sale_id}", response_model=DataResponse[SaleOutput], responses=ERROR_RESPONSES)
def update_sale(
    sale_id: int,
    body: SaveSaleInput,
    request: Request,
    service: SaleService = Depends(get_sale_service),
):
    """Replace a sale, including its whole item list."""
    errors = validate_sale(body)
    if errors:
        raise ValidationError(errors=errors)

    result = service.update(sale_id, sale_from_input(body))
    if not result.success:
        return failure_response(result, request)
    return envelope(sale_to_output(result.model))


@router.delete(
    "/{sale_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=ERROR_RESPONSES,
)
def delete_sale(
    sale_id: int,
    request: Request,
    service: SaleService = Depends(get_sale_service),
):
    """Delete a sale and its items."""
    result = service.delete(sale_id)
    if not result.success:
        return failure_response(result, request)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
