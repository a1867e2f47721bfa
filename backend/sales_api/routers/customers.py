"""
Customer endpoints.
"""

from fastapi import APIRouter, Depends, Request, Response, status

from sales_api.core.dependencies import get_customer_service
from sales_api.mapping import customer_from_input, customer_to_output
from sales_api.repositories import CustomerRepository
from sales_api.routers._common import (
    envelope,
    failure_response,
    paged_envelope,
    paged_request_dependency,
)
from sales_api.schemas import (
    CustomerOutput,
    DataResponse,
    ListResponse,
    ProblemDetails,
    SaveCustomerInput,
)
from sales_api.services.communication import PagedRequest
from sales_api.services.domain import CustomerService
from sales_api.validation import validate_customer
from shared.utils.exceptions import ValidationError


router = APIRouter(prefix="/customers", tags=["customers"])

customer_paging = paged_request_dependency(CustomerRepository)

ERROR_RESPONSES = {
    400: {"model": ProblemDetails},
    404: {"model": ProblemDetails},
    500: {"model": ProblemDetails},
}


@router.get("", response_model=ListResponse[CustomerOutput], responses=ERROR_RESPONSES)
def list_customers(
    request: Request,
    paged: PagedRequest = Depends(customer_paging),
    service: CustomerService = Depends(get_customer_service),
):
    """List customers, paged and sorted."""
    result = service.list_paged(paged)
    if not result.success:
        return failure_response(result, request)
    return paged_envelope(result.model, customer_to_output)


@router.get("/{customer_id}", response_model=DataResponse[CustomerOutput], responses=ERROR_RESPONSES)
def get_customer(
    customer_id: int,
    request: Request,
    service: CustomerService = Depends(get_customer_service),
):
    """Get a specific customer."""
    result = service.find_by_id(customer_id)
    if not result.success:
        return failure_response(result, request)
    return envelope(customer_to_output(result.model))


@router.post(
    "",
    response_model=DataResponse[CustomerOutput],
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
def create_customer(
    body: SaveCustomerInput,
    request: Request,
    response: Response,
    service: CustomerService = Depends(get_customer_service),
):
    """Create a new customer."""
    errors = validate_customer(body)
    if errors:
        raise ValidationError(errors=errors)

    result = service.add(customer_from_input(body))
    if not result.success:
        return failure_response(result, request)

    response.headers["Location"] = str(
        request.url_for("get_customer", customer_id=result.model.id)
    )
    return envelope(customer_to_output(result.model))


@router.put("/{customer_id}", response_model=DataResponse[CustomerOutput], responses=ERROR_RESPONSES)
def update_customer(
    customer_id: int,
    body: SaveCustomerInput,
    request: Request,
    service: CustomerService = Depends(get_customer_service),
):
    """Replace a customer's name, phone and company."""
    errors = validate_customer(body)
    if errors:
        raise ValidationError(errors=errors)

    result = service.update(customer_id, customer_from_input(body))
    if not result.success:
        return failure_response(result, request)
    return envelope(customer_to_output(result.model))


@router.delete(
    "/{customer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=ERROR_RESPONSES,
)
def delete_customer(
    customer_id: int,
    request: Request,
    service: CustomerService = Depends(get_customer_service),
):
    """Delete a customer."""
    result = service.delete(customer_id)
    if not result.success:
        return failure_response(result, request)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
