"""
Product endpoints.

The image in the request body is a base64 data URI. It is written to the
media directory before the product is saved; the product keeps the file
name. Files of failed writes and of replaced or deleted products are
removed.
"""

from fastapi import APIRouter, Depends, Request, Response, status

from sales_api.core.dependencies import get_product_service
from sales_api.mapping import product_from_input, product_to_output
from sales_api.repositories import ProductRepository
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
    ProductOutput,
    SaveProductInput,
)
from sales_api.services.communication import PagedRequest
from sales_api.services.domain import ProductService
from sales_api.services.media import ImageStorage, get_image_storage
from sales_api.validation import validate_product
from shared.utils.exceptions import ValidationError


router = APIRouter(prefix="/products", tags=["products"])

product_paging = paged_request_dependency(ProductRepository)

ERROR_RESPONSES = {
    400: {"model": ProblemDetails},
    404: {"model": ProblemDetails},
    500: {"model": ProblemDetails},
}


@router.get("", response_model=ListResponse[ProductOutput], responses=ERROR_RESPONSES)
def list_products(
    request: Request,
    paged: PagedRequest = Depends(product_paging),
    service: ProductService = Depends(get_product_service),
):
    """List products, paged and sorted."""
    result = service.list_paged(paged)
    if not result.success:
        return failure_response(result, request)
    return paged_envelope(result.model, product_to_output)


@router.get("/{product_id}", response_model=DataResponse[ProductOutput], responses=ERROR_RESPONSES)
def get_product(
    product_id: int,
    request: Request,
    service: ProductService = Depends(get_product_service),
):
    """Get a specific product."""
    result = service.find_by_id(product_id)
    if not result.success:
        return failure_response(result, request)
    return envelope(product_to_output(result.model))


@router.post(
    "",
    response_model=DataResponse[ProductOutput],
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
def create_product(
    body: SaveProductInput,
    request: Request,
    response: Response,
    service: ProductService = Depends(get_product_service),
    storage: ImageStorage = Depends(get_image_storage),
):
    """Create a new product and store its image."""
    errors = validate_product(body)
    if errors:
        raise ValidationError(errors=errors)

    file_name = storage.save(body.image)

    result = service.add(product_from_input(body, file_name))
    if not result.success:
        storage.delete(file_name)
        return failure_response(result, request)

    response.headers["Location"] = str(
        request.url_for("get_product", product_id=result.model.id)
    )
    return envelope(product_to_output(result.model))


@router.put("/{product_id}", response_model=DataResponse[ProductOutput], responses=ERROR_RESPONSES)
def update_product(
    product_id: int,
    body: SaveProductInput,
    request: Request,
    service: ProductService = Depends(get_product_service),
    storage: ImageStorage = Depends(get_image_storage),
):
    """Replace a product's name, price and image."""
    errors = validate_product(body)
    if errors:
        raise ValidationError(errors=errors)

    current = service.find_by_id(product_id)
    if not current.success:
        return failure_response(current, request)
    previous_image = current.model.image

    file_name = storage.save(body.image)

    result = service.update(product_id, product_from_input(body, file_name))
    if not result.success:
        storage.delete(file_name)
        return failure_response(result, request)

    if previous_image != file_name:
        storage.delete(previous_image)
    return envelope(product_to_output(result.model))


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=ERROR_RESPONSES,
)
def delete_product(
    product_id: int,
    request: Request,
    service: ProductService = Depends(get_product_service),
    storage: ImageStorage = Depends(get_image_storage),
):
    """Delete a product and its stored image."""
    result = service.delete(product_id)
    if not result.success:
        return failure_response(result, request)

    storage.delete(result.model.image)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
