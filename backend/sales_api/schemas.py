"""
Request and response schemas for the sales API.

Every body on the wire is camelCase (totalAmount, unitPrice, customerId),
like the pageSize/sortBy query parameters. Python code uses the snake_case
field names; ApiModel maps between the two.

Inputs accept missing values so the validators in validation.py can report
every problem at once, keyed by field. Wrong JSON types are still rejected
by pydantic (rendered as the same 400 problem details).
"""

from datetime import datetime
from decimal import Decimal
from typing import Generic, TypeVar

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ApiModel(BaseModel):
    """Base for request/response bodies: camelCase on the wire."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


# =============================================================================
# Customers
# =============================================================================


class SaveCustomerInput(ApiModel):
    """Create/update body for a customer."""

    name: str | None = None
    phone: str | None = None
    company: str | None = None


class CustomerOutput(ApiModel):
    """Customer as returned by the API."""

    id: int
    name: str
    phone: str
    company: str


# =============================================================================
# Products
# =============================================================================


class SaveProductInput(ApiModel):
    """Create/update body for a product. image is a base64 image data URI."""

    name: str | None = None
    price: Decimal | None = None
    image: str | None = Field(
        default=None,
        description="data:image/<type>;base64,<payload>",
    )


class ProductOutput(ApiModel):
    """Product as returned by the API. image is the stored file name."""

    id: int
    name: str
    price: Decimal
    image: str


# =============================================================================
# Sales
# =============================================================================


class SaveLineItemInput(ApiModel):
    """One line of a sale body."""

    quantity: int | None = None
    unit_price: Decimal | None = None
    product_id: int | None = None


class SaveSaleInput(ApiModel):
    """Create/update body for a sale. Items replace the stored ones on update."""

    date: datetime | None = None
    total_amount: Decimal | None = None
    customer_id: int | None = None
    items: list[SaveLineItemInput] = Field(default_factory=list)


class LineItemOutput(ApiModel):
    """Sale line with its computed total and product name."""

    quantity: int
    unit_price: Decimal
    total: Decimal
    product_name: str | None = None


class SaleOutput(ApiModel):
    """Sale as returned by the API, with customer and product names."""

    id: int
    date: datetime | None = None
    total_amount: Decimal
    customer_id: int
    customer_name: str | None = None
    items: list[LineItemOutput] = Field(default_factory=list)


# =============================================================================
# Envelope
# =============================================================================


class PaginationMeta(ApiModel):
    """Pagination block of a list response."""

    page: int
    page_size: int
    total_count: int
    total_pages: int
    current_count: int
    has_next_page: bool
    has_previous_page: bool


class ListMeta(ApiModel):
    pagination: PaginationMeta


class DataResponse(ApiModel, Generic[T]):
    """Single-item envelope."""

    data: T


class ListResponse(ApiModel, Generic[T]):
    """List envelope with pagination meta."""

    data: list[T]
    meta: ListMeta


class ProblemDetails(ApiModel):
    """Error body (RFC 7807 style)."""

    title: str
    status: int
    detail: str | None = None
    instance: str | None = None
    errors: dict[str, list[str]] | None = None

