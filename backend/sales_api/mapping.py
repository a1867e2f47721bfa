"""
Explicit conversions between ORM entities and API schemas.
"""

from sales_api.models import Customer, LineItem, Product, Sale
from sales_api.schemas import (
    CustomerOutput,
    LineItemOutput,
    ProductOutput,
    SaleOutput,
    SaveCustomerInput,
    SaveLineItemInput,
    SaveProductInput,
    SaveSaleInput,
)


# =============================================================================
# Input → entity
# =============================================================================


def customer_from_input(body: SaveCustomerInput) -> Customer:
    return Customer(
        name=body.name.strip(),
        phone=body.phone.strip(),
        company=body.company.strip(),
    )


def product_from_input(body: SaveProductInput, image_file_name: str) -> Product:
    """Build a Product; the image has already been stored as image_file_name."""
    return Product(
        name=body.name.strip(),
        price=body.price,
        image=image_file_name,
    )


def line_item_from_input(body: SaveLineItemInput) -> LineItem:
    return LineItem(
        quantity=body.quantity,
        unit_price=body.unit_price,
        product_id=body.product_id,
    )


def sale_from_input(body: SaveSaleInput) -> Sale:
    """Build a Sale with its items; sale_id is filled when the sale is flushed."""
    return Sale(
        date=body.date,
        total_amount=body.total_amount,
        customer_id=body.customer_id,
        items=[line_item_from_input(item) for item in body.items],
    )


# =============================================================================
# Entity → output
# =============================================================================


def customer_to_output(customer: Customer) -> CustomerOutput:
    return CustomerOutput(
        id=customer.id,
        name=customer.name,
        phone=customer.phone,
        company=customer.company,
    )


def product_to_output(product: Product) -> ProductOutput:
    return ProductOutput(
        id=product.id,
        name=product.name,
        price=product.price,
        image=product.image,
    )


def line_item_to_output(item: LineItem) -> LineItemOutput:
    return LineItemOutput(
        quantity=item.quantity,
        unit_price=item.unit_price,
        total=item.total,
        product_name=item.product.name if item.product is not None else None,
    )


def sale_to_output(sale: Sale) -> SaleOutput:
    return SaleOutput(
        id=sale.id,
        date=sale.date,
        total_amount=sale.total_amount,
        customer_id=sale.customer_id,
        customer_name=sale.customer.name if sale.customer is not None else None,
        items=[line_item_to_output(item) for item in sale.items],
    )
