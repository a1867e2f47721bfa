"""
Payload validators.

Each validator returns a dict of field name → list of messages; an empty
dict means the payload is valid. Field names are the camelCase names used
on the wire; nested sale items are reported as "items[<index>].<field>".
"""

from decimal import Decimal

from sales_api.schemas import SaveCustomerInput, SaveProductInput, SaveSaleInput
from shared.config.constants import Limits
from shared.utils.validators import decode_image_data_uri

ValidationErrors = dict[str, list[str]]


def _add(errors: ValidationErrors, field: str, message: str) -> None:
    errors.setdefault(field, []).append(message)


def _label(field: str) -> str:
    return field.rsplit(".", 1)[-1]


def _check_text(errors: ValidationErrors, field: str, value: str | None, max_length: int) -> None:
    if value is None or not value.strip():
        _add(errors, field, f"The {_label(field)} field is required.")
    elif len(value.strip()) > max_length:
        _add(errors, field, f"The {_label(field)} field must be at most {max_length} characters.")


def _check_amount(errors: ValidationErrors, field: str, value: Decimal | None) -> None:
    if value is None:
        _add(errors, field, f"The {_label(field)} field is required.")
    elif value < 0:
        _add(errors, field, f"The {_label(field)} field must be zero or greater.")


def _check_id(errors: ValidationErrors, field: str, value: int | None) -> None:
    if value is None:
        _add(errors, field, f"The {_label(field)} field is required.")
    elif value < 1:
        _add(errors, field, f"The {_label(field)} field must be a positive id.")


def validate_customer(body: SaveCustomerInput) -> ValidationErrors:
    errors: ValidationErrors = {}
    _check_text(errors, "name", body.name, Limits.NAME_MAX_LENGTH)
    _check_text(errors, "phone", body.phone, Limits.PHONE_MAX_LENGTH)
    _check_text(errors, "company", body.company, Limits.COMPANY_MAX_LENGTH)
    return errors


def validate_product(body: SaveProductInput) -> ValidationErrors:
    errors: ValidationErrors = {}
    _check_text(errors, "name", body.name, Limits.NAME_MAX_LENGTH)
    _check_amount(errors, "price", body.price)

    if body.image is None or not body.image.strip():
        _add(errors, "image", "The image field is required.")
    else:
        try:
            decode_image_data_uri(body.image)
        except ValueError as e:
            _add(errors, "image", f"Invalid image: {e}.")

    return errors


def validate_sale(body: SaveSaleInput) -> ValidationErrors:
    errors: ValidationErrors = {}
    if body.date is None:
        _add(errors, "date", "The date field is required.")
    _check_amount(errors, "totalAmount", body.total_amount)
    _check_id(errors, "customerId", body.customer_id)

    if not body.items:
        _add(errors, "items", "A sale must have at least one item.")

    for index, item in enumerate(body.items):
        prefix = f"items[{index}]"
        if item.quantity is None:
            _add(errors, f"{prefix}.quantity", "The quantity field is required.")
        elif item.quantity < 1:
            _add(errors, f"{prefix}.quantity", "The quantity field must be at least 1.")
        _check_amount(errors, f"{prefix}.unitPrice", item.unit_price)
        _check_id(errors, f"{prefix}.productId", item.product_id)

    return errors
