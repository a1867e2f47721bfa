"""
Product Service.
"""

from sales_api.models import Product
from sales_api.services.base_service import CrudService


class ProductService(CrudService[Product]):
    """
    Service for product management.

    The image field holds a stored file name; decoding the uploaded
    picture happens before the service is called.
    """

    def merge_fields(self, existing: Product, incoming: Product) -> None:
        existing.name = incoming.name
        existing.price = incoming.price
        existing.image = incoming.image
