"""
Sale Service.

Business rules:
- A sale owns its line items; an update replaces the whole item list
- Writes invalidate only the sale cache entries. Cached sales may show a
  customer or product name changed afterwards until those entries expire.
"""

from sales_api.models import Sale
from sales_api.services.base_service import CrudService


class SaleService(CrudService[Sale]):
    """Service for sales and their line items."""

    def merge_fields(self, existing: Sale, incoming: Sale) -> None:
        existing.date = incoming.date
        existing.total_amount = incoming.total_amount
        existing.customer_id = incoming.customer_id

        # Replace-all: removed items are deleted by the delete-orphan cascade.
        # Copy first, moving an item to existing.items detaches it from incoming.
        new_items = list(incoming.items)
        existing.items.clear()
        existing.items.extend(new_items)
