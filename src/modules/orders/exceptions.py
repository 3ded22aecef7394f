"""Order domain exceptions."""

from __future__ import annotations

from typing import Any

from modules.core.exceptions import Conflict, NotFound


class ProductNotFound(NotFound):
    """A product referenced by an order item does not exist.

    Raised inside the creation transaction, so every row written for the
    order so far is rolled back.
    """

    code = "product_not_found"

    def __init__(self, product_id: Any) -> None:
        super().__init__("Product", product_id)


class ChildRecordLocked(Conflict):
    """An order edit would rewrite a payment or shipment that has moved on."""

    code = "child_record_locked"

    def __init__(self, entity_type: str, entity_id: Any, status: str) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.status = status
        super().__init__(
            f"{entity_type} {entity_id} is {status}; the order change cannot be applied."
        )
