"""Customer service layer (Use Cases).

Business rules enforced here:
- Email must be unique.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.core.exceptions import wrap_store_errors
from modules.core.guards import assert_unique, ensure_exists
from modules.customers.models import Customer

if TYPE_CHECKING:
    from modules.customers.dtos import CreateCustomerDTO, UpdateCustomerDTO
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerService:
    """Application service for Customer use-cases.

    Receives an ``ICustomerRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: ICustomerRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @wrap_store_errors("Failed to create customer.")
    @transaction.atomic
    def create_customer(self, dto: CreateCustomerDTO) -> Customer:
        """Create a new customer.

        Raises:
            UniquenessConflict: the email is already registered.
        """
        assert_unique("Customer", dto.email, self._repo.get_by_email(dto.email))

        customer = Customer(name=dto.name, email=dto.email, phone=dto.phone)
        customer = self._repo.save(customer)
        logger.info("customer.created", customer_id=str(customer.id))
        return customer

    @wrap_store_errors("Failed to update customer.")
    @transaction.atomic
    def update_customer(self, id: str, dto: UpdateCustomerDTO) -> Customer:
        """Update an existing customer with the supplied fields.

        Raises:
            NotFound: the customer does not exist.
            UniquenessConflict: the new email belongs to another customer.
        """
        customer = ensure_exists(self._repo, "Customer", id)

        if dto.email is not None:
            assert_unique(
                "Customer",
                dto.email,
                self._repo.get_by_email(dto.email),
                excluding_id=customer.id,
            )

        for field in ("name", "email", "phone", "is_active"):
            value = getattr(dto, field)
            if value is not None:
                setattr(customer, field, value)

        customer = self._repo.save(customer)
        logger.info("customer.updated", customer_id=str(id))
        return customer

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_customers(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> List[Customer]:
        return self._repo.list(filters)

    def get_customer(self, id: str) -> Customer:
        """Raises ``NotFound`` if the customer does not exist."""
        return ensure_exists(self._repo, "Customer", id)
