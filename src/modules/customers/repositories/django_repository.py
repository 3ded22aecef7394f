"""Django ORM implementation of the Customer repository."""

from __future__ import annotations

from typing import Optional

from modules.core.repositories.django_repository import DjangoRepository
from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository


class CustomerDjangoRepository(DjangoRepository[Customer], ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    model = Customer

    def get_by_email(self, email: str) -> Optional[Customer]:
        return Customer.objects.filter(email__iexact=email).first()
