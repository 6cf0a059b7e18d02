"""Django ORM implementation of the Customer repository.

Satisfies ``ICustomerRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
instead of raising HTTP-level exceptions; the Service Layer decides
how to translate a missing entity.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Customer]:
        """Retrieve a customer by primary key.

        Returns ``None`` for non-existent or malformed IDs.
        """
        try:
            return Customer.objects.filter(id=id).first()
        except (TypeError, ValueError):
            return None

    def insert(self, data: Dict[str, Any]) -> Customer:
        customer = Customer.objects.create(**data)
        logger.info("customer.inserted", customer_id=customer.id)
        return customer

    @transaction.atomic
    def update(self, id: int, data: Dict[str, Any]) -> Optional[Customer]:
        customer = Customer.objects.select_for_update().filter(id=id).first()
        if not customer:
            return None
        for field, value in data.items():
            setattr(customer, field, value)
        customer.save(update_fields=list(data))
        logger.info("customer.updated", customer_id=id, fields=sorted(data))
        return customer

    def delete(self, id: int) -> bool:
        """Delete a customer by ID.

        Raises ``ProtectedError`` when orders still reference the customer.
        """
        deleted, _ = Customer.objects.filter(id=id).delete()
        if deleted:
            logger.info("customer.deleted", customer_id=id)
        return bool(deleted)

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Customer]:
        """List customers with optional Django ORM look-ups.

        Examples of valid filters::

            {"name__icontains": "acme"}
        """
        queryset = Customer.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def get_by_email(self, email: str) -> Optional[Customer]:
        """Retrieve a customer by email address (case-insensitive)."""
        return Customer.objects.filter(email=email.strip().lower()).first()
