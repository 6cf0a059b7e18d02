"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
or ``False`` instead of raising; the Service Layer decides how to
translate a missing entity.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or malformed IDs.
        """
        try:
            return Product.objects.filter(id=id).first()
        except (TypeError, ValueError):
            return None

    def insert(self, data: Dict[str, Any]) -> Product:
        return Product.objects.create(**data)

    @transaction.atomic
    def update(self, id: int, data: Dict[str, Any]) -> Optional[Product]:
        product = Product.objects.select_for_update().filter(id=id).first()
        if not product:
            return None
        for field, value in data.items():
            setattr(product, field, value)
        product.save(update_fields=list(data))
        logger.info("product.updated", product_id=id, fields=sorted(data))
        return product

    def delete(self, id: int) -> bool:
        """Delete a product by ID.

        Raises ``ProtectedError`` when order lines still reference it.
        """
        deleted, _ = Product.objects.filter(id=id).delete()
        if deleted:
            logger.info("product.deleted", product_id=id)
        return bool(deleted)

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Product]:
        """List products with optional Django ORM look-ups.

        Examples of valid filters::

            {"stock_quantity__gt": 0}
            {"name__icontains": "widget"}
        """
        queryset = Product.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def conditional_decrement_stock(self, id: int, quantity: int) -> bool:
        """Single ``UPDATE ... WHERE stock_quantity >= quantity``.

        The precondition and the write happen in one statement, so
        concurrent reservations of the same product cannot interleave
        between a read and a write.
        """
        updated = Product.objects.filter(
            id=id,
            stock_quantity__gte=quantity,
        ).update(
            stock_quantity=F("stock_quantity") - quantity,
            updated_at=timezone.now(),
        )
        return updated == 1
