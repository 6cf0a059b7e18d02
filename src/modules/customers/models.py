"""Customer model.

Business rules implemented:
- Email must be unique in the system (normalised to lowercase on save).
- A customer referenced by an order cannot be deleted (``PROTECT`` on
  ``Order.customer``); customer CRUD happens outside the order core.
"""

from __future__ import annotations

import structlog
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class Customer(BaseModel):
    """Customer record referenced by orders through ``customer_id``."""

    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=254, unique=True)

    class Meta:
        db_table = "customers"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="customers_created_idx"),
        ]

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)
        if is_new:
            logger.info("customer.created", customer_id=self.id)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"
