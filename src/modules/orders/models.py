"""Order and OrderLine models.

Business rules implemented:
- ``total_amount`` equals the sum of ``price_at_purchase * quantity`` over
  the lines (computed by the service before the header is inserted).
- ``OrderLine.price_at_purchase`` is a snapshot of the product price at
  placement time; it is never re-derived from the current product price.
- ``OrderLine.quantity`` is at least 1 (CHECK constraint).
- One line per product per order (UNIQUE constraint).
- Customer and product FKs use PROTECT; deleting an order CASCADEs to
  its lines and never restores stock.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import OrderStatus


class Order(BaseModel):
    """Order header.

    Lines are created only together with the header, inside the same
    transaction (see ``OrderService.place_order``).
    """

    customer: models.ForeignKey = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )
    total_amount: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["-created_at"], name="orders_created_idx"),
        ]

    def __str__(self) -> str:
        return f"Order #{self.pk} ({self.status})"


class OrderLine(models.Model):
    """Line item linking an Order to a Product.

    ``price_at_purchase`` never changes after creation, even if the
    product price is updated later.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="lines",
    )
    product: models.ForeignKey = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="order_lines",
    )
    position: models.PositiveIntegerField = models.PositiveIntegerField(default=0)
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
    )
    price_at_purchase: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
    )

    class Meta:
        db_table = "order_lines"
        ordering = ["order_id", "position"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_lines_quantity_positive",
            ),
            models.UniqueConstraint(
                fields=["order", "product"],
                name="order_lines_unique_product",
            ),
        ]

    @property
    def subtotal(self) -> Decimal:
        return self.price_at_purchase * self.quantity

    def __str__(self) -> str:
        return f"{self.product_id} x{self.quantity} @ {self.price_at_purchase}"
