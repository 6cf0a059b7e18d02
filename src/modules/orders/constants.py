"""Order domain constants.

Defines status choices and list pagination bounds.  No transition table
is enforced between statuses: any enumerated status may follow any other.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    PAID = "paid", "Paid"
    SHIPPED = "shipped", "Shipped"
    DELIVERED = "delivered", "Delivered"
    CANCELLED = "cancelled", "Cancelled"


DEFAULT_LIST_LIMIT = 10
MAX_LIST_LIMIT = 100
