"""Order DRF serializers for API input.

The serializers validate request shape at the Interface layer (API
Views).  Business rules live in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``; responses are rendered from those DTOs.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.constants import DEFAULT_LIST_LIMIT, MAX_LIST_LIMIT


class OrderLineInputSerializer(serializers.Serializer):
    """Validates a single line in an order placement request."""

    product_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1)


class PlaceOrderSerializer(serializers.Serializer):
    """Validates the order placement payload.

    ``status`` is free text here; unknown values are rejected by the
    service as ``invalid_status``.
    """

    customer_id = serializers.IntegerField(min_value=1)
    items = OrderLineInputSerializer(many=True, allow_empty=False)
    status = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class UpdateOrderStatusSerializer(serializers.Serializer):
    """Blank values reach the service and fail as ``invalid_status``."""

    status = serializers.CharField(allow_blank=True)


class ListOrdersQuerySerializer(serializers.Serializer):
    """Validates list query parameters."""

    limit = serializers.IntegerField(
        min_value=1, max_value=MAX_LIST_LIMIT, default=DEFAULT_LIST_LIMIT
    )
    offset = serializers.IntegerField(min_value=0, default=0)
    customer = serializers.IntegerField(min_value=1, required=False)
    status = serializers.CharField(required=False)
