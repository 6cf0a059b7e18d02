"""Order API views.

Exposes the ``OrderService`` via HTTP using a DRF ViewSet.  Domain
exceptions propagate to ``modules.core.exceptions.exception_handler``,
which renders the standardized error body with each exception's
``http_status``.
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.exceptions import DomainValidationError
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.orders.dtos import ListOrdersDTO, OrderLineInputDTO, PlaceOrderDTO
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    ListOrdersQuerySerializer,
    PlaceOrderSerializer,
    UpdateOrderStatusSerializer,
)
from modules.orders.services import OrderService
from modules.products.repositories.django_repository import ProductDjangoRepository


class OrderViewSet(ViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repositories (DIP).  All ORM
    access goes through the service/repository layer.
    """

    lookup_value_regex = r"\d+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            customer_repository=CustomerDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    @extend_schema(request=PlaceOrderSerializer)
    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        serializer = PlaceOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            dto = PlaceOrderDTO(
                customer_id=data["customer_id"],
                items=[
                    OrderLineInputDTO(
                        product_id=item["product_id"],
                        quantity=item["quantity"],
                    )
                    for item in data["items"]
                ],
                status=data.get("status"),
            )
        except PydanticValidationError as exc:
            raise DomainValidationError.from_pydantic(exc) from exc

        order = self._service.place_order(dto)
        return Response(order.model_dump(mode="json"), status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    @extend_schema(parameters=[ListOrdersQuerySerializer])
    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/?limit=&offset=&customer=&status="""
        serializer = ListOrdersQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        params = serializer.validated_data

        query = ListOrdersDTO(
            limit=params["limit"],
            offset=params["offset"],
            customer_id=params.get("customer"),
            status=params.get("status"),
        )
        orders = self._service.list_orders(query)

        return Response(
            {
                "limit": query.limit,
                "offset": query.offset,
                "results": [order.model_dump(mode="json") for order in orders],
            }
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        order = self._service.get_order(int(pk))
        return Response(order.model_dump(mode="json"))

    # ------------------------------------------------------------------
    # Status Update
    # ------------------------------------------------------------------

    @extend_schema(request=UpdateOrderStatusSerializer)
    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/

        Only ``status`` can be changed; any enumerated status is accepted.
        """
        serializer = UpdateOrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = self._service.update_order_status(
            int(pk), serializer.validated_data["status"]
        )
        return Response(order.model_dump(mode="json"))

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/orders/{pk}/

        Lines are deleted with the order; stock is not restored.
        """
        self._service.delete_order(int(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)
