"""Order service layer (Use Cases).

Orchestrates order placement, status updates, deletion and queries.
All write operations run inside ``transaction_scope``: the service
defines the unit-of-work boundary, so callers only ever observe a fully
committed order or no effect at all.

Placement walks through ``INIT -> VALIDATING -> RESERVING -> PERSISTING``
and ends in ``COMMITTED`` or ``ABORTED``.  Exactly one attempt is made
per call; retrying on ``StorageError`` is up to the caller.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, List, Optional

import structlog
from django.db import transaction

from modules.core.exceptions import NotFound
from modules.core.transaction import storage_guard, transaction_scope
from modules.orders.assembler import OrderAssembler
from modules.orders.dtos import OrderDTO, OrderSummaryDTO
from modules.orders.events import OrderDeleted, OrderPlaced, OrderStatusChanged
from modules.orders.reservation import InventoryReservation
from modules.orders.validation import EntityValidator
from shared.infrastructure.bus import event_bus

if TYPE_CHECKING:
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.orders.dtos import ListOrdersDTO, PlaceOrderDTO
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.repositories.interfaces import IProductRepository
    from shared.domain.bus import IEventBus
    from shared.domain.events import DomainEvent

logger = structlog.get_logger(__name__)


class PlacementState(str, enum.Enum):
    INIT = "INIT"
    VALIDATING = "VALIDATING"
    RESERVING = "RESERVING"
    PERSISTING = "PERSISTING"
    COMMITTED = "COMMITTED"
    ABORTED = "ABORTED"


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        customer_repository: ICustomerRepository,
        product_repository: IProductRepository,
        bus: Optional[IEventBus] = None,
    ) -> None:
        self._order_repo = order_repository
        self._validator = EntityValidator(customer_repository, product_repository)
        self._reservation = InventoryReservation(product_repository)
        self._assembler = OrderAssembler()
        self._bus = bus or event_bus

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def place_order(self, dto: PlaceOrderDTO) -> OrderDTO:
        """Validate, reserve stock and persist an order atomically.

        Steps:
        1. Resolve the customer and products; snapshot prices.
        2. Reserve stock per line, in request order (conditional decrement).
        3. Insert the header, then the lines with the generated id.
        4. Commit and return the composed order.

        Raises:
            NotFound: customer or product does not exist.
            InsufficientStock: not enough stock for a line.
            InvalidStatus: the requested initial status is unknown.
            StorageError: the transaction failed; nothing was applied.
        """
        log = logger.bind(customer_id=dto.customer_id, line_count=len(dto.items))
        state = PlacementState.INIT
        log.info("order.placement.state", state=state.value)

        try:
            with transaction_scope("place_order"):
                state = PlacementState.VALIDATING
                log.info("order.placement.state", state=state.value)
                status = self._assembler.resolve_status(dto.status)
                validated = self._validator.validate(dto.customer_id, dto.items)

                state = PlacementState.RESERVING
                log.info("order.placement.state", state=state.value)
                for line in validated.lines:
                    self._reservation.reserve(line.product_id, line.quantity)

                state = PlacementState.PERSISTING
                log.info("order.placement.state", state=state.value)
                header = self._assembler.build_header(validated, status)
                order = self._order_repo.insert_header(header)
                self._order_repo.insert_lines(
                    self._assembler.build_lines(order.id, validated)
                )

                result = self._load(order.id)
                self._publish_on_commit(
                    OrderPlaced(
                        aggregate_id=order.id,
                        customer_id=validated.customer_id,
                        total_amount=str(header.total_amount),
                    )
                )
        except BaseException as exc:
            log.warning(
                "order.placement.state",
                state=PlacementState.ABORTED.value,
                failed_in=state.value,
                error=type(exc).__name__,
            )
            raise

        log.info(
            "order.placement.state",
            state=PlacementState.COMMITTED.value,
            order_id=result.id,
            total_amount=str(result.total_amount),
        )
        return result

    def update_order_status(self, order_id: int, new_status: str) -> OrderDTO:
        """Set the status of an order.

        Any enumerated status is accepted from any other; no transition
        table is enforced.

        Raises:
            InvalidStatus: *new_status* is not an enumerated status.
            NotFound: the order does not exist.
        """
        status = self._assembler.resolve_status(new_status)
        log = logger.bind(order_id=order_id, new_status=status.value)

        with transaction_scope("update_order_status"):
            old_status = self._order_repo.update_status(order_id, status)
            if old_status is None:
                raise NotFound("order", order_id)
            result = self._load(order_id)
            self._publish_on_commit(
                OrderStatusChanged(
                    aggregate_id=order_id,
                    old_status=old_status,
                    new_status=status.value,
                )
            )

        log.info("order.status_updated", old_status=old_status)
        return result

    def delete_order(self, order_id: int) -> None:
        """Delete an order and its lines.  Stock is **not** restored.

        Raises:
            NotFound: the order does not exist (nothing is changed).
        """
        with transaction_scope("delete_order"):
            if not self._order_repo.delete(order_id):
                raise NotFound("order", order_id)
            self._publish_on_commit(OrderDeleted(aggregate_id=order_id))

        logger.info("order.deleted", order_id=order_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: int) -> OrderDTO:
        """Retrieve a single order with lines and customer summary.

        Raises:
            NotFound: if the order does not exist.
            StorageError: the read failed.
        """
        with storage_guard("get_order"):
            return self._load(order_id)

    def list_orders(self, query: ListOrdersDTO) -> List[OrderSummaryDTO]:
        """Return a page of order summaries, newest first."""
        filters = {}
        if query.customer_id is not None:
            filters["customer"] = query.customer_id
        if query.status is not None:
            filters["status"] = self._assembler.resolve_status(query.status).value

        with storage_guard("list_orders"):
            orders = self._order_repo.find_all(query.limit, query.offset, filters)
        return [OrderSummaryDTO.from_entity(order) for order in orders]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _load(self, order_id: int) -> OrderDTO:
        order = self._order_repo.find_by_id(order_id)
        if not order:
            raise NotFound("order", order_id)
        return OrderDTO.from_entity(order)

    def _publish_on_commit(self, event: DomainEvent) -> None:
        """Publish *event* only once the surrounding transaction commits."""
        transaction.on_commit(lambda: self._bus.publish(event), robust=True)
