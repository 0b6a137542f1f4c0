"""Staff order board: a read-only kanban projection of the order collection.

The board never edits its orders in place. Every change signal, and every
transition it issues, is followed by a full refetch that replaces the whole
projection, so redundant or reordered signals converge on the stored state.
"""

from dataclasses import dataclass

import structlog
from protean.utils.globals import current_domain

from ordering.commands import submit
from ordering.errors import AccessDenied, RepositoryFailure
from ordering.order.order import DeliveryType, Order, OrderStatus
from ordering.order.transitions import TransitionOrder
from ordering.realtime.channel import ORDERS_TOPIC, get_change_channel

logger = structlog.get_logger(__name__)

BOARD_COLUMNS = (OrderStatus.PENDING.value, OrderStatus.PREPARING.value, OrderStatus.DELIVERING.value)

# Button label and target per column
COLUMN_ACTIONS = {
    OrderStatus.PENDING.value: (("reject", OrderStatus.CANCELLED.value), ("accept", OrderStatus.PREPARING.value)),
    OrderStatus.PREPARING.value: (("dispatch", OrderStatus.DELIVERING.value),),
    OrderStatus.DELIVERING.value: (("complete", OrderStatus.COMPLETED.value),),
}


@dataclass(frozen=True)
class BoardOrder:
    """One card on the board."""

    order_id: str
    customer_name: str
    customer_phone: str
    items: tuple[str, ...]
    total: float
    status: str
    placed_at: str
    delivery_type: str
    address: str | None

    @classmethod
    def from_order(cls, order) -> "BoardOrder":
        return cls(
            order_id=str(order.id),
            customer_name=order.customer_name,
            customer_phone=order.customer_phone,
            items=tuple(f"{line.quantity}x {line.product_name}" for line in order.ordered_lines()),
            total=order.total,
            status=order.status,
            placed_at=order.created_at.strftime("%H:%M") if order.created_at else "",
            delivery_type=order.delivery_type,
            address=order.delivery_address if order.delivery_type == DeliveryType.DELIVERY.value else None,
        )


class OrderBoard:
    """A dashboard session bound to one staff credential.

    Use as a context manager, or call ``open``/``close`` explicitly; ``close``
    is safe to call on every exit path.
    """

    def __init__(self, gate, token, channel=None):
        self._gate = gate
        self._token = token
        self._channel = channel or get_change_channel()
        self._subscription = None
        self.orders: tuple[BoardOrder, ...] = ()

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def _require_session(self):
        session = self._gate.current_session(self._token)
        if session is None:
            raise AccessDenied("A staff session is required to use the order board")
        return session

    @property
    def is_open(self) -> bool:
        return self._subscription is not None

    def open(self):
        self._require_session()
        if self._subscription is None:
            self._subscription = self._channel.subscribe(self._on_signal, topic=ORDERS_TOPIC)
        self.reconcile()
        return self

    def close(self):
        subscription, self._subscription = self._subscription, None
        self._channel.unsubscribe(subscription)

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def _on_signal(self):
        try:
            self.reconcile()
        except RepositoryFailure as e:
            # The previous projection stays on screen until a later signal succeeds
            logger.warning("Board refresh failed, keeping previous orders", error=str(e))

    # -------------------------------------------------------------------
    # Projection
    # -------------------------------------------------------------------
    def reconcile(self) -> tuple[BoardOrder, ...]:
        """Refetch every order (newest first) and replace the projection."""
        try:
            orders = current_domain.repository_for(Order).list_recent()
        except Exception as exc:
            raise RepositoryFailure(f"Could not list orders: {exc}") from exc

        self.orders = tuple(BoardOrder.from_order(order) for order in orders)
        logger.debug("Board reconciled", orders=len(self.orders))
        return self.orders

    def column(self, status) -> tuple[BoardOrder, ...]:
        return tuple(order for order in self.orders if order.status == status)

    def columns(self) -> dict[str, tuple[BoardOrder, ...]]:
        return {status: self.column(status) for status in BOARD_COLUMNS}

    # -------------------------------------------------------------------
    # Staff actions
    # -------------------------------------------------------------------
    def transition(self, order_id, status):
        """Ask for a status change, then refetch.

        The projection is only ever replaced by a refetch, so an order whose
        transition fails stays in its current column.
        """
        session = self._require_session()
        try:
            return submit(TransitionOrder(order_id=order_id, status=status, requested_by=session.staff_name))
        finally:
            if self.is_open:
                self._on_signal()
