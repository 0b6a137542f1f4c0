"""Order queries beyond get/add."""

from ordering.domain import ordering
from ordering.order.order import Order
from ordering.utils.paging import fetch_all


@ordering.repository(part_of=Order)
class OrderRepository:
    def list_recent(self):
        """All orders, newest first."""
        return fetch_all(self._dao.query.order_by("-created_at"))
