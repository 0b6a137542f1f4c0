"""Application tests for full listings of orders and menu products."""

from decimal import Decimal

from ordering.cart.assembly import LineCandidate
from ordering.checkout.fulfilment import Pickup
from ordering.dashboard.board import OrderBoard
from ordering.menu.product import Product
from ordering.order.order import Order
from ordering.utils.paging import PAGE_SIZE
from protean import current_domain

BEYOND_ONE_PAGE = PAGE_SIZE + 20


def _store_orders(count):
    repo = current_domain.repository_for(Order)
    ids = []
    for index in range(count):
        order = Order.place(
            customer_name=f"Customer {index}",
            customer_phone="85988887777",
            fulfilment=Pickup(),
            payment_method="cash",
            candidates=[LineCandidate("Burger", Decimal("10"), 1, "", Decimal("10"))],
        )
        order._events.clear()
        repo.add(order)
        ids.append(str(order.id))
    return ids


class TestOrderListing:
    def test_lists_every_order(self):
        ids = _store_orders(BEYOND_ONE_PAGE)

        orders = current_domain.repository_for(Order).list_recent()

        assert len(orders) == BEYOND_ONE_PAGE
        assert {str(order.id) for order in orders} == set(ids)

    def test_newest_first_across_pages(self):
        _store_orders(BEYOND_ONE_PAGE)

        created = [order.created_at for order in current_domain.repository_for(Order).list_recent()]

        assert created == sorted(created, reverse=True)

    def test_board_keeps_the_oldest_pending_order(self, staff_gate):
        oldest = _store_orders(BEYOND_ONE_PAGE)[0]

        with OrderBoard(staff_gate, "staff-token") as board:
            pending = {card.order_id for card in board.column("pending")}

        assert len(pending) == BEYOND_ONE_PAGE
        assert oldest in pending


class TestMenuListing:
    def test_lists_every_available_product(self):
        repo = current_domain.repository_for(Product)
        for index in range(BEYOND_ONE_PAGE):
            repo.add(Product.register(name=f"Item {index:03d}", price=1.0, category="snacks"))

        products = repo.list_menu()

        assert len(products) == BEYOND_ONE_PAGE
        assert [p.name for p in products] == sorted(p.name for p in products)
