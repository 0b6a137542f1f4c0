import json

import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield

        from protean import current_domain

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()


BURGER_GROUPS = [
    {
        "name": "Bread",
        "min_selection": 1,
        "max_selection": 1,
        "modifiers": [
            {"modifier_id": "bread-brioche", "name": "Brioche", "price": 2.0},
            {"modifier_id": "bread-sesame", "name": "Sesame", "price": 0.0},
        ],
    },
    {
        "name": "Extras",
        "min_selection": 0,
        "max_selection": 3,
        "modifiers": [
            {"modifier_id": "extra-bacon", "name": "Bacon", "price": 3.0},
            {"modifier_id": "extra-egg", "name": "Egg", "price": 1.5},
        ],
    },
]


@pytest.fixture()
def burger():
    """A stored $10.00 burger with a required bread choice and optional extras."""
    from ordering.menu.product import Product
    from protean import current_domain

    product = Product.register(name="Classic Burger", price=10.0, category="burgers", groups=BURGER_GROUPS)
    current_domain.repository_for(Product).add(product)
    return product


@pytest.fixture()
def lemonade():
    from ordering.menu.product import Product
    from protean import current_domain

    product = Product.register(name="Lemonade", price=4.0, category="drinks")
    current_domain.repository_for(Product).add(product)
    return product


@pytest.fixture()
def bread_group_id(burger):
    return burger.snapshot().groups[0].group_id


@pytest.fixture()
def extras_group_id(burger):
    return burger.snapshot().groups[1].group_id


@pytest.fixture()
def staff_gate():
    from ordering.staff import set_auth_gate
    from ordering.staff.static_gate import StaticTokenGate

    gate = StaticTokenGate({"staff-token": "Ana"})
    set_auth_gate(gate)
    return gate


@pytest.fixture()
def handoff():
    from ordering.handoff import get_handoff

    return get_handoff()


@pytest.fixture()
def cart_id(burger, bread_group_id):
    """An active cart holding two brioche burgers ($24.00)."""
    from ordering.cart.lines import AddCartLine
    from ordering.cart.management import CreateCart
    from protean import current_domain

    cart_id = current_domain.process(CreateCart(session_id="session-1"), asynchronous=False)
    current_domain.process(
        AddCartLine(
            cart_id=cart_id,
            product_id=str(burger.id),
            quantity=2,
            selections=json.dumps({bread_group_id: ["bread-brioche"]}),
        ),
        asynchronous=False,
    )
    return cart_id
