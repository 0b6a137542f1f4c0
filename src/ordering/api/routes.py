"""FastAPI routes for the ordering context: menu, carts and the staff order API."""

import json

from fastapi import APIRouter, Depends, Header
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    AddCartLineRequest,
    CartIdResponse,
    CartLineSchema,
    CartResponse,
    CheckoutRequest,
    CheckoutResponse,
    CreateCartRequest,
    LineIdResponse,
    ModifierGroupSchema,
    ModifierSchema,
    OrderLineSchema,
    OrderSchema,
    ProductSchema,
    SelectionResponse,
    SelectModifierRequest,
    StatusResponse,
    TransitionRequest,
    TransitionResponse,
    UpdateLineQuantityRequest,
)
from ordering.cart.cart import ShoppingCart
from ordering.cart.lines import AddCartLine, RemoveCartLine, SelectModifier, UpdateCartLineQuantity
from ordering.cart.management import AbandonCart, CreateCart
from ordering.checkout.fulfilment import compose_address
from ordering.checkout.placement import PlaceOrder
from ordering.commands import submit
from ordering.errors import AccessDenied
from ordering.menu.product import Product
from ordering.order.order import DeliveryType, Order
from ordering.order.transitions import TransitionOrder
from ordering.staff import get_auth_gate
from ordering.staff.gate import StaffSession


def bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


def require_staff(authorization: str | None = Header(default=None)) -> StaffSession:
    session = get_auth_gate().current_session(bearer_token(authorization))
    if session is None:
        raise AccessDenied("Staff session required")
    return session


def _group_schemas(snapshot) -> list[ModifierGroupSchema]:
    return [
        ModifierGroupSchema(
            group_id=group.group_id,
            name=group.name,
            min_selection=group.min_selection,
            max_selection=group.max_selection,
            required=group.is_required,
            modifiers=[
                ModifierSchema(modifier_id=m.modifier_id, name=m.name, price=float(m.price)) for m in group.modifiers
            ],
        )
        for group in snapshot.groups
    ]


# ---------------------------------------------------------------------------
# Menu Router
# ---------------------------------------------------------------------------
menu_router = APIRouter(prefix="/menu", tags=["menu"])


@menu_router.get("", response_model=list[ProductSchema])
async def list_menu(category: str | None = None) -> list[ProductSchema]:
    products = current_domain.repository_for(Product).list_menu(category=category)
    return [
        ProductSchema(
            product_id=str(product.id),
            name=product.name,
            description=product.description,
            price=product.price,
            category=product.category,
            image_url=product.image_url,
            groups=_group_schemas(product.snapshot()),
        )
        for product in products
    ]


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.post("", status_code=201, response_model=CartIdResponse)
async def create_cart(body: CreateCartRequest) -> CartIdResponse:
    result = submit(CreateCart(session_id=body.session_id))
    return CartIdResponse(cart_id=result)


@cart_router.get("/{cart_id}", response_model=CartResponse)
async def get_cart(cart_id: str) -> CartResponse:
    cart = current_domain.repository_for(ShoppingCart).get(cart_id)
    lines = []
    for line in sorted(cart.lines, key=lambda line: line.added_at):
        snapshot = line.product_snapshot()
        lines.append(
            CartLineSchema(
                line_id=str(line.id),
                product_id=str(line.product_id),
                product_name=snapshot.name,
                unit_price=float(snapshot.price),
                quantity=line.quantity,
                selections=line.selected(),
                options_summary=line.modifier_summary(),
                total_price=float(line.total_price()),
                groups=_group_schemas(snapshot),
            )
        )
    return CartResponse(
        cart_id=str(cart.id),
        status=cart.status,
        lines=lines,
        subtotal=float(cart.subtotal()),
        problems=cart.checkout_errors() if cart.lines else [],
    )


@cart_router.post("/{cart_id}/lines", status_code=201, response_model=LineIdResponse)
async def add_cart_line(cart_id: str, body: AddCartLineRequest) -> LineIdResponse:
    command = AddCartLine(
        cart_id=cart_id,
        product_id=body.product_id,
        quantity=body.quantity,
        selections=json.dumps(body.selections),
    )
    return LineIdResponse(line_id=submit(command))


@cart_router.put("/{cart_id}/lines/{line_id}", response_model=StatusResponse)
async def update_cart_line(cart_id: str, line_id: str, body: UpdateLineQuantityRequest) -> StatusResponse:
    submit(UpdateCartLineQuantity(cart_id=cart_id, line_id=line_id, new_quantity=body.new_quantity))
    return StatusResponse()


@cart_router.put("/{cart_id}/lines/{line_id}/modifiers", response_model=SelectionResponse)
async def select_modifier(cart_id: str, line_id: str, body: SelectModifierRequest) -> SelectionResponse:
    command = SelectModifier(
        cart_id=cart_id,
        line_id=line_id,
        group_id=body.group_id,
        modifier_id=body.modifier_id,
    )
    return SelectionResponse(group_id=body.group_id, selected=submit(command))


@cart_router.delete("/{cart_id}/lines/{line_id}", response_model=StatusResponse)
async def remove_cart_line(cart_id: str, line_id: str) -> StatusResponse:
    submit(RemoveCartLine(cart_id=cart_id, line_id=line_id))
    return StatusResponse()


@cart_router.put("/{cart_id}/abandon", response_model=StatusResponse)
async def abandon_cart(cart_id: str) -> StatusResponse:
    submit(AbandonCart(cart_id=cart_id))
    return StatusResponse()


@cart_router.post("/{cart_id}/checkout", status_code=201, response_model=CheckoutResponse)
async def checkout(cart_id: str, body: CheckoutRequest) -> CheckoutResponse:
    address = None
    if body.delivery_type == DeliveryType.DELIVERY.value:
        address = compose_address(body.street, body.number, body.complement)

    command = PlaceOrder(
        cart_id=cart_id,
        customer_name=body.customer_name,
        customer_phone=body.customer_phone,
        delivery_type=body.delivery_type,
        delivery_address=address,
        payment_method=body.payment_method,
    )
    order_id = submit(command)
    order = current_domain.repository_for(Order).get(order_id)
    return CheckoutResponse(order_id=order_id, total=order.total)


# ---------------------------------------------------------------------------
# Order Router (staff)
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


def _order_schema(order) -> OrderSchema:
    return OrderSchema(
        order_id=str(order.id),
        created_at=order.created_at.isoformat() if order.created_at else "",
        customer_name=order.customer_name,
        customer_phone=order.customer_phone,
        delivery_type=order.delivery_type,
        delivery_address=order.delivery_address,
        payment_method=order.payment_method,
        status=order.status,
        subtotal=order.subtotal,
        delivery_fee=order.delivery_fee,
        total=order.total,
        lines=[
            OrderLineSchema(
                product_name=line.product_name,
                unit_price=line.unit_price,
                quantity=line.quantity,
                options_summary=line.options_summary or "",
                line_total=line.line_total,
            )
            for line in order.ordered_lines()
        ],
    )


@order_router.get("", response_model=list[OrderSchema])
async def list_orders(session: StaffSession = Depends(require_staff)) -> list[OrderSchema]:
    return [_order_schema(order) for order in current_domain.repository_for(Order).list_recent()]


@order_router.get("/{order_id}", response_model=OrderSchema)
async def get_order(order_id: str, session: StaffSession = Depends(require_staff)) -> OrderSchema:
    return _order_schema(current_domain.repository_for(Order).get(order_id))


@order_router.put("/{order_id}/status", response_model=TransitionResponse)
async def transition_order(
    order_id: str, body: TransitionRequest, session: StaffSession = Depends(require_staff)
) -> TransitionResponse:
    status = submit(TransitionOrder(order_id=order_id, status=body.status, requested_by=session.staff_name))
    return TransitionResponse(order_id=order_id, status=status)
