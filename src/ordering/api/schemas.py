"""Pydantic request/response schemas for the ordering API.

These are external contracts (anti-corruption layer), separate from the
internal Protean commands.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Menu
# ---------------------------------------------------------------------------
class ModifierSchema(BaseModel):
    modifier_id: str
    name: str
    price: float


class ModifierGroupSchema(BaseModel):
    group_id: str
    name: str
    min_selection: int
    max_selection: int
    required: bool = False
    modifiers: list[ModifierSchema] = []


class ProductSchema(BaseModel):
    product_id: str
    name: str
    description: str | None = None
    price: float
    category: str | None = None
    image_url: str | None = None
    groups: list[ModifierGroupSchema] = []


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class CreateCartRequest(BaseModel):
    session_id: str | None = None


class CartIdResponse(BaseModel):
    cart_id: str


class AddCartLineRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)
    selections: dict[str, list[str]] = Field(default_factory=dict)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "b2c3d4e5-f6a7-8901-bcde-f12345678901",
                    "quantity": 2,
                    "selections": {"c3d4e5f6-a7b8-9012-cdef-123456789012": ["bread-brioche"]},
                }
            ]
        }
    }


class LineIdResponse(BaseModel):
    line_id: str


class UpdateLineQuantityRequest(BaseModel):
    new_quantity: int = Field(ge=1)


class SelectModifierRequest(BaseModel):
    group_id: str
    modifier_id: str


class SelectionResponse(BaseModel):
    group_id: str
    selected: list[str]


class CartLineSchema(BaseModel):
    line_id: str
    product_id: str
    product_name: str
    unit_price: float
    quantity: int
    selections: dict[str, list[str]]
    options_summary: str
    total_price: float
    groups: list[ModifierGroupSchema] = []


class CartResponse(BaseModel):
    cart_id: str
    status: str
    lines: list[CartLineSchema]
    subtotal: float
    problems: list[str] = []


class CheckoutRequest(BaseModel):
    customer_name: str = ""
    customer_phone: str = ""
    delivery_type: str = Field(description="delivery or pickup")
    street: str | None = None
    number: str | None = None
    complement: str | None = None
    payment_method: str = Field(description="pix, credit, debit or cash")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "customer_name": "Ana Lima",
                    "customer_phone": "85988887777",
                    "delivery_type": "delivery",
                    "street": "Rua das Flores",
                    "number": "42",
                    "complement": "apt 3",
                    "payment_method": "pix",
                }
            ]
        }
    }


class CheckoutResponse(BaseModel):
    order_id: str
    total: float


# ---------------------------------------------------------------------------
# Orders (staff)
# ---------------------------------------------------------------------------
class OrderLineSchema(BaseModel):
    product_name: str
    unit_price: float
    quantity: int
    options_summary: str
    line_total: float


class OrderSchema(BaseModel):
    order_id: str
    created_at: str
    customer_name: str
    customer_phone: str
    delivery_type: str
    delivery_address: str | None = None
    payment_method: str
    status: str
    subtotal: float
    delivery_fee: float
    total: float
    lines: list[OrderLineSchema]


class TransitionRequest(BaseModel):
    status: str = Field(description="Target status")

    model_config = {"json_schema_extra": {"examples": [{"status": "preparing"}]}}


class TransitionResponse(BaseModel):
    order_id: str
    status: str


class StatusResponse(BaseModel):
    status: str = "ok"
