"""Pydantic request/response schemas for the storefront API.

These are the external contracts, separate from the internal Protean
commands. JSON keys are camelCase on the wire; Python attributes stay
snake_case, and requests accept either spelling.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------
class IdResponse(ApiModel):
    id: str


class StatusResponse(ApiModel):
    status: str = "ok"


class ShippingAddressSchema(ApiModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip_code: str = Field(min_length=1)


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------
class RegisterRequest(ApiModel):
    email: str
    password: str
    first_name: str | None = None
    last_name: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "jane@example.com",
                    "password": "correct-horse",
                    "firstName": "Jane",
                    "lastName": "Doe",
                }
            ]
        }
    }


class LoginRequest(ApiModel):
    email: str
    password: str


class ExternalLoginRequest(ApiModel):
    token: str = Field(min_length=1)


class UserResponse(ApiModel):
    id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    is_admin: bool = False


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class ProductResponse(ApiModel):
    id: str
    name: str
    description: str | None = None
    price: str
    image_url: str | None = None
    category: str | None = None
    stock: int = 0
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CreateProductRequest(ApiModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    price: str
    image_url: str | None = None
    category: str | None = None
    stock: int = Field(default=0, ge=0)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Widget",
                    "description": "A very useful widget",
                    "price": "10.00",
                    "imageUrl": "https://cdn.example.com/widget.jpg",
                    "category": "gadgets",
                    "stock": 25,
                }
            ]
        }
    }


class UpdateProductRequest(ApiModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    price: str | None = None
    image_url: str | None = None
    category: str | None = None
    stock: int | None = Field(default=None, ge=0)
    is_active: bool | None = None


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(ApiModel):
    product_id: str
    quantity: int = Field(default=1, ge=1)


class UpdateCartItemRequest(ApiModel):
    quantity: int = Field(ge=1)


class CartProductSchema(ApiModel):
    name: str
    price: str
    image_url: str | None = None
    stock: int = 0
    is_active: bool = True


class CartItemResponse(ApiModel):
    id: str
    product_id: str
    quantity: int
    line_total: str
    product: CartProductSchema


class CartResponse(ApiModel):
    items: list[CartItemResponse] = []
    item_count: int = 0
    subtotal: str = "0.00"


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
class CheckoutSummaryResponse(ApiModel):
    subtotal: str
    tax: str
    shipping: str
    total: str
    item_count: int
    currency: str


class PaymentIntentResponse(ApiModel):
    client_secret: str
    payment_intent_id: str
    amount: str
    currency: str


class CreateOrderRequest(ApiModel):
    payment_intent_id: str
    shipping_address: ShippingAddressSchema

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "paymentIntentId": "pi_3Nk2...",
                    "shippingAddress": {
                        "name": "Jane Doe",
                        "email": "jane@example.com",
                        "address": "123 Main St",
                        "city": "Springfield",
                        "state": "IL",
                        "zipCode": "62701",
                    },
                }
            ]
        }
    }


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderItemResponse(ApiModel):
    id: str
    product_id: str
    product_name: str
    quantity: int
    price: str


class OrderResponse(ApiModel):
    id: str
    user_id: str
    status: str
    subtotal: str
    tax: str
    shipping: str
    total: str
    currency: str | None = None
    payment_intent_id: str
    shipping_address: ShippingAddressSchema | None = None
    items: list[OrderItemResponse] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UpdateOrderStatusRequest(ApiModel):
    status: str


# ---------------------------------------------------------------------------
# Product requests
# ---------------------------------------------------------------------------
class SubmitProductRequestRequest(ApiModel):
    description: str = Field(min_length=1)
    quantity: int | None = Field(default=None, ge=1)
    budget_range: str | None = None
    email: str


class RespondToProductRequestRequest(ApiModel):
    status: str
    admin_response: str | None = None
    quoted_price: str | None = None


class ProductRequestResponse(ApiModel):
    id: str
    user_id: str
    description: str
    quantity: int | None = None
    budget_range: str | None = None
    email: str
    status: str
    admin_response: str | None = None
    quoted_price: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------
class ConfigureGatewayRequest(ApiModel):
    should_succeed: bool = True
    failure_reason: str = "Card declined"
    unavailable: bool = False


class GatewayConfigResponse(ApiModel):
    gateway: str
    should_succeed: bool
    failure_reason: str
    unavailable: bool


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------
class DashboardResponse(ApiModel):
    total_revenue: str
    total_orders: int
    pending_requests: int
    low_stock_products: list[ProductResponse] = []
    recent_orders: list[OrderResponse] = []
    recent_requests: list[ProductRequestResponse] = []
