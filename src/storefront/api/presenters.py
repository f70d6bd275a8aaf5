"""Aggregate → response schema conversion shared by several routers."""

from storefront.api.schemas import (
    OrderItemResponse,
    OrderResponse,
    ProductRequestResponse,
    ProductResponse,
    ShippingAddressSchema,
    UserResponse,
)


def user_response(user) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        profile_image_url=user.profile_image_url,
        is_admin=bool(user.is_admin),
    )


def product_response(product) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        description=product.description,
        price=product.price,
        image_url=product.image_url,
        category=product.category,
        stock=product.stock or 0,
        is_active=bool(product.is_active),
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def order_response(order) -> OrderResponse:
    address = order.shipping_address
    return OrderResponse(
        id=str(order.id),
        user_id=str(order.user_id),
        status=order.status,
        subtotal=order.subtotal,
        tax=order.tax,
        shipping=order.shipping,
        total=order.total,
        currency=order.currency,
        payment_intent_id=order.payment_intent_id,
        shipping_address=(
            ShippingAddressSchema(
                name=address.name,
                email=address.email,
                address=address.address,
                city=address.city,
                state=address.state,
                zip_code=address.zip_code,
            )
            if address
            else None
        ),
        items=[
            OrderItemResponse(
                id=str(item.id),
                product_id=str(item.product_id),
                product_name=item.product_name,
                quantity=item.quantity,
                price=item.price,
            )
            for item in order.items
        ],
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def product_request_response(request) -> ProductRequestResponse:
    return ProductRequestResponse(
        id=str(request.id),
        user_id=str(request.user_id),
        description=request.description,
        quantity=request.quantity,
        budget_range=request.budget_range,
        email=request.email,
        status=request.status,
        admin_response=request.admin_response,
        quoted_price=request.quoted_price,
        created_at=request.created_at,
        updated_at=request.updated_at,
    )
