"""Back-office routes.

The admin guard is attached once, to the router: every route below is
rejected with 401/403 before its body runs unless the caller is an admin.
"""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.admin.dashboard import dashboard_stats
from storefront.api.paging import Page, page_params
from storefront.api.presenters import order_response, product_request_response, product_response
from storefront.api.schemas import (
    CreateProductRequest,
    DashboardResponse,
    OrderResponse,
    ProductRequestResponse,
    ProductResponse,
    RespondToProductRequestRequest,
    StatusResponse,
    UpdateOrderStatusRequest,
    UpdateProductRequest,
)
from storefront.api.security import Principal, require_admin
from storefront.catalogue.management import CreateProduct, DeactivateProduct, UpdateProduct
from storefront.catalogue.product import Product
from storefront.order.order import Order
from storefront.order.status import UpdateOrderStatus
from storefront.shared.money import format_amount
from storefront.sourcing.product_request import ProductRequest
from storefront.sourcing.response import RespondToProductRequest

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
@router.get("/products", response_model=list[ProductResponse])
async def list_all_products(page: Page = Depends(page_params)) -> list[ProductResponse]:
    """Every product, inactive ones included."""
    products = current_domain.repository_for(Product).everything(limit=page.limit, offset=page.offset)
    return [product_response(p) for p in products]


@router.post("/products", status_code=201, response_model=ProductResponse)
async def create_product(body: CreateProductRequest) -> ProductResponse:
    product_id = current_domain.process(
        CreateProduct(
            name=body.name,
            description=body.description,
            price=body.price,
            image_url=body.image_url,
            category=body.category,
            stock=body.stock,
        ),
        asynchronous=False,
    )
    return product_response(current_domain.repository_for(Product).get(product_id))


@router.put("/products/{product_id}", response_model=ProductResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> ProductResponse:
    current_domain.process(
        UpdateProduct(
            product_id=product_id,
            name=body.name,
            description=body.description,
            price=body.price,
            image_url=body.image_url,
            category=body.category,
            stock=body.stock,
            is_active=body.is_active,
        ),
        asynchronous=False,
    )
    return product_response(current_domain.repository_for(Product).get(product_id))


@router.delete("/products/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str) -> StatusResponse:
    """Soft delete: the product leaves listings but existing orders keep their lines."""
    current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)
    return StatusResponse(status="deactivated")


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@router.get("/orders", response_model=list[OrderResponse])
async def list_all_orders(page: Page = Depends(page_params)) -> list[OrderResponse]:
    orders = current_domain.repository_for(Order).recent(limit=page.limit, offset=page.offset)
    return [order_response(o) for o in orders]


@router.put("/orders/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    admin: Principal = Depends(require_admin),
) -> OrderResponse:
    current_domain.process(
        UpdateOrderStatus(order_id=order_id, status=body.status, changed_by=admin.user_id),
        asynchronous=False,
    )
    return order_response(current_domain.repository_for(Order).get(order_id))


# ---------------------------------------------------------------------------
# Product requests
# ---------------------------------------------------------------------------
@router.get("/product-requests", response_model=list[ProductRequestResponse])
async def list_all_product_requests(page: Page = Depends(page_params)) -> list[ProductRequestResponse]:
    requests = current_domain.repository_for(ProductRequest).recent(limit=page.limit, offset=page.offset)
    return [product_request_response(r) for r in requests]


@router.put("/product-requests/{request_id}", response_model=ProductRequestResponse)
async def respond_to_product_request(
    request_id: str,
    body: RespondToProductRequestRequest,
    admin: Principal = Depends(require_admin),
) -> ProductRequestResponse:
    current_domain.process(
        RespondToProductRequest(
            request_id=request_id,
            status=body.status,
            admin_response=body.admin_response,
            quoted_price=body.quoted_price,
            responded_by=admin.user_id,
        ),
        asynchronous=False,
    )
    return product_request_response(current_domain.repository_for(ProductRequest).get(request_id))


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------
@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard() -> DashboardResponse:
    stats = dashboard_stats()
    return DashboardResponse(
        total_revenue=format_amount(stats.total_revenue),
        total_orders=stats.total_orders,
        pending_requests=stats.pending_requests,
        low_stock_products=[product_response(p) for p in stats.low_stock_products],
        recent_orders=[order_response(o) for o in stats.recent_orders],
        recent_requests=[product_request_response(r) for r in stats.recent_requests],
    )
