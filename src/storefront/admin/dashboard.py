"""Back-office dashboard figures."""

from dataclasses import dataclass, field
from decimal import Decimal

from protean.utils.globals import current_domain

from storefront import config
from storefront.catalogue.product import Product
from storefront.order.order import Order, OrderStatus
from storefront.shared.money import quantize, to_decimal
from storefront.sourcing.product_request import ProductRequest


@dataclass(frozen=True)
class DashboardStats:
    total_revenue: Decimal
    total_orders: int
    pending_requests: int
    low_stock_products: list = field(default_factory=list)
    recent_orders: list = field(default_factory=list)
    recent_requests: list = field(default_factory=list)


def dashboard_stats() -> DashboardStats:
    """Revenue counts every order that was not cancelled."""
    # Every order, not a page of them: the figures are totals
    orders = current_domain.repository_for(Order).recent()
    requests = current_domain.repository_for(ProductRequest)
    limit = config.recent_activity_limit()

    revenue = sum(
        (to_decimal(o.total) for o in orders if o.status != OrderStatus.CANCELLED.value),
        Decimal("0"),
    )
    return DashboardStats(
        total_revenue=quantize(revenue),
        total_orders=len(orders),
        pending_requests=len(requests.pending()),
        low_stock_products=current_domain.repository_for(Product).low_stock(config.low_stock_threshold()),
        recent_orders=orders[:limit],
        recent_requests=requests.recent(limit=limit),
    )
