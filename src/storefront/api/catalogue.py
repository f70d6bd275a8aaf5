"""Public catalogue routes."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.paging import Page, page_params
from storefront.api.presenters import product_response
from storefront.api.schemas import ProductResponse
from storefront.catalogue.product import Product

router = APIRouter(prefix="/api", tags=["catalogue"])


@router.get("/products", response_model=list[ProductResponse])
async def list_products(category: str | None = None, page: Page = Depends(page_params)) -> list[ProductResponse]:
    """Active products, newest first, optionally narrowed to one category."""
    products = current_domain.repository_for(Product).active(category=category, limit=page.limit, offset=page.offset)
    return [product_response(p) for p in products]


@router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    """A single product. Inactive products still resolve so old order links keep working."""
    return product_response(current_domain.repository_for(Product).get(product_id))


@router.get("/categories", response_model=list[str])
async def list_categories() -> list[str]:
    return current_domain.repository_for(Product).categories()
