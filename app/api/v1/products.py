"""
==============================================================================
Product Catalog Endpoints
==============================================================================

CRUD and search endpoints for the product catalog.

Access:
-------
- Reads (GET): user or admin role
- Writes (POST, PUT, DELETE): admin role

Static paths (/search, /price/..., /stock/...) are registered before
/{product_id} so they are not captured by the id route.

==============================================================================
"""

from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.db.models import Product, User
from app.catalog.validation import INTEGER_MAX, INTEGER_MIN
from app.core.dependencies import require_admin, require_user
from app.core import exceptions
from app.services.product_service import ProductService
from app.services.results import MutationResult, NotFound, Ok, ValidationFailed
from app.schemas.common import ERROR_RESPONSES
from app.schemas.product import ProductRequest, ProductResponse
from app.utils.audit_logger import get_audit_logger


router = APIRouter(prefix="/products", tags=["Products"])


class ProductController:
    """Controller for product catalog operations."""

    def __init__(self, db: Session):
        self._service = ProductService(db)

    @staticmethod
    def _unwrap(result: MutationResult):
        """Return the Ok value or raise the matching AppException."""
        if isinstance(result, Ok):
            return result.value
        if isinstance(result, ValidationFailed):
            raise exceptions.validation_failed(result.errors)
        if isinstance(result, NotFound):
            raise exceptions.product_not_found(result.product_id)
        raise exceptions.internal_error()

    def list_products(self) -> List[Product]:
        return self._service.get_all_products()

    def get_product(self, product_id: int) -> Product:
        product = self._service.get_product_by_id(product_id)
        if product is None:
            raise exceptions.product_not_found(product_id, status.HTTP_404_NOT_FOUND)
        return product

    def create_product(self, request: ProductRequest, admin: User) -> Product:
        product = self._unwrap(self._service.create_product(request))
        get_audit_logger().log_product_addition(product.id, product.name, admin.username)
        return product

    def update_product(self, product_id: int, request: ProductRequest) -> Product:
        return self._unwrap(self._service.update_product(product_id, request))

    def delete_product(self, product_id: int) -> None:
        self._unwrap(self._service.delete_product(product_id))

    def search_by_name(self, name: str) -> List[Product]:
        return self._service.search_products_by_name(name)

    def search_by_name_and_stock(self, name: str, stock: int) -> List[Product]:
        return self._service.find_products_by_name_and_stock_greater_than(name, stock)

    def filter_by_min_price(self, price: Decimal) -> List[Product]:
        return self._service.find_products_by_price_greater_than_equal(price)

    def filter_by_price_range(self, min_price: Decimal, max_price: Decimal) -> List[Product]:
        return self._service.find_products_by_price_between(min_price, max_price)

    def filter_by_max_stock(self, stock: int) -> List[Product]:
        return self._service.find_products_by_stock_less_than(stock)


# =============================================================================
# COLLECTION
# =============================================================================

@router.get("", response_model=List[ProductResponse], responses=ERROR_RESPONSES)
async def list_products(
    user: User = Depends(require_user),
    db: Session = Depends(get_db)
):
    """List every product in the catalog."""
    controller = ProductController(db)
    return controller.list_products()


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES
)
async def create_product(
    request: ProductRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """
    Create a product.

    Any id in the body is ignored; the store assigns a new one.
    """
    controller = ProductController(db)
    return controller.create_product(request, admin)


# =============================================================================
# SEARCH AND FILTERS
# =============================================================================

@router.get("/search", response_model=List[ProductResponse], responses=ERROR_RESPONSES)
async def search_products(
    name: str = Query(...),
    user: User = Depends(require_user),
    db: Session = Depends(get_db)
):
    """Case-insensitive substring search on product name."""
    controller = ProductController(db)
    return controller.search_by_name(name)


@router.get("/search/stock", response_model=List[ProductResponse], responses=ERROR_RESPONSES)
async def search_products_in_stock(
    name: str = Query(...),
    stock: int = Query(..., ge=INTEGER_MIN, le=INTEGER_MAX),
    user: User = Depends(require_user),
    db: Session = Depends(get_db)
):
    """Name search restricted to products with stock strictly above the threshold."""
    controller = ProductController(db)
    return controller.search_by_name_and_stock(name, stock)


@router.get("/price/min", response_model=List[ProductResponse], responses=ERROR_RESPONSES)
async def products_by_min_price(
    price: Decimal = Query(...),
    user: User = Depends(require_user),
    db: Session = Depends(get_db)
):
    """Products priced at or above the given amount."""
    controller = ProductController(db)
    return controller.filter_by_min_price(price)


@router.get("/price/range", response_model=List[ProductResponse], responses=ERROR_RESPONSES)
async def products_by_price_range(
    min_price: Decimal = Query(..., alias="minPrice"),
    max_price: Decimal = Query(..., alias="maxPrice"),
    user: User = Depends(require_user),
    db: Session = Depends(get_db)
):
    """Products priced within [minPrice, maxPrice]; an inverted range matches nothing."""
    controller = ProductController(db)
    return controller.filter_by_price_range(min_price, max_price)


@router.get("/stock/max", response_model=List[ProductResponse], responses=ERROR_RESPONSES)
async def products_by_max_stock(
    stock: int = Query(..., ge=INTEGER_MIN, le=INTEGER_MAX),
    user: User = Depends(require_user),
    db: Session = Depends(get_db)
):
    """Products with stock strictly below the given level."""
    controller = ProductController(db)
    return controller.filter_by_max_stock(stock)


# =============================================================================
# SINGLE PRODUCT
# =============================================================================

@router.get("/{product_id}", response_model=ProductResponse, responses=ERROR_RESPONSES)
async def get_product(
    product_id: int = Path(..., ge=INTEGER_MIN, le=INTEGER_MAX),
    user: User = Depends(require_user),
    db: Session = Depends(get_db)
):
    """Get a product by id (404 when absent)."""
    controller = ProductController(db)
    return controller.get_product(product_id)


@router.put("/{product_id}", response_model=ProductResponse, responses=ERROR_RESPONSES)
async def update_product(
    request: ProductRequest,
    product_id: int = Path(..., ge=INTEGER_MIN, le=INTEGER_MAX),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Replace all fields of a product, keeping its id."""
    controller = ProductController(db)
    return controller.update_product(product_id, request)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=ERROR_RESPONSES
)
async def delete_product(
    product_id: int = Path(..., ge=INTEGER_MIN, le=INTEGER_MAX),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Delete a product."""
    controller = ProductController(db)
    controller.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
