"""Catalog API routes"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from ..core.errors import StoreError
from ..database.products import ProductDatabase
from ..dependencies import get_message_provider, get_product_db
from ..models.cart import OrderMode
from ..models.product import (
    CreateProductRequest,
    Product,
    ProductSort,
    StockUpdateRequest,
)
from ..services.message_provider import MessageProvider
from .errors import http_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/phones", tags=["Phones"])


@router.get("", response_model=list[Product])
async def list_phones(
    sort: ProductSort = Query(ProductSort.NAME_ASC, description="Sort order"),
    in_stock_only: bool = Query(False, description="Only show in-stock phones"),
    mode: OrderMode = Query(OrderMode.RETAIL, description="Price used for price sorting"),
    products: ProductDatabase = Depends(get_product_db),
):
    """List phones in the catalog"""
    return products.list_products(sort=sort, in_stock_only=in_stock_only, mode=mode)


@router.get("/{product_id}", response_model=Product)
async def get_phone(
    product_id: int,
    products: ProductDatabase = Depends(get_product_db),
):
    """Get a phone by ID"""
    product = products.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Phone not found")
    return product


@router.post("", response_model=Product, status_code=201)
async def add_phone(
    request: CreateProductRequest,
    products: ProductDatabase = Depends(get_product_db),
    provider: MessageProvider = Depends(get_message_provider),
):
    """
    Add a phone to the catalog.

    The description is generated from the phone's name.
    """
    description = await provider.product_description(request.name)
    return products.create_product(request, description)


@router.put("/{product_id}/stock", response_model=Product)
async def update_stock(
    product_id: int,
    request: StockUpdateRequest,
    products: ProductDatabase = Depends(get_product_db),
):
    """Overwrite a phone's stock count"""
    try:
        return products.set_stock(product_id, request.stock)
    except StoreError as e:
        logger.warning(f"Error updating stock for phone {product_id}: {e}")
        raise http_error(e)
