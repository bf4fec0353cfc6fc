"""Order lookup API routes"""

from fastapi import APIRouter, Depends, HTTPException, Query

from ..database.orders import OrderDatabase
from ..dependencies import get_order_db
from ..models.order import OrderTracking

router = APIRouter(prefix="/api/orders", tags=["Orders"])


@router.get("", response_model=list[OrderTracking])
async def list_orders(
    limit: int = Query(50, ge=1, le=200),
    orders: OrderDatabase = Depends(get_order_db),
):
    """List recent orders, newest first"""
    return [record.tracking() for record in orders.list_orders(limit=limit)]


@router.get("/{order_id}", response_model=OrderTracking)
async def get_order(
    order_id: str,
    orders: OrderDatabase = Depends(get_order_db),
):
    """Get order details and its status timeline"""
    record = orders.get_order(order_id)
    if not record:
        raise HTTPException(status_code=404, detail="Order not found")
    return record.tracking()
