"""Shopper session API routes: cart, pricing mode, checkout and tracking"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..core.errors import StoreError
from ..core.session import SessionManager, StoreSession
from ..database.products import ProductDatabase
from ..dependencies import get_checkout, get_product_db, get_session_manager
from ..models.cart import (
    AddToCartRequest,
    CartLineView,
    CartView,
    OrderModeRequest,
    SetQuantityRequest,
)
from ..models.order import DeliveryOptionRequest, OrderTracking, SessionView
from ..services.checkout import Checkout
from ..services.pricing import line_total, price
from .errors import http_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sessions", tags=["Sessions"])


def cart_view(session: StoreSession) -> CartView:
    """Price the session's cart in its current order mode"""
    mode = session.order_mode
    return CartView(
        order_mode=mode,
        lines=[
            CartLineView(
                product=line.product,
                quantity=line.quantity,
                unit_price=price(line.product, mode),
                line_total=line_total(line.product, line.quantity, mode),
            )
            for line in session.cart
        ],
        item_count=session.cart.item_count,
        total=session.cart.total(mode),
    )


def session_view(session: StoreSession) -> SessionView:
    tracking = None
    if session.current_order is not None:
        tracking = OrderTracking.build(session.current_order, session.status_updates)
    return SessionView(
        session_id=session.session_id,
        created_at=session.created_at,
        updated_at=session.updated_at,
        cart=cart_view(session),
        delivery_option=session.delivery_option,
        order=tracking,
    )


def get_store_session(
    session_id: str,
    sessions: SessionManager = Depends(get_session_manager),
) -> StoreSession:
    """Resolve the session named in the path"""
    session = sessions.get_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.post("", response_model=SessionView, status_code=201)
async def create_session(sessions: SessionManager = Depends(get_session_manager)):
    """Start a new shopper session with an empty cart"""
    return session_view(sessions.create_session())


@router.get("/{session_id}", response_model=SessionView)
async def get_session(session: StoreSession = Depends(get_store_session)):
    """Get the session's cart, delivery choice and active order"""
    return session_view(session)


@router.delete("/{session_id}", status_code=204)
async def delete_session(
    session_id: str,
    sessions: SessionManager = Depends(get_session_manager),
):
    """End a session, stopping any order progression it runs"""
    if not await sessions.delete_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found")


@router.post("/{session_id}/cart/items", response_model=SessionView)
async def add_to_cart(
    request: AddToCartRequest,
    session: StoreSession = Depends(get_store_session),
    products: ProductDatabase = Depends(get_product_db),
):
    """Add units of a phone to the cart"""
    product = products.get_product(request.product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Phone not found")

    try:
        session.cart.add(product, request.quantity)
    except StoreError as e:
        raise http_error(e)

    session.touch()
    return session_view(session)


@router.put("/{session_id}/cart/items/{product_id}", response_model=SessionView)
async def set_cart_quantity(
    product_id: int,
    request: SetQuantityRequest,
    session: StoreSession = Depends(get_store_session),
):
    """Set a line's quantity; zero or less removes the line"""
    try:
        session.cart.set_quantity(product_id, request.quantity)
    except StoreError as e:
        raise http_error(e)

    session.touch()
    return session_view(session)


@router.delete("/{session_id}/cart/items/{product_id}", response_model=SessionView)
async def remove_from_cart(
    product_id: int,
    session: StoreSession = Depends(get_store_session),
):
    """Remove a phone from the cart"""
    session.cart.remove(product_id)
    session.touch()
    return session_view(session)


@router.delete("/{session_id}/cart", response_model=SessionView)
async def clear_cart(session: StoreSession = Depends(get_store_session)):
    """Clear all items from cart"""
    session.cart.clear()
    session.touch()
    return session_view(session)


@router.put("/{session_id}/mode", response_model=SessionView)
async def set_order_mode(
    request: OrderModeRequest,
    session: StoreSession = Depends(get_store_session),
):
    """Switch between retail and wholesale pricing"""
    session.set_order_mode(request.mode)
    return session_view(session)


@router.put("/{session_id}/delivery", response_model=SessionView)
async def set_delivery_option(
    request: DeliveryOptionRequest,
    session: StoreSession = Depends(get_store_session),
):
    """Choose how the order will be delivered"""
    session.set_delivery_option(request.delivery_option)
    return session_view(session)


@router.post("/{session_id}/orders", response_model=OrderTracking, status_code=201)
async def place_order(
    session: StoreSession = Depends(get_store_session),
    checkout: Checkout = Depends(get_checkout),
):
    """
    Place an order from the cart.

    Returns the order with its Placed update; later statuses appear on
    ``GET /api/sessions/{session_id}/order`` as the order progresses.
    """
    try:
        order = checkout.place_order(session)
    except StoreError as e:
        raise http_error(e)
    return OrderTracking.build(order, session.status_updates)


@router.get("/{session_id}/order", response_model=OrderTracking)
async def get_active_order(session: StoreSession = Depends(get_store_session)):
    """Track the session's active order"""
    if session.current_order is None:
        raise HTTPException(status_code=404, detail="No active order")
    return OrderTracking.build(session.current_order, session.status_updates)


@router.post("/{session_id}/orders/new", response_model=SessionView)
async def start_new_order(
    session: StoreSession = Depends(get_store_session),
    checkout: Checkout = Depends(get_checkout),
):
    """Leave the tracking view: stop progression, clear order and cart"""
    await checkout.new_order(session)
    return session_view(session)
