import random

import pytest

from pear_store.core.errors import EmptyCartError, OrderInProgressError
from pear_store.core.session import SessionManager
from pear_store.database.orders import OrderDatabase
from pear_store.models.order import OrderStatus
from pear_store.services.checkout import Checkout
from pear_store.services.order_factory import OrderFactory
from pear_store.services.status_engine import StatusProgressionEngine

from tests.helpers import GatedSleep, RecordingSleep, wait_until


@pytest.fixture
def sessions(catalog):
    return SessionManager(product_lookup=catalog.get)


@pytest.fixture
def order_db():
    return OrderDatabase()


def make_checkout(provider, sleep, clock, order_db):
    engine = StatusProgressionEngine(provider=provider, sleep=sleep, clock=clock, rng=random.Random(3))
    return Checkout(factory=OrderFactory(clock=clock), engine=engine, order_db=order_db)


class TestPlaceOrder:
    @pytest.mark.asyncio
    async def test_place_order_starts_tracking(self, sessions, order_db, provider, clock, phone_x):
        checkout = make_checkout(provider, RecordingSleep(), clock, order_db)
        session = sessions.create_session()
        session.cart.add(phone_x, 2)

        order = checkout.place_order(session)

        assert session.current_order == order
        assert session.status_updates[0].status == OrderStatus.PLACED
        assert session.progress_task is not None
        assert order_db.get_order(order.order_id).updates is session.status_updates

        await session.progress_task
        assert session.latest_status == OrderStatus.DELIVERED
        assert order_db.get_order(order.order_id).tracking().is_complete

    @pytest.mark.asyncio
    async def test_empty_cart_produces_no_order(self, sessions, order_db, provider, clock):
        checkout = make_checkout(provider, RecordingSleep(), clock, order_db)
        session = sessions.create_session()

        with pytest.raises(EmptyCartError):
            checkout.place_order(session)

        assert session.current_order is None
        assert session.status_updates == []
        assert order_db.list_orders() == []

    @pytest.mark.asyncio
    async def test_second_order_refused_while_active(self, sessions, order_db, provider, clock, phone_x):
        checkout = make_checkout(provider, RecordingSleep(), clock, order_db)
        session = sessions.create_session()
        session.cart.add(phone_x, 1)
        first = checkout.place_order(session)
        await session.progress_task

        with pytest.raises(OrderInProgressError):
            checkout.place_order(session)

        assert session.current_order == first
        assert len(order_db.list_orders()) == 1


class TestNewOrder:
    @pytest.mark.asyncio
    async def test_new_order_cancels_running_progression(self, sessions, order_db, provider, clock, phone_x):
        sleep = GatedSleep(open_calls=1)
        checkout = make_checkout(provider, sleep, clock, order_db)
        session = sessions.create_session()
        session.cart.add(phone_x, 1)
        order = checkout.place_order(session)
        task = session.progress_task
        assert await wait_until(lambda: len(sleep.delays) == 2)

        await checkout.new_order(session)

        assert task.cancelled()
        assert session.current_order is None
        assert session.status_updates == []
        assert session.cart.is_empty
        record = order_db.get_order(order.order_id)
        assert [u.status for u in record.updates] == [OrderStatus.PLACED, OrderStatus.PROCESSING]

    @pytest.mark.asyncio
    async def test_new_order_after_delivery_allows_next_order(self, sessions, order_db, provider, clock, phone_x, phone_y):
        checkout = make_checkout(provider, RecordingSleep(), clock, order_db)
        session = sessions.create_session()
        session.cart.add(phone_x, 1)
        first = checkout.place_order(session)
        await session.progress_task

        await checkout.new_order(session)
        session.cart.add(phone_y, 2)
        second = checkout.place_order(session)
        await session.progress_task

        assert second.order_id != first.order_id
        assert first.items[0].product.id == phone_x.id
        assert order_db.get_order(first.order_id).tracking().current_status == OrderStatus.DELIVERED
        assert [r.order.order_id for r in order_db.list_orders()] == [second.order_id, first.order_id]
