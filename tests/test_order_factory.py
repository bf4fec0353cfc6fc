from decimal import Decimal

import pydantic
import pytest

from pear_store.core.errors import EmptyCartError, ValidationError
from pear_store.models.cart import OrderMode
from pear_store.models.order import DeliveryOption
from pear_store.services.order_factory import OrderFactory

from tests.helpers import FakeClock


class TestPlaceOrder:
    def test_empty_cart_is_rejected(self, ledger, clock):
        factory = OrderFactory(clock=clock)

        with pytest.raises(EmptyCartError):
            factory.place_order(ledger, OrderMode.RETAIL, DeliveryOption.STANDARD)

    def test_empty_cart_error_is_validation_error(self):
        assert issubclass(EmptyCartError, ValidationError)

    def test_order_captures_cart_mode_and_delivery(self, ledger, phone_x, clock):
        ledger.add(phone_x, 2)
        created_at = clock.now

        order = OrderFactory(clock=clock).place_order(
            ledger, OrderMode.WHOLESALE, DeliveryOption.EXPRESS
        )

        assert order.total == Decimal("1500.00")
        assert order.order_mode == OrderMode.WHOLESALE
        assert order.delivery_option == DeliveryOption.EXPRESS
        assert order.created_at == created_at
        assert [(line.product.id, line.quantity) for line in order.items] == [(phone_x.id, 2)]
        assert order.order_id.startswith("ORD-")

    def test_order_is_frozen_against_cart_changes(self, ledger, phone_x, phone_y, clock):
        ledger.add(phone_x, 2)
        order = OrderFactory(clock=clock).place_order(
            ledger, OrderMode.RETAIL, DeliveryOption.STANDARD
        )

        ledger.add(phone_x, 5)
        ledger.add(phone_y, 1)
        ledger.set_quantity(phone_x.id, 0)
        ledger.clear()

        assert order.total == Decimal("1998.00")
        assert len(order.items) == 1
        assert order.items[0].quantity == 2

    def test_order_record_cannot_be_reassigned(self, ledger, phone_x, clock):
        ledger.add(phone_x, 1)
        order = OrderFactory(clock=clock).place_order(
            ledger, OrderMode.RETAIL, DeliveryOption.PICKUP
        )

        with pytest.raises(pydantic.ValidationError):
            order.total = Decimal("1")

    def test_ids_unique_within_one_clock_tick(self, ledger, phone_x):
        frozen = FakeClock()
        frozen.step = frozen.step * 0
        factory = OrderFactory(clock=frozen)
        ledger.add(phone_x, 1)

        ids = {
            factory.place_order(ledger, OrderMode.RETAIL, DeliveryOption.STANDARD).order_id
            for _ in range(5)
        }

        assert len(ids) == 5

    def test_ids_unique_across_factories(self, ledger, phone_x):
        frozen = FakeClock()
        frozen.step = frozen.step * 0
        ledger.add(phone_x, 1)

        first = OrderFactory(clock=frozen).place_order(ledger, OrderMode.RETAIL, DeliveryOption.STANDARD)
        second = OrderFactory(clock=frozen).place_order(ledger, OrderMode.RETAIL, DeliveryOption.STANDARD)

        assert first.order_id != second.order_id
