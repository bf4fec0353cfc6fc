from decimal import Decimal

import pytest

from pear_store.models.product import Product
from pear_store.services.cart_ledger import CartLedger

from tests.helpers import FakeClock, RecordingSleep, ScriptedProvider


@pytest.fixture
def phone_x():
    return Product(
        id=1,
        name="Quantum X1",
        image_url="https://picsum.photos/seed/qx1/400/400",
        retail_price=Decimal("999"),
        wholesale_price=Decimal("750"),
        stock=150,
    )


@pytest.fixture
def phone_y():
    return Product(
        id=2,
        name="Nova Spark",
        retail_price=Decimal("349.00"),
        wholesale_price=Decimal("250.00"),
        stock=300,
    )


@pytest.fixture
def catalog(phone_x, phone_y):
    return {p.id: p for p in (phone_x, phone_y)}


@pytest.fixture
def ledger(catalog):
    return CartLedger(product_lookup=catalog.get)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def provider():
    return ScriptedProvider()
