from decimal import Decimal

import pytest

from pear_store.core.errors import InvalidStockError, NotFoundError
from pear_store.database.products import SEED_PRODUCTS, ProductDatabase
from pear_store.models.cart import OrderMode
from pear_store.models.product import CreateProductRequest, ProductSort


@pytest.fixture
def products():
    return ProductDatabase(seed=SEED_PRODUCTS)


class TestCatalog:
    def test_seed_assigns_sequential_ids(self, products):
        assert [p.id for p in products.get_all_products()] == [1, 2, 3, 4, 5, 6]
        assert products.get_product(1).name == "Quantum X1"
        assert products.get_product(1).retail_price == Decimal("999.00")

    def test_name_sorting(self, products):
        names = [p.name for p in products.list_products(sort=ProductSort.NAME_ASC)]
        assert names == sorted(names, key=str.lower)

        names = [p.name for p in products.list_products(sort=ProductSort.NAME_DESC)]
        assert names == sorted(names, key=str.lower, reverse=True)

    def test_price_sorting_uses_mode(self, products):
        wholesale = products.list_products(sort=ProductSort.PRICE_ASC, mode=OrderMode.WHOLESALE)
        prices = [p.wholesale_price for p in wholesale]
        assert prices == sorted(prices)

        retail = products.list_products(sort=ProductSort.PRICE_DESC, mode=OrderMode.RETAIL)
        assert retail[0].name == "Galaxy Fold Z5"
        assert retail[-1].name == "Nova Spark"

    def test_in_stock_filter(self, products):
        products.set_stock(2, 0)

        listed = products.list_products(in_stock_only=True)

        assert 2 not in [p.id for p in listed]
        assert len(listed) == 5


class TestCreate:
    def test_create_assigns_next_id_and_description(self, products):
        request = CreateProductRequest(
            name="Zeta",
            image_url="https://example.com/zeta.png",
            retail_price=Decimal("599"),
            wholesale_price=Decimal("450"),
            stock=10,
        )

        product = products.create_product(request, "Zeta description")

        assert product.id == 7
        assert product.description == "Zeta description"
        assert products.get_product(7) == product


class TestStock:
    def test_set_stock_returns_updated_product(self, products):
        updated = products.set_stock(1, 42)

        assert updated.stock == 42
        assert products.get_product(1).stock == 42

    @pytest.mark.parametrize("value", [-1, "5", 2.5, True])
    def test_invalid_stock_rejected(self, products, value):
        with pytest.raises(InvalidStockError):
            products.set_stock(1, value)
        assert products.get_product(1).stock == 150

    def test_unknown_product(self, products):
        with pytest.raises(NotFoundError):
            products.set_stock(99, 1)
