"""In-memory phone catalog"""

import itertools
import logging
from decimal import Decimal
from typing import Iterable, Optional

from ..core.config import settings
from ..core.errors import InvalidStockError, NotFoundError
from ..models.cart import OrderMode
from ..models.product import CreateProductRequest, Product, ProductSort
from ..services.pricing import price

logger = logging.getLogger(__name__)

# Default catalog
SEED_PRODUCTS: list[dict] = [
    {
        "name": "Quantum X1",
        "image_url": "https://picsum.photos/seed/qx1/400/400",
        "retail_price": Decimal("999.00"),
        "wholesale_price": Decimal("750.00"),
        "stock": 150,
        "description": "Experience the next leap in mobile technology with the Quantum X1, where unparalleled speed meets a breathtaking display.",
    },
    {
        "name": "Nebula Pro",
        "image_url": "https://picsum.photos/seed/np1/400/400",
        "retail_price": Decimal("1199.00"),
        "wholesale_price": Decimal("900.00"),
        "stock": 80,
        "description": "Capture the cosmos with the Nebula Pro's revolutionary camera system and immerse yourself in its edge-to-edge starlight screen.",
    },
    {
        "name": "Stellar Lite",
        "image_url": "https://picsum.photos/seed/sl1/400/400",
        "retail_price": Decimal("499.00"),
        "wholesale_price": Decimal("380.00"),
        "stock": 250,
        "description": "The Stellar Lite packs a universe of features into a sleek, lightweight design, making premium technology accessible to everyone.",
    },
    {
        "name": "Galaxy Fold Z5",
        "image_url": "https://picsum.photos/seed/gfz5/400/400",
        "retail_price": Decimal("1799.00"),
        "wholesale_price": Decimal("1500.00"),
        "stock": 50,
        "description": "Unfold the future with the Galaxy Fold Z5, where a cinematic tablet experience fits right in your pocket.",
    },
    {
        "name": "Pixel 8 Pro",
        "image_url": "https://picsum.photos/seed/p8p/400/400",
        "retail_price": Decimal("1099.00"),
        "wholesale_price": Decimal("850.00"),
        "stock": 120,
        "description": "With the power of Google AI, the Pixel 8 Pro's camera makes every photo a masterpiece, effortlessly.",
    },
    {
        "name": "Nova Spark",
        "image_url": "https://picsum.photos/seed/ns1/400/400",
        "retail_price": Decimal("349.00"),
        "wholesale_price": Decimal("250.00"),
        "stock": 300,
        "description": "Ignite your creativity with the Nova Spark, the vibrant and powerful companion for your everyday adventures.",
    },
]


class ProductDatabase:
    """In-memory product catalog with integer ids assigned in creation order"""

    def __init__(self, seed: Optional[Iterable[dict]] = None):
        self.products: dict[int, Product] = {}
        self._ids = itertools.count(1)
        for data in seed or ():
            self._insert(**data)

    def _insert(self, **fields) -> Product:
        product = Product(id=next(self._ids), **fields)
        self.products[product.id] = product
        return product

    def get_product(self, product_id: int) -> Optional[Product]:
        """Get a product by ID"""
        return self.products.get(product_id)

    def list_products(
        self,
        sort: ProductSort = ProductSort.NAME_ASC,
        in_stock_only: bool = False,
        mode: OrderMode = OrderMode.RETAIL,
    ) -> list[Product]:
        """
        List products for the storefront.

        Price sorting uses the unit price of ``mode``, so the order follows
        whatever price the shopper is currently seeing.
        """
        results = list(self.products.values())

        if in_stock_only:
            results = [p for p in results if p.in_stock]

        if sort in (ProductSort.PRICE_ASC, ProductSort.PRICE_DESC):
            results.sort(key=lambda p: price(p, mode), reverse=sort == ProductSort.PRICE_DESC)
        else:
            results.sort(key=lambda p: p.name.lower(), reverse=sort == ProductSort.NAME_DESC)

        return results

    def get_all_products(self) -> list[Product]:
        """Get all products in id order"""
        return list(self.products.values())

    def create_product(self, request: CreateProductRequest, description: str) -> Product:
        """Add a phone to the catalog"""
        product = self._insert(
            name=request.name,
            image_url=request.image_url,
            retail_price=request.retail_price,
            wholesale_price=request.wholesale_price,
            stock=request.stock,
            description=description,
        )
        logger.info(f"Product {product.id} created: {product.name}")
        return product

    def set_stock(self, product_id: int, stock: int) -> Product:
        """
        Overwrite a product's stock count.

        Raises:
            InvalidStockError: stock is negative or not an integer
            NotFoundError: no product with this id
        """
        if isinstance(stock, bool) or not isinstance(stock, int) or stock < 0:
            raise InvalidStockError(f"Invalid stock value: {stock!r}")

        product = self.products.get(product_id)
        if not product:
            raise NotFoundError(f"Product {product_id} not found")

        updated = product.model_copy(update={"stock": stock})
        self.products[product_id] = updated
        logger.info(f"Stock for product {product_id} set to {stock}")
        return updated


# Singleton instance
product_db = ProductDatabase(seed=SEED_PRODUCTS if settings.seed_catalog else None)
