"""Product models for the phone catalog"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """Phone in the catalog"""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    name: str
    image_url: str = ""
    retail_price: Decimal = Field(ge=0)
    wholesale_price: Decimal = Field(ge=0)
    stock: int = Field(ge=0, default=0)
    description: str = ""

    @property
    def in_stock(self) -> bool:
        return self.stock > 0


class ProductSort(str, Enum):
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"


class CreateProductRequest(BaseModel):
    """Request to add a phone to the catalog"""
    name: str = Field(min_length=1)
    image_url: str = ""
    retail_price: Decimal = Field(ge=0)
    wholesale_price: Decimal = Field(ge=0)
    stock: int = Field(ge=0, default=0)


class StockUpdateRequest(BaseModel):
    """Request to overwrite a phone's stock count"""
    stock: int = Field(ge=0, strict=True)
