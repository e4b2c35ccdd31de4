# catalog_api/models.py
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class Product(BaseModel):
    """Stored catalog record. Frozen so the store can hand out snapshots."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(gt=0)
    name: str = Field(min_length=1)
    price: Decimal = Field(gt=0)
    category_id: int = Field(gt=0)


class ProductResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    price: Decimal
    category_id: int = Field(alias="categoryId")

    @field_serializer("price")
    def _price_as_number(self, price: Decimal) -> float:
        return float(price)


class UpdateProductResponse(BaseModel):
    success: bool
    message: str
    product: Optional[ProductResponse] = None


class MessageResponse(BaseModel):
    message: str
