# catalog_api/core.py
from decimal import Decimal
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from .models import Product, ProductResponse

NAME_MAX_LENGTH = 200


def _blank_to_none(value: Any) -> Any:
    # query strings send "categoryId=" for an unset field
    if isinstance(value, str) and not value.strip():
        return None
    return value


# ---------------------------
# Request schemas
# ---------------------------
class FilterProductsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Optional[str] = None
    category_id: Optional[int] = Field(default=None, alias="categoryId")
    min_price: Optional[Decimal] = Field(default=None, alias="minPrice")
    max_price: Optional[Decimal] = Field(default=None, alias="maxPrice")

    @field_validator("category_id", "min_price", "max_price", mode="before")
    @classmethod
    def _empty_is_absent(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("category_id")
    @classmethod
    def _category_positive(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value <= 0:
            raise PydanticCustomError("category_range", "Category ID must be a positive number")
        return value

    @field_validator("min_price")
    @classmethod
    def _min_price_non_negative(cls, value: Optional[Decimal]) -> Optional[Decimal]:
        if value is not None and value < 0:
            raise PydanticCustomError("price_range", "Minimum price must be non-negative")
        return value

    @field_validator("max_price")
    @classmethod
    def _max_price_non_negative(cls, value: Optional[Decimal]) -> Optional[Decimal]:
        if value is not None and value < 0:
            raise PydanticCustomError("price_range", "Maximum price must be non-negative")
        return value


class UpdateProductRequest(BaseModel):
    """Partial update payload. ``None`` means the field was not supplied."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    price: Optional[Decimal] = Field(default=None)

    @field_validator("name")
    @classmethod
    def _name_length(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        trimmed = value.strip()
        if not 1 <= len(trimmed) <= NAME_MAX_LENGTH:
            raise PydanticCustomError(
                "name_length",
                "Product name must be between 1 and {max_length} characters",
                {"max_length": NAME_MAX_LENGTH},
            )
        return trimmed

    @field_validator("price")
    @classmethod
    def _price_positive(cls, value: Optional[Decimal]) -> Optional[Decimal]:
        if value is not None and value <= 0:
            raise PydanticCustomError("price_range", "Price must be greater than zero")
        return value

    def has_changes(self) -> bool:
        return self.name is not None or self.price is not None


# ---------------------------
# Helpers
# ---------------------------
def _field_aliases(model: Type[BaseModel]) -> Dict[str, str]:
    aliases: Dict[str, str] = {}
    for field_name, info in model.model_fields.items():
        outward = info.alias or field_name
        aliases[field_name] = outward
        aliases[outward] = outward
    return aliases


def collect_field_errors(exc: ValidationError, model: Type[BaseModel]) -> Dict[str, List[str]]:
    """Group every pydantic error by the outward (camelCase) field name."""
    aliases = _field_aliases(model)
    errors: Dict[str, List[str]] = {}
    for err in exc.errors():
        loc = err.get("loc") or ()
        field = str(loc[0]) if loc else "__root__"
        errors.setdefault(aliases.get(field, field), []).append(err["msg"])
    return errors


def _make_product_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.id,
        name=product.name,
        price=product.price,
        category_id=product.category_id,
    )
