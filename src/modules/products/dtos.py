"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer and the Service layer.
DTOs are immutable (``frozen=True``).

- ``ProductInputDTO``: validated product fields for create and full update.
  Field aliases are the wire names (``product_name``, ``product_description``).
- ``BrandCountDTO``: one row of the brand summary.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from modules.products.models import (
    BRAND_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    MODEL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    RETAILER_MAX_LENGTH,
)

PRICE_MIN = Decimal("0.01")
PRICE_MAX = Decimal("999999.99")
PRICE_INTEGER_DIGITS = 6
PRICE_FRACTION_DIGITS = 2

_TEXT_RULES = {
    "retailer": ("Retailer", RETAILER_MAX_LENGTH),
    "brand": ("Brand", BRAND_MAX_LENGTH),
    "model": ("Model", MODEL_MAX_LENGTH),
    "name": ("Product name", NAME_MAX_LENGTH),
}


def _price_digits(value: Decimal) -> tuple[int, int]:
    """Return ``(integer digits, fraction digits)`` ignoring trailing zeros."""
    _, digits, exponent = value.normalize().as_tuple()
    fraction = max(0, -exponent)
    integer = max(0, len(digits) + exponent)
    return integer, fraction


class ProductInputDTO(BaseModel):
    """Immutable DTO for product create and update requests.

    Validates:
    - ``retailer``, ``brand``, ``model`` are non-blank, at most 100 chars.
    - ``name`` is non-blank, at most 200 chars.
    - ``description`` is optional, at most 1000 chars.
    - ``price`` is in [0.01, 999999.99] with up to 6 integer and 2
      fraction digits.

    Values are kept exactly as sent; nothing is trimmed or rounded.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        validate_default=True,
    )

    retailer: str = ""
    brand: str = ""
    model: str = ""
    name: str = Field(default="", alias="product_name")
    description: Optional[str] = Field(default=None, alias="product_description")
    price: Optional[Decimal] = None

    @field_validator("retailer", "brand", "model", "name", mode="before")
    @classmethod
    def text_is_present_and_sized(cls, v: Any, info: ValidationInfo) -> str:
        label, max_length = _TEXT_RULES[info.field_name]
        if v is None:
            raise PydanticCustomError("required", f"{label} is required")
        if not isinstance(v, str):
            raise PydanticCustomError("string_type", f"{label} must be a string")
        if not v.strip():
            raise PydanticCustomError("required", f"{label} is required")
        if len(v) > max_length:
            raise PydanticCustomError(
                "string_length",
                f"{label} must be between 1 and {max_length} characters",
            )
        return v

    @field_validator("description", mode="before")
    @classmethod
    def description_within_limit(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        if not isinstance(v, str):
            raise PydanticCustomError(
                "string_type", "Product description must be a string"
            )
        if len(v) > DESCRIPTION_MAX_LENGTH:
            raise PydanticCustomError(
                "string_length",
                f"Product description cannot exceed {DESCRIPTION_MAX_LENGTH} characters",
            )
        return v

    @field_validator("price", mode="before")
    @classmethod
    def price_in_range(cls, v: Any) -> Decimal:
        if v is None or (isinstance(v, str) and not v.strip()):
            raise PydanticCustomError("required", "Price is required")
        if isinstance(v, bool) or not isinstance(v, (int, float, str, Decimal)):
            raise PydanticCustomError("decimal_type", "Price must be a number")
        try:
            # str() first so a JSON float such as 19.99 keeps its decimal text
            price = Decimal(str(v).strip())
        except InvalidOperation:
            raise PydanticCustomError("decimal_parsing", "Price must be a number") from None
        if not price.is_finite():
            raise PydanticCustomError("decimal_parsing", "Price must be a number")
        if price < PRICE_MIN:
            raise PydanticCustomError("greater_than_equal", "Price must be at least 0.01")
        if price > PRICE_MAX:
            raise PydanticCustomError("less_than_equal", "Price cannot exceed 999,999.99")
        integer, fraction = _price_digits(price)
        if integer > PRICE_INTEGER_DIGITS or fraction > PRICE_FRACTION_DIGITS:
            raise PydanticCustomError(
                "decimal_digits",
                "Price must have up to 6 digits before decimal and 2 after",
            )
        return price

    def to_fields(self) -> Dict[str, Any]:
        """Model field values, keyed by ``Product`` attribute name."""
        return self.model_dump(by_alias=False)


class BrandCountDTO(BaseModel):
    """Immutable DTO for one brand summary row."""

    model_config = ConfigDict(frozen=True)

    brand: str
    count: int
