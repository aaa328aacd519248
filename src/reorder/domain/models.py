"""Wire models for jobs, OMS orders, and refund records."""

from __future__ import annotations

from collections.abc import Collection
from enum import Enum
import json
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel, to_pascal


class ProductOptionsError(ValueError):
    """An order item's ``ProductOptions`` cannot be decoded."""


class ProcessingStatus(Enum):
    """Terminal values of a refund's ``IsProcessed`` attribute."""

    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class WireModel(BaseModel):
    """Shared base for OMS/DynamoDB records keyed in PascalCase."""

    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    @classmethod
    def parse(cls, data: Any) -> Self:
        return cls.model_validate(data)


# ---------------------------------------------------------------------------
# Job file
# ---------------------------------------------------------------------------


class Job(BaseModel):
    """One batch file requesting a re-order of cancelled order lines."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    order_number: str
    refund_id: str
    skus: list[str]


# ---------------------------------------------------------------------------
# Order
# ---------------------------------------------------------------------------


class ProductOptions(BaseModel):
    """Parsed form of an order item's JSON-encoded ``ProductOptions`` field."""

    model_config = ConfigDict(extra="ignore")

    attributes_info: list[dict[str, Any]]


class Address(WireModel):
    city: str | None = None
    country_code: str | None = None
    postcode: str | None = None
    region: str | None = None
    street: Any = None


class CustomerDetails(WireModel):
    phone: str | None = None


class BillingDetails(WireModel):
    address: Address = Field(default_factory=Address)


class ShippingDetails(WireModel):
    address: Address = Field(default_factory=Address)
    first_name: str | None = None
    last_name: str | None = None
    price: float | None = None
    method: str | None = None
    type: str | None = None


class OrderItem(WireModel):
    sku: str
    quantity: float
    price: float
    original_price: float | None = None
    image: str | None = None
    name: str | None = None
    product_type: str | None = None
    size: Any = None
    # Raw JSON string as stored by the OMS; decoded by ``parsed_options``.
    product_options: str | dict[str, Any] | None = None

    def parsed_options(self) -> ProductOptions:
        """Decode ``ProductOptions``.

        Raises:
            ProductOptionsError: If the options are missing, not valid JSON,
                or lack ``attributes_info``.
        """
        raw: Any = self.product_options
        if raw is None:
            raise ProductOptionsError(f"Item {self.sku} has no ProductOptions")
        if isinstance(raw, str):
            try:
                raw = json.loads(raw)
            except json.JSONDecodeError as e:
                raise ProductOptionsError(
                    f"Item {self.sku} ProductOptions is not valid JSON: {e}"
                ) from e
        try:
            return ProductOptions.model_validate(raw)
        except ValidationError as e:
            raise ProductOptionsError(
                f"Item {self.sku} ProductOptions are malformed: {e}"
            ) from e


class Order(WireModel):
    order_id: str | None = None
    order_number: str
    store_id: Any = None
    currency_code: str | None = None
    customer_id: Any = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    shipping_refunded: str | None = None
    customer_details: CustomerDetails = Field(default_factory=CustomerDetails)
    billing_details: BillingDetails = Field(default_factory=BillingDetails)
    shipping_details: ShippingDetails = Field(default_factory=ShippingDetails)
    items: list[OrderItem] = Field(default_factory=list)

    def has_sku(self, sku: str) -> bool:
        return any(item.sku == sku for item in self.items)

    def items_for(self, skus: Collection[str]) -> list[OrderItem]:
        return [item for item in self.items if item.sku in skus]


# ---------------------------------------------------------------------------
# Refund
# ---------------------------------------------------------------------------


class RefundingLine(WireModel):
    product_sku: str
    quantity: int


class Refund(WireModel):
    id: str
    is_processed: str | None = None
    refund_approve: str | None = None
    is_refunding_shipping: bool = False
    source: str | None = None
    refunding_lines: list[RefundingLine] = Field(default_factory=list)
