"""Map a fetched order into the OMS re-order creation payload."""

from __future__ import annotations

from collections.abc import Collection
from typing import Any

from reorder.domain.models import Address, Order, OrderItem

REORDER_DISCOUNT_CODE = "RE-ORDER"


def _address(address: Address) -> dict[str, Any]:
    return {
        "City": address.city,
        "CountryCode": address.country_code,
        "Postcode": address.postcode,
        "Region": address.region,
        "Street": address.street,
    }


def _item(item: OrderItem) -> dict[str, Any]:
    return {
        "Discount": 0,
        "Sku": item.sku,
        "Quantity": float(item.quantity),
        "Image": item.image,
        "Name": item.name,
        "ProductType": item.product_type,
        "Size": item.size,
        "OriginalPrice": (
            float(item.original_price) if item.original_price is not None else None
        ),
        "Price": float(item.price),
        "SelectedValues": item.parsed_options().attributes_info,
    }


def build_reorder_payload(
    order: Order, fulfillable_skus: Collection[str]
) -> dict[str, Any]:
    """Build the payload for ``PUT reorder``.

    Customer, billing, and shipping details are copied from ``order``; only
    items whose SKU is in ``fulfillable_skus`` are carried over, at their
    stored prices.
    """
    shipping = order.shipping_details
    shipping_price = float(shipping.price) if shipping.price is not None else None

    return {
        "StoreId": order.store_id,
        "ParentOrderId": order.order_id,
        "ParentOrderNumber": order.order_number,
        "CurrencyCode": order.currency_code,
        "DiscountCode": REORDER_DISCOUNT_CODE,
        "DiscountCouponDescription": REORDER_DISCOUNT_CODE,
        "BillingDetails": {
            "Address": _address(order.billing_details.address),
            "FirstName": order.first_name,
            "LastName": order.last_name,
        },
        "CustomerDetails": {
            "CustomerId": order.customer_id,
            "Email": order.email,
            "FirstName": order.first_name,
            "LastName": order.last_name,
            "Phone": order.customer_details.phone,
        },
        "Items": [_item(item) for item in order.items if item.sku in fulfillable_skus],
        "ShippingDetails": {
            "Address": _address(shipping.address),
            "FirstName": shipping.first_name,
            "LastName": shipping.last_name,
            "BasePrice": shipping_price,
            "Price": shipping_price,
            "Method": shipping.method,
            "Type": shipping.type,
        },
    }


def validate_product_options(order: Order, skus: Collection[str]) -> None:
    """Decode the options of every item being re-ordered.

    Other items are not inspected, so an unrelated line with empty or
    missing options does not block the job.

    Raises:
        ProductOptionsError: If a requested item's options are unusable.
    """
    for item in order.items_for(skus):
        item.parsed_options()
