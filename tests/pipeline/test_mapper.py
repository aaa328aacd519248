"""Tests for the re-order payload mapper."""

from __future__ import annotations

import pytest

from reorder.domain.models import Order, ProductOptionsError
from reorder.pipeline.mapper import build_reorder_payload, validate_product_options


class TestBuildReorderPayload:
    def test_item_is_repriced_from_stored_fields(self, order_data):
        payload = build_reorder_payload(Order.parse(order_data), ["X"])

        assert payload["Items"] == [
            {
                "Discount": 0,
                "Sku": "X",
                "Quantity": 1.0,
                "Image": "x.jpg",
                "Name": "Dress",
                "ProductType": "simple",
                "Size": "10",
                "OriginalPrice": 12.99,
                "Price": 9.99,
                "SelectedValues": [
                    {"label": "Colour", "value": "Red"},
                    {"label": "Size", "value": "10"},
                ],
            }
        ]
        assert isinstance(payload["Items"][0]["Price"], float)

    def test_items_filtered_to_fulfillable_skus(self, order_data):
        payload = build_reorder_payload(Order.parse(order_data), ["Y"])

        assert [item["Sku"] for item in payload["Items"]] == ["Y"]
        assert payload["Items"][0]["Quantity"] == 2.0

    def test_header_references_parent_and_discount(self, order_data):
        payload = build_reorder_payload(Order.parse(order_data), ["X"])

        assert payload["ParentOrderId"] == "1001"
        assert payload["ParentOrderNumber"] == "O1"
        assert payload["StoreId"] == 1
        assert payload["CurrencyCode"] == "GBP"
        assert payload["DiscountCode"] == "RE-ORDER"
        assert payload["DiscountCouponDescription"] == "RE-ORDER"

    def test_customer_and_billing_copied(self, order_data):
        payload = build_reorder_payload(Order.parse(order_data), ["X"])

        assert payload["CustomerDetails"] == {
            "CustomerId": 42,
            "Email": "jo@example.com",
            "FirstName": "Jo",
            "LastName": "Bloggs",
            "Phone": "07700900000",
        }
        assert payload["BillingDetails"] == {
            "Address": {
                "City": "Sheffield",
                "CountryCode": "GB",
                "Postcode": "S1 2AB",
                "Region": "South Yorkshire",
                "Street": "1 High Street",
            },
            "FirstName": "Jo",
            "LastName": "Bloggs",
        }

    def test_shipping_copied_with_numeric_price(self, order_data):
        payload = build_reorder_payload(Order.parse(order_data), ["X"])

        shipping = payload["ShippingDetails"]
        assert shipping["Address"]["City"] == "Leeds"
        assert shipping["FirstName"] == "Sam"
        assert shipping["BasePrice"] == 4.95
        assert shipping["Price"] == 4.95
        assert shipping["Method"] == "tablerate_bestway"
        assert shipping["Type"] == "Standard"

    def test_minimal_single_item_order(self):
        order = Order.parse(
            {
                "OrderNumber": "O9",
                "Items": [
                    {
                        "Sku": "X",
                        "Quantity": 1,
                        "Price": "9.99",
                        "ProductOptions": '{"attributes_info": []}',
                    }
                ],
            }
        )

        payload = build_reorder_payload(order, ["X"])

        assert payload["Items"][0]["Price"] == 9.99
        assert payload["Items"][0]["Discount"] == 0
        assert payload["Items"][0]["OriginalPrice"] is None
        assert payload["ShippingDetails"]["Price"] is None


class TestValidateProductOptions:
    def test_only_requested_items_are_checked(self, order_data):
        order_data["Items"][1]["ProductOptions"] = "{}"

        validate_product_options(Order.parse(order_data), ["X"])

    def test_requested_item_with_unusable_options_raises(self, order_data):
        order_data["Items"][1]["ProductOptions"] = None

        with pytest.raises(ProductOptionsError, match="Y has no ProductOptions"):
            validate_product_options(Order.parse(order_data), ["X", "Y"])
