"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from reorder.core.config import ReorderConfig


def _options(*attributes: tuple[str, str]) -> str:
    return json.dumps(
        {
            "info_buyRequest": {"qty": 1},
            "attributes_info": [
                {"label": label, "value": value} for label, value in attributes
            ],
        }
    )


@pytest.fixture
def order_data() -> dict[str, Any]:
    """An OMS order in wire format with two items."""
    return {
        "OrderId": "1001",
        "OrderNumber": "O1",
        "StoreId": 1,
        "CurrencyCode": "GBP",
        "CustomerId": 42,
        "Email": "jo@example.com",
        "FirstName": "Jo",
        "LastName": "Bloggs",
        "ShippingRefunded": None,
        "CustomerDetails": {"Phone": "07700900000"},
        "BillingDetails": {
            "Address": {
                "City": "Sheffield",
                "CountryCode": "GB",
                "Postcode": "S1 2AB",
                "Region": "South Yorkshire",
                "Street": "1 High Street",
            }
        },
        "ShippingDetails": {
            "Address": {
                "City": "Leeds",
                "CountryCode": "GB",
                "Postcode": "LS1 1AA",
                "Region": "West Yorkshire",
                "Street": "2 Low Road",
            },
            "FirstName": "Sam",
            "LastName": "Bloggs",
            "Price": "4.95",
            "Method": "tablerate_bestway",
            "Type": "Standard",
        },
        "Items": [
            {
                "Sku": "X",
                "Quantity": "1.0000",
                "Price": "9.99",
                "OriginalPrice": "12.99",
                "Image": "x.jpg",
                "Name": "Dress",
                "ProductType": "simple",
                "Size": "10",
                "ProductOptions": _options(("Colour", "Red"), ("Size", "10")),
            },
            {
                "Sku": "Y",
                "Quantity": "2.0000",
                "Price": "5.00",
                "OriginalPrice": "5.00",
                "Image": "y.jpg",
                "Name": "Scarf",
                "ProductType": "simple",
                "Size": "One Size",
                "ProductOptions": _options(("Colour", "Blue")),
            },
        ],
    }


@pytest.fixture
def refund_data() -> dict[str, Any]:
    """A pending refund in DynamoDB item format."""
    return {
        "Id": "R1",
        "OrderId": "O1",
        "IsProcessed": "Pending",
        "RefundApprove": "Pending",
        "IsRefundingShipping": False,
        "Source": "Customer Service",
        "RefundingLines": [{"ProductSku": "X ", "Quantity": 1}],
    }


@pytest.fixture
def config(tmp_path: Path) -> ReorderConfig:
    return ReorderConfig(
        oms_endpoint="https://oms.example.com/orders/",
        oms_api_key="oms-key",
        inventory_endpoint="https://inventory.example.com/",
        inventory_api_key="is-key",
        batch_dir=tmp_path / "batch",
        csv_path=tmp_path / "reorder.csv",
    )


@pytest.fixture
def write_job(tmp_path: Path):
    """Write a job file into ``tmp_path/batch`` and return its path."""
    batch_dir = tmp_path / "batch"
    batch_dir.mkdir(exist_ok=True)

    def _write(
        name: str = "job.json",
        *,
        order_number: str = "O1",
        refund_id: str = "R1",
        skus: list[str] | None = None,
    ) -> Path:
        path = batch_dir / name
        payload = {
            "orderNumber": order_number,
            "refundId": refund_id,
            "skus": skus if skus is not None else ["X"],
        }
        path.write_text(json.dumps(payload))
        return path

    return _write
