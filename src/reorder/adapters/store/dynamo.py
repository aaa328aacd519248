"""DynamoDB adapter for refund, order, and order-log records."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger
from pydantic import ValidationError

from reorder.core.config import ReorderConfig
from reorder.domain.models import Refund
from reorder.domain.records import (
    OrderLineStatusEntry,
    OrderLogEntry,
    to_epoch_millis,
)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class StoreError(Exception):
    """Base error for DynamoDB store operations."""


class RefundUpdateRejectedError(StoreError):
    """The refund was already cancelled by finance when we tried to cancel it."""


REFUND_CANCELLED = "Cancelled"
CANCELLED_BY_FINANCE = "Cancelled by Finance"

_CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"


def _build_resource(config: ReorderConfig) -> Any:
    """Create a boto3 DynamoDB resource for the configured region."""
    return boto3.resource("dynamodb", region_name=config.aws_region)


class DynamoStore:
    """Reads and writes the refund/order/log tables the re-order job touches."""

    def __init__(self, config: ReorderConfig, resource: Any | None = None) -> None:
        self._config = config
        self._resource = resource if resource is not None else _build_resource(config)

    def _table(self, name: str) -> Any:
        return self._resource.Table(name)

    # -----------------------------------------------------------------------
    # Refunds
    # -----------------------------------------------------------------------

    def get_refund(self, refund_id: str) -> Refund | None:
        """Return the refund with the given id, or ``None`` if absent."""
        table_name = self._config.refunds_table
        try:
            response = self._table(table_name).query(
                KeyConditionExpression=Key("Id").eq(refund_id)
            )
        except (BotoCoreError, ClientError) as exc:
            raise StoreError(f"Failed to query refund {refund_id!r}: {exc}") from exc

        items = response.get("Items") or []
        if not items:
            return None

        try:
            return Refund.parse(items[0])
        except ValidationError as exc:
            raise StoreError(f"Malformed refund {refund_id!r}: {exc}") from exc

    def cancel_refund_approval(
        self, refund_id: str, *, now: datetime | None = None
    ) -> dict[str, Any]:
        """Mark a refund as cancelled by finance.

        The write is conditional on ``RefundApprove`` not already being
        ``"Cancelled"``; a second cancel of the same refund is rejected.

        Raises:
            RefundUpdateRejectedError: If the refund is already cancelled.
            StoreError: For any other DynamoDB failure.
        """
        if now is None:
            now = datetime.now(UTC)

        try:
            response = self._table(self._config.refunds_table).update_item(
                Key={"Id": refund_id},
                UpdateExpression=(
                    "SET RefundApprove = :RefundApprove, IsProcessed = :IsProcessed, "
                    "RefundApproveDate = :RefundApproveDate, IsException = :IsException"
                ),
                ConditionExpression=(
                    "attribute_not_exists(RefundApprove) "
                    "OR RefundApprove <> :RefundApprove"
                ),
                ExpressionAttributeValues={
                    ":IsException": CANCELLED_BY_FINANCE,
                    ":RefundApprove": REFUND_CANCELLED,
                    ":IsProcessed": REFUND_CANCELLED,
                    ":RefundApproveDate": to_epoch_millis(now),
                },
                ReturnValues="ALL_NEW",
            )
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") == _CONDITIONAL_CHECK_FAILED:
                raise RefundUpdateRejectedError(
                    f"Refund {refund_id!r} is already cancelled"
                ) from exc
            raise StoreError(f"Failed to cancel refund {refund_id!r}: {exc}") from exc
        except BotoCoreError as exc:
            raise StoreError(f"Failed to cancel refund {refund_id!r}: {exc}") from exc

        logger.bind(refund_id=refund_id).debug("Refund {} cancelled by finance", refund_id)
        attributes: dict[str, Any] = response.get("Attributes", {})
        return attributes

    # -----------------------------------------------------------------------
    # Orders
    # -----------------------------------------------------------------------

    def update_order_shipping_refunded(self, order_number: str, status: str) -> None:
        try:
            self._table(self._config.orders_table).update_item(
                Key={"OrderId": order_number, "AttributeId": "Details"},
                UpdateExpression="SET #ShippingRefunded = :value",
                ExpressionAttributeNames={"#ShippingRefunded": "ShippingRefunded"},
                ExpressionAttributeValues={":value": status},
            )
        except (BotoCoreError, ClientError) as exc:
            msg = f"Failed to update ShippingRefunded on order {order_number}: {exc}"
            raise StoreError(msg) from exc

    def put_order_line_status(self, entry: OrderLineStatusEntry) -> None:
        try:
            self._table(self._config.orders_table).put_item(Item=entry.to_item())
        except (BotoCoreError, ClientError) as exc:
            msg = f"Failed to write line status {entry.attribute_id}: {exc}"
            raise StoreError(msg) from exc

    def insert_order_log(self, entry: OrderLogEntry) -> None:
        try:
            self._table(self._config.logs_table).put_item(Item=entry.to_item())
        except (BotoCoreError, ClientError) as exc:
            msg = f"Failed to write log for order {entry.order_number}: {exc}"
            raise StoreError(msg) from exc
