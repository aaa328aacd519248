"""Compensating writes when finance cancels a pending refund."""

from __future__ import annotations

from datetime import UTC, datetime

from reorder.adapters.store.dynamo import DynamoStore
from reorder.domain.models import Order, Refund
from reorder.domain.records import FINANCE_CANCELLED, OrderLineStatusEntry
from reorder.pipeline.logger import PipelineLogger

SHIPPING_REFUNDED_YES = "Yes"


def finance_cancelled_lines(order: Order, refund: Refund) -> list[OrderLineStatusEntry]:
    """Build one status entry per refund line whose SKU is on the order."""
    order_skus = {item.sku.strip() for item in order.items}
    now = datetime.now(UTC)

    entries: list[OrderLineStatusEntry] = []
    for line in refund.refunding_lines:
        sku = line.product_sku.strip()
        if sku not in order_skus:
            continue
        entries.append(
            OrderLineStatusEntry(
                order_number=order.order_number,
                sku=sku,
                qty=int(line.quantity),
                source=refund.source,
                created_at=now,
            )
        )
    return entries


class RefundStateUpdater:
    """Applies the finance-cancellation writes to the refund and order records."""

    def __init__(
        self, store: DynamoStore, pipeline_logger: PipelineLogger | None = None
    ) -> None:
        self._store = store
        self._log = pipeline_logger or PipelineLogger()

    def cancel_pending_finance_approval(self, order: Order, refund: Refund) -> None:
        """Cancel the refund, then flag shipping and lines as finance cancelled.

        Any store error propagates; a rejected refund update
        (``RefundUpdateRejectedError``) is never skipped.
        """
        self._store.cancel_refund_approval(refund.id)
        self._log.refund_cancelled(refund.id, order.order_number)

        if (
            refund.is_refunding_shipping
            and order.shipping_refunded != SHIPPING_REFUNDED_YES
        ):
            self._store.update_order_shipping_refunded(
                order.order_number, FINANCE_CANCELLED
            )
            self._log.shipping_refund_cancelled(order.order_number)

        for entry in finance_cancelled_lines(order, refund):
            self._store.put_order_line_status(entry)
            self._log.line_status_written(order.order_number, entry.sku, entry.qty)
