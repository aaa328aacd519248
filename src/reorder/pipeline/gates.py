"""Ordered validation gates for a re-order job.

Each gate returns a ``GateFailure`` naming the gate and the reason the job
stops there. ``check_*`` gates return ``None`` when the job may continue;
``require_*`` gates return the record they were given.
"""

from __future__ import annotations

from dataclasses import dataclass

from reorder.domain.models import Job, Order, ProcessingStatus, Refund
from reorder.pipeline.outcomes import FailureReason, Outcome
from reorder.pipeline.stock import StockQuote, available_quotes


@dataclass(frozen=True, slots=True)
class GateFailure:
    gate: str
    reason: FailureReason
    detail: str

    @property
    def outcome(self) -> Outcome:
        return self.reason.outcome


def require_order(job: Job, order: Order | None) -> Order | GateFailure:
    if order is None:
        return GateFailure(
            gate="order-exists",
            reason=FailureReason.ORDER_NOT_FOUND,
            detail=f"Order {job.order_number} does not exist",
        )
    return order


def require_refund(job: Job, refund: Refund | None) -> Refund | GateFailure:
    if refund is None:
        return GateFailure(
            gate="refund-exists",
            reason=FailureReason.REFUND_NOT_FOUND,
            detail=f"RefundId {job.refund_id} not found",
        )
    return refund


def check_refund_state(refund: Refund) -> GateFailure | None:
    if refund.is_processed == ProcessingStatus.CANCELLED.value:
        return GateFailure(
            gate="refund-state",
            reason=FailureReason.REFUND_ALREADY_CANCELLED,
            detail=f"RefundId {refund.id} already cancelled",
        )
    if refund.is_processed == ProcessingStatus.COMPLETED.value:
        return GateFailure(
            gate="refund-state",
            reason=FailureReason.REFUND_ALREADY_COMPLETED,
            detail=f"RefundId {refund.id} already refunded",
        )
    return None


def check_skus_in_order(order: Order, skus: list[str]) -> GateFailure | None:
    missing = [sku for sku in skus if not order.has_sku(sku)]
    if missing:
        return GateFailure(
            gate="sku-membership",
            reason=FailureReason.SKU_NOT_IN_ORDER,
            detail=f"SKU(s) not in order: {', '.join(missing)}",
        )
    return None


def check_any_stock(quotes: list[StockQuote]) -> GateFailure | None:
    if not available_quotes(quotes):
        return GateFailure(
            gate="stock-any",
            reason=FailureReason.NO_STOCK_AVAILABLE,
            detail="No requested SKU has stock",
        )
    return None


def check_all_stock(quotes: list[StockQuote], skus: list[str]) -> GateFailure | None:
    # All-or-nothing: a partially fulfillable job is rejected, never trimmed.
    available = available_quotes(quotes)
    if len(available) != len(skus):
        return GateFailure(
            gate="stock-all",
            reason=FailureReason.PARTIAL_STOCK_AVAILABLE,
            detail=f"Stock for {len(available)} of {len(skus)} SKU(s)",
        )
    return None
