"""Terminal job outcomes and the named failures that lead to them."""

from __future__ import annotations

from enum import Enum


class Outcome(Enum):
    """Terminal outcome of a job; the value is its outcome folder name."""

    DONE = "done"
    FAILED = "failed"
    REJECTED = "rejected"
    ALREADY_REFUNDED = "already-refunded"


class FailureReason(Enum):
    """Why a job stopped before a re-order was created."""

    ORDER_NOT_FOUND = "order_not_found"
    REFUND_NOT_FOUND = "refund_not_found"
    REFUND_ALREADY_CANCELLED = "refund_already_cancelled"
    REFUND_ALREADY_COMPLETED = "refund_already_completed"
    SKU_NOT_IN_ORDER = "sku_not_in_order"
    NO_STOCK_AVAILABLE = "no_stock_available"
    PARTIAL_STOCK_AVAILABLE = "partial_stock_available"
    CREATION_FAILED = "creation_failed"

    @property
    def outcome(self) -> Outcome:
        return _OUTCOME_BY_REASON[self]


_OUTCOME_BY_REASON: dict[FailureReason, Outcome] = {
    FailureReason.ORDER_NOT_FOUND: Outcome.FAILED,
    FailureReason.REFUND_NOT_FOUND: Outcome.FAILED,
    FailureReason.REFUND_ALREADY_CANCELLED: Outcome.FAILED,
    FailureReason.REFUND_ALREADY_COMPLETED: Outcome.ALREADY_REFUNDED,
    FailureReason.SKU_NOT_IN_ORDER: Outcome.FAILED,
    FailureReason.NO_STOCK_AVAILABLE: Outcome.REJECTED,
    FailureReason.PARTIAL_STOCK_AVAILABLE: Outcome.REJECTED,
    FailureReason.CREATION_FAILED: Outcome.FAILED,
}
