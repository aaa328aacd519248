"""Append-only audit records written during a re-order."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
import uuid

FINANCE_CANCELLED = "Finance Cancelled"


def to_epoch_millis(timestamp: datetime) -> int:
    return int(timestamp.timestamp() * 1000)


def to_iso_millis(timestamp: datetime) -> str:
    """Format like ``2026-02-10T03:38:00.000Z``."""
    return timestamp.astimezone(UTC).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


@dataclass(frozen=True, slots=True)
class OrderLineStatusEntry:
    """A per-line status row marking a refund line as cancelled by finance."""

    order_number: str
    sku: str
    qty: int
    source: str | None
    status: str = FINANCE_CANCELLED
    type: str = "Cancelled"
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    suffix: str = field(default_factory=lambda: uuid.uuid4().hex[:5])

    @property
    def attribute_id(self) -> str:
        # Suffix keeps ids unique when two writers hit the same order in one ms.
        return (
            f"OrderLine#Status#{self.sku}#"
            f"{to_epoch_millis(self.created_at)}#{self.suffix}"
        )

    def to_item(self) -> dict[str, Any]:
        return {
            "AttributeId": self.attribute_id,
            "OrderId": self.order_number,
            "CreatedAt": to_iso_millis(self.created_at),
            "Qty": self.qty,
            "Status": self.status,
            "Source": self.source,
            "Type": self.type,
        }


@dataclass(frozen=True, slots=True)
class OrderLogEntry:
    """An order history entry shown to support staff."""

    order_number: str
    comment: str
    user: str = "System"
    type: str = "Shipment"
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_item(self) -> dict[str, Any]:
        return {
            "Id": self.id,
            "OrderId": self.order_number,
            "CreatedAt": to_iso_millis(self.created_at),
            "User": self.user,
            "Type": self.type,
            "Comment": self.comment,
            "UserId": None,
            "LogData": {},
        }
