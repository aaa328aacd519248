"""Key-value store adapters."""

from __future__ import annotations

from reorder.adapters.store.dynamo import (
    DynamoStore,
    RefundUpdateRejectedError,
    StoreError,
)

__all__ = ["DynamoStore", "RefundUpdateRejectedError", "StoreError"]
