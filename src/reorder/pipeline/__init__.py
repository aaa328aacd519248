"""Validation-and-decision pipeline for re-order jobs."""

from __future__ import annotations

from reorder.pipeline.decision import JobFileError, JobResult, ReorderPipeline
from reorder.pipeline.gates import GateFailure
from reorder.pipeline.mapper import build_reorder_payload
from reorder.pipeline.outcomes import FailureReason, Outcome
from reorder.pipeline.refund_state import RefundStateUpdater
from reorder.pipeline.router import OutcomeRouter, ReorderCsvWriter
from reorder.pipeline.stock import StockQuote, allocate

__all__ = [
    "FailureReason",
    "GateFailure",
    "JobFileError",
    "JobResult",
    "Outcome",
    "OutcomeRouter",
    "RefundStateUpdater",
    "ReorderCsvWriter",
    "ReorderPipeline",
    "StockQuote",
    "allocate",
    "build_reorder_payload",
]
