"""Logging for the re-order pipeline.

Keeps log statements out of the gate and orchestration code.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import loguru
from loguru import logger

if TYPE_CHECKING:
    from reorder.pipeline.gates import GateFailure
    from reorder.pipeline.outcomes import Outcome
    from reorder.pipeline.stock import StockQuote


class PipelineLogger:
    """Handles all logging for re-order jobs and batches."""

    def __init__(self, logger_instance: loguru.Logger = logger) -> None:
        """Initialize logger.

        Args:
            logger_instance: Logger instance to use (defaults to loguru.logger)
        """
        self._logger = logger_instance

    # Batch ---------------------------------------------------------------

    def batch_started(self, batch_dir: Path, file_count: int) -> None:
        """Log the start of a batch run."""
        self._logger.bind(batch_dir=str(batch_dir), files=file_count).info(
            "Processing {} job file(s) in {}", file_count, batch_dir
        )

    def batch_complete(self, counts: dict[str, int], fatal_count: int) -> None:
        """Log per-outcome totals for a finished batch."""
        self._logger.bind(counts=counts, fatal=fatal_count).info(
            "Batch complete: {} ({} left in inbox)",
            ", ".join(f"{name}={count}" for name, count in counts.items()) or "no jobs",
            fatal_count,
        )

    def job_fatal(self, job_path: Path, error: Exception) -> None:
        """Log a job aborted by an unexpected error, with traceback."""
        self._logger.bind(job=job_path.name).opt(exception=error).error(
            "Job {} aborted, file left in inbox: {}", job_path.name, error
        )

    # Job -----------------------------------------------------------------

    def job_started(self, job_path: Path, order_number: str) -> None:
        """Log a job file being picked up."""
        self._logger.bind(job=job_path.name, order_number=order_number).info(
            "Processing-ReOrder {} {}", job_path.name, order_number
        )

    def gate_failed(self, order_number: str, failure: GateFailure) -> None:
        """Log the gate that stopped a job."""
        self._logger.bind(
            order_number=order_number,
            gate=failure.gate,
            reason=failure.reason.name,
        ).warning("{} stopped at {}: {}", order_number, failure.gate, failure.detail)

    def stock_resolved(self, order_number: str, quotes: list[StockQuote]) -> None:
        """Log allocated stock per SKU."""
        self._logger.bind(order_number=order_number).debug(
            "{} stock: {}",
            order_number,
            ", ".join(f"{q.sku}={q.stock}@{q.allocation}" for q in quotes) or "none",
        )

    def reorder_created(
        self, order_number: str, new_order_number: str, skus: list[str]
    ) -> None:
        """Log a created re-order."""
        self._logger.bind(
            order_number=order_number, new_order_number=new_order_number, skus=skus
        ).info("{} re-ordered as {} ({})", order_number, new_order_number, skus)

    def job_routed(self, job_path: Path, outcome: Outcome, destination: Path) -> None:
        """Log a job file moved to its outcome folder."""
        self._logger.bind(job=job_path.name, outcome=outcome.value).info(
            "Moved {} to {}", job_path.name, destination.parent
        )

    # Compensating writes -------------------------------------------------

    def refund_cancelled(self, refund_id: str, order_number: str) -> None:
        """Log a refund set to Finance Cancelled."""
        self._logger.bind(refund_id=refund_id, order_number=order_number).info(
            "Refund {} cancelled by finance for {}", refund_id, order_number
        )

    def shipping_refund_cancelled(self, order_number: str) -> None:
        """Log the order shipping refund flag update."""
        self._logger.bind(order_number=order_number).info(
            "Shipping refund flag set to Finance Cancelled on {}", order_number
        )

    def line_status_written(self, order_number: str, sku: str, qty: int) -> None:
        """Log one order line status entry."""
        self._logger.bind(order_number=order_number, sku=sku, qty=qty).debug(
            "Line {} x{} marked Finance Cancelled on {}", sku, qty, order_number
        )
