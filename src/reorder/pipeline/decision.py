"""Decision pipeline: validate one job file and create its re-order."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import json
from pathlib import Path

from pydantic import ValidationError

from reorder.adapters.clients.inventory import InventoryClient
from reorder.adapters.clients.oms import OmsClient
from reorder.adapters.store.dynamo import DynamoStore
from reorder.core.config import DEFAULT_ALLOCATION_PRIORITY, ReorderConfig
from reorder.domain.models import Job
from reorder.domain.records import OrderLogEntry
from reorder.pipeline.gates import (
    GateFailure,
    check_all_stock,
    check_any_stock,
    check_refund_state,
    check_skus_in_order,
    require_order,
    require_refund,
)
from reorder.pipeline.logger import PipelineLogger
from reorder.pipeline.mapper import build_reorder_payload, validate_product_options
from reorder.pipeline.outcomes import FailureReason, Outcome
from reorder.pipeline.refund_state import RefundStateUpdater
from reorder.pipeline.router import OutcomeRouter, ReorderCsvWriter
from reorder.pipeline.stock import allocate, available_quotes


class JobFileError(Exception):
    """A job file could not be read or lacks the fields the pipeline needs."""


def read_job(job_path: Path) -> Job:
    try:
        raw = json.loads(job_path.read_text(encoding="utf-8"))
        return Job.model_validate(raw)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        raise JobFileError(f"Cannot read job file {job_path}: {e}") from e


@dataclass(frozen=True, slots=True)
class JobResult:
    """Terminal state of one job file."""

    job_path: Path
    order_number: str
    outcome: Outcome
    destination: Path
    failure: GateFailure | None = None
    new_order_number: str | None = None
    skus: tuple[str, ...] = ()

    @property
    def success(self) -> bool:
        return self.outcome is Outcome.DONE


class ReorderPipeline:
    """Runs the ordered gates for a job and creates the replacement order.

    Business-rule failures end the job with a ``GateFailure`` and move the
    file to its outcome folder. Collaborator errors propagate and leave the
    file where it is.
    """

    def __init__(
        self,
        *,
        oms: OmsClient,
        inventory: InventoryClient,
        store: DynamoStore,
        router: OutcomeRouter,
        csv_writer: ReorderCsvWriter,
        allocation_priority: Sequence[str] = DEFAULT_ALLOCATION_PRIORITY,
        pipeline_logger: PipelineLogger | None = None,
    ) -> None:
        self._oms = oms
        self._inventory = inventory
        self._store = store
        self._router = router
        self._csv_writer = csv_writer
        self._allocation_priority = tuple(allocation_priority)
        self._log = pipeline_logger or PipelineLogger()
        self._refund_updater = RefundStateUpdater(store, self._log)

    @classmethod
    def from_config(
        cls, config: ReorderConfig, *, store: DynamoStore | None = None
    ) -> ReorderPipeline:
        pipeline_logger = PipelineLogger()
        return cls(
            oms=OmsClient.from_config(config),
            inventory=InventoryClient.from_config(config),
            store=store if store is not None else DynamoStore(config),
            router=OutcomeRouter(config.batch_dir, pipeline_logger),
            csv_writer=ReorderCsvWriter(config.csv_path),
            allocation_priority=config.allocation_priority,
            pipeline_logger=pipeline_logger,
        )

    def process_job(self, job_path: Path) -> JobResult:
        job = read_job(job_path)
        self._log.job_started(job_path, job.order_number)

        order = require_order(job, self._oms.get_order(job.order_number))
        if isinstance(order, GateFailure):
            return self._stop(job_path, job, order)

        refund = require_refund(job, self._store.get_refund(job.refund_id))
        if isinstance(refund, GateFailure):
            return self._stop(job_path, job, refund)

        failure = check_refund_state(refund) or check_skus_in_order(order, job.skus)
        if failure is not None:
            return self._stop(job_path, job, failure)

        validate_product_options(order, job.skus)

        quotes = allocate(
            self._inventory.get_stock(job.skus), self._allocation_priority
        )
        self._log.stock_resolved(job.order_number, quotes)

        failure = check_any_stock(quotes) or check_all_stock(quotes, job.skus)
        if failure is not None:
            return self._stop(job_path, job, failure)

        self._refund_updater.cancel_pending_finance_approval(order, refund)

        skus = [quote.sku for quote in available_quotes(quotes)]
        new_order_number = self._oms.create_reorder(build_reorder_payload(order, skus))
        if not new_order_number:
            failure = GateFailure(
                gate="order-creation",
                reason=FailureReason.CREATION_FAILED,
                detail=f"Failed to create re-order for {job.order_number}",
            )
            return self._stop(job_path, job, failure)

        self._store.insert_order_log(
            OrderLogEntry(
                order_number=job.order_number,
                comment=(
                    "COLs from Order to Re-Order, "
                    f"Re-Order Order Number {new_order_number}"
                ),
            )
        )
        self._csv_writer.append(job.order_number, new_order_number, skus)
        self._log.reorder_created(job.order_number, new_order_number, skus)

        destination = self._router.route(job_path, Outcome.DONE)
        return JobResult(
            job_path=job_path,
            order_number=job.order_number,
            outcome=Outcome.DONE,
            destination=destination,
            new_order_number=new_order_number,
            skus=tuple(skus),
        )

    def _stop(self, job_path: Path, job: Job, failure: GateFailure) -> JobResult:
        self._log.gate_failed(job.order_number, failure)
        destination = self._router.route(job_path, failure.outcome)
        return JobResult(
            job_path=job_path,
            order_number=job.order_number,
            outcome=failure.outcome,
            destination=destination,
            failure=failure,
            skus=tuple(job.skus),
        )
