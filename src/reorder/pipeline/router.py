"""Relocate finished job files and record successful re-orders."""

from __future__ import annotations

from collections.abc import Iterable
import csv
from pathlib import Path

from reorder.pipeline.logger import PipelineLogger
from reorder.pipeline.outcomes import Outcome


class OutcomeRouter:
    """Moves job files from the inbox into their outcome folder."""

    def __init__(
        self, batch_dir: Path, pipeline_logger: PipelineLogger | None = None
    ) -> None:
        self._batch_dir = batch_dir
        self._log = pipeline_logger or PipelineLogger()

    def folder_for(self, outcome: Outcome) -> Path:
        return self._batch_dir / outcome.value

    def route(self, job_path: Path, outcome: Outcome) -> Path:
        """Rename ``job_path`` into the outcome folder.

        The filename is kept unless the folder already holds a file of that
        name, in which case a ``-1``, ``-2``, ... suffix is added to the stem.
        """
        folder = self.folder_for(outcome)
        folder.mkdir(parents=True, exist_ok=True)
        destination = _free_path(folder / job_path.name)
        job_path.rename(destination)
        self._log.job_routed(job_path, outcome, destination)
        return destination


def _free_path(candidate: Path) -> Path:
    counter = 0
    path = candidate
    while path.exists():
        counter += 1
        path = candidate.with_name(f"{candidate.stem}-{counter}{candidate.suffix}")
    return path


class ReorderCsvWriter:
    """Appends ``order, new order, "sku1,sku2"`` rows for created re-orders."""

    def __init__(self, csv_path: Path) -> None:
        self._csv_path = csv_path

    @property
    def path(self) -> Path:
        return self._csv_path

    def append(
        self, order_number: str, new_order_number: str, skus: Iterable[str]
    ) -> None:
        self._csv_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._csv_path, "a", newline="") as f:
            writer = csv.writer(f, quoting=csv.QUOTE_ALL)
            writer.writerow([order_number, new_order_number, ",".join(skus)])
