"""Batch runner that feeds every job file in the inbox through the pipeline."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

from reorder.pipeline.decision import JobResult, ReorderPipeline
from reorder.pipeline.logger import PipelineLogger
from reorder.pipeline.outcomes import Outcome


@dataclass(frozen=True, slots=True)
class JobError:
    """A job aborted by an unexpected error; its file stays in the inbox."""

    job_path: Path
    error: str


@dataclass
class BatchReport:
    """Result of one batch run."""

    results: list[JobResult] = field(default_factory=list)
    errors: list[JobError] = field(default_factory=list)

    def counts(self) -> dict[str, int]:
        tally = Counter(result.outcome for result in self.results)
        return {outcome.value: tally[outcome] for outcome in Outcome if tally[outcome]}

    @property
    def created(self) -> list[JobResult]:
        return [result for result in self.results if result.success]


def list_job_files(batch_dir: Path) -> list[Path]:
    """Return the ``*.json`` job files directly inside ``batch_dir``."""
    if not batch_dir.is_dir():
        return []
    return sorted(path for path in batch_dir.glob("*.json") if path.is_file())


class BatchRunner:
    """Processes job files one at a time.

    With ``fail_fast`` off, an unexpected error ends only the current job:
    it is logged, its file is left in the inbox for a manual re-run, and the
    next file is processed. With ``fail_fast`` on, the error aborts the run.
    """

    def __init__(
        self,
        pipeline: ReorderPipeline,
        batch_dir: Path,
        *,
        fail_fast: bool = False,
        pipeline_logger: PipelineLogger | None = None,
    ) -> None:
        self._pipeline = pipeline
        self._batch_dir = batch_dir
        self._fail_fast = fail_fast
        self._log = pipeline_logger or PipelineLogger()

    def run(self) -> BatchReport:
        files = list_job_files(self._batch_dir)
        self._log.batch_started(self._batch_dir, len(files))

        report = BatchReport()
        for job_path in files:
            try:
                report.results.append(self._pipeline.process_job(job_path))
            except Exception as exc:
                self._log.job_fatal(job_path, exc)
                if self._fail_fast:
                    raise
                report.errors.append(JobError(job_path=job_path, error=str(exc)))

        self._log.batch_complete(report.counts(), len(report.errors))
        return report
