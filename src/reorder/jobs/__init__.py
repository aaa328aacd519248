"""Batch job for processing re-order inboxes."""

from __future__ import annotations

from reorder.jobs.batch import BatchReport, BatchRunner, JobError, list_job_files

__all__ = ["BatchReport", "BatchRunner", "JobError", "list_job_files"]
