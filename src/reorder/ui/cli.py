from __future__ import annotations

from dataclasses import replace
from pathlib import Path
import sys

from dotenv import load_dotenv
from loguru import logger
import typer

from reorder.core.config import ConfigError, ReorderConfig, load_reorder_config_from_env
from reorder.jobs.batch import BatchRunner
from reorder.pipeline.decision import ReorderPipeline

# Load environment variables from .env
load_dotenv()

app = typer.Typer(
    help="Re-order cancelled order lines from a batch of job files.",
    no_args_is_help=True,
)


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        format="{time:YYYY-MM-DD HH:mm:ss} [{level}] {name}: {message}",
        level="DEBUG" if verbose else "INFO",
    )


def _load_config(batch_dir: Path | None, csv_path: Path | None) -> ReorderConfig:
    try:
        config = load_reorder_config_from_env()
    except ConfigError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(2) from None

    if batch_dir is not None:
        config = replace(config, batch_dir=batch_dir)
    if csv_path is not None:
        config = replace(config, csv_path=csv_path)
    return config


@app.command("run")
def run_cmd(
    batch_dir: Path | None = typer.Option(
        None, "--batch-dir", help="Inbox of job files (default: REORDER_BATCH_DIR)"
    ),
    csv_path: Path | None = typer.Option(
        None, "--csv", help="Re-order CSV to append to (default: REORDER_CSV_PATH)"
    ),
    fail_fast: bool = typer.Option(
        False,
        "--fail-fast",
        help="Abort the whole run on the first unexpected error.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Process every job file in the batch directory."""
    _configure_logging(verbose)
    config = _load_config(batch_dir, csv_path)

    pipeline = ReorderPipeline.from_config(config)
    runner = BatchRunner(pipeline, config.batch_dir, fail_fast=fail_fast)
    report = runner.run()

    typer.echo(f"Processed {len(report.results) + len(report.errors)} job file(s)")
    for outcome, count in report.counts().items():
        typer.echo(f"  {outcome}: {count}")
    for result in report.created:
        typer.echo(f"  + {result.order_number} -> {result.new_order_number}")

    if report.errors:
        typer.echo(f"\n{len(report.errors)} job(s) left in inbox:", err=True)
        for job_error in report.errors:
            typer.echo(f"  - {job_error.job_path.name}: {job_error.error}", err=True)
        raise typer.Exit(1)


@app.command("job")
def job_cmd(
    job_path: Path = typer.Argument(..., help="A single job file to process"),
    csv_path: Path | None = typer.Option(None, "--csv", help="Re-order CSV"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Process one job file; outcome folders are created beside it."""
    _configure_logging(verbose)
    config = _load_config(job_path.parent, csv_path)

    pipeline = ReorderPipeline.from_config(config)
    result = pipeline.process_job(job_path)

    if result.success:
        typer.echo(f"{result.order_number} re-ordered as {result.new_order_number}")
    else:
        reason = result.failure.reason.name if result.failure else "unknown"
        typer.echo(f"{result.order_number}: {result.outcome.value} ({reason})")


def main() -> None:
    app()
