from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

DEFAULT_ALLOCATION_PRIORITY: tuple[str, ...] = ("GB-SHE-WAMAS-1", "GB-SHE-JDA-1")

_REQUIRED_ENV_VARS = (
    "OMS_ENDPOINT",
    "OMS_API_KEY",
    "IS_ENDPOINT",
    "IS_API_KEY",
)


class ConfigError(Exception):
    """Missing or invalid re-order configuration."""


@dataclass(frozen=True, slots=True)
class ReorderConfig:
    """Endpoints, keys, and table names injected into every collaborator."""

    oms_endpoint: str
    oms_api_key: str
    inventory_endpoint: str
    inventory_api_key: str
    aws_region: str = "eu-west-1"
    refunds_table: str = "Refunds"
    orders_table: str = "OrdersV3"
    logs_table: str = "OrdersLogs"
    batch_dir: Path = Path("batch")
    csv_path: Path = Path("reorder.csv")
    allocation_priority: tuple[str, ...] = DEFAULT_ALLOCATION_PRIORITY
    http_timeout: float = 30.0


def _parse_priority(raw: str) -> tuple[str, ...]:
    sources = tuple(part.strip() for part in raw.split(",") if part.strip())
    if not sources:
        raise ConfigError("REORDER_ALLOCATION_PRIORITY must name at least one source")
    return sources


def _parse_timeout(raw: str) -> float:
    try:
        timeout = float(raw)
    except ValueError as e:
        raise ConfigError(f"REORDER_HTTP_TIMEOUT must be a number, got {raw!r}") from e
    if timeout <= 0:
        raise ConfigError("REORDER_HTTP_TIMEOUT must be positive")
    return timeout


def load_reorder_config_from_env() -> ReorderConfig:
    """Load re-order configuration from environment variables.

    Required env vars: OMS_ENDPOINT, OMS_API_KEY, IS_ENDPOINT, IS_API_KEY.

    Raises:
        ConfigError: If any required variable is missing or a value is invalid.
    """
    missing = [var for var in _REQUIRED_ENV_VARS if not os.environ.get(var, "").strip()]
    if missing:
        raise ConfigError(
            f"Missing required re-order env var(s): {', '.join(missing)}"
        )

    priority_raw = os.environ.get("REORDER_ALLOCATION_PRIORITY", "").strip()
    timeout_raw = os.environ.get("REORDER_HTTP_TIMEOUT", "").strip()

    return ReorderConfig(
        oms_endpoint=os.environ["OMS_ENDPOINT"].strip(),
        oms_api_key=os.environ["OMS_API_KEY"].strip(),
        inventory_endpoint=os.environ["IS_ENDPOINT"].strip(),
        inventory_api_key=os.environ["IS_API_KEY"].strip(),
        aws_region=os.environ.get("AWS_REGION", "eu-west-1").strip() or "eu-west-1",
        refunds_table=os.environ.get("REORDER_REFUNDS_TABLE", "Refunds"),
        orders_table=os.environ.get("REORDER_ORDERS_TABLE", "OrdersV3"),
        logs_table=os.environ.get("REORDER_LOGS_TABLE", "OrdersLogs"),
        batch_dir=Path(os.environ.get("REORDER_BATCH_DIR", "batch")),
        csv_path=Path(os.environ.get("REORDER_CSV_PATH", "reorder.csv")),
        allocation_priority=(
            _parse_priority(priority_raw)
            if priority_raw
            else DEFAULT_ALLOCATION_PRIORITY
        ),
        http_timeout=_parse_timeout(timeout_raw) if timeout_raw else 30.0,
    )
