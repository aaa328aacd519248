"""Inventory service client for per-SKU stock lookups."""

from __future__ import annotations

import json
from typing import Any, cast
import urllib.error
import urllib.parse
import urllib.request

from loguru import logger

from reorder.core.config import ReorderConfig


class InventoryClientError(Exception):
    """Base error for inventory service failures."""


class InventoryClient:
    def __init__(self, *, endpoint: str, api_key: str, timeout: float = 30.0) -> None:
        self._endpoint = endpoint
        self._api_key = api_key
        self._timeout = timeout

    @classmethod
    def from_config(cls, config: ReorderConfig) -> InventoryClient:
        return cls(
            endpoint=config.inventory_endpoint,
            api_key=config.inventory_api_key,
            timeout=config.http_timeout,
        )

    def stock_url(self, skus: list[str]) -> str:
        """Build the stock lookup URL: ``stock?skus=[<url-encoded comma list>]``."""
        encoded = urllib.parse.quote(",".join(skus), safe="")
        return f"{self._endpoint}stock?skus=[{encoded}]"

    def get_stock(self, skus: list[str]) -> dict[str, Any]:
        """Return the raw stock response ``{"skus": [{sku: {...}}]}``."""
        url = self.stock_url(skus)
        req = urllib.request.Request(  # noqa: S310
            url,
            headers={"Content-Type": "application/json", "x-api-key": self._api_key},
            method="GET",
        )

        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as resp:  # noqa: S310
                body = resp.read().decode("utf-8")
        except urllib.error.HTTPError as e:
            err_body = e.read().decode("utf-8", "ignore")
            logger.bind(url=url, status=e.code).error("Inventory error: {}", err_body)
            raise InventoryClientError(
                f"Inventory API error ({e.code}): {err_body}"
            ) from e
        except urllib.error.URLError as e:
            raise InventoryClientError(
                f"Network error calling inventory API: {e}"
            ) from e

        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            raise InventoryClientError(
                f"Failed to parse inventory response as JSON: {e}: {body}"
            ) from e

        if not isinstance(data, dict) or not isinstance(data.get("skus"), list):
            raise InventoryClientError(f"Unexpected inventory response shape: {body}")
        return cast(dict[str, Any], data)
