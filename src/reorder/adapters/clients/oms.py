"""Order management service (OMS) client: order lookup and re-order creation."""

from __future__ import annotations

import json
from typing import Any, cast
import urllib.error
import urllib.parse
import urllib.request

from loguru import logger
from pydantic import BaseModel, ValidationError

from reorder.core.config import ReorderConfig
from reorder.domain.models import Order


class OmsClientError(Exception):
    """Base error for OMS client failures."""


class OrderLookupResponse(BaseModel):
    Order: dict[str, Any] | None = None


class ReorderCreateResponse(BaseModel):
    OrderNumber: str | int | None = None


class OmsClient:
    def __init__(self, *, endpoint: str, api_key: str, timeout: float = 30.0) -> None:
        self._endpoint = endpoint
        self._api_key = api_key
        self._timeout = timeout

    @classmethod
    def from_config(cls, config: ReorderConfig) -> OmsClient:
        return cls(
            endpoint=config.oms_endpoint,
            api_key=config.oms_api_key,
            timeout=config.http_timeout,
        )

    def _headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json", "x-api-key": self._api_key}

    def _parse_json_response(self, body: str) -> dict[str, Any]:
        try:
            return cast(dict[str, Any], json.loads(body))
        except json.JSONDecodeError as e:
            raise OmsClientError(
                f"Failed to parse OMS response as JSON: {e}: {body}"
            ) from e

    def _request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
        *,
        allow_not_found: bool = False,
    ) -> dict[str, Any] | None:
        url = self._endpoint + path
        data = json.dumps(payload).encode("utf-8") if payload is not None else None
        req = urllib.request.Request(  # noqa: S310
            url,
            data=data,
            headers=self._headers(),
            method=method,
        )

        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as resp:  # noqa: S310
                body = resp.read().decode("utf-8")
        except urllib.error.HTTPError as e:
            if allow_not_found and e.code == 404:
                return None
            err_body = e.read().decode("utf-8", "ignore")
            logger.bind(url=url, status=e.code).error("OMS error: {}", err_body)
            raise OmsClientError(f"OMS API error ({e.code}): {err_body}") from e
        except urllib.error.URLError as e:
            raise OmsClientError(f"Network error calling OMS API: {e}") from e

        if not body.strip():
            return {}
        return self._parse_json_response(body)

    # High-level APIs -----------------------------------------------------

    def get_order(self, order_number: str) -> Order | None:
        """Fetch an order by number; ``None`` when the OMS has no such order."""
        path = urllib.parse.quote(order_number, safe="")
        raw = self._request("GET", path, allow_not_found=True)
        if raw is None:
            return None

        try:
            resp = OrderLookupResponse.model_validate(raw)
            if not resp.Order:
                return None
            return Order.parse(resp.Order)
        except ValidationError as e:
            raise OmsClientError(f"Malformed order {order_number}: {e}") from e

    def create_reorder(self, payload: dict[str, Any]) -> str | None:
        """Create a replacement order and return its number, if the OMS issued one."""
        raw = self._request("PUT", "reorder", payload) or {}
        try:
            resp = ReorderCreateResponse.model_validate(raw)
        except ValidationError as e:
            raise OmsClientError(f"Malformed re-order response: {e}") from e
        if resp.OrderNumber in (None, ""):
            return None
        return str(resp.OrderNumber)
