"""Tests for the OMS client."""

from __future__ import annotations

import io
import json
from unittest.mock import MagicMock, patch
import urllib.error

import pytest

from reorder.adapters.clients.oms import OmsClient, OmsClientError


def _client() -> OmsClient:
    return OmsClient(endpoint="https://oms.example.com/orders/", api_key="oms-key")


def _response(body: bytes) -> MagicMock:
    resp = MagicMock()
    resp.__enter__.return_value.read.return_value = body
    return resp


def _http_error(code: int, body: bytes = b"") -> urllib.error.HTTPError:
    return urllib.error.HTTPError(
        "https://oms.example.com/orders/O1", code, "error", {}, io.BytesIO(body)
    )


class TestGetOrder:
    @patch("urllib.request.urlopen")
    def test_returns_parsed_order(self, mock_urlopen, order_data):
        mock_urlopen.return_value = _response(json.dumps({"Order": order_data}).encode())

        order = _client().get_order("O1")

        assert order is not None
        assert order.order_number == "O1"
        req = mock_urlopen.call_args.args[0]
        assert req.full_url == "https://oms.example.com/orders/O1"
        assert req.get_method() == "GET"
        assert req.get_header("X-api-key") == "oms-key"

    @patch("urllib.request.urlopen")
    def test_missing_order_key_is_absent(self, mock_urlopen):
        mock_urlopen.return_value = _response(b'{"message": "not found"}')

        assert _client().get_order("O1") is None

    @patch("urllib.request.urlopen")
    def test_404_is_absent(self, mock_urlopen):
        mock_urlopen.side_effect = _http_error(404, b"missing")

        assert _client().get_order("O1") is None

    @patch("urllib.request.urlopen")
    def test_server_error_raises(self, mock_urlopen):
        mock_urlopen.side_effect = _http_error(500, b"boom")

        with pytest.raises(OmsClientError, match="500"):
            _client().get_order("O1")

    @patch("urllib.request.urlopen")
    def test_network_error_raises(self, mock_urlopen):
        mock_urlopen.side_effect = urllib.error.URLError("unreachable")

        with pytest.raises(OmsClientError, match="Network error"):
            _client().get_order("O1")

    @patch("urllib.request.urlopen")
    def test_malformed_order_raises(self, mock_urlopen, order_data):
        del order_data["Items"][0]["Sku"]
        mock_urlopen.return_value = _response(json.dumps({"Order": order_data}).encode())

        with pytest.raises(OmsClientError, match="Malformed order O1"):
            _client().get_order("O1")

    @patch("urllib.request.urlopen")
    def test_invalid_json_raises(self, mock_urlopen):
        mock_urlopen.return_value = _response(b"<html>")

        with pytest.raises(OmsClientError, match="parse OMS response"):
            _client().get_order("O1")


class TestCreateReorder:
    @patch("urllib.request.urlopen")
    def test_puts_payload_and_returns_order_number(self, mock_urlopen):
        mock_urlopen.return_value = _response(b'{"OrderNumber": "N1"}')

        result = _client().create_reorder({"ParentOrderNumber": "O1"})

        assert result == "N1"
        req = mock_urlopen.call_args.args[0]
        assert req.full_url == "https://oms.example.com/orders/reorder"
        assert req.get_method() == "PUT"
        assert json.loads(req.data) == {"ParentOrderNumber": "O1"}

    @patch("urllib.request.urlopen")
    def test_numeric_order_number_returned_as_str(self, mock_urlopen):
        mock_urlopen.return_value = _response(b'{"OrderNumber": 200345}')

        assert _client().create_reorder({}) == "200345"

    @pytest.mark.parametrize("body", [b"{}", b'{"OrderNumber": ""}', b""])
    @patch("urllib.request.urlopen")
    def test_missing_order_number_returns_none(self, mock_urlopen, body):
        mock_urlopen.return_value = _response(body)

        assert _client().create_reorder({}) is None

    @patch("urllib.request.urlopen")
    def test_http_error_raises(self, mock_urlopen):
        mock_urlopen.side_effect = _http_error(400, b"bad payload")

        with pytest.raises(OmsClientError, match="bad payload"):
            _client().create_reorder({})
