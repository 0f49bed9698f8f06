"""Tests for the Cloudflare API client."""

from __future__ import annotations

import json

import httpx
import pytest

from routewall.core.cloudflare import CloudflareApiClient, CloudflareApiError, CloudflareError
from routewall.core.cloudflare.waf_client import WafApiClient
from tests.helpers import RecordingTransport, envelope, error_response


def make_client(transport: httpx.MockTransport, cls: type = CloudflareApiClient):
    return cls("secret-token", "zone123", retry_attempts=3, retry_delay=0, transport=transport)


class TestRequests:
    def test_sends_auth_headers_to_zone_endpoint(self) -> None:
        transport = RecordingTransport(lambda request: httpx.Response(200, json=envelope([])))
        client = make_client(transport)

        response = client.get(client.zone_endpoint("filters"), params={"page": 2})

        request = transport.requests[0]
        assert request.url.path == "/client/v4/zones/zone123/filters"
        assert request.url.params["page"] == "2"
        assert request.headers["Authorization"] == "Bearer secret-token"
        assert request.headers["Content-Type"] == "application/json"
        assert CloudflareApiClient.result(response) == []

    def test_post_sends_json_body(self) -> None:
        transport = RecordingTransport(
            lambda request: httpx.Response(200, json=envelope({"id": "abc"}))
        )
        client = make_client(transport)

        response = client.post("zones/zone123/purge_cache", {"purge_everything": True})

        assert json.loads(transport.requests[0].content) == {"purge_everything": True}
        assert client.result(response) == {"id": "abc"}

    def test_result_default_for_missing_or_non_json_result(self) -> None:
        assert CloudflareApiClient.result(httpx.Response(200, text="ok"), {}) == {}
        assert CloudflareApiClient.result(httpx.Response(200, json={"result": None}), []) == []

    def test_context_manager_closes_client(self) -> None:
        transport = RecordingTransport(lambda request: httpx.Response(200, json=envelope({})))
        with make_client(transport) as client:
            client.delete("zones/zone123/filters/f1")

        assert transport.calls() == [("DELETE", "/client/v4/zones/zone123/filters/f1")]


class TestErrorMapping:
    @pytest.mark.parametrize("status", [401, 403])
    def test_authentication_errors(self, status: int) -> None:
        transport = RecordingTransport(lambda request: error_response(status, "Invalid token"))

        with pytest.raises(CloudflareApiError) as exc_info:
            make_client(transport).get("zones/zone123/firewall/rules")

        assert exc_info.value.is_authentication_error
        assert "Cloudflare authentication error: Invalid token" in str(exc_info.value)
        assert len(transport.requests) == 1

    def test_zone_errors(self) -> None:
        transport = RecordingTransport(
            lambda request: error_response(400, "Could not route to /zones/zone123", code=7003)
        )

        with pytest.raises(CloudflareApiError, match="Please check your Zone ID"):
            make_client(transport).get("zones/zone123/filters")

    def test_other_errors_include_context_and_code(self) -> None:
        transport = RecordingTransport(
            lambda request: error_response(400, "Filter expression invalid", code=10014)
        )

        with pytest.raises(CloudflareApiError) as exc_info:
            make_client(transport).post("zones/zone123/filters", [{}])

        error = exc_info.value
        assert str(error) == "POST request failed: Filter expression invalid (Code: 10014)"
        assert error.status_code == 400
        assert error.method == "POST"
        assert error.endpoint == "zones/zone123/filters"
        assert error.error_response is not None

    def test_error_without_body(self) -> None:
        transport = RecordingTransport(lambda request: httpx.Response(404, text="not found"))

        with pytest.raises(CloudflareApiError, match="GET request failed: Unknown error"):
            make_client(transport).get("zones/zone123/filters/x")


class TestRetries:
    def test_retries_server_errors_then_succeeds(self) -> None:
        responses = iter(
            [httpx.Response(502), httpx.Response(200, json=envelope({"id": "r1"}))]
        )
        transport = RecordingTransport(lambda request: next(responses))

        response = make_client(transport).get("zones/zone123/firewall/rules/r1")

        assert response.status_code == 200
        assert len(transport.requests) == 2

    def test_rate_limit_raises_after_attempts(self) -> None:
        transport = RecordingTransport(
            lambda request: error_response(429, "Too many", headers={"Retry-After": "30"})
        )

        with pytest.raises(CloudflareApiError) as exc_info:
            make_client(transport).get("zones/zone123/filters")

        assert exc_info.value.is_rate_limit_error
        assert "Retry after 30 seconds" in str(exc_info.value)
        assert len(transport.requests) == 3

    def test_transport_errors_become_cloudflare_errors(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = RecordingTransport(handler)

        with pytest.raises(CloudflareError, match="GET request failed: connection refused"):
            make_client(transport).get("zones/zone123/filters")

        assert len(transport.requests) == 3

    def test_client_errors_are_not_retried(self) -> None:
        transport = RecordingTransport(lambda request: error_response(400, "Bad request"))

        with pytest.raises(CloudflareApiError):
            make_client(transport).get("zones/zone123/filters")

        assert len(transport.requests) == 1


class TestWafApiClient:
    def test_filter_and_rule_endpoints(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "GET" and request.url.path.endswith("/firewall/rules"):
                return httpx.Response(200, json=envelope([{"id": "r1"}]))
            if request.method == "PUT":
                return httpx.Response(200, json=envelope(json.loads(request.content)))
            return httpx.Response(200, json=envelope({"id": "x"}))

        transport = RecordingTransport(handler)
        client = make_client(transport, WafApiClient)

        assert client.get_firewall_rules() == [{"id": "r1"}]
        assert client.update_filter("f1", {"id": "f1", "expression": "x"}) == {
            "id": "f1",
            "expression": "x",
        }
        assert client.get_filter("f1") == {"id": "x"}
        client.delete_firewall_rule("r1")

        assert transport.calls() == [
            ("GET", "/client/v4/zones/zone123/firewall/rules"),
            ("PUT", "/client/v4/zones/zone123/filters/f1"),
            ("GET", "/client/v4/zones/zone123/filters/f1"),
            ("DELETE", "/client/v4/zones/zone123/firewall/rules/r1"),
        ]
