"""Unit tests for the Cloudflare firewall client."""

from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from clients.base import RemoteServiceClient
from clients.cloudflare import CloudflareFirewallClient
from clients.cloudflare.client import error_from_response
from config import CloudflareConfig
from errors import RemoteErrorKind, RemoteServiceError
from models import FilterRef, RemoteRecord

RULE_PAYLOAD = {
    "id": "rule-1",
    "paused": False,
    "description": "block bad bots",
    "action": "block",
    "priority": 10,
    "filter": {"id": "filter-1"},
    "products": ["waf"],
}


def fake_session(status, body):
    """Build a ClientSession stand-in returning one canned response."""
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=body)

    session = MagicMock()
    session.request.return_value.__aenter__.return_value = response
    session.request.return_value.__aexit__.return_value = False

    session_cls = MagicMock()
    session_cls.return_value.__aenter__.return_value = session
    session_cls.return_value.__aexit__.return_value = False
    return session_cls, session


class TestErrorFromResponse:
    """Tests for error_from_response."""

    def test_success(self):
        assert error_from_response(200, {"success": True, "result": {}}) is None

    def test_not_found(self):
        """Test that 404 is classified as not found."""
        error = error_from_response(
            404,
            {"success": False, "errors": [{"code": 10008, "message": "not found"}]},
        )
        assert error.kind is RemoteErrorKind.NOT_FOUND
        assert error.status == 404
        assert str(error) == "HTTP status 404: 10008: not found"

    def test_server_error(self):
        error = error_from_response(500, None)
        assert error.kind is RemoteErrorKind.OTHER
        assert str(error) == "HTTP status 500"

    def test_bad_request_collects_errors(self):
        """Test that every envelope error ends up in the message."""
        error = error_from_response(
            400,
            {
                "success": False,
                "errors": [
                    {"code": 1, "message": "bad action"},
                    {"code": 2, "message": "bad filter"},
                ],
            },
        )
        assert error.kind is RemoteErrorKind.OTHER
        assert "1: bad action; 2: bad filter" in str(error)

    def test_unsuccessful_envelope_on_200(self):
        """Test that success: false is a failure even on 200."""
        error = error_from_response(200, {"success": False, "errors": []})
        assert error.kind is RemoteErrorKind.OTHER

    def test_non_json_body_on_200(self):
        assert error_from_response(200, None).kind is RemoteErrorKind.OTHER


class TestClientConfiguration:
    """Tests for client construction."""

    def test_is_remote_service_client(self):
        assert isinstance(CloudflareFirewallClient("token"), RemoteServiceClient)

    def test_from_config(self):
        config = CloudflareConfig(
            api_base_url="https://example.test/v4/", api_token="t", timeout=5
        )
        client = CloudflareFirewallClient.from_config(config)
        assert client.api_base_url == "https://example.test/v4"
        assert client.api_token == "t"
        assert client.timeout == 5

    def test_headers_with_token(self):
        client = CloudflareFirewallClient("secret")
        assert client._get_headers()["Authorization"] == "Bearer secret"

    def test_headers_without_token(self):
        client = CloudflareFirewallClient("")
        assert "Authorization" not in client._get_headers()


@pytest.mark.asyncio
class TestClientOperations:
    """Tests for the four operations, with _request stubbed."""

    @pytest.fixture
    def client(self):
        client = CloudflareFirewallClient("token")
        client._request = AsyncMock()
        return client

    async def test_create(self, client):
        """Test that create posts a list and parses a list."""
        client._request.return_value = [RULE_PAYLOAD]
        record = RemoteRecord(action="block", filter=FilterRef(id="filter-1"))

        created = await client.create("zone-1", [record])

        client._request.assert_awaited_once_with(
            "POST", "/zones/zone-1/firewall/rules", json=[record.to_payload()]
        )
        assert [r.id for r in created] == ["rule-1"]

    async def test_create_empty_result(self, client):
        client._request.return_value = None
        assert await client.create("zone-1", [RemoteRecord()]) == []

    async def test_get(self, client):
        client._request.return_value = RULE_PAYLOAD

        record = await client.get("zone-1", "rule-1")

        client._request.assert_awaited_once_with(
            "GET", "/zones/zone-1/firewall/rules/rule-1"
        )
        assert record.filter.id == "filter-1"
        assert record.products == ["waf"]

    async def test_get_without_result_raises(self, client):
        """Test that a success envelope with a null result is a failure."""
        client._request.return_value = None

        with pytest.raises(RemoteServiceError) as exc_info:
            await client.get("zone-1", "rule-1")

        assert exc_info.value.kind is RemoteErrorKind.OTHER
        assert "returned no rule object" in str(exc_info.value)

    async def test_update(self, client):
        """Test that update puts the full record to the rule's path."""
        client._request.return_value = RULE_PAYLOAD
        record = RemoteRecord.from_payload(RULE_PAYLOAD)

        updated = await client.update("zone-1", record)

        client._request.assert_awaited_once_with(
            "PUT", "/zones/zone-1/firewall/rules/rule-1", json=record.to_payload()
        )
        assert updated.id == "rule-1"

    async def test_delete(self, client):
        client._request.return_value = {"id": "rule-1"}

        assert await client.delete("zone-1", "rule-1") is None

        client._request.assert_awaited_once_with(
            "DELETE", "/zones/zone-1/firewall/rules/rule-1"
        )


@pytest.mark.asyncio
class TestRequest:
    """Tests for _request against a stubbed aiohttp session."""

    async def test_returns_result(self):
        session_cls, session = fake_session(
            200, {"success": True, "errors": [], "result": RULE_PAYLOAD}
        )
        client = CloudflareFirewallClient("token", api_base_url="https://cf.test/v4")

        with patch("clients.cloudflare.client.aiohttp.ClientSession", session_cls):
            result = await client._request("GET", "/zones/z/firewall/rules/r")

        assert result == RULE_PAYLOAD
        args, kwargs = session.request.call_args
        assert args == ("GET", "https://cf.test/v4/zones/z/firewall/rules/r")
        assert kwargs["headers"]["Authorization"] == "Bearer token"

    async def test_not_found_raises_classified_error(self):
        session_cls, _ = fake_session(404, {"success": False, "errors": []})
        client = CloudflareFirewallClient("token")

        with patch("clients.cloudflare.client.aiohttp.ClientSession", session_cls):
            with pytest.raises(RemoteServiceError) as exc_info:
                await client._request("GET", "/zones/z/firewall/rules/r")

        assert exc_info.value.is_not_found

    async def test_connection_error_is_other(self):
        """Test that transport failures are classified at the boundary."""
        session_cls, session = fake_session(200, {})
        session.request.side_effect = aiohttp.ClientConnectionError("refused")
        client = CloudflareFirewallClient("token")

        with patch("clients.cloudflare.client.aiohttp.ClientSession", session_cls):
            with pytest.raises(RemoteServiceError) as exc_info:
                await client._request("DELETE", "/zones/z/firewall/rules/r")

        assert exc_info.value.kind is RemoteErrorKind.OTHER
        assert "refused" in str(exc_info.value)
