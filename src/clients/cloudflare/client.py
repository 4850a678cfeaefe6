"""
Cloudflare Firewall Client - Implements RemoteServiceClient over the v4 API.

Talks to ``/zones/{zone_id}/firewall/rules`` and classifies failures at
this boundary so callers never inspect error text.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from clients.base import RemoteServiceClient
from config import CloudflareConfig
from errors import RemoteErrorKind, RemoteServiceError
from models import RemoteRecord

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://api.cloudflare.com/client/v4"


def error_from_response(status: int, body: Any) -> Optional[RemoteServiceError]:
    """
    Classify a v4 API response.

    Args:
        status: HTTP status code.
        body: Decoded JSON envelope, or None if the body was not JSON.

    Returns:
        A RemoteServiceError describing the failure, or None on success.
    """
    envelope = body if isinstance(body, dict) else {}
    details = "; ".join(
        f"{e.get('code', '?')}: {e.get('message', '')}"
        for e in envelope.get("errors") or []
        if isinstance(e, dict)
    )
    message = f"HTTP status {status}"
    if details:
        message = f"{message}: {details}"

    if status == 404:
        return RemoteServiceError(message, kind=RemoteErrorKind.NOT_FOUND, status=status)

    if status >= 400 or not isinstance(body, dict) or body.get("success") is False:
        return RemoteServiceError(message, kind=RemoteErrorKind.OTHER, status=status)

    return None


class CloudflareFirewallClient(RemoteServiceClient):
    """
    Remote service client for Cloudflare firewall rules.

    Opens a short-lived aiohttp session per call; the API token is sent as
    a bearer token.
    """

    def __init__(
        self,
        api_token: str = "",
        api_base_url: str = DEFAULT_API_BASE_URL,
        timeout: int = 30,
    ):
        self.api_token = api_token
        self.api_base_url = api_base_url.rstrip("/")
        self.timeout = timeout

        if not self.api_token:
            logger.warning(
                "Cloudflare API token not configured. "
                "Set CLOUDFLARE_API_TOKEN environment variable."
            )

    @classmethod
    def from_config(cls, config: CloudflareConfig) -> "CloudflareFirewallClient":
        return cls(
            api_token=config.api_token,
            api_base_url=config.api_base_url,
            timeout=config.timeout,
        )

    async def create(
        self, zone_id: str, rules: List[RemoteRecord]
    ) -> List[RemoteRecord]:
        result = await self._request(
            "POST",
            self._rules_path(zone_id),
            json=[rule.to_payload() for rule in rules],
        )
        return [RemoteRecord.from_payload(r) for r in result or []]

    async def get(self, zone_id: str, rule_id: str) -> RemoteRecord:
        path = self._rules_path(zone_id, rule_id)
        result = await self._request("GET", path)
        if not isinstance(result, dict):
            raise RemoteServiceError(f"GET {path} returned no rule object")
        return RemoteRecord.from_payload(result)

    async def update(self, zone_id: str, rule: RemoteRecord) -> RemoteRecord:
        result = await self._request(
            "PUT",
            self._rules_path(zone_id, rule.id),
            json=rule.to_payload(),
        )
        return RemoteRecord.from_payload(result or {})

    async def delete(self, zone_id: str, rule_id: str) -> None:
        await self._request("DELETE", self._rules_path(zone_id, rule_id))

    # Private helper methods

    def _rules_path(self, zone_id: str, rule_id: Optional[str] = None) -> str:
        path = f"/zones/{zone_id}/firewall/rules"
        if rule_id:
            path = f"{path}/{rule_id}"
        return path

    def _get_headers(self) -> Dict[str, str]:
        """Get HTTP headers for v4 API requests."""
        headers = {"Content-Type": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        return headers

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        """
        Send a request and return the envelope's ``result``.

        Raises:
            RemoteServiceError: On any HTTP, envelope, connection or timeout failure.
        """
        url = f"{self.api_base_url}{path}"
        timeout = aiohttp.ClientTimeout(total=self.timeout)

        logger.debug(f"{method} {url}")

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.request(
                    method, url, headers=self._get_headers(), json=json
                ) as response:
                    try:
                        body = await response.json(content_type=None)
                    except ValueError:
                        body = None
                    status = response.status
        except asyncio.TimeoutError as e:
            raise RemoteServiceError(
                f"{method} {url} timed out after {self.timeout}s"
            ) from e
        except aiohttp.ClientError as e:
            raise RemoteServiceError(f"{method} {url} failed: {e}") from e

        error = error_from_response(status, body)
        if error is not None:
            logger.debug(f"{method} {url} failed: {error}")
            raise error

        return body.get("result")
