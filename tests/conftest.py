"""Pytest configuration and fixtures."""

import pytest
from unittest.mock import AsyncMock

from clients.base import RemoteServiceClient
from models import DesiredState, FilterRef, FirewallRuleAction, RemoteRecord


@pytest.fixture
def desired_state():
    """Sample desired state with every field set."""
    return DesiredState(
        zone_id="zone-1",
        filter_id="filter-1",
        action=FirewallRuleAction.BLOCK,
        description="block bad bots",
        paused=False,
        priority=10,
        products=frozenset({"waf", "bic"}),
    )


@pytest.fixture
def remote_record():
    """Sample record as returned by the remote service."""
    return RemoteRecord(
        id="rule-1",
        paused=False,
        description="block bad bots",
        action="block",
        priority=10,
        filter=FilterRef(id="filter-1"),
        products=["waf", "bic"],
    )


@pytest.fixture
def mock_client(remote_record):
    """Create a mock remote service client that echoes remote_record."""
    client = AsyncMock(spec=RemoteServiceClient)
    client.create = AsyncMock(return_value=[remote_record])
    client.get = AsyncMock(return_value=remote_record)
    client.update = AsyncMock(return_value=remote_record)
    client.delete = AsyncMock(return_value=None)
    return client
