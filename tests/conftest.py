# -*- coding: utf-8 -*-
"""
Shared fixtures and utilities for testing Myfxbook client.
"""

import json
import pytest
from typing import Any, Dict, List
from unittest.mock import AsyncMock, Mock

from myfxbook_client.models import ConnectionConfig, RawResponse
from myfxbook_client.transport import Transport


CHALLENGE_PAGE = (
    "<!DOCTYPE html><html><head><title>Just a moment...</title></head>"
    "<body><div>Checking your browser before accessing myfxbook.com.</div>"
    "<div>Ray ID: 123abc</div></body></html>"
)

MAINTENANCE_PAGE = (
    "<!DOCTYPE html><html><head><title>Maintenance</title></head>"
    "<body><h1>We'll be back soon</h1></body></html>"
)


def make_json_response(data: Any, status: int = 200) -> RawResponse:
    """Build a JSON RawResponse."""
    return RawResponse(
        status=status,
        content_type="application/json; charset=utf-8",
        body=json.dumps(data),
    )


def make_html_response(body: str, status: int = 503) -> RawResponse:
    """Build an HTML RawResponse."""
    return RawResponse(status=status, content_type="text/html; charset=UTF-8", body=body)


# Mock data fixtures
@pytest.fixture
def account_entry_data() -> Dict[str, Any]:
    """Mock single upstream account entry."""
    return {
        "id": 12345,
        "name": "Live Scalper",
        "accountId": 987654,
        "gain": 34.51,
        "absGain": 30.12,
        "daily": 0.05,
        "monthly": 2.7,
        "withdrawals": 0,
        "deposits": 10000,
        "interest": -12.5,
        "profit": 3451.2,
        "balance": 13451.2,
        "drawdown": 8.4,
        "equity": 13380.75,
        "equityPercent": 99.48,
        "demo": False,
        "lastUpdateDate": "03/14/2025 10:22",
        "creationDate": "01/02/2024 09:00",
        "firstTradeDate": "01/03/2024 11:30",
        "currency": "USD",
        "profitFactor": 1.62,
        "pips": 4120.3,
        "server": {"name": "ICMarkets-Live07"},
        "invitationUrl": "https://www.myfxbook.com/members/x/y/12345",
    }


@pytest.fixture
def accounts_response_data(account_entry_data) -> Dict[str, Any]:
    """Mock get-my-accounts response with two accounts."""
    second = dict(account_entry_data, id=22222, name="Demo Swing", accountId=111, demo=True)
    return {"error": False, "message": "", "accounts": [account_entry_data, second]}


@pytest.fixture
def login_response_data() -> Dict[str, Any]:
    """Mock successful login response."""
    return {"error": False, "message": "", "session": "abc%3D"}


@pytest.fixture
def connection_config() -> ConnectionConfig:
    """Connection config with credentials."""
    return ConnectionConfig(
        email="trader@example.com",
        password="p@ss word",
        base_url="https://test-api.example.com/api",
        timeout=5.0,
    )


@pytest.fixture
def unconfigured_config() -> ConnectionConfig:
    """Connection config without credentials."""
    return ConnectionConfig(base_url="https://test-api.example.com/api")


@pytest.fixture
def mock_transport() -> Mock:
    """Mock Transport whose send() is scripted per test."""
    transport = Mock(spec=Transport)
    transport.send = AsyncMock()
    transport.close = AsyncMock()
    transport.closed = True
    return transport


def sent_urls(transport: Mock) -> List[str]:
    """URLs passed to a mock transport, in call order."""
    return [call.args[0] for call in transport.send.call_args_list]


@pytest.fixture
def json_response():
    """Factory for JSON RawResponse objects."""
    return make_json_response


@pytest.fixture
def html_response():
    """Factory for HTML RawResponse objects."""
    return make_html_response


@pytest.fixture
def challenge_page() -> str:
    """Cloudflare-style interstitial body."""
    return CHALLENGE_PAGE


@pytest.fixture
def maintenance_page() -> str:
    """Generic HTML error page without challenge markers."""
    return MAINTENANCE_PAGE


@pytest.fixture
def urls_sent():
    """Return the URLs a mock transport was asked to fetch."""
    return sent_urls
