"""
Myfxbook Client - resilient Python client for the Myfxbook account API.

This package provides an async client that logs in, caches the session
credential, retries once on session expiry, routes traffic through an
optional proxy, and reports bot-mitigation challenges distinctly from
other upstream failures.
"""

from .client import MyfxbookClient, create_myfxbook_client
from .classifier import classify
from .fetcher import AccountFetcher, is_session_error
from .rates import ExchangeRateClient
from .session_manager import SessionManager
from .transport import Transport
from .models import (
    # Configuration
    ConnectionConfig,
    ProxyConfig,
    # Results
    AccountSnapshot,
    AccountsResult,
    # Errors
    ClientError,
    ErrorKind,
    MyfxbookError,
    # Responses
    Payload,
    BotChallenge,
    Malformed,
    TransportFailure,
)

__all__ = [
    # Main Client
    "MyfxbookClient",
    "create_myfxbook_client",
    "ExchangeRateClient",
    # Components
    "Transport",
    "SessionManager",
    "AccountFetcher",
    "classify",
    "is_session_error",
    "ConnectionConfig",
    "ProxyConfig",
    "AccountSnapshot",
    "AccountsResult",
    "ClientError",
    "ErrorKind",
    "MyfxbookError",
    "Payload",
    "BotChallenge",
    "Malformed",
    "TransportFailure",
]
