"""
Data models for Myfxbook client.

This package contains all data structures used throughout the Myfxbook client,
following the state-first principle with immutable data structures.
"""

from .config import ConnectionConfig, ProxyConfig, normalize_proxy_url
from .account import AccountSnapshot
from .errors import ClientError, ErrorKind, MyfxbookError
from .responses import (
    BotChallenge,
    ClassifiedResponse,
    Malformed,
    Payload,
    RawResponse,
    TransportFailure,
)
from .results import AccountsResult

__all__ = [
    # Configuration
    "ConnectionConfig",
    "ProxyConfig",
    "normalize_proxy_url",
    # Account
    "AccountSnapshot",
    "AccountsResult",
    # Errors
    "ClientError",
    "ErrorKind",
    "MyfxbookError",
    # Responses
    "RawResponse",
    "Payload",
    "BotChallenge",
    "Malformed",
    "TransportFailure",
    "ClassifiedResponse",
]
