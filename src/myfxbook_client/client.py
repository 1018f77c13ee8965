"""
Myfxbook Client - Main orchestration module.

This module provides the MyfxbookClient class, the public entry point that
composes the pieces below into one call with a single retry on session expiry:
- Transport selection (direct or proxied) is handled by transport.py
- Response classification is handled by classifier.py
- The cached session credential is owned by session_manager.py
- Account list retrieval is implemented in fetcher.py
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

from .constants import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from .fetcher import AccountFetcher
from .models import AccountsResult, ConnectionConfig, ErrorKind, ProxyConfig
from .models.errors import ClientError
from .session_manager import SessionManager
from .transport import Transport

load_dotenv()
logger = logging.getLogger(__name__)


class MyfxbookClient:
    """
    Resilient client for the Myfxbook account API.

    Recovers internally from exactly one condition, an expired session, by
    logging in again and replaying the fetch once. Every other failure is
    returned to the caller classified.
    """

    def __init__(self, config: ConnectionConfig, transport: Optional[Transport] = None):
        """Initialize Myfxbook client with configuration."""
        self._config = config
        self._transport = transport or Transport(config)
        self._session_manager = SessionManager(config, self._transport)
        self._fetcher = AccountFetcher(config, self._transport)
        self._closed = False

    @classmethod
    def from_env(cls) -> "MyfxbookClient":
        """Create client from environment variables."""
        proxy_url = (
            os.getenv("MYFXBOOK_PROXY_URL")
            or os.getenv("HTTPS_PROXY")
            or os.getenv("HTTP_PROXY")
        )
        proxy = None
        if proxy_url:
            proxy = ProxyConfig(
                url=proxy_url,
                protocol=os.getenv("MYFXBOOK_PROXY_PROTOCOL") or None,
            )

        config = ConnectionConfig(
            email=os.getenv("MYFXBOOK_EMAIL", ""),
            password=os.getenv("MYFXBOOK_PASSWORD", ""),
            base_url=os.getenv("MYFXBOOK_BASE_URL", DEFAULT_BASE_URL),
            timeout=float(os.getenv("MYFXBOOK_TIMEOUT", str(DEFAULT_TIMEOUT))),
            proxy=proxy,
        )

        return cls(config)

    async def get_accounts(self) -> AccountsResult:
        """Fetch all account snapshots, re-authenticating once if the session expired."""
        if self._closed:
            raise RuntimeError("Client is closed")

        credential = await self._session_manager.acquire(force_refresh=False)
        if isinstance(credential, ClientError):
            return self._failed(credential)

        outcome = await self._fetcher.fetch(credential)

        if isinstance(outcome, ClientError) and outcome.kind is ErrorKind.SESSION_EXPIRED:
            logger.info("Session invalid, retrying with fresh login...")
            credential = await self._session_manager.acquire(force_refresh=True)
            if isinstance(credential, ClientError):
                return self._failed(credential)
            outcome = await self._fetcher.fetch(credential)

        if isinstance(outcome, ClientError):
            return self._failed(outcome)

        return AccountsResult.ok(outcome)

    def invalidate_session(self) -> None:
        """Clear the cached session credential. Always succeeds."""
        self._session_manager.invalidate()

    def _failed(self, error: ClientError) -> AccountsResult:
        logger.warning(f"get_accounts failed: {error}")
        return AccountsResult.failed(error)

    @property
    def config(self) -> ConnectionConfig:
        return self._config

    @property
    def transport(self) -> Transport:
        """Transport shared with side clients such as ExchangeRateClient."""
        return self._transport

    async def close(self) -> None:
        """Close client and cleanup resources."""
        if not self._closed:
            await self._transport.close()
            self._closed = True
            logger.info("Myfxbook client closed")

    # Context manager support
    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    def __del__(self):
        """Cleanup on deletion."""
        if hasattr(self, '_closed') and not self._closed and not self._transport.closed:
            logger.warning("MyfxbookClient not properly closed - call close() explicitly")


def create_myfxbook_client(
    email: str,
    password: str,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = DEFAULT_TIMEOUT,
    proxy_url: Optional[str] = None,
    proxy_protocol: Optional[str] = None,
) -> MyfxbookClient:
    """
    Factory function to create Myfxbook client with common configuration.

    Args:
        email: Myfxbook account email
        password: Myfxbook account password
        base_url: Base URL for API endpoints
        timeout: Per-request timeout in seconds
        proxy_url: Optional proxy endpoint; all traffic is routed through it
        proxy_protocol: Optional protocol override for the proxy (e.g. "socks5")

    Returns:
        Configured MyfxbookClient instance
    """
    proxy = ProxyConfig(url=proxy_url, protocol=proxy_protocol) if proxy_url else None

    config = ConnectionConfig(
        email=email,
        password=password,
        base_url=base_url,
        timeout=timeout,
        proxy=proxy,
    )

    return MyfxbookClient(config)
