"""
Transport selection for Myfxbook client.

Owns the aiohttp session and decides, once, how requests leave the process:
directly, or tunneled through the configured proxy via aiohttp-socks. A proxy
that cannot be reached is reported as a transport failure; there is no
fallback to a direct connection, since the proxy exists to avoid an IP block.
"""

import asyncio
import logging
from typing import Dict, Optional, Union

import aiohttp
from aiohttp_socks import ProxyConnectionError, ProxyConnector, ProxyError, ProxyTimeoutError
from yarl import URL

from .models.config import ConnectionConfig
from .models.responses import RawResponse, TransportFailure
from .utils import mask_proxy_url

logger = logging.getLogger(__name__)


class Transport:
    """Sends GET requests to the upstream, directly or through a proxy."""

    def __init__(self, config: ConnectionConfig):
        """Initialize transport with configuration."""
        self._config = config
        self._session: Optional[aiohttp.ClientSession] = None
        self._timeout = aiohttp.ClientTimeout(total=config.timeout)
        self._proxy_url = config.proxy.normalized_url if config.proxy else None

        if self._proxy_url:
            logger.info(f"Using proxy: {mask_proxy_url(self._proxy_url)}")

    @property
    def proxy_url(self) -> Optional[str]:
        """Normalized proxy URL, or None for direct connections."""
        return self._proxy_url

    def _create_connector(self) -> aiohttp.TCPConnector:
        """Create the connector for the configured route."""
        if self._proxy_url:
            return ProxyConnector.from_url(self._proxy_url, limit=10)
        return aiohttp.TCPConnector(limit=10, ttl_dns_cache=300)

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the HTTP session."""
        if self._session is not None and not self._session.closed:
            return self._session

        headers = {
            "User-Agent": self._config.user_agent,
            "Accept": "application/json",
        }

        self._session = aiohttp.ClientSession(
            connector=self._create_connector(),
            timeout=self._timeout,
            headers=headers,
        )
        return self._session

    async def send(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
    ) -> Union[RawResponse, TransportFailure]:
        """
        Issue a GET request.

        Args:
            url: Fully built, already percent-encoded URL. It is sent verbatim.
            headers: Optional extra headers

        Returns:
            RawResponse for any HTTP status, TransportFailure when no response
            was received (timeout, connection or proxy error)
        """
        session = await self._get_session()

        try:
            async with session.get(
                URL(url, encoded=True),
                headers=headers,
                timeout=self._timeout,
                allow_redirects=True,
            ) as response:
                body = await response.text(errors="replace")
                return RawResponse(
                    status=response.status,
                    content_type=response.headers.get("Content-Type", ""),
                    body=body,
                )
        except asyncio.TimeoutError as e:
            logger.warning(f"Request timed out after {self._config.timeout}s")
            return TransportFailure(f"Request timed out after {self._config.timeout}s", e)
        except (ProxyError, ProxyConnectionError, ProxyTimeoutError) as e:
            logger.warning(f"Proxy failure: {e}")
            return TransportFailure(f"Proxy failure: {e}", e)
        except aiohttp.ClientError as e:
            logger.warning(f"Connection failure: {type(e).__name__}: {e}")
            return TransportFailure(f"Connection failure: {type(e).__name__}: {e}", e)

    async def close(self) -> None:
        """Close HTTP session and cleanup resources."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    @property
    def closed(self) -> bool:
        return self._session is None or self._session.closed

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
