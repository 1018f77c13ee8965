"""
Session management for Myfxbook client.

Owns the single cached session credential. Myfxbook sessions are bound to the
caller's IP and stay valid for weeks, so one login is reused by every request
until the upstream rejects it or a refresh is forced. Concurrent callers that
need a login share one in-flight handshake.
"""

import asyncio
import logging
from typing import Optional, Union
from urllib.parse import quote

from .classifier import classify_response
from .constants import LOGIN_ENDPOINT
from .models.config import ConnectionConfig
from .models.errors import (
    ClientError,
    authentication_failed,
    blocked_by_upstream,
    configuration_error,
    upstream_unavailable,
)
from .models.responses import BotChallenge, Malformed, Payload, TransportFailure
from .transport import Transport
from .utils import message_text

logger = logging.getLogger(__name__)


class SessionManager:
    """Caches the upstream session credential and performs logins."""

    def __init__(self, config: ConnectionConfig, transport: Transport):
        """Initialize session manager with configuration and transport."""
        self._config = config
        self._transport = transport
        self._credential: Optional[str] = None
        self._inflight: Optional["asyncio.Task[Union[str, ClientError]]"] = None
        # Bumped by invalidate(); a login started before a reset must not cache
        self._generation = 0

    @property
    def has_credential(self) -> bool:
        """Whether a credential is currently cached."""
        return self._credential is not None

    async def acquire(self, force_refresh: bool = False) -> Union[str, ClientError]:
        """
        Return the cached credential, logging in when needed.

        Args:
            force_refresh: Ignore the cache and perform a fresh login

        Returns:
            The session credential, or a ClientError describing why none is
            available
        """
        if not force_refresh and self._credential is not None:
            return self._credential

        if not self._config.has_credentials:
            return configuration_error(
                "Myfxbook credentials not configured (MYFXBOOK_EMAIL / MYFXBOOK_PASSWORD)"
            )

        task = self._inflight
        if task is None:
            task = asyncio.ensure_future(self._login())
            task.add_done_callback(self._clear_inflight)
            self._inflight = task
        else:
            logger.debug("Joining in-flight login")

        return await asyncio.shield(task)

    def invalidate(self) -> None:
        """
        Drop the cached credential. No network call.

        A login already in flight still hands its credential to the callers
        waiting on it, but does not cache it.
        """
        self._generation += 1
        if self._credential is not None:
            logger.info("Session cache cleared")
        self._credential = None

    def _clear_inflight(self, task: asyncio.Task) -> None:
        if self._inflight is task:
            self._inflight = None

    def _login_url(self) -> str:
        email = quote(self._config.email, safe="")
        password = quote(self._config.password, safe="")
        return f"{self._config.base_url}{LOGIN_ENDPOINT}?email={email}&password={password}"

    async def _login(self) -> Union[str, ClientError]:
        """Perform the login handshake and update the cache."""
        logger.info("Attempting login...")
        generation = self._generation

        outcome = self._interpret(classify_response(await self._transport.send(self._login_url())))

        if isinstance(outcome, ClientError):
            self._credential = None
            logger.warning(f"Login failed: {outcome}")
            return outcome

        if generation != self._generation:
            logger.info("Login completed after a session reset; not caching it")
            return outcome

        self._credential = outcome
        logger.info("Login successful, session cached")
        return outcome

    @staticmethod
    def _interpret(response) -> Union[str, ClientError]:
        """Map a classified login response to a credential or an error."""
        if isinstance(response, Payload):
            data = response.data
            if not isinstance(data, dict):
                return upstream_unavailable(
                    f"Unexpected login payload of type {type(data).__name__}"
                )
            session = data.get("session")
            if data.get("error") or not session or not isinstance(session, str):
                return authentication_failed(message_text(data.get("message"), "Login failed"))
            return session

        if isinstance(response, BotChallenge):
            return blocked_by_upstream(response.signature)

        if isinstance(response, Malformed):
            return upstream_unavailable(f"Login: {response.detail}")

        if isinstance(response, TransportFailure):
            return upstream_unavailable(f"Login: {response.cause}")

        return upstream_unavailable(f"Login: unclassified response {response!r}")
