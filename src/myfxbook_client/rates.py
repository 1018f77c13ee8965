"""
Exchange rate lookup used to convert account values for display.

Shares the Transport of the main client so the proxy route applies here too.
"""

import logging
from decimal import Decimal
from typing import Union

from .classifier import classify_response
from .constants import EXCHANGE_RATE_BASE_URL
from .models.errors import (
    ClientError,
    blocked_by_upstream,
    request_rejected,
    upstream_unavailable,
)
from .models.responses import BotChallenge, Malformed, Payload, TransportFailure
from .transport import Transport
from .utils import to_decimal

logger = logging.getLogger(__name__)


class ExchangeRateClient:
    """Looks up the latest rate between two currencies."""

    def __init__(self, transport: Transport, base_url: str = EXCHANGE_RATE_BASE_URL):
        self._transport = transport
        self._base_url = base_url.rstrip("/")

    async def get_rate(self, base: str = "USD", quote: str = "JPY") -> Union[Decimal, ClientError]:
        """
        Get how many units of ``quote`` one unit of ``base`` buys.

        Returns:
            The rate, or a ClientError
        """
        base, quote = base.upper(), quote.upper()
        response = classify_response(await self._transport.send(f"{self._base_url}/{base}"))

        if isinstance(response, Payload):
            if not 200 <= response.status < 300:
                return upstream_unavailable(f"Exchange rate lookup failed (HTTP {response.status})")
            rates = response.data.get("rates") if isinstance(response.data, dict) else None
            rate = to_decimal(rates.get(quote), default=Decimal("0")) if isinstance(rates, dict) else Decimal("0")
            if rate <= 0:
                return request_rejected(f"{quote} rate not found")
            logger.debug(f"{base}/{quote} = {rate}")
            return rate

        if isinstance(response, BotChallenge):
            return blocked_by_upstream(response.signature)

        if isinstance(response, Malformed):
            return upstream_unavailable(f"Exchange rate: {response.detail}")

        if isinstance(response, TransportFailure):
            return upstream_unavailable(f"Exchange rate: {response.cause}")

        return upstream_unavailable(f"Exchange rate: unclassified response {response!r}")
