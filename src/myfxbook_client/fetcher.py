"""
Account list retrieval for Myfxbook client.

Issues the authenticated accounts request and maps the upstream's JSON into
AccountSnapshot objects and the client's error taxonomy.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from .classifier import classify_response
from .constants import ACCOUNTS_ENDPOINT
from .models.account import AccountSnapshot
from .models.config import ConnectionConfig
from .models.errors import (
    ClientError,
    blocked_by_upstream,
    request_rejected,
    session_expired,
    upstream_unavailable,
)
from .models.responses import BotChallenge, Malformed, Payload, TransportFailure
from .transport import Transport
from .utils import message_text, parse_timestamp, to_decimal, to_int

logger = logging.getLogger(__name__)


def is_session_error(message: Optional[str]) -> bool:
    """
    Guess whether an upstream error message means the session is no longer valid.

    Myfxbook signals this only through free text ("Invalid session.",
    "Session is invalid"), so this is a best-effort substring heuristic, not
    a contract. A wording or locale change upstream will silently turn expired
    sessions into RequestRejected errors.
    """
    return isinstance(message, str) and "session" in message.lower()


def parse_account(data: Dict[str, Any]) -> Optional[AccountSnapshot]:
    """Create AccountSnapshot from one upstream entry. Extra fields are ignored."""
    account_id = to_int(data.get("id"))
    if account_id is None:
        return None

    return AccountSnapshot(
        id=account_id,
        name=str(data.get("name") or ""),
        account_id=to_int(data.get("accountId")) or 0,
        balance=to_decimal(data.get("balance")),
        equity=to_decimal(data.get("equity")),
        profit=to_decimal(data.get("profit")),
        currency=str(data.get("currency") or ""),
        gain=to_decimal(data.get("gain")),
        daily=to_decimal(data.get("daily")),
        monthly=to_decimal(data.get("monthly")),
        drawdown=to_decimal(data.get("drawdown")),
        demo=bool(data.get("demo", False)),
        last_update=parse_timestamp(data.get("lastUpdateDate")),
        abs_gain=to_decimal(data.get("absGain")),
        deposits=to_decimal(data.get("deposits")),
        withdrawals=to_decimal(data.get("withdrawals")),
        interest=to_decimal(data.get("interest")),
        equity_percent=to_decimal(data.get("equityPercent")),
        profit_factor=to_decimal(data.get("profitFactor")),
        pips=to_decimal(data.get("pips")),
        creation_date=parse_timestamp(data.get("creationDate")),
        first_trade_date=parse_timestamp(data.get("firstTradeDate")),
    )


class AccountFetcher:
    """Fetches the account list for a session credential."""

    def __init__(self, config: ConnectionConfig, transport: Transport):
        self._config = config
        self._transport = transport

    def _accounts_url(self, credential: str) -> str:
        # The credential arrives percent-encoded from the login response.
        # Encoding it again corrupts it.
        return f"{self._config.base_url}{ACCOUNTS_ENDPOINT}?session={credential}"

    async def fetch(self, credential: str) -> Union[List[AccountSnapshot], ClientError]:
        """
        Fetch all accounts visible to the session.

        Returns:
            Snapshots in upstream order (possibly empty), or a ClientError
        """
        logger.info("Fetching accounts...")
        response = classify_response(await self._transport.send(self._accounts_url(credential)))

        if isinstance(response, Payload):
            return self._interpret_payload(response.data)

        if isinstance(response, BotChallenge):
            return blocked_by_upstream(response.signature)

        if isinstance(response, Malformed):
            return upstream_unavailable(f"Accounts: {response.detail}")

        if isinstance(response, TransportFailure):
            return upstream_unavailable(f"Accounts: {response.cause}")

        return upstream_unavailable(f"Accounts: unclassified response {response!r}")

    def _interpret_payload(self, data: Any) -> Union[List[AccountSnapshot], ClientError]:
        if not isinstance(data, dict):
            return upstream_unavailable(
                f"Unexpected accounts payload of type {type(data).__name__}"
            )

        if data.get("error"):
            message = message_text(data.get("message"), "Failed to fetch accounts")
            if is_session_error(message):
                return session_expired(message)
            return request_rejected(message)

        entries = data.get("accounts") or []
        if not isinstance(entries, list):
            return upstream_unavailable("Accounts field is not a list")

        accounts = []
        for entry in entries:
            account = parse_account(entry) if isinstance(entry, dict) else None
            if account is None:
                return upstream_unavailable(f"Unparseable account entry: {str(entry)[:200]}")
            accounts.append(account)

        logger.info(f"Fetched {len(accounts)} account(s)")
        return accounts
