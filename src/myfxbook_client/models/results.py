"""
Result models returned by the public client.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from .account import AccountSnapshot
from .errors import ClientError, MyfxbookError


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AccountsResult:
    """
    Outcome of one ``get_accounts`` call.

    Attributes:
        success: Whether accounts were fetched
        accounts: Snapshots in upstream order (empty on failure)
        error: The classified failure, if any
        timestamp: When the result was produced (UTC)
    """
    success: bool
    accounts: Tuple[AccountSnapshot, ...] = ()
    error: Optional[ClientError] = None
    timestamp: datetime = field(default_factory=_utcnow)

    @classmethod
    def ok(cls, accounts) -> "AccountsResult":
        return cls(success=True, accounts=tuple(accounts))

    @classmethod
    def failed(cls, error: ClientError) -> "AccountsResult":
        return cls(success=False, error=error)

    def raise_for_error(self) -> Tuple[AccountSnapshot, ...]:
        """Return the accounts, or raise ``MyfxbookError`` on failure."""
        if self.error is not None:
            raise MyfxbookError(self.error)
        return self.accounts

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON body served to dashboards."""
        if self.success:
            return {
                "success": True,
                "accounts": [account.to_dict() for account in self.accounts],
                "timestamp": self.timestamp.isoformat(),
            }
        return {
            "success": False,
            "kind": self.error.kind.value if self.error else None,
            "error": self.error.message if self.error else "Unknown error",
            "timestamp": self.timestamp.isoformat(),
        }
