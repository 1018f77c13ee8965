"""
Account-related models for Myfxbook client.

Immutable data structures for account snapshots.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class AccountSnapshot:
    """Point-in-time view of one tracked trading account."""
    id: int  # Myfxbook internal id
    name: str
    account_id: int  # broker account number
    balance: Decimal
    equity: Decimal
    profit: Decimal  # floating profit
    currency: str
    gain: Decimal  # cumulative gain %
    daily: Decimal  # daily gain %
    monthly: Decimal  # monthly gain %
    drawdown: Decimal  # drawdown %
    demo: bool
    last_update: Optional[datetime]
    abs_gain: Decimal = Decimal("0")
    deposits: Decimal = Decimal("0")
    withdrawals: Decimal = Decimal("0")
    interest: Decimal = Decimal("0")
    equity_percent: Decimal = Decimal("0")
    profit_factor: Decimal = Decimal("0")
    pips: Decimal = Decimal("0")
    creation_date: Optional[datetime] = None
    first_trade_date: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON shape consumed by dashboards."""
        return {
            "id": self.id,
            "name": self.name,
            "accountId": self.account_id,
            "balance": float(self.balance),
            "equity": float(self.equity),
            "profit": float(self.profit),
            "currency": self.currency,
            "gain": float(self.gain),
            "daily": float(self.daily),
            "monthly": float(self.monthly),
            "drawdown": float(self.drawdown),
            "demo": self.demo,
            "lastUpdateDate": self.last_update.isoformat() if self.last_update else None,
        }
