"""
Utility functions for Myfxbook client.

Small pure helpers for URL handling and tolerant parsing of upstream values.
"""

import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from .constants import BODY_PREFIX_LENGTH

# Myfxbook reports dates as "MM/DD/YYYY HH:MM" in the account's timezone
_UPSTREAM_DATE_FORMATS = ("%m/%d/%Y %H:%M", "%m/%d/%Y %H:%M:%S", "%m/%d/%Y")

_PROXY_PASSWORD_RE = re.compile(r":[^:@/]+@")


def validate_url(url: str) -> bool:
    """Validate URL format."""
    if not url or not isinstance(url, str):
        return False
    return url.startswith(("http://", "https://")) and "." in url


def mask_proxy_url(url: str) -> str:
    """Hide the password part of a proxy URL for logging."""
    return _PROXY_PASSWORD_RE.sub(":****@", url)


def body_prefix(body: str, length: int = BODY_PREFIX_LENGTH) -> str:
    """Return a bounded, single-line prefix of a response body."""
    return " ".join(body[:length].split())


def to_decimal(value: Any, default: Decimal = Decimal("0")) -> Decimal:
    """Convert an upstream numeric value to Decimal, falling back to default."""
    if value is None or isinstance(value, bool):
        return default
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return default
    # NaN and Infinity break comparisons and float conversion downstream
    return result if result.is_finite() else default


def to_int(value: Any) -> Optional[int]:
    """Convert an upstream identifier to int, or None when it is not numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(str(value))
    except ValueError:
        return None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an upstream timestamp (ISO-8601 or MM/DD/YYYY HH:MM)."""
    if not value or not isinstance(value, str):
        return None

    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass

    for fmt in _UPSTREAM_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def message_text(value: Any, default: str) -> str:
    """Return an upstream message if it is non-empty text, otherwise default."""
    if isinstance(value, str) and value.strip():
        return value
    return default
