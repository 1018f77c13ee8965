"""
Error taxonomy for Myfxbook client.

Failures are returned as ``ClientError`` values rather than raised, so callers
branch on ``kind``. ``MyfxbookError`` wraps one for code that prefers exceptions.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    """Classified failure kinds."""
    CONFIGURATION_ERROR = "ConfigurationError"
    AUTHENTICATION_FAILED = "AuthenticationFailed"
    SESSION_EXPIRED = "SessionExpired"
    BLOCKED_BY_UPSTREAM = "BlockedByUpstream"
    REQUEST_REJECTED = "RequestRejected"
    UPSTREAM_UNAVAILABLE = "UpstreamUnavailable"


# Worth retrying later, with backoff. BlockedByUpstream wants a longer delay.
_RETRYABLE_KINDS = frozenset({
    ErrorKind.SESSION_EXPIRED,
    ErrorKind.BLOCKED_BY_UPSTREAM,
    ErrorKind.UPSTREAM_UNAVAILABLE,
})


@dataclass(frozen=True)
class ClientError:
    """A classified failure with a human-readable message."""
    kind: ErrorKind
    message: str

    @property
    def retryable(self) -> bool:
        """Whether retrying after a delay can succeed without operator action."""
        return self.kind in _RETRYABLE_KINDS

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


def configuration_error(message: str) -> ClientError:
    return ClientError(ErrorKind.CONFIGURATION_ERROR, message)


def authentication_failed(message: str) -> ClientError:
    return ClientError(ErrorKind.AUTHENTICATION_FAILED, message)


def session_expired(message: str) -> ClientError:
    return ClientError(ErrorKind.SESSION_EXPIRED, message)


def blocked_by_upstream(signature: str) -> ClientError:
    return ClientError(
        ErrorKind.BLOCKED_BY_UPSTREAM,
        f"Bot-mitigation challenge detected (matched '{signature}')",
    )


def request_rejected(message: str) -> ClientError:
    return ClientError(ErrorKind.REQUEST_REJECTED, message)


def upstream_unavailable(detail: str) -> ClientError:
    return ClientError(ErrorKind.UPSTREAM_UNAVAILABLE, detail)


class MyfxbookError(Exception):
    """Exception carrying a classified ``ClientError``."""

    def __init__(self, error: ClientError):
        super().__init__(str(error))
        self.error = error

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind
