"""
Classified HTTP response models.

Every upstream call resolves to exactly one of these; they are produced per
call and never cached.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True)
class RawResponse:
    """Raw HTTP response as delivered by the transport."""
    status: int
    content_type: str
    body: str


@dataclass(frozen=True)
class Payload:
    """Parsed JSON body."""
    data: Any
    status: int = 200


@dataclass(frozen=True)
class BotChallenge:
    """Anti-bot interstitial page; ``signature`` is the marker that matched."""
    signature: str
    status: int = 0


@dataclass(frozen=True)
class Malformed:
    """Body that is neither usable JSON nor a recognizable challenge."""
    status: int
    body_prefix: str
    reason: str = "Unexpected response"

    @property
    def detail(self) -> str:
        return f"{self.reason} (HTTP {self.status}): {self.body_prefix}"


@dataclass(frozen=True)
class TransportFailure:
    """The request never produced an HTTP response."""
    cause: str
    exception: Optional[BaseException] = None


ClassifiedResponse = Union[Payload, BotChallenge, Malformed, TransportFailure]
