"""
Response classification for Myfxbook client.

The upstream serves HTML both for anti-bot challenges and for ordinary error
pages (maintenance, geo-blocks). Only an explicit signature match may claim a
challenge; everything else that is not JSON is reported as malformed.
"""

import json
from typing import Optional, Union

from .constants import BOT_CHALLENGE_SIGNATURES
from .models.responses import (
    BotChallenge,
    ClassifiedResponse,
    Malformed,
    Payload,
    RawResponse,
    TransportFailure,
)
from .utils import body_prefix

_HTML_MARKERS = ("<!doctype", "<html", "<")


def is_json_content_type(content_type: Optional[str]) -> bool:
    """Check whether a Content-Type header denotes JSON (including +json types)."""
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def looks_like_html(body: str) -> bool:
    return body.lstrip().lower().startswith(_HTML_MARKERS)


def find_challenge_signature(body: str) -> Optional[str]:
    """Return the first bot-mitigation signature found in body, if any."""
    lowered = body.lower()
    for signature in BOT_CHALLENGE_SIGNATURES:
        if signature.lower() in lowered:
            return signature
    return None


def classify(status: int, content_type: Optional[str], body: str) -> ClassifiedResponse:
    """Classify a raw HTTP response into a payload, challenge or malformed page."""
    body = body or ""

    if is_json_content_type(content_type) and not looks_like_html(body):
        if not body.strip():
            return Malformed(status, "", reason="Empty JSON response")
        try:
            return Payload(json.loads(body), status)
        except (ValueError, RecursionError):
            # JSONDecodeError, oversized integer literals, pathological nesting
            return Malformed(status, body_prefix(body), reason="Invalid JSON response")

    signature = find_challenge_signature(body)
    if signature is not None:
        return BotChallenge(signature, status)

    return Malformed(status, body_prefix(body), reason="Non-JSON response")


def classify_response(response: Union[RawResponse, TransportFailure]) -> ClassifiedResponse:
    """Classify a transport result; transport failures pass through unchanged."""
    if isinstance(response, TransportFailure):
        return response
    return classify(response.status, response.content_type, response.body)
