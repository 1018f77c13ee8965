"""
Configuration models for Myfxbook client.

Immutable configuration structures following state-first design.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

from ..constants import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    SOCKS_PROXY_SCHEMES,
    SUPPORTED_PROXY_SCHEMES,
)
from ..utils import mask_proxy_url, validate_url


@dataclass(frozen=True)
class ProxyConfig:
    """Upstream proxy endpoint.

    ``protocol`` names the tunneling protocol the deployment expects. When it is
    a SOCKS protocol, a plain ``http://`` endpoint is reinterpreted as that
    protocol, since many providers hand out SOCKS endpoints with an http scheme.
    """
    url: str
    protocol: Optional[str] = None

    def __post_init__(self):
        """Validate proxy configuration after initialization."""
        if not self.url or not self.url.strip():
            raise ValueError("Proxy URL cannot be empty")

        if self.protocol is not None and self.protocol.lower() not in SUPPORTED_PROXY_SCHEMES:
            raise ValueError(
                f"Unsupported proxy protocol '{self.protocol}' "
                f"(expected one of: {', '.join(SUPPORTED_PROXY_SCHEMES)})"
            )

        parsed = urlparse(self.normalized_url)
        if not parsed.hostname:
            raise ValueError(f"Proxy URL has no host: {mask_proxy_url(self.url)}")
        try:
            port = parsed.port
        except ValueError:
            port = None
        if port is None:
            raise ValueError(f"Proxy URL must include a valid port: {mask_proxy_url(self.url)}")

    @property
    def normalized_url(self) -> str:
        """Proxy URL with its scheme resolved for the transport library."""
        return normalize_proxy_url(self.url, self.protocol)


def normalize_proxy_url(url: str, protocol: Optional[str] = None) -> str:
    """Resolve the scheme of a configured proxy endpoint.

    - ``host:port`` gets ``protocol`` (or ``http``) prepended.
    - ``http://`` and ``https://`` become ``protocol://`` when ``protocol`` is SOCKS.
    - Any other scheme must be one the transport supports.
    """
    url = url.strip()
    target = protocol.lower() if protocol else None

    if "://" not in url:
        return f"{target or 'http'}://{url}"

    scheme, rest = url.split("://", 1)
    scheme = scheme.lower()

    if scheme in ("http", "https") and target in SOCKS_PROXY_SCHEMES:
        return f"{target}://{rest}"

    if scheme == "https":
        # Proxies speak plain HTTP CONNECT; TLS is negotiated end-to-end.
        scheme = "http"

    if scheme not in SUPPORTED_PROXY_SCHEMES:
        raise ValueError(f"Unsupported proxy scheme '{scheme}' in proxy URL")

    return f"{scheme}://{rest}"


@dataclass(frozen=True)
class ConnectionConfig:
    """Configuration for Myfxbook client connection.

    Credentials may be empty here; the session manager reports missing
    credentials as a configuration error when a login is first needed.
    """
    email: str = ""
    password: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    proxy: Optional[ProxyConfig] = None
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not validate_url(self.base_url):
            raise ValueError("Base URL must be a valid HTTP/HTTPS URL")

        if self.timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {self.timeout}")

        # Normalize once so endpoint joining never produces '//'
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @property
    def has_credentials(self) -> bool:
        """True when both email and password are configured."""
        return bool(self.email and self.password)
