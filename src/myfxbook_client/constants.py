"""
Constants for the Myfxbook client.
"""

# API Configuration
DEFAULT_BASE_URL = "https://www.myfxbook.com/api"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "myfxbook-client/1.0"

# Endpoints
LOGIN_ENDPOINT = "/login.json"
ACCOUNTS_ENDPOINT = "/get-my-accounts.json"

# Exchange rate lookup
EXCHANGE_RATE_BASE_URL = "https://api.exchangerate-api.com/v4/latest"

# Diagnostics
BODY_PREFIX_LENGTH = 200

# Substrings that identify an anti-bot interstitial rather than a real error
# page. Matched case-insensitively, first match wins.
BOT_CHALLENGE_SIGNATURES = (
    "cf-browser-verification",
    "cf_chl_opt",
    "cf-chl",
    "challenge-platform",
    "Just a moment...",
    "Checking your browser",
    "Attention Required! | Cloudflare",
    "DDoS protection by",
    "Enable JavaScript and cookies to continue",
    "Ray ID",
    "cf-ray",
)

# Proxy schemes understood by aiohttp-socks
SUPPORTED_PROXY_SCHEMES = ("http", "socks4", "socks5")
SOCKS_PROXY_SCHEMES = ("socks4", "socks5")
