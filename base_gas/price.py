"""
price.py — ETH/USD rate from CoinGecko, used as the ETH/USDC rate (1 USDC ~ 1 USD).

Free tier, no API key. One request per call, no caching.
"""

import math
import os

import requests

from . import __version__
from .errors import (
    PriceConnectionFailed,
    PriceHTTPError,
    PriceInvalidResponse,
    PriceRateLimited,
    PriceServerError,
    PriceTimeout,
)

DEFAULT_PRICE_URL = os.getenv(
    "BASE_GAS_PRICE_URL",
    "https://api.coingecko.com/api/v3/simple/price?ids=ethereum&vs_currencies=usd",
)
DEFAULT_PRICE_TIMEOUT = float(os.getenv("BASE_GAS_PRICE_TIMEOUT", "5"))

HEADERS = {
    "Accept": "application/json",
    "User-Agent": f"base-gas-estimator/{__version__}",
}


def parse_eth_usd(payload) -> float:
    """Pull ethereum.usd out of a simple/price response and check it is a usable rate."""
    if not isinstance(payload, dict):
        raise PriceInvalidResponse("Invalid response format from price API")
    eth = payload.get("ethereum")
    usd = eth.get("usd") if isinstance(eth, dict) else None
    if usd is None:
        raise PriceInvalidResponse("Invalid response format from price API")
    if isinstance(usd, bool) or not isinstance(usd, (int, float)):
        raise PriceInvalidResponse(f"Invalid ETH price received from API: {usd!r}")
    usd = float(usd)
    if not math.isfinite(usd) or usd <= 0:
        raise PriceInvalidResponse(f"Invalid ETH price received from API: {usd!r}")
    return usd


def get_eth_usd_price(url: str = DEFAULT_PRICE_URL, timeout: float = DEFAULT_PRICE_TIMEOUT) -> float:
    try:
        r = requests.get(url, headers=HEADERS, timeout=timeout)
    except requests.exceptions.Timeout as e:
        raise PriceTimeout(timeout) from e
    except requests.exceptions.ConnectionError as e:
        raise PriceConnectionFailed() from e
    except requests.exceptions.RequestException as e:
        raise PriceInvalidResponse(f"Failed to fetch ETH price: {type(e).__name__}") from e

    if r.status_code == 429:
        raise PriceRateLimited()
    if r.status_code >= 500:
        raise PriceServerError(r.status_code)
    if not r.ok:
        raise PriceHTTPError(r.status_code)

    try:
        payload = r.json()
    except ValueError as e:
        raise PriceInvalidResponse("Price API returned invalid JSON") from e
    return parse_eth_usd(payload)
