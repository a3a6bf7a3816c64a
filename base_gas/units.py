"""
units.py — wei / Gwei / ETH conversions and display formatting.

All authoritative amounts are Python ints in wei. Decimal is used for the
division into Gwei/ETH so nothing is lost before rounding for display; float
only shows up for the USDC estimate, which is approximate anyway.
"""

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Optional, Union

from web3 import Web3

from .errors import InvalidAmount

Number = Union[int, float, str, Decimal]

NOT_AVAILABLE = "N/A"

# Web3.from_wei rejects anything wider than uint256
MAX_WEI = 2**256 - 1


def trim_trailing_zeros(value: str) -> str:
    """'1.500' -> '1.5', '2.000' -> '2'. Integer strings are left alone."""
    if "." not in value:
        return value
    value = value.rstrip("0")
    if value.endswith("."):
        value = value[:-1]
    return value


def to_wei_int(amount: Number) -> int:
    """Coerce an integer-like wei amount (int, digit string, 0x-hex, integral float) to int."""
    if isinstance(amount, bool):
        raise InvalidAmount(f"Invalid wei amount: {amount!r}")

    if isinstance(amount, int):
        wei = amount
    elif isinstance(amount, Decimal):
        if not amount.is_finite() or amount != amount.to_integral_value():
            raise InvalidAmount(f"Invalid wei amount: {amount!r}")
        wei = int(amount)
    elif isinstance(amount, float):
        if not math.isfinite(amount) or not amount.is_integer():
            raise InvalidAmount(f"Invalid wei amount: {amount!r}")
        wei = int(amount)
    elif isinstance(amount, str):
        s = amount.strip()
        try:
            if s[:2].lower() == "0x":
                wei = int(s, 16)
            elif s.isascii() and s.isdigit():
                wei = int(s)
            else:
                raise ValueError(s)
        except ValueError as exc:
            raise InvalidAmount(f"Invalid wei amount: {amount!r}") from exc
    else:
        raise InvalidAmount(f"Invalid wei amount: {amount!r}")

    if wei < 0:
        raise InvalidAmount(f"Wei amount cannot be negative: {amount!r}")
    if wei > MAX_WEI:
        raise InvalidAmount("Wei amount exceeds uint256")
    return wei


def _render(value: Decimal, places: int) -> str:
    with localcontext() as ctx:
        ctx.prec = 999
        rounded = value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    return trim_trailing_zeros(format(rounded, "f"))


def to_gwei(amount: Number) -> str:
    """
    Render a wei amount in Gwei.

    Precision depends on magnitude: whole Gwei from 1000 up, 3 decimals
    from 1, 6 decimals below that.
    """
    gwei = Decimal(Web3.from_wei(to_wei_int(amount), "gwei"))
    if gwei >= 1000:
        return _render(gwei, 0)
    if gwei >= 1:
        return _render(gwei, 3)
    return _render(gwei, 6)


def to_ether(amount: Number) -> str:
    """Render a wei amount in ETH: 6 decimals from 0.001 up, 9 decimals below."""
    eth = Decimal(Web3.from_wei(to_wei_int(amount), "ether"))
    if eth >= Decimal("0.001"):
        return _render(eth, 6)
    return _render(eth, 9)


def format_thousands(value: int) -> str:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidAmount(f"Expected a non-negative integer, got {value!r}")
    return f"{value:,}"


def parse_ether(value: Number) -> int:
    """Exact ETH decimal -> wei. Zero is allowed; negatives and sub-wei precision are not."""
    if isinstance(value, bool):
        raise InvalidAmount(f"Invalid ETH value: {value!r}")
    try:
        eth = Decimal(value.strip() if isinstance(value, str) else str(value))
    except (InvalidOperation, ValueError) as exc:
        raise InvalidAmount(f"Invalid ETH value: {value!r}") from exc

    if not eth.is_finite():
        raise InvalidAmount(f"Invalid ETH value: {value!r}")
    if eth < 0:
        raise InvalidAmount("ETH value cannot be negative")
    # scaleb over/underflows silently past these exponents
    if eth != 0 and eth.adjusted() < -18:
        raise InvalidAmount("ETH value has more than 18 decimal places")
    if eth.adjusted() > 59:
        raise InvalidAmount("ETH value exceeds uint256 wei")

    with localcontext() as ctx:
        ctx.prec = 999
        wei = eth.scaleb(18)
        if wei != wei.to_integral_value():
            raise InvalidAmount("ETH value has more than 18 decimal places")
    if wei > MAX_WEI:
        raise InvalidAmount("ETH value exceeds uint256 wei")
    return int(wei)


def wei_to_usdc(amount_wei: int, eth_usd: Optional[float]) -> Optional[float]:
    """Approximate USDC value of a wei amount (1 USDC ~ 1 USD). None if no rate."""
    if eth_usd is None:
        return None
    return float(Web3.from_wei(amount_wei, "ether")) * eth_usd


def format_usdc(amount: Optional[float]) -> str:
    if amount is None or not math.isfinite(amount):
        return NOT_AVAILABLE
    return f"{amount:.6f}"
