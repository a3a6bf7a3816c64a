"""Input predicates used by the CLI before anything touches the network."""

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any

from web3 import Web3

ADDRESS_RE = re.compile(r"0x[0-9a-fA-F]{40}")


def is_address_shaped(value: Any) -> bool:
    """0x + 40 hex digits, no checksum check."""
    return isinstance(value, str) and ADDRESS_RE.fullmatch(value) is not None


def is_valid_address(value: Any) -> bool:
    """
    True for a well-formed EVM address.

    Mixed-case input must carry a valid EIP-55 checksum; all-lowercase or
    all-uppercase hex is accepted as-is.
    """
    if not is_address_shaped(value):
        return False
    body = value[2:]
    if body == body.lower() or body == body.upper():
        return True
    return Web3.is_checksum_address(value)


def is_positive_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value > 0
    if isinstance(value, float):
        return math.isfinite(value) and value > 0
    if isinstance(value, Decimal):
        return value.is_finite() and value > 0
    if not isinstance(value, str):
        return False
    try:
        number = Decimal(value.strip())
    except InvalidOperation:
        return False
    return number.is_finite() and number > 0
