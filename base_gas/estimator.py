"""
estimator.py — Estimate the gas cost of a plain ETH transfer on Base

What it does:
- Connect to the network's JSON-RPC endpoint
- Fetch fee data: latest base fee (EIP-1559), eth_maxPriorityFeePerGas and
  the legacy eth_gasPrice
- Estimate gas for {to, value, data: 0x}; a plain transfer always costs
  21,000 gas, so that is used when the node refuses to estimate
- Compute:
    • fee per gas = maxFeePerGas (2 * baseFee + tip), or gasPrice on legacy nodes
    • total cost  = gas units * fee per gas (exact, in wei)
"""

import os
from dataclasses import dataclass
from typing import Optional

import requests
from web3 import Web3
from web3.exceptions import Web3Exception

from .errors import InvalidAmount, InvalidInput, RemoteUnavailable
from .units import Number, parse_ether, to_ether, to_gwei
from .validators import is_address_shaped

DEFAULT_RPC_TIMEOUT = float(os.getenv("BASE_GAS_RPC_TIMEOUT", "20"))

TRANSFER_GAS = 21_000
# eth_maxPriorityFeePerGas is not on every node; ethers uses the same default
DEFAULT_PRIORITY_FEE_WEI = Web3.to_wei(1, "gwei")
# Address of private key 0x...01, only used as `from` so the node can simulate
ESTIMATE_FROM = "0x7E5F4552091A69125d5DfCb7b8C2659029395Bdf"

RPC_ERRORS = (requests.exceptions.RequestException, Web3Exception, ValueError)


@dataclass(frozen=True)
class FeeData:
    gas_price: Optional[int] = None
    max_fee_per_gas: Optional[int] = None
    max_priority_fee_per_gas: Optional[int] = None
    base_fee_per_gas: Optional[int] = None

    @property
    def preferred(self) -> Optional[int]:
        """maxFeePerGas when the chain is EIP-1559, otherwise the legacy gasPrice."""
        return self.max_fee_per_gas or self.gas_price


@dataclass(frozen=True)
class EstimationResult:
    gas_units: int
    gas_price_wei: int
    total_wei: int
    gas_price_display: str
    total_display: str
    used_fallback_gas: bool = False

    def __post_init__(self):
        if self.total_wei != self.gas_units * self.gas_price_wei:
            raise ValueError("total_wei must equal gas_units * gas_price_wei")

    @classmethod
    def build(cls, gas_units: int, gas_price_wei: int, used_fallback_gas: bool = False) -> "EstimationResult":
        total_wei = gas_units * gas_price_wei
        return cls(
            gas_units=gas_units,
            gas_price_wei=gas_price_wei,
            total_wei=total_wei,
            gas_price_display=f"{to_gwei(gas_price_wei)} Gwei ({gas_price_wei} wei)",
            total_display=to_ether(total_wei),
            used_fallback_gas=used_fallback_gas,
        )


def connect(rpc: str, timeout: float = DEFAULT_RPC_TIMEOUT) -> Web3:
    w3 = Web3(Web3.HTTPProvider(rpc, request_kwargs={"timeout": timeout}))
    if not w3.is_connected():
        raise RemoteUnavailable(
            "Unable to connect to Base network. Check your internet connection or try again later.",
            endpoint=rpc,
        )
    return w3


def get_fee_data(w3: Web3, endpoint: Optional[str] = None) -> FeeData:
    try:
        latest = w3.eth.get_block("latest")
    except RPC_ERRORS as e:
        raise RemoteUnavailable(f"Error fetching latest block: {e}", endpoint=endpoint) from e

    base_fee = latest.get("baseFeePerGas")

    try:
        gas_price = int(w3.eth.gas_price)
    except RPC_ERRORS:
        gas_price = None

    if base_fee is None:
        return FeeData(gas_price=gas_price)

    try:
        priority = int(w3.eth.max_priority_fee)
    except RPC_ERRORS:
        priority = DEFAULT_PRIORITY_FEE_WEI

    base_fee = int(base_fee)
    return FeeData(
        gas_price=gas_price,
        max_fee_per_gas=base_fee * 2 + priority,
        max_priority_fee_per_gas=priority,
        base_fee_per_gas=base_fee,
    )


def estimate_transfer_gas(w3: Web3, to: str, value_wei: int) -> Optional[int]:
    """eth_estimateGas for a plain transfer, or None when the node can't (or won't) estimate."""
    tx = {
        "from": ESTIMATE_FROM,
        "to": Web3.to_checksum_address(to),
        "value": value_wei,
        "data": "0x",
    }
    try:
        return int(w3.eth.estimate_gas(tx))
    except RPC_ERRORS:
        return None


def estimate_eth_transfer(
    to: str,
    value_eth: Number,
    rpc_url: Optional[str] = None,
    w3: Optional[Web3] = None,
    timeout: float = DEFAULT_RPC_TIMEOUT,
) -> EstimationResult:
    """
    Estimate the cost of sending `value_eth` ETH to `to`.

    Either `rpc_url` or an already connected `w3` must be given. Input is
    checked before any RPC call is made.
    """
    if not is_address_shaped(to):
        raise InvalidInput("Invalid recipient address", field="to")

    try:
        value_wei = parse_ether(value_eth)
    except InvalidAmount as e:
        raise InvalidInput(f"Invalid ETH value: {e}", field="value") from e

    if w3 is None:
        if not rpc_url:
            raise ValueError("rpc_url or w3 is required")
        w3 = connect(rpc_url, timeout=timeout)

    fees = get_fee_data(w3, endpoint=rpc_url)
    gas_price = fees.preferred
    if not gas_price:
        raise RemoteUnavailable("Unable to fetch gas price from network", endpoint=rpc_url)

    gas_units = estimate_transfer_gas(w3, to, value_wei)
    if gas_units is None:
        return EstimationResult.build(TRANSFER_GAS, gas_price, used_fallback_gas=True)
    return EstimationResult.build(gas_units, gas_price)
