#!/usr/bin/env python3
"""
cli.py — base-gas command line

Usage:
  base-gas transfer --to 0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045 --value 0.1
  base-gas transfer --to 0x... --value 1.5 --network base-sepolia --json
  base-gas spotlight --register

Results go to stdout; warnings and diagnostics go to stderr.
"""

import argparse
import asyncio
import json
import math
import sys
import time
from typing import List, Optional, Tuple

from . import __version__
from .errors import GasEstimatorError, InvalidAmount, PriceFetchError, UnsupportedNetwork
from .estimator import DEFAULT_RPC_TIMEOUT, TRANSFER_GAS, EstimationResult, estimate_eth_transfer
from .networks import DEFAULT_NETWORK, NetworkConfig, resolve, supported_networks
from .price import get_eth_usd_price
from .units import format_thousands, format_usdc, parse_ether, to_gwei, wei_to_usdc
from .validators import is_positive_number, is_valid_address

SPOTLIGHT_REPO = "https://github.com/logiccrafterdz/Base-Gas-Estimator-CLI"
SPOTLIGHT_DIRECTORY = "https://github.com/logiccrafterdz/base-builders-spotlight"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="base-gas",
        description="A free, open-source CLI to estimate gas costs on Base network.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="command")

    t = sub.add_parser("transfer", help="Estimate gas cost for an ETH transfer")
    t.add_argument("--to", required=True, help="Recipient Ethereum address")
    t.add_argument("--value", required=True, help="Amount of ETH to transfer")
    t.add_argument(
        "--network",
        default=DEFAULT_NETWORK,
        help=f"Network to use ({', '.join(supported_networks())}). Default: {DEFAULT_NETWORK}",
    )
    t.add_argument("--rpc", help="Override the network's RPC URL")
    t.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_RPC_TIMEOUT,
        help=f"RPC timeout in seconds (default: {DEFAULT_RPC_TIMEOUT:g})",
    )
    t.add_argument("--json", action="store_true", help="Output results as JSON")
    t.add_argument("-v", "--verbose", action="store_true", help="Print diagnostics to stderr")

    s = sub.add_parser("spotlight", help="Register your project in the Base Builders Spotlight directory")
    s.add_argument("--register", action="store_true", help="Submit your project for inclusion")

    args = p.parse_args(argv)
    if args.command is None:
        p.print_help()
    return args


async def fetch_quote(to: str, value: str, rpc: str, timeout: float) -> Tuple[EstimationResult, Optional[float]]:
    """Run gas estimation and the price lookup side by side.

    Estimation errors propagate; a failed price lookup only costs the USDC figure.
    """
    estimation, eth_usd = await asyncio.gather(
        asyncio.to_thread(estimate_eth_transfer, to, value, rpc_url=rpc, timeout=timeout),
        asyncio.to_thread(get_eth_usd_price),
        return_exceptions=True,
    )
    if isinstance(estimation, BaseException):
        raise estimation
    if isinstance(eth_usd, PriceFetchError):
        print(f"⚠️  ETH price unavailable ({eth_usd}); USDC estimate shown as N/A.", file=sys.stderr)
        eth_usd = None
    elif isinstance(eth_usd, BaseException):
        raise eth_usd
    return estimation, eth_usd


def render_text(estimation: EstimationResult, eth_usd: Optional[float]) -> str:
    usdc = format_usdc(wei_to_usdc(estimation.total_wei, eth_usd))
    return "\n".join(
        [
            f"Gas Units: {format_thousands(estimation.gas_units)}",
            f"Gas Price: {estimation.gas_price_display}",
            f"Total Cost: {estimation.total_display} ETH (~{usdc} USDC)",
        ]
    )


def render_json(network: str, net: NetworkConfig, rpc: str, estimation: EstimationResult, eth_usd: Optional[float]) -> str:
    out = {
        "network": network,
        "networkName": net.name,
        "chainId": net.chain_id,
        "rpc": rpc,
        "gasUnits": estimation.gas_units,
        "gasEstimateFallback": estimation.used_fallback_gas,
        "gasPriceWei": estimation.gas_price_wei,
        "gasPriceGwei": to_gwei(estimation.gas_price_wei),
        "totalWei": estimation.total_wei,
        "totalEth": estimation.total_display,
        "ethUsd": eth_usd,
        "totalUsdc": format_usdc(wei_to_usdc(estimation.total_wei, eth_usd)),
    }
    return json.dumps(out, indent=2, sort_keys=True)


def run_transfer(args: argparse.Namespace) -> int:
    start = time.time()

    if not is_valid_address(args.to):
        print("❌ Invalid recipient address: provide a valid Ethereum address (0x... format).", file=sys.stderr)
        return 1

    if not is_positive_number(args.value):
        print("❌ Invalid ETH value: provide a positive number (e.g., 0.1, 1.5).", file=sys.stderr)
        return 1
    try:
        parse_ether(args.value)
    except InvalidAmount as e:
        print(f"❌ Invalid ETH value: {e}.", file=sys.stderr)
        return 1

    if not math.isfinite(args.timeout) or args.timeout <= 0:
        print(f"❌ --timeout must be a positive number of seconds (got {args.timeout:g}).", file=sys.stderr)
        return 1

    try:
        net = resolve(args.network)
    except UnsupportedNetwork as e:
        print(f"❌ Invalid network \"{e.network}\". Supported networks: {', '.join(e.supported)}", file=sys.stderr)
        return 1

    rpc = args.rpc or net.rpc_url
    if args.verbose:
        print(f"🌐 {net.name} (chainId {net.chain_id})", file=sys.stderr)
        print(f"🔗 RPC: {rpc}", file=sys.stderr)

    try:
        estimation, eth_usd = asyncio.run(fetch_quote(args.to, args.value, rpc, args.timeout))
    except GasEstimatorError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    if estimation.used_fallback_gas:
        print(
            f"⚠️  Node could not estimate gas; using the standard transfer cost ({format_thousands(TRANSFER_GAS)}).",
            file=sys.stderr,
        )

    if args.json:
        print(render_json(args.network, net, rpc, estimation, eth_usd))
    else:
        print(render_text(estimation, eth_usd))

    if args.verbose:
        print(f"⏱️ Completed in {time.time() - start:.2f}s", file=sys.stderr)
    return 0


def run_spotlight(args: argparse.Namespace) -> int:
    if not args.register:
        print("Use --register to submit your project.")
        return 0
    print("📝 Preparing to register your project...")
    print(f"🔗 GitHub Repo: {SPOTLIGHT_REPO}")
    print("🏷️  Category: Developer Tools")
    print("💡 Description: Free CLI to estimate gas costs in ETH/USDC")
    print()
    print("✅ To add your project:")
    print(f"1. Fork: {SPOTLIGHT_DIRECTORY}")
    print("2. Edit projects.yml")
    print("3. Submit a Pull Request")
    print()
    print("🚀 Your project will be featured in the weekly Farcaster spotlight!")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        if args.command == "transfer":
            return run_transfer(args)
        if args.command == "spotlight":
            return run_spotlight(args)
    except KeyboardInterrupt:
        print("\nInterrupted by user.", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
