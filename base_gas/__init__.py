"""Estimate ETH transfer gas costs on Base, in ETH and USDC."""

__version__ = "0.1.0"
