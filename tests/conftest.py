"""Shared fixtures."""

import pytest

from tests.fakes import FakeEth


@pytest.fixture
def eip1559_eth():
    """Base-like node: 0.005 gwei base fee, 0.001 gwei tip."""
    return FakeEth(
        block={"number": 1, "baseFeePerGas": 5_000_000},
        gas_price=6_000_000,
        max_priority_fee=1_000_000,
    )
