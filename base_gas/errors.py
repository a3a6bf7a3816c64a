"""Exception taxonomy for base-gas.

Every failure the CLI reports is one of these classes; messages are single
line and safe to show to a user as-is.
"""

from typing import Optional, Tuple


class GasEstimatorError(Exception):
    """Root of all base-gas errors."""


class InvalidInput(GasEstimatorError):
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvalidAmount(InvalidInput):
    def __init__(self, message: str):
        super().__init__(message, field="amount")


class UnsupportedNetwork(InvalidInput):
    def __init__(self, network: str, supported: Tuple[str, ...]):
        super().__init__(
            f"Unsupported network: {network}. Supported networks: {', '.join(supported)}",
            field="network",
        )
        self.network = network
        self.supported = supported


class RemoteUnavailable(GasEstimatorError):
    def __init__(self, message: str, endpoint: Optional[str] = None):
        super().__init__(message)
        self.endpoint = endpoint


class PriceFetchError(GasEstimatorError):
    """Any failure to obtain the ETH/USD rate. Never fatal for the CLI."""


class PriceTimeout(PriceFetchError):
    def __init__(self, timeout: float):
        super().__init__(f"Price API request timed out after {timeout:g}s")
        self.timeout = timeout


class PriceConnectionFailed(PriceFetchError):
    def __init__(self):
        super().__init__("Unable to connect to price API. Check your internet connection.")


class PriceHTTPError(PriceFetchError):
    def __init__(self, status: int, message: Optional[str] = None):
        super().__init__(message or f"Price API error (HTTP {status})")
        self.status = status


class PriceRateLimited(PriceHTTPError):
    def __init__(self, status: int = 429):
        super().__init__(status, "Price API rate limit exceeded. Try again later.")


class PriceServerError(PriceHTTPError):
    def __init__(self, status: int):
        super().__init__(status, f"Price API server error (HTTP {status}). Try again later.")


class PriceInvalidResponse(PriceFetchError):
    pass
