"""Exceptions raised by reader proxies.

Construction problems derive from :class:`ProxyConfigError` and are raised
before a proxy exists. Problems found while reading derive from
:class:`ProxyReadError` and propagate to the caller unchanged.
"""


class ProxyError(Exception):
    """Base exception for reader proxy errors."""

    pass


class ProxyConfigError(ProxyError):
    """Raised when a proxy cannot be constructed from the given parameters."""

    pass


class ZeroProxyAddress(ProxyConfigError):
    """Raised when a required upstream proxy or feed is missing."""

    def __init__(self, role: str = "proxy"):
        """Initialize the error.

        :param role: Name of the constructor parameter that was null.
        """
        self.role = role
        super().__init__(f"{role} is the zero address")


class SameProxyAddress(ProxyConfigError):
    """Raised when both inputs of a two-input proxy are the same proxy."""

    def __init__(self) -> None:
        super().__init__("proxy1 and proxy2 are the same proxy")


class DappIdMismatch(ProxyConfigError):
    """Raised when combined proxies are bound to different dApp IDs."""

    def __init__(self, dapp_id1: bytes, dapp_id2: bytes):
        """Initialize the error.

        :param dapp_id1: dApp ID of the first proxy.
        :param dapp_id2: dApp ID of the second proxy.
        """
        self.dapp_id1 = dapp_id1
        self.dapp_id2 = dapp_id2
        super().__init__(
            f"dApp ID mismatch: 0x{dapp_id1.hex()} != 0x{dapp_id2.hex()}"
        )


class InvalidDappId(ProxyConfigError):
    """Raised when a dApp ID cannot be interpreted as 32 bytes."""

    pass


class InvalidDecimals(ProxyConfigError):
    """Raised when a decimals parameter is outside the supported range."""

    def __init__(self, decimals: int):
        """Initialize the error.

        :param decimals: The rejected decimals value.
        """
        self.decimals = decimals
        super().__init__(f"Invalid decimals: {decimals}")


class NoTransformNeeded(ProxyConfigError):
    """Raised when a transform is configured to do nothing."""

    pass


class NoNormalizationNeeded(NoTransformNeeded):
    """Raised when the wrapped feed already uses 18 decimals."""

    def __init__(self) -> None:
        super().__init__("Feed already uses 18 decimals")


class NoScalingNeeded(NoTransformNeeded):
    """Raised when the target decimals equal 18."""

    def __init__(self) -> None:
        super().__init__("Target decimals are already 18")


class InvalidBounds(ProxyConfigError):
    """Raised when a price cap interval is malformed."""

    pass


class LowerBoundMustBeNonNegative(InvalidBounds):
    """Raised when the lower bound of a price cap is negative."""

    def __init__(self, lower_bound: int):
        self.lower_bound = lower_bound
        super().__init__(f"Lower bound must be non-negative, got {lower_bound}")


class UpperBoundMustBeGreaterOrEqualToLowerBound(InvalidBounds):
    """Raised when the upper bound of a price cap is below the lower bound."""

    def __init__(self, lower_bound: int, upper_bound: int):
        self.lower_bound = lower_bound
        self.upper_bound = upper_bound
        super().__init__(
            f"Upper bound {upper_bound} must be greater or equal to "
            f"lower bound {lower_bound}"
        )


class UnknownProxyKind(ProxyConfigError):
    """Raised when a proxy kind is not registered."""

    pass


class UnknownProxyAddress(ProxyConfigError):
    """Raised when an address does not belong to a deployed proxy."""

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"No proxy deployed at {address}")


class UnsupportedRateFunction(ProxyConfigError):
    """Raised when a rate contract does not expose the requested getter."""

    pass


class ProxyReadError(ProxyError):
    """Raised when a proxy cannot produce a reading."""

    pass


class DivisionError(ProxyReadError, ArithmeticError):
    """Raised when a non-positive value would be inverted."""

    def __init__(self, value: int):
        """Initialize the error.

        :param value: The value that could not be inverted.
        """
        self.value = value
        super().__init__(f"Cannot invert non-positive value {value}")


class FunctionIsNotSupported(ProxyReadError):
    """Raised by retired legacy accessors."""

    def __init__(self, function_name: str = ""):
        self.function_name = function_name
        message = "Function is not supported"
        if function_name:
            message = f"{function_name} is not supported"
        super().__init__(message)


class SourceReadError(ProxyReadError):
    """Raised when an on-chain data source call fails."""

    pass
