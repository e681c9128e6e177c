"""
Feed Proxy - Composable Read-Only Price Feed Proxies

This module provides fixed arithmetic transforms over price readings:
- Reading: 18-decimal value and timestamp pair
- InverseReaderProxy: Multiplicative inverse
- NormalizedReaderProxy: Aggregator feed rescaled to 18 decimals
- ScaledFeedProxy: 18-decimal proxy exposed with legacy decimals
- ProductReaderProxy: Product of two proxies, timestamped at read time
- PriceCappedReaderProxy: Value clamped into a fixed interval
- LegacyFeedView: Round-based aggregator interface shared by all proxies
- ProxyDirectory: Address-keyed construction and read interface
- sources: On-chain and in-memory leaf sources
"""

from .errors import (
    DappIdMismatch,
    DivisionError,
    FunctionIsNotSupported,
    InvalidBounds,
    InvalidDappId,
    InvalidDecimals,
    LowerBoundMustBeNonNegative,
    NoNormalizationNeeded,
    NoScalingNeeded,
    NoTransformNeeded,
    ProxyConfigError,
    ProxyError,
    ProxyReadError,
    SameProxyAddress,
    SourceReadError,
    UnknownProxyAddress,
    UnknownProxyKind,
    UnsupportedRateFunction,
    UpperBoundMustBeGreaterOrEqualToLowerBound,
    ZeroProxyAddress,
)
from .fixed_point import CANONICAL_DECIMALS, SCALE
from .InverseReaderProxy import InverseReaderProxy
from .LegacyFeedView import LegacyFeedView
from .NormalizedReaderProxy import NormalizedReaderProxy
from .PriceCappedReaderProxy import PriceCappedReaderProxy
from .ProductReaderProxy import ProductReaderProxy
from .ProxyDirectory import ZERO_ADDRESS, ProxyDirectory
from .ReaderProxy import (
    PROXY_REGISTRY,
    ReaderProxy,
    get_available_proxies,
    get_proxy_class,
    register_proxy,
)
from .Reading import Reading, as_dapp_id
from .ScaledFeedProxy import ScaledFeedProxy

# Import sources to trigger registration
from .sources import (
    AggregatorFeed,
    Api3ReaderProxy,
    ERC4626ReaderProxy,
    ExchangeRateReaderProxy,
    MockAggregatorFeed,
    MockReaderProxy,
    RateReaderProxy,
    WstETHReaderProxy,
)

__all__ = [
    "CANONICAL_DECIMALS",
    "SCALE",
    "ZERO_ADDRESS",
    "PROXY_REGISTRY",
    # Core types
    "Reading",
    "as_dapp_id",
    "ReaderProxy",
    "LegacyFeedView",
    "ProxyDirectory",
    "register_proxy",
    "get_proxy_class",
    "get_available_proxies",
    # Transforms
    "InverseReaderProxy",
    "NormalizedReaderProxy",
    "PriceCappedReaderProxy",
    "ProductReaderProxy",
    "ScaledFeedProxy",
    # Sources
    "AggregatorFeed",
    "Api3ReaderProxy",
    "RateReaderProxy",
    "WstETHReaderProxy",
    "ERC4626ReaderProxy",
    "ExchangeRateReaderProxy",
    "MockAggregatorFeed",
    "MockReaderProxy",
    # Errors
    "ProxyError",
    "ProxyConfigError",
    "ProxyReadError",
    "ZeroProxyAddress",
    "SameProxyAddress",
    "DappIdMismatch",
    "InvalidDappId",
    "InvalidDecimals",
    "NoTransformNeeded",
    "NoNormalizationNeeded",
    "NoScalingNeeded",
    "InvalidBounds",
    "LowerBoundMustBeNonNegative",
    "UpperBoundMustBeGreaterOrEqualToLowerBound",
    "UnknownProxyKind",
    "UnknownProxyAddress",
    "UnsupportedRateFunction",
    "DivisionError",
    "FunctionIsNotSupported",
    "SourceReadError",
]
