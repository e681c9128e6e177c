"""
Leaf data sources for reader proxy graphs.

Usage:
    from feedproxy.src.ContractUtility import ContractUtility
    from feedproxy.src.sources import Api3ReaderProxy

    utility = ContractUtility("https://eth.example.org")
    contract = utility.get_contract(address, Api3ReaderProxy.ABI_NAME)
    eth_usd = Api3ReaderProxy(contract)
    reading = eth_usd.read()
"""

from .aggregator import AggregatorFeed
from .api3 import Api3ReaderProxy
from .base import call_view, latest_block_timestamp
from .mock import MockAggregatorFeed, MockReaderProxy
from .rate import (
    ERC4626ReaderProxy,
    ExchangeRateReaderProxy,
    RateReaderProxy,
    WstETHReaderProxy,
)

__all__ = [
    # On-chain sources
    "AggregatorFeed",
    "Api3ReaderProxy",
    "RateReaderProxy",
    "WstETHReaderProxy",
    "ERC4626ReaderProxy",
    "ExchangeRateReaderProxy",
    # In-memory sources
    "MockAggregatorFeed",
    "MockReaderProxy",
    # Helpers
    "call_view",
    "latest_block_timestamp",
]
