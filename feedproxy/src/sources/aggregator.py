"""Chainlink-style aggregator feed source.

Aggregator feeds report answers with their own decimals. They are not
reader proxies themselves: wrap them in a
:class:`~feedproxy.src.NormalizedReaderProxy.NormalizedReaderProxy` to
bring them into the 18-decimal domain.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

from ..errors import ZeroProxyAddress
from ..ReaderProxy import register_proxy
from .base import call_view

if TYPE_CHECKING:
    from web3.contract import Contract

logger = logging.getLogger(__name__)


@register_proxy
class AggregatorFeed:
    """On-chain aggregator exposing ``decimals()`` and ``latestRoundData()``.

    :cvar ABI_NAME: Bundled ABI the contract is bound with.
    :ivar contract: web3 contract instance.
    """

    kind: ClassVar[str] = "aggregator"
    ABI_NAME: ClassVar[str] = "IAggregatorV2V3"

    def __init__(self, contract: Contract | None) -> None:
        """Initialize the feed.

        :param contract: Aggregator contract.
        :raises ZeroProxyAddress: If contract is None.
        """
        if contract is None:
            raise ZeroProxyAddress("feed")
        self.contract = contract
        logger.info(f"AggregatorFeed bound to {contract.address}")

    def decimals(self) -> int:
        """Return the number of decimals of the feed's answers.

        :raises SourceReadError: If the call fails.
        """
        return call_view(
            self.contract.functions.decimals(), f"{self.contract.address}.decimals"
        )

    def latest_round_data(self) -> tuple[int, int, int, int, int]:
        """Return the feed's latest round.

        :returns: Tuple of (round_id, answer, started_at, updated_at,
            answered_in_round).
        :raises SourceReadError: If the call fails.
        """
        round_id, answer, started_at, updated_at, answered_in_round = call_view(
            self.contract.functions.latestRoundData(),
            f"{self.contract.address}.latestRoundData",
        )
        return round_id, answer, started_at, updated_at, answered_in_round

    def __repr__(self) -> str:
        return f"AggregatorFeed({self.contract.address})"
