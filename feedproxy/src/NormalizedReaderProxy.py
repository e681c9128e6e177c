"""NormalizedReaderProxy: Bring an aggregator feed into the 18-decimal domain.

Chainlink-style aggregators report answers with their own decimal count
(commonly 8). This proxy wraps such a feed and rescales its latest answer
to 18 decimals so it can be combined with other reader proxies. Aggregator
feeds carry no dApp ID, so it is supplied at construction.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .errors import NoNormalizationNeeded, ZeroProxyAddress
from .fixed_point import CANONICAL_DECIMALS, scaling_factor, to_canonical
from .ReaderProxy import ReaderProxy, register_proxy
from .Reading import Reading, as_dapp_id

if TYPE_CHECKING:
    from .sources.aggregator import AggregatorFeed

logger = logging.getLogger(__name__)


@register_proxy
class NormalizedReaderProxy(ReaderProxy):
    """Proxy normalizing an aggregator feed to 18 decimals.

    :ivar feed: Wrapped aggregator feed.
    :ivar is_upscaling: True if the feed has fewer than 18 decimals.
    :ivar scaling_factor: Power of ten applied to the feed's answers.
    """

    kind = "normalized"
    VERSION = 4916

    def __init__(self, feed: AggregatorFeed | None, dapp_id: bytes | int | str) -> None:
        """Initialize the normalized proxy.

        The feed's decimals are read once here and never again.

        :param feed: Aggregator exposing ``decimals()`` and ``latest_round_data()``.
        :param dapp_id: dApp ID the proxy is bound to.
        :raises ZeroProxyAddress: If feed is None.
        :raises NoNormalizationNeeded: If the feed already has 18 decimals.
        """
        if feed is None:
            raise ZeroProxyAddress("feed")
        feed_decimals = feed.decimals()
        if feed_decimals == CANONICAL_DECIMALS:
            raise NoNormalizationNeeded()
        self._feed = feed
        self._dapp_id = as_dapp_id(dapp_id)
        self._feed_decimals = feed_decimals
        self._is_upscaling = feed_decimals < CANONICAL_DECIMALS
        self._scaling_factor = scaling_factor(feed_decimals)
        logger.debug(
            f"NormalizedReaderProxy created over {feed_decimals}-decimal feed "
            f"(factor {self._scaling_factor}, upscaling={self._is_upscaling})"
        )

    @property
    def feed(self) -> AggregatorFeed:
        return self._feed

    @property
    def dapp_id(self) -> bytes:
        return self._dapp_id

    @property
    def feed_decimals(self) -> int:
        return self._feed_decimals

    @property
    def is_upscaling(self) -> bool:
        return self._is_upscaling

    @property
    def scaling_factor(self) -> int:
        return self._scaling_factor

    def read(self) -> Reading:
        """Read the feed's latest answer rescaled to 18 decimals.

        :returns: Reading with the normalized answer and the feed's
            ``updatedAt`` timestamp.
        """
        _, answer, _, updated_at, _ = self._feed.latest_round_data()
        return Reading(
            value=to_canonical(answer, self._feed_decimals),
            timestamp=updated_at,
        )
