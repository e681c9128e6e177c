"""PriceCappedReaderProxy: Clamp a reader proxy into a fixed interval.

Typically used for stablecoins, where a depeg beyond a small band should
not propagate to the consumer. The cap only filters the value; the
wrapped proxy's timestamp is kept.

.. code-block:: python

    >>> capped = PriceCappedReaderProxy(usdc_usd, 999_500_000_000_000_000, 1_000_500_000_000_000_000)
    >>> capped.read().value  # usdc_usd reads 0.9991
    999500000000000000
"""

from __future__ import annotations

import logging

from .errors import (
    LowerBoundMustBeNonNegative,
    UpperBoundMustBeGreaterOrEqualToLowerBound,
)
from .ReaderProxy import ReaderProxy, register_proxy, require_proxy
from .Reading import Reading

logger = logging.getLogger(__name__)


@register_proxy
class PriceCappedReaderProxy(ReaderProxy):
    """Proxy clamping another proxy's value into ``[lower_bound, upper_bound]``.

    :ivar proxy: Wrapped proxy.
    :ivar lower_bound: Inclusive lower bound, 18 decimals.
    :ivar upper_bound: Inclusive upper bound, 18 decimals.
    """

    kind = "price_capped"
    VERSION = 4918

    def __init__(
        self, proxy: ReaderProxy | None, lower_bound: int, upper_bound: int
    ) -> None:
        """Initialize the capped proxy.

        :param proxy: Proxy whose value is clamped.
        :param lower_bound: Inclusive lower bound, must be non-negative.
        :param upper_bound: Inclusive upper bound, must not be below lower_bound.
        :raises ZeroProxyAddress: If proxy is None.
        :raises LowerBoundMustBeNonNegative: If lower_bound is negative.
        :raises UpperBoundMustBeGreaterOrEqualToLowerBound: If the bounds are inverted.
        """
        self._proxy = require_proxy(proxy)
        if lower_bound < 0:
            raise LowerBoundMustBeNonNegative(lower_bound)
        if upper_bound < lower_bound:
            raise UpperBoundMustBeGreaterOrEqualToLowerBound(lower_bound, upper_bound)
        self._lower_bound = lower_bound
        self._upper_bound = upper_bound
        logger.debug(
            f"PriceCappedReaderProxy created over {self._proxy!r} "
            f"with bounds [{lower_bound}, {upper_bound}]"
        )

    @property
    def proxy(self) -> ReaderProxy:
        return self._proxy

    @property
    def lower_bound(self) -> int:
        return self._lower_bound

    @property
    def upper_bound(self) -> int:
        return self._upper_bound

    @property
    def dapp_id(self) -> bytes | None:
        return self._proxy.dapp_id

    def read(self) -> Reading:
        """Read the clamped value with the wrapped proxy's timestamp."""
        value, timestamp = self._proxy.read()
        capped = min(max(value, self._lower_bound), self._upper_bound)
        return Reading(value=capped, timestamp=timestamp)

    def is_capped(self) -> bool:
        """Check whether the wrapped value currently lies outside the bounds.

        :returns: True if ``read()`` is returning a bound instead of the
            wrapped value.
        """
        value = self._proxy.read().value
        return value < self._lower_bound or value > self._upper_bound
