"""ScaledFeedProxy: Expose a reader proxy with a legacy decimal count.

The inverse of :class:`~feedproxy.src.NormalizedReaderProxy.NormalizedReaderProxy`.
Some consumers hard-code the decimals of the feed they were written for
(8 for most USD pairs). This adapter re-exposes a canonical proxy at any
decimal count in ``[1, 36]``. It only offers the legacy interface; its
output is not meant to be composed further.

.. code-block:: python

    >>> scaled = ScaledFeedProxy(proxy, 8)  # proxy reads 1.0001
    >>> scaled.latest_answer()
    100010000
    >>> scaled.decimals()
    8
"""

from __future__ import annotations

import logging
from typing import ClassVar

from .errors import InvalidDecimals, NoScalingNeeded
from .fixed_point import (
    CANONICAL_DECIMALS,
    MAX_DECIMALS,
    MIN_DECIMALS,
    from_canonical,
    scaling_factor,
)
from .LegacyFeedView import LegacyFeedMixin, LegacyFeedView
from .ReaderProxy import ReaderProxy, register_proxy, require_proxy
from .Reading import Reading

logger = logging.getLogger(__name__)


@register_proxy
class ScaledFeedProxy(LegacyFeedMixin):
    """Legacy feed exposing a reader proxy with ``target_decimals`` decimals.

    :cvar kind: Registry name of the proxy kind.
    :cvar VERSION: Version tag reported by the legacy interface.
    :ivar proxy: Wrapped proxy.
    :ivar target_decimals: Decimals of the exposed answers.
    :ivar is_upscaling: True if target_decimals is above 18.
    :ivar scaling_factor: Power of ten applied to the wrapped values.
    """

    kind: ClassVar[str] = "scaled"
    VERSION: ClassVar[int] = 4917

    def __init__(self, proxy: ReaderProxy | None, target_decimals: int) -> None:
        """Initialize the scaled feed.

        :param proxy: Canonical proxy to rescale.
        :param target_decimals: Decimals of the exposed answers, in ``[1, 36]``.
        :raises ZeroProxyAddress: If proxy is None.
        :raises InvalidDecimals: If target_decimals is outside ``[1, 36]``.
        :raises NoScalingNeeded: If target_decimals is 18.
        """
        self._proxy = require_proxy(proxy)
        if not MIN_DECIMALS <= target_decimals <= MAX_DECIMALS:
            raise InvalidDecimals(target_decimals)
        if target_decimals == CANONICAL_DECIMALS:
            raise NoScalingNeeded()
        self._target_decimals = target_decimals
        self._is_upscaling = target_decimals > CANONICAL_DECIMALS
        self._scaling_factor = scaling_factor(target_decimals)
        logger.debug(
            f"ScaledFeedProxy created over {self._proxy!r} "
            f"with {target_decimals} decimals"
        )

    @property
    def proxy(self) -> ReaderProxy:
        return self._proxy

    @property
    def dapp_id(self) -> bytes | None:
        return self._proxy.dapp_id

    @property
    def target_decimals(self) -> int:
        return self._target_decimals

    @property
    def is_upscaling(self) -> bool:
        return self._is_upscaling

    @property
    def scaling_factor(self) -> int:
        return self._scaling_factor

    @property
    def legacy(self) -> LegacyFeedView:
        return LegacyFeedView(self._read_scaled, self._target_decimals, self.VERSION)

    def _read_scaled(self) -> Reading:
        value, timestamp = self._proxy.read()
        return Reading(
            value=from_canonical(value, self._target_decimals),
            timestamp=timestamp,
        )

    def __repr__(self) -> str:
        return f"ScaledFeedProxy({self._proxy!r}, {self._target_decimals})"
