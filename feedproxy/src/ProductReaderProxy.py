"""ProductReaderProxy: Product of two reader proxies.

Multiplies e.g. wstETH/stETH by ETH/USD to get wstETH/USD. The two inputs
update independently, so the product has no single as-of time: the
reading is timestamped with the time of the read itself.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from .errors import DappIdMismatch, SameProxyAddress
from .fixed_point import SCALE, div_trunc
from .ReaderProxy import ReaderProxy, register_proxy, require_proxy
from .Reading import Reading

logger = logging.getLogger(__name__)


def _current_time() -> int:
    return int(time.time())


@register_proxy
class ProductReaderProxy(ReaderProxy):
    """Proxy reading the product of two proxies bound to the same dApp.

    :ivar proxy1: First factor.
    :ivar proxy2: Second factor.
    """

    kind = "product"
    VERSION = 4914

    def __init__(
        self,
        proxy1: ReaderProxy | None,
        proxy2: ReaderProxy | None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        """Initialize the product proxy.

        :param proxy1: First factor.
        :param proxy2: Second factor.
        :param clock: Callable returning the current Unix time in seconds.
            Defaults to the system clock.
        :raises ZeroProxyAddress: If either proxy is None.
        :raises SameProxyAddress: If both arguments are the same proxy.
        :raises DappIdMismatch: If the proxies are bound to different dApp IDs.
        """
        self._proxy1 = require_proxy(proxy1, "proxy1")
        self._proxy2 = require_proxy(proxy2, "proxy2")
        if self._proxy1 is self._proxy2:
            raise SameProxyAddress()
        self._dapp_id = self._common_dapp_id(self._proxy1, self._proxy2)
        self._clock = clock or _current_time
        logger.debug(
            f"ProductReaderProxy created over {self._proxy1!r} and {self._proxy2!r}"
        )

    @staticmethod
    def _common_dapp_id(proxy1: ReaderProxy, proxy2: ReaderProxy) -> bytes | None:
        # Unbound rate sources adopt the dApp ID of the other factor
        dapp_id1, dapp_id2 = proxy1.dapp_id, proxy2.dapp_id
        if dapp_id1 is not None and dapp_id2 is not None and dapp_id1 != dapp_id2:
            raise DappIdMismatch(dapp_id1, dapp_id2)
        return dapp_id1 if dapp_id1 is not None else dapp_id2

    @property
    def proxy1(self) -> ReaderProxy:
        return self._proxy1

    @property
    def proxy2(self) -> ReaderProxy:
        return self._proxy2

    @property
    def dapp_id(self) -> bytes | None:
        return self._dapp_id

    def read(self) -> Reading:
        """Read the product of both proxies.

        :returns: Reading with value ``value1 * value2 / 10**18`` truncated
            toward zero, timestamped at the time of the call.
        """
        value1, _ = self._proxy1.read()
        value2, _ = self._proxy2.read()
        return Reading(value=div_trunc(value1 * value2, SCALE), timestamp=self._clock())
