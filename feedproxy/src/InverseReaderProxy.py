"""InverseReaderProxy: Multiplicative inverse of a reader proxy.

Turns an ETH/USD reading into USD/ETH. The inverse of ``v`` in the
canonical domain is ``10**36 / v``, floored. Only positive values can be
inverted.
"""

from __future__ import annotations

import logging

from .errors import DivisionError
from .fixed_point import SCALE
from .ReaderProxy import ReaderProxy, register_proxy, require_proxy
from .Reading import Reading

logger = logging.getLogger(__name__)


@register_proxy
class InverseReaderProxy(ReaderProxy):
    """Proxy reading the inverse of another proxy.

    :ivar proxy: Wrapped proxy.
    """

    kind = "inverse"
    VERSION = 4913

    def __init__(self, proxy: ReaderProxy | None) -> None:
        """Initialize the inverse proxy.

        :param proxy: Proxy whose value is inverted.
        :raises ZeroProxyAddress: If proxy is None.
        """
        self._proxy = require_proxy(proxy)
        logger.debug(f"InverseReaderProxy created over {self._proxy!r}")

    @property
    def proxy(self) -> ReaderProxy:
        return self._proxy

    @property
    def dapp_id(self) -> bytes | None:
        return self._proxy.dapp_id

    def read(self) -> Reading:
        """Read the inverted value.

        :returns: Reading with value ``10**36 // value`` and the wrapped
            proxy's timestamp.
        :raises DivisionError: If the wrapped value is not positive.
        """
        value, timestamp = self._proxy.read()
        if value <= 0:
            raise DivisionError(value)
        return Reading(value=SCALE * SCALE // value, timestamp=timestamp)
