"""Api3 reader proxy source.

An Api3 reader proxy contract already reports 18-decimal readings and the
dApp ID it serves, so it is the usual leaf of a proxy graph.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..errors import ZeroProxyAddress
from ..ReaderProxy import ReaderProxy, register_proxy
from ..Reading import Reading, as_dapp_id
from .base import call_view

if TYPE_CHECKING:
    from web3.contract import Contract

logger = logging.getLogger(__name__)


@register_proxy
class Api3ReaderProxy(ReaderProxy):
    """Leaf proxy reading an on-chain Api3 reader proxy contract.

    The dApp ID is fetched once at construction.

    :cvar ABI_NAME: Bundled ABI the contract is bound with.
    :ivar contract: web3 contract instance.
    """

    kind = "api3"
    ABI_NAME = "IApi3ReaderProxy"

    def __init__(self, contract: Contract | None) -> None:
        """Initialize the source.

        :param contract: Api3 reader proxy contract.
        :raises ZeroProxyAddress: If contract is None.
        :raises SourceReadError: If the dApp ID cannot be fetched.
        """
        if contract is None:
            raise ZeroProxyAddress()
        self.contract = contract
        self._dapp_id = as_dapp_id(
            call_view(contract.functions.dappId(), f"{contract.address}.dappId")
        )
        logger.info(f"Api3ReaderProxy bound to {contract.address}")

    @property
    def dapp_id(self) -> bytes:
        return self._dapp_id

    def read(self) -> Reading:
        """Read the contract's current value and timestamp.

        :raises SourceReadError: If the call fails.
        """
        value, timestamp = call_view(
            self.contract.functions.read(), f"{self.contract.address}.read"
        )
        return Reading(value=value, timestamp=timestamp)

    def __repr__(self) -> str:
        return f"Api3ReaderProxy({self.contract.address})"
