"""Exchange-rate sources.

Liquid staking and vault tokens expose their redemption rate through a
view function on the token contract itself (``stEthPerToken()`` on wstETH,
``convertToAssets(1e18)`` on ERC-4626 vaults, ``exchangeRateStored()`` on
lending-market tokens). These leaves turn such a rate into a reading
timestamped with the latest block, since the rate is current as of that
block.

Rate sources are not bound to a dApp. When multiplied with a dApp-bound
proxy they adopt its dApp ID.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar

from ..errors import InvalidDecimals, UnsupportedRateFunction, ZeroProxyAddress
from ..fixed_point import MAX_DECIMALS, MIN_DECIMALS, SCALE, to_canonical
from ..ReaderProxy import ReaderProxy, register_proxy
from ..Reading import Reading, as_dapp_id
from .base import call_view, latest_block_timestamp

if TYPE_CHECKING:
    from web3.contract import Contract

logger = logging.getLogger(__name__)


class RateReaderProxy(ReaderProxy):
    """Leaf proxy reading a rate getter on a token contract.

    Subclasses set ``rate_function`` and ``rate_args``.

    :cvar ABI_NAME: Bundled ABI the contract is bound with.
    :cvar rate_function: Name of the view function returning the rate.
    :cvar rate_args: Arguments passed to the rate function.
    :ivar contract: web3 contract instance.
    :ivar rate_decimals: Decimals of the raw rate.
    """

    ABI_NAME: ClassVar[str] = "IRateProvider"
    VERSION = 4919

    rate_function: ClassVar[str] = ""
    rate_args: ClassVar[tuple[Any, ...]] = ()

    def __init__(
        self,
        contract: Contract | None,
        rate_decimals: int = 18,
        dapp_id: bytes | int | str | None = None,
    ) -> None:
        """Initialize the rate source.

        :param contract: Token contract exposing the rate function.
        :param rate_decimals: Decimals of the raw rate (default: 18).
        :param dapp_id: Optional dApp ID to bind the source to.
        :raises ZeroProxyAddress: If contract is None.
        :raises InvalidDecimals: If rate_decimals is outside ``[1, 36]``.
        :raises UnsupportedRateFunction: If the contract ABI lacks the rate function.
        """
        if contract is None:
            raise ZeroProxyAddress()
        if not MIN_DECIMALS <= rate_decimals <= MAX_DECIMALS:
            raise InvalidDecimals(rate_decimals)
        function_names = {
            entry.get("name") for entry in contract.abi if entry.get("type") == "function"
        }
        if self.rate_function not in function_names:
            raise UnsupportedRateFunction(
                f"Contract {contract.address} has no {self.rate_function}() function"
            )
        self.contract = contract
        self.rate_decimals = rate_decimals
        self._dapp_id = as_dapp_id(dapp_id) if dapp_id is not None else None
        logger.info(
            f"{type(self).__name__} bound to {contract.address}.{self.rate_function}"
        )

    @property
    def dapp_id(self) -> bytes | None:
        return self._dapp_id

    def read_rate(self) -> int:
        """Read the raw rate from the contract.

        :returns: Rate with ``rate_decimals`` decimals.
        :raises SourceReadError: If the call fails.
        """
        function = getattr(self.contract.functions, self.rate_function)
        return call_view(
            function(*self.rate_args),
            f"{self.contract.address}.{self.rate_function}",
        )

    def read(self) -> Reading:
        """Read the rate in 18 decimals, timestamped with the latest block.

        :raises SourceReadError: If the contract or block cannot be read.
        """
        rate = self.read_rate()
        timestamp = latest_block_timestamp(self.contract.w3, self.contract.address)
        return Reading(value=to_canonical(rate, self.rate_decimals), timestamp=timestamp)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.contract.address})"


@register_proxy
class WstETHReaderProxy(RateReaderProxy):
    """wstETH/stETH rate from ``stEthPerToken()``."""

    kind = "wsteth"
    rate_function = "stEthPerToken"


@register_proxy
class ERC4626ReaderProxy(RateReaderProxy):
    """Assets per share of an ERC-4626 vault, e.g. wOS/OS.

    The rate is ``convertToAssets(1e18)``, the assets redeemable for one
    whole share.
    """

    kind = "erc4626"
    rate_function = "convertToAssets"
    rate_args = (SCALE,)


@register_proxy
class ExchangeRateReaderProxy(RateReaderProxy):
    """Exchange rate of a lending-market or staking token, e.g. spSEI/SEI.

    Defaults to ``exchangeRateStored()``; any other zero-argument getter in
    the bundled ABI can be selected per instance.
    """

    kind = "exchange_rate"
    rate_function = "exchangeRateStored"

    def __init__(
        self,
        contract: Contract | None,
        rate_decimals: int = 18,
        dapp_id: bytes | int | str | None = None,
        rate_function: str | None = None,
    ) -> None:
        """Initialize the source.

        :param contract: Token contract exposing the rate function.
        :param rate_decimals: Decimals of the raw rate (default: 18).
        :param dapp_id: Optional dApp ID to bind the source to.
        :param rate_function: Getter to call instead of ``exchangeRateStored``.
        """
        if rate_function is not None:
            self.rate_function = rate_function
        super().__init__(contract, rate_decimals=rate_decimals, dapp_id=dapp_id)
