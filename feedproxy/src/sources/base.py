"""Shared helpers for on-chain data sources.

Leaf proxies read from contracts through web3. Any failure of such a call
surfaces as :class:`~feedproxy.src.errors.SourceReadError`, chained to the
original web3 or transport exception.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from web3.exceptions import Web3Exception

from ..errors import SourceReadError

if TYPE_CHECKING:
    from web3 import Web3
    from web3.contract.contract import ContractFunction

logger = logging.getLogger(__name__)


def call_view(function: ContractFunction, label: str) -> Any:
    """Call a contract view function.

    :param function: Bound contract function, arguments already applied.
    :param label: Human-readable name of the call used in log and error messages.
    :returns: Decoded return value.
    :raises SourceReadError: If the call reverts or the node is unreachable.
    """
    try:
        return function.call()
    except (Web3Exception, OSError) as e:
        logger.warning(f"[{label}] Contract call failed: {e}")
        raise SourceReadError(f"{label} failed: {e}") from e


def latest_block_timestamp(w3: Web3, label: str) -> int:
    """Return the timestamp of the latest block.

    :param w3: Web3 instance.
    :param label: Human-readable name of the caller used in error messages.
    :returns: Unix timestamp in seconds.
    :raises SourceReadError: If the block cannot be fetched.
    """
    try:
        return int(w3.eth.get_block("latest")["timestamp"])
    except (Web3Exception, OSError) as e:
        logger.warning(f"[{label}] Failed to fetch latest block: {e}")
        raise SourceReadError(f"{label} failed to fetch latest block: {e}") from e
