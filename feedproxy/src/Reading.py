"""Reading: The value/timestamp pair produced by every reader proxy.

.. code-block:: python

    >>> reading = Reading(value=10**18, timestamp=1700000000)
    >>> value, timestamp = reading
    >>> value
    1000000000000000000
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from web3 import Web3

from .errors import InvalidDappId

DAPP_ID_LENGTH = 32


@dataclass(frozen=True)
class Reading:
    """A canonical reading.

    :ivar value: Signed fixed-point value with 18 decimals.
    :ivar timestamp: Unix timestamp in seconds.
    """

    value: int
    timestamp: int

    def __iter__(self) -> Iterator[int]:
        """Allow ``value, timestamp = reading``."""
        yield self.value
        yield self.timestamp


def as_dapp_id(dapp_id: bytes | int | str) -> bytes:
    """Coerce a dApp ID into its 32-byte form.

    On-chain proxies report the dApp ID as a ``uint256``, configuration files
    carry it as a hex string, so all three forms are accepted.

    :param dapp_id: 32 raw bytes, a non-negative integer or a 0x-prefixed hex string.
    :returns: 32-byte dApp ID.
    :raises InvalidDappId: If the value does not fit in 32 bytes.

    .. code-block:: python

        >>> as_dapp_id(1).hex()
        '0000000000000000000000000000000000000000000000000000000000000001'
    """
    if isinstance(dapp_id, bool):
        raise InvalidDappId(f"Invalid dApp ID: {dapp_id!r}")
    if isinstance(dapp_id, int):
        if dapp_id < 0 or dapp_id >= 2 ** (8 * DAPP_ID_LENGTH):
            raise InvalidDappId(f"dApp ID out of range: {dapp_id}")
        return dapp_id.to_bytes(DAPP_ID_LENGTH, "big")
    if isinstance(dapp_id, str):
        try:
            dapp_id = Web3.to_bytes(hexstr=dapp_id)
        except ValueError as e:
            raise InvalidDappId(f"Invalid dApp ID hex string: {dapp_id!r}") from e
    if isinstance(dapp_id, (bytes, bytearray)) and len(dapp_id) == DAPP_ID_LENGTH:
        return bytes(dapp_id)
    raise InvalidDappId(f"dApp ID must be {DAPP_ID_LENGTH} bytes: {dapp_id!r}")
