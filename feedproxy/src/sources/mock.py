"""In-memory sources for tests and offline graphs.

These hold a single value that can be replaced with ``update()``. They are
the only mutable objects in the package and stand in for on-chain data
changing between reads.
"""

from __future__ import annotations

from typing import ClassVar

from ..ReaderProxy import ReaderProxy, register_proxy
from ..Reading import Reading, as_dapp_id


@register_proxy
class MockReaderProxy(ReaderProxy):
    """Reader proxy returning a fixed reading.

    .. code-block:: python

        >>> proxy = MockReaderProxy(1, 1_824_970_000_000_000_000_000, 1700000000)
        >>> proxy.read().value
        1824970000000000000000
    """

    kind = "mock"

    def __init__(self, dapp_id: bytes | int | str | None, value: int, timestamp: int) -> None:
        self._dapp_id = as_dapp_id(dapp_id) if dapp_id is not None else None
        self._reading = Reading(value=value, timestamp=timestamp)

    @property
    def dapp_id(self) -> bytes | None:
        return self._dapp_id

    def read(self) -> Reading:
        return self._reading

    def update(self, value: int, timestamp: int) -> None:
        """Replace the reading returned by ``read()``."""
        self._reading = Reading(value=value, timestamp=timestamp)


@register_proxy
class MockAggregatorFeed:
    """Aggregator feed returning a fixed answer with the given decimals."""

    kind: ClassVar[str] = "mock_aggregator"

    def __init__(self, decimals: int, answer: int, timestamp: int) -> None:
        self._decimals = decimals
        self._answer = answer
        self._timestamp = timestamp

    def decimals(self) -> int:
        return self._decimals

    def latest_round_data(self) -> tuple[int, int, int, int, int]:
        return 0, self._answer, self._timestamp, self._timestamp, 0

    def update(self, answer: int, timestamp: int) -> None:
        """Replace the answer returned by ``latest_round_data()``."""
        self._answer = answer
        self._timestamp = timestamp
