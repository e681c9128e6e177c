"""LegacyFeedView: Round-based oracle interface over a canonical reading.

Reader proxies have no notion of rounds. Consumers written against the
historical aggregator interface still expect one, so every proxy carries a
view that collapses its reading into a single synthetic round (ID 0) and
rejects the per-round accessors.

.. code-block:: python

    >>> view = LegacyFeedView(lambda: Reading(10**18, 1700000000), 18, 4913)
    >>> view.latest_round_data()
    (0, 1000000000000000000, 1700000000, 1700000000, 0)
    >>> view.latest_round()
    Traceback (most recent call last):
        ...
    feedproxy.src.errors.FunctionIsNotSupported: latestRound is not supported
"""

from __future__ import annotations

from typing import Callable

from .errors import FunctionIsNotSupported
from .Reading import Reading

RoundData = tuple[int, int, int, int, int]


class LegacyFeedView:
    """Legacy aggregator interface backed by a read function.

    :ivar read: Callable returning the reading to expose.
    """

    def __init__(self, read: Callable[[], Reading], decimals: int, version: int) -> None:
        """Initialize the view.

        :param read: Callable returning the current reading.
        :param decimals: Decimals of the exposed values.
        :param version: Version tag identifying the proxy kind.
        """
        self.read = read
        self._decimals = decimals
        self._version = version

    def decimals(self) -> int:
        return self._decimals

    def description(self) -> str:
        """Return an empty description; proxies are deliberately unlabeled."""
        return ""

    def version(self) -> int:
        return self._version

    def latest_answer(self) -> int:
        return self.read().value

    def latest_timestamp(self) -> int:
        return self.read().timestamp

    def latest_round_data(self) -> RoundData:
        """Return the reading as a single synthetic round.

        :returns: Tuple of (round_id, answer, started_at, updated_at,
            answered_in_round) with both round IDs set to 0.
        """
        value, timestamp = self.read()
        return 0, value, timestamp, timestamp, 0

    def latest_round(self) -> int:
        raise FunctionIsNotSupported("latestRound")

    def get_answer(self, round_id: int) -> int:
        raise FunctionIsNotSupported("getAnswer")

    def get_timestamp(self, round_id: int) -> int:
        raise FunctionIsNotSupported("getTimestamp")

    def get_round_data(self, round_id: int) -> RoundData:
        raise FunctionIsNotSupported("getRoundData")


class LegacyFeedMixin:
    """Forward the legacy interface to a composed :class:`LegacyFeedView`.

    Classes using this mixin provide a ``legacy`` attribute or property.
    """

    legacy: LegacyFeedView

    def decimals(self) -> int:
        return self.legacy.decimals()

    def description(self) -> str:
        return self.legacy.description()

    def version(self) -> int:
        return self.legacy.version()

    def latest_answer(self) -> int:
        return self.legacy.latest_answer()

    def latest_timestamp(self) -> int:
        return self.legacy.latest_timestamp()

    def latest_round_data(self) -> RoundData:
        return self.legacy.latest_round_data()

    def latest_round(self) -> int:
        return self.legacy.latest_round()

    def get_answer(self, round_id: int) -> int:
        return self.legacy.get_answer(round_id)

    def get_timestamp(self, round_id: int) -> int:
        return self.legacy.get_timestamp(round_id)

    def get_round_data(self, round_id: int) -> RoundData:
        return self.legacy.get_round_data(round_id)
