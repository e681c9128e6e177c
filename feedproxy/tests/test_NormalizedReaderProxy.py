"""Unit tests for NormalizedReaderProxy."""

import pytest

from feedproxy.src.errors import InvalidDappId, NoNormalizationNeeded, ZeroProxyAddress
from feedproxy.src.NormalizedReaderProxy import NormalizedReaderProxy
from feedproxy.src.sources.mock import MockAggregatorFeed

DAPP_ID = bytes.fromhex("55" * 32)
TIMESTAMP = 1700000000


class TestNormalizedReaderProxyConstructor:
    """Test NormalizedReaderProxy construction."""

    def test_constructs_upscaling(self) -> None:
        """An 8-decimal feed should be upscaled by 10**10."""
        feed = MockAggregatorFeed(8, 25_000_000, TIMESTAMP)
        normalized = NormalizedReaderProxy(feed, DAPP_ID)
        assert normalized.feed is feed
        assert normalized.dapp_id == DAPP_ID
        assert normalized.feed_decimals == 8
        assert normalized.is_upscaling is True
        assert normalized.scaling_factor == 10_000_000_000

    def test_constructs_downscaling(self) -> None:
        """A 24-decimal feed should be downscaled by 10**6."""
        normalized = NormalizedReaderProxy(MockAggregatorFeed(24, 1, TIMESTAMP), DAPP_ID)
        assert normalized.is_upscaling is False
        assert normalized.scaling_factor == 1_000_000

    def test_dapp_id_forms(self) -> None:
        """The dApp ID may be given as an integer or hex string."""
        feed = MockAggregatorFeed(8, 1, TIMESTAMP)
        assert NormalizedReaderProxy(feed, 1).dapp_id == (1).to_bytes(32, "big")
        assert NormalizedReaderProxy(feed, "0x" + "55" * 32).dapp_id == DAPP_ID

    def test_invalid_dapp_id(self) -> None:
        """A malformed dApp ID should be rejected."""
        with pytest.raises(InvalidDappId):
            NormalizedReaderProxy(MockAggregatorFeed(8, 1, TIMESTAMP), b"short")

    def test_no_normalization_needed(self) -> None:
        """An 18-decimal feed needs no normalization."""
        feed = MockAggregatorFeed(18, 10**18, TIMESTAMP)
        with pytest.raises(NoNormalizationNeeded):
            NormalizedReaderProxy(feed, DAPP_ID)

    def test_zero_address(self) -> None:
        """A missing feed should be rejected."""
        with pytest.raises(ZeroProxyAddress, match="feed"):
            NormalizedReaderProxy(None, DAPP_ID)

    @pytest.mark.parametrize("decimals", [d for d in range(1, 37) if d != 18])
    def test_constructs_for_all_other_decimals(self, decimals: int) -> None:
        """Every decimal count except 18 should be accepted."""
        normalized = NormalizedReaderProxy(MockAggregatorFeed(decimals, 1, TIMESTAMP), DAPP_ID)
        assert normalized.is_upscaling == (decimals < 18)
        assert normalized.scaling_factor == 10 ** abs(18 - decimals)


class TestNormalizedReaderProxyRead:
    """Test NormalizedReaderProxy.read()."""

    def test_reads_upscaled(self) -> None:
        """0.25 at 8 decimals should read as 0.25 at 18 decimals."""
        feed = MockAggregatorFeed(8, 25_000_000, TIMESTAMP)
        value, timestamp = NormalizedReaderProxy(feed, DAPP_ID).read()
        assert value == 250_000_000_000_000_000
        assert timestamp == TIMESTAMP

    def test_reads_downscaled(self) -> None:
        """Extra decimals should be truncated away."""
        feed = MockAggregatorFeed(20, 123_456_789_012_345_678_999, TIMESTAMP)
        assert NormalizedReaderProxy(feed, DAPP_ID).read().value == 1_234_567_890_123_456_789

    def test_reads_negative_downscaled(self) -> None:
        """Negative answers should be truncated toward zero."""
        feed = MockAggregatorFeed(20, -199, TIMESTAMP)
        assert NormalizedReaderProxy(feed, DAPP_ID).read().value == -1

    def test_follows_feed_updates(self) -> None:
        """Reads should reflect the feed's latest round."""
        feed = MockAggregatorFeed(8, 25_000_000, TIMESTAMP)
        normalized = NormalizedReaderProxy(feed, DAPP_ID)
        feed.update(30_000_000, TIMESTAMP + 60)
        assert tuple(normalized.read()) == (300_000_000_000_000_000, TIMESTAMP + 60)


class TestNormalizedReaderProxyLegacy:
    """Test the legacy interface of NormalizedReaderProxy."""

    def test_legacy_values(self) -> None:
        """Legacy accessors should report 18 decimals and normalized values."""
        normalized = NormalizedReaderProxy(MockAggregatorFeed(8, 25_000_000, TIMESTAMP), DAPP_ID)
        assert normalized.decimals() == 18
        assert normalized.version() == 4916
        assert normalized.description() == ""
        assert normalized.latest_answer() == 250_000_000_000_000_000
        assert normalized.latest_timestamp() == TIMESTAMP
        assert normalized.latest_round_data() == (
            0,
            250_000_000_000_000_000,
            TIMESTAMP,
            TIMESTAMP,
            0,
        )
