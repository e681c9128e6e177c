"""Unit tests for on-chain data sources."""

from unittest.mock import MagicMock

import pytest
from web3.exceptions import ContractLogicError

from feedproxy.src.ContractUtility import ContractUtility
from feedproxy.src.errors import (
    InvalidDecimals,
    SourceReadError,
    UnsupportedRateFunction,
    ZeroProxyAddress,
)
from feedproxy.src.NormalizedReaderProxy import NormalizedReaderProxy
from feedproxy.src.ProductReaderProxy import ProductReaderProxy
from feedproxy.src.sources.aggregator import AggregatorFeed
from feedproxy.src.sources.api3 import Api3ReaderProxy
from feedproxy.src.sources.mock import MockReaderProxy
from feedproxy.src.sources.rate import (
    ERC4626ReaderProxy,
    ExchangeRateReaderProxy,
    WstETHReaderProxy,
)

WSTETH_ADDRESS = "0x7f39C581F595B53c5cb19bD0b3f8dA6c935E2Ca0"
ETH_USD_ADDRESS = "0x37422cC8e1487a0452cc0D0BF75877d86c63c88A"
BLOCK_TIMESTAMP = 1700000300


def make_api3_contract(dapp_id: int = 1, value: int = 2_000 * 10**18, timestamp: int = 1700000000):
    contract = MagicMock()
    contract.address = ETH_USD_ADDRESS
    contract.functions.dappId.return_value.call.return_value = dapp_id
    contract.functions.read.return_value.call.return_value = (value, timestamp)
    return contract


def make_rate_contract(function_name: str, rate: int):
    contract = MagicMock()
    contract.address = WSTETH_ADDRESS
    contract.abi = ContractUtility.get_abi("IRateProvider")
    getattr(contract.functions, function_name).return_value.call.return_value = rate
    contract.w3.eth.get_block.return_value = {"timestamp": BLOCK_TIMESTAMP}
    return contract


class TestApi3ReaderProxy:
    """Test Api3ReaderProxy."""

    def test_fetches_dapp_id_once(self) -> None:
        """The dApp ID should be read at construction only."""
        contract = make_api3_contract(dapp_id=7)
        proxy = Api3ReaderProxy(contract)
        proxy.read()
        proxy.read()
        assert proxy.dapp_id == (7).to_bytes(32, "big")
        assert contract.functions.dappId.return_value.call.call_count == 1

    def test_reads_value_and_timestamp(self) -> None:
        """read() should return the contract's reading unchanged."""
        proxy = Api3ReaderProxy(make_api3_contract())
        value, timestamp = proxy.read()
        assert value == 2_000 * 10**18
        assert timestamp == 1700000000

    def test_zero_address(self) -> None:
        """A missing contract should be rejected."""
        with pytest.raises(ZeroProxyAddress):
            Api3ReaderProxy(None)

    def test_read_revert_raises_source_error(self) -> None:
        """A reverted call should surface as SourceReadError."""
        contract = make_api3_contract()
        contract.functions.read.return_value.call.side_effect = ContractLogicError(
            "execution reverted"
        )
        proxy = Api3ReaderProxy(contract)
        with pytest.raises(SourceReadError) as exc_info:
            proxy.read()
        assert isinstance(exc_info.value.__cause__, ContractLogicError)

    def test_connection_error_raises_source_error(self) -> None:
        """An unreachable node should surface as SourceReadError."""
        contract = make_api3_contract()
        contract.functions.dappId.return_value.call.side_effect = ConnectionError("refused")
        with pytest.raises(SourceReadError):
            Api3ReaderProxy(contract)

    def test_version(self) -> None:
        """Leaf proxies report version 0."""
        assert Api3ReaderProxy(make_api3_contract()).version() == 0


class TestAggregatorFeed:
    """Test AggregatorFeed."""

    def test_decimals_and_round_data(self) -> None:
        """Calls should be forwarded to the contract."""
        contract = MagicMock()
        contract.functions.decimals.return_value.call.return_value = 8
        contract.functions.latestRoundData.return_value.call.return_value = (
            18446744073709551617,
            182497000000,
            1700000000,
            1700000000,
            18446744073709551617,
        )
        feed = AggregatorFeed(contract)
        assert feed.decimals() == 8
        assert feed.latest_round_data()[1] == 182497000000

    def test_normalized(self) -> None:
        """An aggregator feed should normalize to 18 decimals."""
        contract = MagicMock()
        contract.functions.decimals.return_value.call.return_value = 8
        contract.functions.latestRoundData.return_value.call.return_value = (
            1,
            182497000000,
            1699999990,
            1700000000,
            1,
        )
        normalized = NormalizedReaderProxy(AggregatorFeed(contract), 1)
        assert tuple(normalized.read()) == (1_824_970_000_000_000_000_000, 1700000000)

    def test_zero_address(self) -> None:
        """A missing contract should be rejected."""
        with pytest.raises(ZeroProxyAddress, match="feed"):
            AggregatorFeed(None)


class TestRateReaderProxies:
    """Test exchange-rate sources."""

    def test_wsteth(self) -> None:
        """stEthPerToken() should be read with the latest block timestamp."""
        contract = make_rate_contract("stEthPerToken", 1_180_000_000_000_000_000)
        proxy = WstETHReaderProxy(contract)
        value, timestamp = proxy.read()
        assert value == 1_180_000_000_000_000_000
        assert timestamp == BLOCK_TIMESTAMP
        assert proxy.dapp_id is None
        assert proxy.version() == 4919

    def test_erc4626_passes_one_share(self) -> None:
        """convertToAssets() should be called with one whole share."""
        contract = make_rate_contract("convertToAssets", 1_050_000_000_000_000_000)
        proxy = ERC4626ReaderProxy(contract)
        assert proxy.read().value == 1_050_000_000_000_000_000
        contract.functions.convertToAssets.assert_called_with(10**18)

    def test_exchange_rate_default(self) -> None:
        """exchangeRateStored() should be the default getter."""
        contract = make_rate_contract("exchangeRateStored", 10**18)
        proxy = ExchangeRateReaderProxy(contract)
        assert proxy.rate_function == "exchangeRateStored"
        assert proxy.read_rate() == 10**18

    def test_exchange_rate_custom_function(self) -> None:
        """Another getter can be selected per instance."""
        contract = make_rate_contract("getRate", 1_020_000_000_000_000_000)
        proxy = ExchangeRateReaderProxy(contract, rate_function="getRate")
        assert proxy.read().value == 1_020_000_000_000_000_000
        assert ExchangeRateReaderProxy.rate_function == "exchangeRateStored"

    def test_unsupported_rate_function(self) -> None:
        """A getter missing from the ABI should be rejected."""
        contract = make_rate_contract("getRate", 1)
        with pytest.raises(UnsupportedRateFunction):
            ExchangeRateReaderProxy(contract, rate_function="pricePerShare")

    def test_rate_decimals_rescaled(self) -> None:
        """Rates with other decimals should be rescaled to 18."""
        contract = make_rate_contract("exchangeRateStored", 1_020_000)
        proxy = ExchangeRateReaderProxy(contract, rate_decimals=6)
        assert proxy.read().value == 1_020_000_000_000_000_000

    @pytest.mark.parametrize("decimals", [0, 37])
    def test_invalid_rate_decimals(self, decimals: int) -> None:
        """Rate decimals outside [1, 36] should be rejected."""
        contract = make_rate_contract("stEthPerToken", 1)
        with pytest.raises(InvalidDecimals):
            WstETHReaderProxy(contract, rate_decimals=decimals)

    def test_bound_dapp_id(self) -> None:
        """A dApp ID can be supplied explicitly."""
        contract = make_rate_contract("stEthPerToken", 1)
        assert WstETHReaderProxy(contract, dapp_id=3).dapp_id == (3).to_bytes(32, "big")

    def test_zero_address(self) -> None:
        """A missing contract should be rejected."""
        with pytest.raises(ZeroProxyAddress):
            WstETHReaderProxy(None)

    def test_block_fetch_failure(self) -> None:
        """A failing block fetch should surface as SourceReadError."""
        contract = make_rate_contract("stEthPerToken", 1)
        contract.w3.eth.get_block.side_effect = TimeoutError("timed out")
        with pytest.raises(SourceReadError):
            WstETHReaderProxy(contract).read()

    def test_wsteth_usd_product(self) -> None:
        """wstETH/USD is the wstETH rate multiplied by ETH/USD."""
        rate = WstETHReaderProxy(make_rate_contract("stEthPerToken", 1_180_000_000_000_000_000))
        eth_usd = MockReaderProxy(1, 2_000 * 10**18, 1700000000)
        product = ProductReaderProxy(rate, eth_usd, clock=lambda: 1700000400)
        assert product.dapp_id == (1).to_bytes(32, "big")
        assert tuple(product.read()) == (2_360 * 10**18, 1700000400)
