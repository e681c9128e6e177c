"""ContractUtility: Web3 initialization and contract ABI loading."""

import json
import os
from pathlib import Path

from web3 import Web3
from web3.contract import Contract

DEFAULT_RPC_URL = "http://localhost:8545"


class ContractUtility:
    """Utility for Web3 connection and contract ABI loading.

    :ivar rpc_url: RPC endpoint URL.
    :ivar w3: Configured Web3 instance.
    """

    def __init__(self, rpc_url: str | None = None) -> None:
        """Initialize the contract utility.

        :param rpc_url: RPC endpoint URL. The RPC_URL env var takes precedence.
        """
        self.rpc_url = os.environ.get("RPC_URL") or rpc_url or DEFAULT_RPC_URL
        self.w3 = Web3(Web3.HTTPProvider(self.rpc_url))

    @staticmethod
    def get_abi(contract_name: str) -> list:
        """Fetch the bundled ABI of an interface from the abi folder.

        :param contract_name: Name of the interface (e.g., "IApi3ReaderProxy").
        :returns: ABI as a list of entries.
        :raises FileNotFoundError: If no ABI is bundled under that name.
        """
        abi_path = (Path(__file__).parent / "abi" / f"{contract_name}.json").resolve()

        with open(abi_path, "r") as file:
            return json.load(file)

    def get_contract(self, address: str, contract_name: str) -> Contract:
        """Bind a bundled ABI to a deployed contract.

        :param address: Contract address (any checksum casing).
        :param contract_name: Name of the bundled ABI.
        :returns: web3 contract instance.
        :raises ValueError: If address is not a valid address.
        """
        if not Web3.is_address(address):
            raise ValueError(f"Invalid contract address: {address}")
        return self.w3.eth.contract(
            address=Web3.to_checksum_address(address),
            abi=self.get_abi(contract_name),
        )
