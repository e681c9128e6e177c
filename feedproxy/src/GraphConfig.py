"""GraphConfig: Build a proxy graph from a JSON description.

The file lists nodes in construction order. Each node names a registered
kind and its constructor arguments. Arguments may refer to earlier nodes
by name, to contract addresses, or to 18-decimal amounts in ether units:

.. code-block:: json

    {
        "rpc_url": "https://eth.example.org",
        "nodes": [
            {"name": "eth_usd", "kind": "api3",
             "args": ["0x37422cC8e1487a0452cc0D0BF75877d86c63c88A"]},
            {"name": "wsteth_steth", "kind": "wsteth",
             "args": ["0x7f39C581F595B53c5cb19bD0b3f8dA6c935E2Ca0"]},
            {"name": "wsteth_usd", "kind": "product",
             "args": ["$wsteth_steth", "$eth_usd"]},
            {"name": "usdc_usd", "kind": "mock",
             "args": [1, {"ether": "0.9991"}, 1700000000]},
            {"name": "usdc_usd_capped", "kind": "price_capped",
             "args": ["$usdc_usd", {"ether": "0.9995"}, {"ether": "1.0005"}]},
            {"name": "wsteth_usd_8", "kind": "scaled",
             "args": ["$wsteth_usd", 8]}
        ]
    }

For kinds that read a contract (those with an ``ABI_NAME``), the first
argument is the contract address and is bound through
:class:`~feedproxy.src.ContractUtility.ContractUtility`. The zero address is
passed on as a missing contract. Ether amounts may be negative.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from web3 import Web3

from .ContractUtility import ContractUtility
from .ProxyDirectory import ProxyDirectory
from .ReaderProxy import get_proxy_class

logger = logging.getLogger(__name__)


class GraphConfigError(ValueError):
    """Raised when a graph description is malformed."""

    pass


@dataclass
class NodeConfig:
    """One node of a graph description.

    :ivar name: Unique node name, referenced as ``$name``.
    :ivar kind: Registered proxy kind.
    :ivar args: Raw constructor arguments.
    :ivar kwargs: Raw constructor keyword arguments.
    """

    name: str
    kind: str
    args: list[Any] = field(default_factory=list)
    kwargs: dict[str, Any] = field(default_factory=dict)


@dataclass
class GraphConfig:
    """A parsed graph description.

    :ivar nodes: Nodes in construction order.
    :ivar rpc_url: Optional RPC endpoint for contract-backed kinds.
    """

    nodes: list[NodeConfig]
    rpc_url: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GraphConfig:
        """Parse a graph description.

        :param data: Decoded JSON object.
        :returns: New GraphConfig instance.
        :raises GraphConfigError: If a node is missing fields or names repeat.
        """
        raw_nodes = data.get("nodes")
        if not isinstance(raw_nodes, list) or not raw_nodes:
            raise GraphConfigError("Graph must contain a non-empty 'nodes' list")

        nodes: list[NodeConfig] = []
        seen: set[str] = set()
        for index, raw in enumerate(raw_nodes):
            if not isinstance(raw, dict) or "name" not in raw or "kind" not in raw:
                raise GraphConfigError(f"Node {index} must have 'name' and 'kind'")
            name = raw["name"]
            if name in seen:
                raise GraphConfigError(f"Duplicate node name '{name}'")
            seen.add(name)
            nodes.append(
                NodeConfig(
                    name=name,
                    kind=raw["kind"],
                    args=list(raw.get("args", [])),
                    kwargs=dict(raw.get("kwargs", {})),
                )
            )
        return cls(nodes=nodes, rpc_url=data.get("rpc_url"))

    @classmethod
    def load(cls, path: str | Path) -> GraphConfig:
        """Load a graph description from a JSON file.

        :param path: Path to the JSON file.
        :returns: New GraphConfig instance.
        """
        with open(path, "r") as file:
            return cls.from_dict(json.load(file))

    def build(
        self,
        directory: ProxyDirectory | None = None,
        contract_utility: ContractUtility | None = None,
    ) -> tuple[ProxyDirectory, dict[str, str]]:
        """Deploy every node into a directory.

        :param directory: Directory to deploy into (default: a new one).
        :param contract_utility: Web3 utility for contract-backed kinds. Created
            from ``rpc_url`` on first use if not provided.
        :returns: Tuple of (directory, mapping of node name to address).
        :raises GraphConfigError: If an argument cannot be resolved or a node
            is given arguments of the wrong type.
        :raises ProxyConfigError: If a proxy rejects its parameters.
        """
        if directory is None:
            directory = ProxyDirectory()
        addresses: dict[str, str] = {}

        for node in self.nodes:
            try:
                contract_utility = self._build_node(
                    node, directory, addresses, contract_utility
                )
            except GraphConfigError:
                raise
            except (ValueError, TypeError) as e:
                raise GraphConfigError(f"Node '{node.name}' ({node.kind}): {e}") from e
            logger.debug(f"Node '{node.name}' ({node.kind}) at {addresses[node.name]}")

        return directory, addresses

    def _build_node(
        self,
        node: NodeConfig,
        directory: ProxyDirectory,
        addresses: dict[str, str],
        contract_utility: ContractUtility | None,
    ) -> ContractUtility | None:
        args = [self._resolve_arg(arg, addresses) for arg in node.args]
        kwargs = {
            key: self._resolve_arg(value, addresses)
            for key, value in node.kwargs.items()
        }

        abi_name = getattr(get_proxy_class(node.kind), "ABI_NAME", None)
        if abi_name:
            if not args:
                raise GraphConfigError(
                    f"Node '{node.name}' needs a contract address argument"
                )
            if _is_zero_address(args[0]):
                # Left unbound so the source rejects it as a missing contract
                args[0] = None
            else:
                if contract_utility is None:
                    contract_utility = ContractUtility(self.rpc_url)
                args[0] = contract_utility.get_contract(args[0], abi_name)

        addresses[node.name] = directory.deploy(node.kind, *args, **kwargs)
        return contract_utility

    @staticmethod
    def _resolve_arg(arg: Any, addresses: dict[str, str]) -> Any:
        if isinstance(arg, str) and arg.startswith("$"):
            name = arg[1:]
            if name not in addresses:
                raise GraphConfigError(f"Unknown node reference '{arg}'")
            return addresses[name]
        if isinstance(arg, dict):
            if set(arg) != {"ether"}:
                raise GraphConfigError(f"Unsupported argument object: {arg}")
            return _ether_to_wei(arg["ether"])
        return arg


def _ether_to_wei(amount: Any) -> int:
    # to_wei only accepts unsigned amounts
    text = str(amount).strip()
    sign = -1 if text.startswith("-") else 1
    try:
        return sign * Web3.to_wei(text[1:] if sign < 0 else text, "ether")
    except (ValueError, ArithmeticError) as e:
        raise GraphConfigError(f"Invalid ether amount: {amount!r}") from e


def _is_zero_address(arg: Any) -> bool:
    return isinstance(arg, str) and Web3.is_address(arg) and int(arg, 16) == 0
