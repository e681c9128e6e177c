"""ProxyDirectory: Address-keyed arena of constructed proxies.

The directory is the construction and read interface of a proxy graph.
``deploy()`` constructs a proxy of a registered kind and assigns it a
stable, checksummed address; ``read()`` and ``legacy()`` query a proxy by
that address. Proxies can only reference addresses that already exist, so
every graph built through the directory is acyclic.

Addresses are derived as ``keccak256(namespace, nonce)[12:]``, where the
nonce counts successful deployments. A failed construction consumes no
nonce and leaves the directory unchanged.

.. code-block:: python

    >>> directory = ProxyDirectory()
    >>> eth_usd = directory.deploy("mock", 1, 2_000 * 10**18, 1700000000)
    >>> usd_eth = directory.deploy("inverse", eth_usd)
    >>> directory.read(usd_eth).value
    500000000000000
"""

from __future__ import annotations

import logging
from typing import Any

from web3 import Web3

from .errors import FunctionIsNotSupported, UnknownProxyAddress
from .LegacyFeedView import LegacyFeedView
from .ReaderProxy import ReaderProxy, get_proxy_class
from .Reading import Reading

logger = logging.getLogger(__name__)

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


class ProxyDirectory:
    """Registry of deployed proxies keyed by address.

    :ivar namespace: Seed for address derivation.
    """

    def __init__(self, namespace: str = "feedproxy") -> None:
        """Initialize an empty directory.

        :param namespace: Seed for address derivation. Directories with the
            same namespace assign the same addresses in deployment order.
        """
        self.namespace = namespace
        self._nonce = 0
        self._proxies: dict[str, Any] = {}

    def __contains__(self, address: object) -> bool:
        if not isinstance(address, str) or not Web3.is_address(address):
            return False
        return Web3.to_checksum_address(address) in self._proxies

    def __len__(self) -> int:
        return len(self._proxies)

    def addresses(self) -> list[str]:
        """Return the addresses of all deployed proxies in deployment order."""
        return list(self._proxies.keys())

    def _next_address(self) -> str:
        digest = Web3.solidity_keccak(["string", "uint256"], [self.namespace, self._nonce])
        return Web3.to_checksum_address(digest[12:])

    def _resolve(self, arg: Any) -> Any:
        # Address strings refer to deployed proxies; everything else passes through
        if isinstance(arg, str) and Web3.is_address(arg):
            if int(arg, 16) == 0:
                return None
            return self.get(arg)
        return arg

    def deploy(self, kind: str, *args: Any, **kwargs: Any) -> str:
        """Construct a proxy and assign it an address.

        Positional and keyword arguments are passed to the proxy constructor
        after address resolution: the zero address becomes None and any other
        address is replaced by the proxy deployed there.

        :param kind: Registered proxy kind (e.g., "product", "price_capped").
        :param args: Constructor arguments.
        :param kwargs: Constructor keyword arguments.
        :returns: Checksummed address of the new proxy.
        :raises UnknownProxyKind: If kind is not registered.
        :raises UnknownProxyAddress: If an argument names an unknown address.
        :raises ProxyConfigError: If the proxy rejects its parameters.
        """
        cls = get_proxy_class(kind)
        resolved_args = [self._resolve(arg) for arg in args]
        resolved_kwargs = {key: self._resolve(value) for key, value in kwargs.items()}
        proxy = cls(*resolved_args, **resolved_kwargs)

        address = self._next_address()
        self._nonce += 1
        self._proxies[address] = proxy
        logger.info(f"Deployed {kind} proxy at {address}")
        return address

    def get(self, address: str) -> Any:
        """Return the proxy deployed at an address.

        :param address: Proxy address (any checksum casing).
        :returns: The proxy instance.
        :raises UnknownProxyAddress: If nothing is deployed there.
        """
        if not Web3.is_address(address):
            raise UnknownProxyAddress(address)
        checksum_address = Web3.to_checksum_address(address)
        if checksum_address not in self._proxies:
            raise UnknownProxyAddress(checksum_address)
        return self._proxies[checksum_address]

    def address_of(self, proxy: Any) -> str:
        """Return the address a proxy instance was deployed at.

        :param proxy: A proxy returned by ``get()``.
        :returns: Checksummed address.
        :raises UnknownProxyAddress: If the proxy was not deployed here.
        """
        for address, deployed in self._proxies.items():
            if deployed is proxy:
                return address
        raise UnknownProxyAddress(repr(proxy))

    def read(self, address: str) -> Reading:
        """Read the proxy deployed at an address.

        :param address: Proxy address.
        :returns: The proxy's current reading.
        :raises UnknownProxyAddress: If nothing is deployed there.
        :raises FunctionIsNotSupported: If the proxy has no canonical reading
            (scaled feeds and aggregator feeds).
        """
        proxy = self.get(address)
        if not isinstance(proxy, ReaderProxy):
            raise FunctionIsNotSupported("read")
        return proxy.read()

    def legacy(self, address: str) -> LegacyFeedView:
        """Return the legacy aggregator view of the proxy at an address.

        :param address: Proxy address.
        :returns: Legacy view of the proxy.
        :raises UnknownProxyAddress: If nothing is deployed there.
        :raises FunctionIsNotSupported: If the object has no legacy view.
        """
        proxy = self.get(address)
        view = getattr(proxy, "legacy", None)
        if not isinstance(view, LegacyFeedView):
            raise FunctionIsNotSupported("legacy")
        return view
