"""Base reader proxy interface and proxy kind registry.

Every proxy produces a canonical :class:`~feedproxy.src.Reading.Reading`
through ``read()`` and exposes the legacy aggregator interface through a
composed :class:`~feedproxy.src.LegacyFeedView.LegacyFeedView`. Proxies are
immutable once constructed; all parameters are validated in ``__init__``.

Proxy kinds register themselves by name so the directory and the graph
loader can construct them from configuration.

.. code-block:: python

    @register_proxy
    class MyReaderProxy(ReaderProxy):
        kind = "my"
        VERSION = 1

        def __init__(self, proxy: ReaderProxy) -> None:
            self._proxy = require_proxy(proxy)

        @property
        def dapp_id(self) -> bytes | None:
            return self._proxy.dapp_id

        def read(self) -> Reading:
            return self._proxy.read()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from .errors import UnknownProxyKind, ZeroProxyAddress
from .fixed_point import CANONICAL_DECIMALS
from .LegacyFeedView import LegacyFeedMixin, LegacyFeedView
from .Reading import Reading


class ReaderProxy(LegacyFeedMixin, ABC):
    """Abstract base class for proxies producing canonical readings.

    :cvar kind: Registry name of the proxy kind.
    :cvar VERSION: Version tag reported by the legacy interface.
    """

    kind: ClassVar[str] = ""
    VERSION: ClassVar[int] = 0

    @property
    @abstractmethod
    def dapp_id(self) -> bytes | None:
        """Return the dApp ID the proxy is bound to, or None if it has none."""
        pass

    @abstractmethod
    def read(self) -> Reading:
        """Return the current reading.

        :returns: Reading with an 18-decimal value.
        :raises ProxyReadError: If the reading cannot be produced.
        """
        pass

    @property
    def legacy(self) -> LegacyFeedView:
        """Return the legacy aggregator view of this proxy."""
        return LegacyFeedView(self.read, CANONICAL_DECIMALS, self.VERSION)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(dapp_id={_format_dapp_id(self.dapp_id)})"


def require_proxy(proxy: ReaderProxy | None, role: str = "proxy") -> ReaderProxy:
    """Validate an upstream proxy reference.

    :param proxy: Upstream proxy, or None for the zero address.
    :param role: Constructor parameter name used in error messages.
    :returns: The proxy unchanged.
    :raises ZeroProxyAddress: If proxy is None.
    :raises TypeError: If proxy does not produce canonical readings.
    """
    if proxy is None:
        raise ZeroProxyAddress(role)
    if not isinstance(proxy, ReaderProxy):
        raise TypeError(f"{role} must be a ReaderProxy, got {type(proxy).__name__}")
    return proxy


def _format_dapp_id(dapp_id: bytes | None) -> str:
    if dapp_id is None:
        return "None"
    return f"0x{dapp_id.hex()}"


# Registry of constructible proxy kinds (populated by module imports)
PROXY_REGISTRY: dict[str, type] = {}


def register_proxy(cls: type) -> type:
    """Decorator to register a proxy class in the global registry.

    :param cls: Proxy class to register.
    :returns: The registered class (unchanged).
    :raises ValueError: If the class has no kind defined.
    """
    if not getattr(cls, "kind", ""):
        raise ValueError(f"Proxy {cls.__name__} must define a 'kind' class variable")
    PROXY_REGISTRY[cls.kind] = cls
    return cls


def get_proxy_class(kind: str) -> type:
    """Look up a proxy class by kind.

    :param kind: Registered kind name (e.g., "inverse", "product").
    :returns: The proxy class.
    :raises UnknownProxyKind: If kind is not registered.
    """
    if kind not in PROXY_REGISTRY:
        available = ", ".join(sorted(PROXY_REGISTRY.keys()))
        raise UnknownProxyKind(f"Unknown proxy kind '{kind}'. Available: {available}")
    return PROXY_REGISTRY[kind]


def get_available_proxies() -> list[str]:
    """Get list of registered proxy kinds.

    :returns: Sorted list of kind names.
    """
    return sorted(PROXY_REGISTRY.keys())
