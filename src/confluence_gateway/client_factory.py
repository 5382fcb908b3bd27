"""Factory for Confluence wire clients.

Every call builds a fresh client bound to the factory's configuration;
nothing is cached or shared between calls.
"""

from typing import Union

from .config import GatewayConfig
from .models import WireVersion
from .wire_client import BaseWireClient, LegacyWireClient, ModernWireClient

_CLIENT_CLASSES = {
    WireVersion.LEGACY: LegacyWireClient,
    WireVersion.MODERN: ModernWireClient,
}


class WireClientFactory:
    """Creates wire clients for a given configuration.

    Example:
        >>> factory = WireClientFactory(config)
        >>> factory.create(WireVersion.LEGACY).base_url()
        'https://example.atlassian.net/wiki/rest/api'
    """

    def __init__(self, config: GatewayConfig):
        self._config = config

    @property
    def config(self) -> GatewayConfig:
        return self._config

    def create(self, version: Union[WireVersion, str]) -> BaseWireClient:
        """Create a client for the requested wire version.

        Args:
            version: WireVersion member or its value ("v1" / "v2")

        Returns:
            BaseWireClient: A new client instance

        Raises:
            ValueError: If the version is not supported
        """
        try:
            client_class = _CLIENT_CLASSES[WireVersion(version)]
        except (ValueError, KeyError):
            raise ValueError(f"Unsupported API version: {version}") from None
        return client_class(self._config)

    def create_legacy(self) -> LegacyWireClient:
        return LegacyWireClient(self._config)

    def create_modern(self) -> ModernWireClient:
        return ModernWireClient(self._config)


def create_legacy_client(config: GatewayConfig) -> LegacyWireClient:
    return LegacyWireClient(config)


def create_modern_client(config: GatewayConfig) -> ModernWireClient:
    return ModernWireClient(config)


def create_wire_client(config: GatewayConfig, version: Union[WireVersion, str]) -> BaseWireClient:
    """Create a client for the given version without keeping a factory around."""
    return WireClientFactory(config).create(version)
