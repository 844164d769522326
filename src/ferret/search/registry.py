"""Name to provider mapping used by the dispatcher."""

from __future__ import annotations

from typing import Dict, List

from ferret.exceptions import (
    DuplicateProviderError,
    ProviderNameMismatchError,
    ProviderNotFoundError,
)
from ferret.search.provider import ProviderInfo, SearchProvider


class ProviderRegistry:
    """Registry of search providers keyed by name.

    Populated once at startup; read-only afterwards. Registration is not
    safe against concurrent callers.
    """

    def __init__(self) -> None:
        self._providers: Dict[str, SearchProvider] = {}

    def register(self, name: str, provider: SearchProvider) -> None:
        if name != provider.info.name:
            raise ProviderNameMismatchError(name, provider.info.name)
        if name in self._providers:
            raise DuplicateProviderError(name)
        self._providers[name] = provider

    def list_names(self) -> List[str]:
        """Return the registered names in ascending order."""
        return sorted(self._providers)

    def lookup(self, name: str) -> SearchProvider:
        try:
            return self._providers[name]
        except KeyError:
            raise ProviderNotFoundError(name, self.list_names()) from None

    def providers(self) -> List[ProviderInfo]:
        """Return provider descriptors ordered by priority, then name."""
        infos = [p.info for p in self._providers.values()]
        return sorted(infos, key=lambda info: (info.priority, info.name))

    def __contains__(self, name: object) -> bool:
        return name in self._providers

    def __len__(self) -> int:
        return len(self._providers)
