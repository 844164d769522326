"""Provider contract shared by every search backend.

Adapters differ only in how they are constructed and how they project hits;
they all expose the same ``info`` descriptor and ``search`` coroutine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol, runtime_checkable

from ferret.search.cancellation import CancelToken
from ferret.search.models import SearchRequest, SearchResult


@dataclass(frozen=True, slots=True)
class ProviderInfo:
    """Immutable descriptor of a registered provider."""

    name: str
    title: str
    priority: int
    enabled: bool


@runtime_checkable
class SearchProvider(Protocol):
    """Minimal protocol for search providers."""

    @property
    def info(self) -> ProviderInfo: ...

    async def search(self, token: CancelToken, request: SearchRequest) -> List[SearchResult]:
        """Run the search and return results in backend order.

        Raises a ``SearchError`` subclass on failure. Implementations must not
        retry and must honor ``token``.
        """
        ...
