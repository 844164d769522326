from .cancellation import CancelToken
from .models import SearchRequest, SearchResult
from .provider import ProviderInfo, SearchProvider
from .registry import ProviderRegistry

__all__ = [
    "CancelToken",
    "ProviderInfo",
    "ProviderRegistry",
    "SearchProvider",
    "SearchRequest",
    "SearchResult",
]
