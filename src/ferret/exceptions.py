"""Custom exception hierarchy for Ferret.

These exceptions allow callers to discriminate error categories
and handle them appropriately while preserving the original context.
Every search failure carries a ``kind`` string naming its category.
"""

from __future__ import annotations

from typing import List, Optional


class FerretError(Exception):
    """Base class for all Ferret exceptions."""


class ConfigError(FerretError):
    """Raised when configuration loading or validation fails."""


class SearchError(FerretError):
    """Raised when a provider search fails."""

    kind = "search"


class RequestConstructionError(SearchError):
    """Raised when the backend request cannot be built."""

    kind = "request-construction"


class TransportError(SearchError):
    """Raised for DNS, connect, TLS and read errors."""

    kind = "transport"


class BadStatusError(SearchError):
    """Raised when the backend answers outside the 2xx range."""

    kind = "bad-status"

    def __init__(self, status_code: int, message: Optional[str] = None) -> None:
        super().__init__(message or f"bad response: {status_code}")
        self.status_code = status_code


class DecodeError(SearchError):
    """Raised when the response body does not match the expected schema."""

    kind = "decode"


class SearchCancelled(SearchError):
    """Raised when the cancellation token fires before the search completes."""

    kind = "cancelled"


class DisabledProviderError(SearchError):
    """Raised when a provider without its required configuration is searched."""

    kind = "disabled-provider"


class RegistryError(FerretError):
    """Raised for provider registry lookups and registrations."""

    kind = "registry"


class DuplicateProviderError(RegistryError):
    kind = "duplicate-name"

    def __init__(self, name: str) -> None:
        super().__init__(f"provider {name} is already registered")
        self.name = name


class ProviderNameMismatchError(RegistryError):
    kind = "name-mismatch"

    def __init__(self, name: str, provider_name: str) -> None:
        super().__init__(f"cannot register provider {provider_name} under the name {name}")
        self.name = name
        self.provider_name = provider_name


class ProviderNotFoundError(RegistryError):
    kind = "not-found"

    def __init__(self, name: str, available: List[str]) -> None:
        super().__init__(
            f'invalid provider "{name}". Possible providers are {", ".join(available)}'
        )
        self.name = name
        self.available = available


class UsageError(FerretError):
    """Raised when the caller asks for something the results cannot satisfy."""


class InvalidGotoError(UsageError):
    def __init__(self, index: int, count: int) -> None:
        super().__init__(f"invalid result # to go. It should be between 1 and {count}")
        self.index = index
        self.count = count


class OpenerError(UsageError):
    """Raised when the external URL opener cannot be run or fails."""
