"""Uniform search request and result records shared by every provider."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


@dataclass(frozen=True, slots=True)
class SearchResult:
    """Represents a single search hit, whatever backend produced it."""

    description: str
    link: str
    title: Optional[str] = None
    date: Optional[datetime] = None


def _positive_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return number if number > 0 else default


@dataclass(frozen=True, slots=True)
class SearchRequest:
    """A keyword plus the recognized paging and goto options."""

    keyword: str
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    goto: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "page", _positive_int(self.page, DEFAULT_PAGE))
        object.__setattr__(self, "limit", _positive_int(self.limit, DEFAULT_LIMIT))

    @classmethod
    def from_options(cls, keyword: str, options: Optional[Mapping[str, Any]] = None) -> SearchRequest:
        """Build a request from a loose option mapping.

        Unknown keys are ignored. ``page`` and ``limit`` fall back to their
        defaults when absent, non-numeric, zero or negative. A ``goto`` that is
        not an integer is kept as ``0`` so that it fails index validation.
        """
        opts = dict(options or {})
        goto: Optional[int] = None
        raw_goto = opts.get("goto")
        if raw_goto is not None:
            try:
                goto = int(raw_goto)
            except (TypeError, ValueError, OverflowError):
                goto = 0
        return cls(
            keyword=keyword,
            page=opts.get("page", DEFAULT_PAGE),
            limit=opts.get("limit", DEFAULT_LIMIT),
            goto=goto,
        )
