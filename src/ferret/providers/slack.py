"""Slack provider searching messages with the search.all Web API method.

The token travels as a query parameter and every page holds ten matches.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional
from urllib.parse import quote_plus

import httpx
from pydantic import BaseModel, Field

from ferret.config import SlackConfig
from ferret.exceptions import DecodeError, DisabledProviderError
from ferret.providers.http import JSONFetcher
from ferret.search.cancellation import CancelToken
from ferret.search.models import SearchRequest, SearchResult
from ferret.search.provider import ProviderInfo

logger = logging.getLogger(__name__)

PAGE_SIZE = 10
MAX_TEXT = 120


class Match(BaseModel):
    type: Optional[str] = None
    username: Optional[str] = None
    text: Optional[str] = None
    permalink: str = Field(min_length=1)
    ts: Optional[str] = None


class Messages(BaseModel):
    total: int = 0
    path: Optional[str] = None
    matches: List[Match] = Field(default_factory=list)


class SearchAll(BaseModel):
    ok: bool = True
    error: Optional[str] = None
    query: Optional[str] = None
    messages: Optional[Messages] = None


def _timestamp(ts: Optional[str]) -> Optional[datetime]:
    # Slack message timestamps look like "1355517523.000005"
    if not ts:
        return None
    try:
        return datetime.fromtimestamp(float(ts), tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None


class SlackProvider:
    def __init__(
        self,
        *,
        token: str,
        url: str = "https://slack.com/api",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url.rstrip("/")
        self.token = token
        self._http = JSONFetcher(timeout=timeout, transport=transport)
        self._info = ProviderInfo(
            name="slack", title="Slack", priority=3000, enabled=bool(self.token)
        )

    @classmethod
    def from_config(cls, cfg: SlackConfig, *, timeout: float = 30.0) -> SlackProvider:
        return cls(token=cfg.token, url=cfg.url, timeout=timeout)

    @property
    def info(self) -> ProviderInfo:
        return self._info

    def search_url(self, request: SearchRequest) -> str:
        return (
            f"{self.url}/search.all?page={request.page}&count={PAGE_SIZE}"
            f"&query={quote_plus(request.keyword)}&token={quote_plus(self.token)}"
        )

    async def search(self, token: CancelToken, request: SearchRequest) -> List[SearchResult]:
        if not self.info.enabled:
            raise DisabledProviderError(
                "slack provider is disabled. Set FERRET_SLACK_TOKEN to enable it"
            )
        data = await self._http.get(token, self.search_url(request), SearchAll)
        if not data.ok:
            raise DecodeError(f"Slack API error: {data.error or 'unknown'}")
        matches = data.messages.matches if data.messages else []
        results = [
            SearchResult(
                description=f"{m.username or ''}: {(m.text or '')[:MAX_TEXT]}",
                link=m.permalink,
                date=_timestamp(m.ts),
            )
            for m in matches
        ]
        logger.debug("slack returned %d results", len(results))
        return results
