"""AnswerHub provider searching questions through the v2 node API.

Auth: HTTP Basic with username/password, only when at least one is set.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional
from urllib.parse import quote_plus

import httpx
from pydantic import BaseModel, Field

from ferret.config import AnswerHubConfig
from ferret.exceptions import DisabledProviderError
from ferret.providers.http import JSONFetcher
from ferret.search.cancellation import CancelToken
from ferret.search.models import SearchRequest, SearchResult
from ferret.search.provider import ProviderInfo

logger = logging.getLogger(__name__)

MAX_DESCRIPTION = 255


class Author(BaseModel):
    username: Optional[str] = None
    realname: Optional[str] = None


class Node(BaseModel):
    id: int
    title: Optional[str] = None
    body: Optional[str] = None
    author: Optional[Author] = None
    creation_date: Optional[int] = Field(default=None, alias="creationDate")


class NodeList(BaseModel):
    items: List[Node] = Field(default_factory=list, alias="list")


def describe(node: Node) -> str:
    """Return the trimmed body, truncated to 255 chars, or an "Asked by" line."""
    text = (node.body or "").strip()
    if len(text) > MAX_DESCRIPTION:
        return text[: MAX_DESCRIPTION - 3] + "..."
    if text:
        return text
    author = node.author or Author()
    return "Asked by " + (author.realname or author.username or "")


def _creation_date(node: Node) -> Optional[datetime]:
    if node.creation_date is None:
        return None
    return datetime.fromtimestamp(node.creation_date / 1000, tz=timezone.utc)


class AnswerHubProvider:
    def __init__(
        self,
        *,
        url: str,
        username: str = "",
        password: str = "",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url.rstrip("/")
        self.username = username
        self.password = password
        self._http = JSONFetcher(timeout=timeout, transport=transport)
        self._info = ProviderInfo(
            name="answerhub",
            title="AnswerHub",
            priority=1000,
            enabled=bool(self.url),
        )

    @classmethod
    def from_config(cls, cfg: AnswerHubConfig, *, timeout: float = 30.0) -> AnswerHubProvider:
        return cls(url=cfg.url, username=cfg.username, password=cfg.password, timeout=timeout)

    @property
    def info(self) -> ProviderInfo:
        return self._info

    def search_url(self, request: SearchRequest) -> str:
        # The trailing "*" is a wildcard and stays unencoded
        return (
            f"{self.url}/services/v2/node.json"
            f"?page={request.page}&pageSize={request.limit}&q={quote_plus(request.keyword)}*"
        )

    async def search(self, token: CancelToken, request: SearchRequest) -> List[SearchResult]:
        if not self.info.enabled:
            raise DisabledProviderError(
                "answerhub provider is disabled. Set FERRET_ANSWERHUB_URL to enable it"
            )
        auth = None
        if self.username or self.password:
            auth = (self.username, self.password)
        data = await self._http.get(
            token,
            self.search_url(request),
            NodeList,
            headers={"Accept": "application/json"},
            auth=auth,
        )
        results = [
            SearchResult(
                description=describe(node),
                link=f"{self.url}/questions/{node.id}/",
                title=node.title,
                date=_creation_date(node),
            )
            for node in data.items
        ]
        logger.debug("answerhub returned %d results", len(results))
        return results
