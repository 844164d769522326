"""GitHub provider searching code through the REST API v3 search endpoint."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional
from urllib.parse import quote_plus

import httpx
from pydantic import BaseModel, Field

from ferret.config import GitHubConfig
from ferret.providers.http import JSONFetcher
from ferret.search.cancellation import CancelToken
from ferret.search.models import SearchRequest, SearchResult
from ferret.search.provider import ProviderInfo

logger = logging.getLogger(__name__)


class Repository(BaseModel):
    full_name: str = ""
    description: Optional[str] = None


class CodeItem(BaseModel):
    name: str = ""
    path: str = ""
    html_url: str = Field(min_length=1)
    repository: Optional[Repository] = None


class CodeSearch(BaseModel):
    total_count: int = 0
    incomplete_results: bool = False
    items: List[CodeItem] = Field(default_factory=list)


class GitHubProvider:
    def __init__(
        self,
        *,
        url: str = "https://api.github.com",
        token: str = "",
        search_user: str = "",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url.rstrip("/")
        self.token = token
        self.search_user = search_user
        self._http = JSONFetcher(timeout=timeout, transport=transport)
        self._info = ProviderInfo(name="github", title="GitHub", priority=2000, enabled=True)

    @classmethod
    def from_config(cls, cfg: GitHubConfig, *, timeout: float = 30.0) -> GitHubProvider:
        return cls(url=cfg.url, token=cfg.token, search_user=cfg.search_user, timeout=timeout)

    @property
    def info(self) -> ProviderInfo:
        return self._info

    def _headers(self) -> Dict[str, str]:
        h = {"Accept": "application/vnd.github+json"}
        if self.token:
            h["Authorization"] = f"token {self.token}"
        return h

    def search_url(self, request: SearchRequest) -> str:
        url = f"{self.url}/search/code?q={quote_plus(request.keyword)}"
        if self.search_user:
            url += f"+user:{quote_plus(self.search_user)}"
        return url

    async def search(self, token: CancelToken, request: SearchRequest) -> List[SearchResult]:
        data = await self._http.get(token, self.search_url(request), CodeSearch, headers=self._headers())
        results: List[SearchResult] = []
        for item in data.items:
            repo_name = item.repository.full_name if item.repository else ""
            results.append(SearchResult(description=f"{repo_name}: {item.path}", link=item.html_url))
        logger.debug("github returned %d of %d results", len(results), data.total_count)
        return results
