import os
from typing import List, Optional

import pytest

from ferret.search.cancellation import CancelToken
from ferret.search.models import SearchRequest, SearchResult
from ferret.search.provider import ProviderInfo


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    # Keep developer FERRET_* variables and .env files out of the tests
    for key in list(os.environ):
        if key.startswith("FERRET_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


class FakeProvider:
    def __init__(
        self,
        name: str,
        *,
        results: Optional[List[SearchResult]] = None,
        error: Optional[Exception] = None,
        priority: int = 100,
        enabled: bool = True,
    ) -> None:
        self.info = ProviderInfo(name=name, title=name.title(), priority=priority, enabled=enabled)
        self.results = results or []
        self.error = error
        self.requests: List[SearchRequest] = []

    async def search(self, token: CancelToken, request: SearchRequest) -> List[SearchResult]:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return list(self.results)
