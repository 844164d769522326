import asyncio
import io
import subprocess
from typing import Any, List

import pytest
from rich.console import Console

from ferret import dispatcher as dispatcher_mod
from ferret.dispatcher import Dispatcher
from ferret.exceptions import BadStatusError, SearchCancelled
from ferret.search.models import SearchResult
from ferret.search.registry import ProviderRegistry

from conftest import FakeProvider

RESULTS = [
    SearchResult(description="o/r: x/f.go", link="https://h/1"),
    SearchResult(description="[bold]literal[/bold]", link="https://h/2"),
]


def make_dispatcher(*providers: FakeProvider, **kwargs: Any):
    registry = ProviderRegistry()
    for p in providers:
        registry.register(p.info.name, p)
    out, err = io.StringIO(), io.StringIO()
    d = Dispatcher(
        registry,
        console=Console(file=out, width=200),
        err_console=Console(file=err, width=200),
        **kwargs,
    )
    return d, out, err


def fake_run(calls: List[List[str]], returncode: int = 0):
    def _run(cmd, **kwargs):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, returncode, b"", b"")

    return _run


def test_unknown_provider_lists_sorted_names() -> None:
    d, _, err = make_dispatcher(FakeProvider("slack"), FakeProvider("answerhub"), FakeProvider("github"))
    assert d.run("nope", "kw") == 1
    message = err.getvalue()
    assert '"nope"' in message
    assert "answerhub, github, slack" in message


def test_results_are_rendered_as_numbered_table() -> None:
    provider = FakeProvider("github", results=RESULTS)
    d, out, err = make_dispatcher(provider)

    assert d.run("github", "kw", {"page": 3, "limit": -1}) == 0
    table = out.getvalue()
    assert "DESCRIPTION" in table
    assert "o/r: x/f.go" in table
    assert "[bold]literal[/bold]" in table
    assert err.getvalue() == ""
    assert provider.requests[0].keyword == "kw"
    assert provider.requests[0].page == 3
    assert provider.requests[0].limit == 10


def test_search_failure_is_reported() -> None:
    d, _, err = make_dispatcher(FakeProvider("answerhub", error=BadStatusError(503)))
    assert d.run("answerhub", "kw") == 1
    assert "failed to search due to bad response: 503" in err.getvalue()


def test_cancelled_search_is_reported() -> None:
    d, _, err = make_dispatcher(FakeProvider("slack", error=SearchCancelled("interrupted by SIGINT")))
    assert d.run("slack", "kw") == 1
    assert "interrupted by SIGINT" in err.getvalue()


def test_goto_opens_selected_link(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: List[List[str]] = []
    monkeypatch.setattr(dispatcher_mod.subprocess, "run", fake_run(calls))
    d, out, _ = make_dispatcher(FakeProvider("github", results=RESULTS), goto_cmd="xdg-open --new")

    assert d.run("github", "kw", {"goto": 2}) == 0
    assert calls == [["xdg-open", "--new", "https://h/2"]]
    assert out.getvalue() == ""


@pytest.mark.parametrize("index", [0, 3, -1])
def test_goto_out_of_range(monkeypatch: pytest.MonkeyPatch, index: int) -> None:
    calls: List[List[str]] = []
    monkeypatch.setattr(dispatcher_mod.subprocess, "run", fake_run(calls))
    d, _, err = make_dispatcher(FakeProvider("github", results=RESULTS))

    assert d.run("github", "kw", {"goto": index}) == 1
    assert "between 1 and 2" in err.getvalue()
    assert calls == []


def test_goto_opener_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(dispatcher_mod.subprocess, "run", fake_run([], returncode=3))
    d, _, err = make_dispatcher(FakeProvider("github", results=RESULTS))

    assert d.run("github", "kw", {"goto": 1}) == 1
    assert "FERRET_GOTO_CMD" in err.getvalue()


def test_goto_opener_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    def missing(cmd, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    monkeypatch.setattr(dispatcher_mod.subprocess, "run", missing)
    d, _, err = make_dispatcher(FakeProvider("github", results=RESULTS), goto_cmd="no-such-opener")

    assert d.run("github", "kw", {"goto": 1}) == 1
    assert "https://h/1" in err.getvalue()
    assert "FERRET_GOTO_CMD" in err.getvalue()


def test_deadline_reaches_provider() -> None:
    class DeadlineProvider(FakeProvider):
        async def search(self, token, request):
            await token.run(asyncio.sleep(10))
            return []

    d, _, err = make_dispatcher(DeadlineProvider("slow"), timeout=0.05)
    assert d.run("slow", "kw") == 1
    assert "deadline exceeded" in err.getvalue()
