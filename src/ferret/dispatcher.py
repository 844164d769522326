"""Dispatcher: resolve a provider, run its search, then print or open results.

``Dispatcher.run`` returns the process exit code; the CLI turns it into
``typer.Exit``.
"""

from __future__ import annotations

import asyncio
import logging
import shlex
import signal
import subprocess
from typing import Any, List, Mapping, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ferret.exceptions import (
    FerretError,
    InvalidGotoError,
    OpenerError,
    SearchCancelled,
    SearchError,
)
from ferret.search.cancellation import CancelToken
from ferret.search.models import SearchRequest, SearchResult
from ferret.search.provider import SearchProvider
from ferret.search.registry import ProviderRegistry

logger = logging.getLogger(__name__)


class Dispatcher:
    def __init__(
        self,
        registry: ProviderRegistry,
        *,
        goto_cmd: str = "open",
        timeout: Optional[float] = None,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ) -> None:
        self.registry = registry
        self.goto_cmd = goto_cmd
        self.timeout = timeout
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def run(self, provider_name: str, keyword: str, options: Optional[Mapping[str, Any]] = None) -> int:
        """Search ``provider_name`` for ``keyword`` and return an exit code."""
        try:
            provider = self.registry.lookup(provider_name)
            request = SearchRequest.from_options(keyword, options)
            results = asyncio.run(self._search(provider, request))
            if request.goto is not None:
                self.goto(results, request.goto)
            else:
                self.render(results)
        except SearchError as exc:
            logger.debug("%s search failed (%s)", provider_name, exc.kind)
            self._fail(f"failed to search due to {exc}")
            return 1
        except FerretError as exc:
            self._fail(str(exc))
            return 1
        return 0

    def _fail(self, message: str) -> None:
        self.err_console.print(message, markup=False, highlight=False, soft_wrap=True)

    async def _search(self, provider: SearchProvider, request: SearchRequest) -> List[SearchResult]:
        token = CancelToken(timeout=self.timeout)
        loop = asyncio.get_running_loop()
        installed = []
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, token.cancel, f"interrupted by {sig.name}")
            except (NotImplementedError, RuntimeError, ValueError):
                # No signal support on this platform or outside the main thread
                continue
            installed.append(sig)
        try:
            return await provider.search(token, request)
        except SearchCancelled:
            logger.info("search on %s cancelled: %s", provider.info.name, token.reason)
            raise
        finally:
            for sig in installed:
                loop.remove_signal_handler(sig)

    def goto(self, results: List[SearchResult], index: int) -> None:
        """Open the ``index``-th (1-based) result with the configured command."""
        if not 1 <= index <= len(results):
            raise InvalidGotoError(index, len(results))
        link = results[index - 1].link
        cmd = shlex.split(self.goto_cmd) + [link]
        logger.debug("running %s", cmd)
        try:
            completed = subprocess.run(cmd, capture_output=True, check=False)
        except OSError as exc:
            raise OpenerError(
                f"failed to go to {link} due to {exc}. Check FERRET_GOTO_CMD environment variable"
            ) from exc
        if completed.returncode != 0:
            raise OpenerError(
                f"failed to go to {link} due to exit status {completed.returncode}. "
                "Check FERRET_GOTO_CMD environment variable"
            )

    def render(self, results: List[SearchResult]) -> None:
        table = Table(box=None, show_edge=False)
        table.add_column("#", justify="right")
        table.add_column("DESCRIPTION", overflow="fold")
        for i, result in enumerate(results, start=1):
            table.add_row(str(i), Text(result.description))
        self.console.print(table)
