"""Cancellable JSON-over-HTTP GET shared by the provider adapters."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ferret.exceptions import (
    BadStatusError,
    DecodeError,
    RequestConstructionError,
    TransportError,
)
from ferret.search.cancellation import CancelToken

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class JSONFetcher:
    """Performs one GET per call and decodes the body into a pydantic model.

    A fresh ``httpx.AsyncClient`` is used for every request. The response is
    streamed and always closed, including when the token cancels the request.
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def get(
        self,
        token: CancelToken,
        url: str,
        schema: Type[M],
        *,
        headers: Optional[Dict[str, str]] = None,
        auth: Optional[Tuple[str, str]] = None,
    ) -> M:
        body = await token.run(self._get_bytes(url, headers=headers, auth=auth))
        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"response is not valid UTF-8. Error: {exc}") from exc
        try:
            return schema.model_validate_json(text)
        except ValidationError as exc:
            raise DecodeError(f"failed to decode JSON data. Error: {exc}") from exc

    async def _get_bytes(
        self,
        url: str,
        *,
        headers: Optional[Dict[str, str]],
        auth: Optional[Tuple[str, str]],
    ) -> bytes:
        async with self._client() as client:
            try:
                request = client.build_request("GET", url, headers=headers)
            except (httpx.InvalidURL, ValueError, TypeError) as exc:
                raise RequestConstructionError(
                    f"failed to prepare request. Error: {exc}"
                ) from exc
            if request.url.scheme not in ("http", "https") or not request.url.host:
                raise RequestConstructionError(
                    f"failed to prepare request. Error: invalid URL {url!r}"
                )
            # Never log the query string; it may carry credentials
            logger.debug("GET %s", request.url.copy_with(query=None))
            try:
                response = await client.send(request, auth=auth, stream=True)
            except httpx.HTTPError as exc:
                raise TransportError(f"failed to fetch data. Error: {exc}") from exc
            try:
                body = await response.aread()
            except httpx.HTTPError as exc:
                raise TransportError(f"failed to read response. Error: {exc}") from exc
            finally:
                await response.aclose()
        logger.debug("Response %s (%d bytes)", response.status_code, len(body))
        if not response.is_success:
            raise BadStatusError(response.status_code)
        return body
