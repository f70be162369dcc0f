"""Async transport using httpx."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from authed_fetch.options import RequestOptions
from authed_fetch.transports._headers import request_headers

logger = logging.getLogger(__name__)


class HttpxTransport:
    """Sends requests through an ``httpx.AsyncClient``.

    The client is created on first use unless one is given. Clients created here are closed by
    ``aclose``; clients passed in are left to their owner.

    With ``credentials="omit"`` the client's cookies are left off the request, but cookies set by the
    response are still stored in the client's cookie jar.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None, *, client_name: Optional[str] = None, **kwargs):
        """
        Args:
            client: Client to send with.
            client_name: Name added to User-Agent.
            **kwargs: Arguments for the ``httpx.AsyncClient`` created when no client is given
                (e.g. timeout, verify).
        """
        self._client = client
        self._owns_client = client is None
        self._client_kwargs = kwargs
        self.client_name = client_name

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            # Use a custom transport to set the number of retries for connection errors
            self._client_kwargs.setdefault("transport", httpx.AsyncHTTPTransport(retries=3))
            self._client = httpx.AsyncClient(**self._client_kwargs)
        return self._client

    async def send(self, target: str, options: Optional[RequestOptions] = None) -> httpx.Response:
        options = options or RequestOptions()
        headers = request_headers(options, f"python-httpx/{httpx.__version__}", self.client_name)
        request = self.client.build_request(options.method.upper(), target, headers=headers, content=options.body)
        if options.credentials == "omit":
            request.headers.pop("Cookie", None)
        logger.debug(f"Sending {request.method} {target}")
        return await self.client.send(request)

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
