"""Blocking transport using requests."""

from __future__ import annotations

import logging
from typing import Optional

import requests
from requests import Session
from requests.adapters import HTTPAdapter, Retry

from authed_fetch.options import RequestOptions
from authed_fetch.transports._headers import request_headers

logger = logging.getLogger(__name__)


DEFAULT_RETRY = Retry(total=3, connect=3, read=3, backoff_factor=0.5, status_forcelist=[502, 503, 504])


def create_session(retry: Retry = DEFAULT_RETRY) -> Session:
    """Create a requests session with retries for transient errors."""
    session = requests.Session()
    session.mount("http://", HTTPAdapter(max_retries=retry))
    session.mount("https://", HTTPAdapter(max_retries=retry))
    return session


class RequestsTransport:
    """Sends requests through a ``requests.Session``.

    With ``credentials="omit"`` the session's cookies are left off the request, but cookies set by the
    response are still stored in the session's cookie jar.
    """

    def __init__(self, session: Optional[Session] = None, *, client_name: Optional[str] = None):
        self.session = session or create_session()
        self.client_name = client_name

    def send(self, target: str, options: Optional[RequestOptions] = None) -> requests.Response:
        options = options or RequestOptions()
        headers = request_headers(options, f"requests/{requests.__version__}", self.client_name)
        request = requests.Request(options.method.upper(), target, headers=headers, data=options.body)
        prepared = self.session.prepare_request(request)
        if options.credentials == "omit":
            prepared.headers.pop("Cookie", None)
        settings = self.session.merge_environment_settings(prepared.url, {}, None, None, None)
        logger.debug(f"Sending {prepared.method} {target}")
        return self.session.send(prepared, **settings)

    def close(self) -> None:
        self.session.close()
