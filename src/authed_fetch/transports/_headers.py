"""Outgoing headers shared by the transports."""

from __future__ import annotations

import platform
from typing import Dict, Optional

from authed_fetch import __version__
from authed_fetch.options import RequestOptions

USER_AGENT_HEADER = "User-Agent"


def request_headers(options: RequestOptions, http_lib: str, client_name: Optional[str] = None) -> Dict[str, str]:
    """Return the headers to send for ``options``.

    The caller's headers are kept as given. A User-Agent naming this library, the Python version,
    the HTTP library and the optional client is added unless the caller set one (in any case).

    Args:
        options: Options of the request being sent.
        http_lib: The HTTP library and version (e.g. "requests/2.31.0")
        client_name: Optional client name appended to the User-Agent
    """
    headers = dict(options.headers)
    if not any(name.lower() == USER_AGENT_HEADER.lower() for name in headers):
        agent = [f"authed-fetch/{__version__}", f"python/{platform.python_version()}", http_lib]
        if client_name:
            agent.append(client_name)
        headers[USER_AGENT_HEADER] = " ".join(agent)
    return headers
