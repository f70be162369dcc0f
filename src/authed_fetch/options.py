"""Request descriptor passed from callers through the dispatcher to a transport."""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional

AUTHORIZATION_HEADER = "Authorization"


@dataclass(frozen=True)
class RequestOptions:
    """Immutable description of an outgoing request.

    Header keys are kept exactly as supplied. ``credentials`` follows the browser fetch
    vocabulary ("include", "omit", "same-origin") and is interpreted by the transport.
    """

    method: str = "GET"
    headers: Mapping[str, str] = field(default_factory=dict)
    credentials: Optional[str] = None
    body: Any = None

    def __post_init__(self):
        # Freeze a private copy so later changes to the caller's dict are not observed
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def with_header(self, name: str, value: str) -> "RequestOptions":
        """Return a copy with ``name`` set to ``value``, overriding any existing value."""
        return replace(self, headers={**self.headers, name: value})

    def with_bearer_token(self, token: str) -> "RequestOptions":
        return self.with_header(AUTHORIZATION_HEADER, f"Bearer {token}")


def with_auth(options: Optional[RequestOptions], token: Optional[str]) -> Optional[RequestOptions]:
    """Attach ``token`` as a bearer Authorization header.

    Without a token the options are returned as given (including None), so the outgoing
    request carries no Authorization key at all.
    """
    if not token:
        return options
    return (options or RequestOptions()).with_bearer_token(token)
