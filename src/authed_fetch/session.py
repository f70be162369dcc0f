"""Session record exchanged with session providers."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional


@dataclass
class Session:
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


def access_token_of(session: Any) -> Optional[str]:
    """Return the access token of a session, or None when it has none.

    Accepts ``Session`` instances, objects with an ``access_token`` attribute and OAuth2 style
    token mappings.
    """
    if session is None:
        return None
    if isinstance(session, Mapping):
        token = session.get("access_token")
    else:
        token = getattr(session, "access_token", None)
    return token or None


def refresh_token_of(session: Any) -> Optional[str]:
    if session is None:
        return None
    if isinstance(session, Mapping):
        return session.get("refresh_token") or None
    return getattr(session, "refresh_token", None) or None


def session_to_dict(session: Any) -> Dict[str, Any]:
    """Convert a session into an OAuth2 token dict."""
    if isinstance(session, Mapping):
        return dict(session)
    if isinstance(session, Session):
        token = dict(session.extra)
        if session.access_token:
            token["access_token"] = session.access_token
        if session.refresh_token:
            token["refresh_token"] = session.refresh_token
        return token
    raise TypeError(f"Unsupported session type: {type(session).__name__}")
