"""Errors raised by authed-fetch."""

from typing import Optional


class AuthedFetchError(Exception):
    """Base class for all errors raised by this package."""


class UnauthorizedError(AuthedFetchError):
    """The session could not be (re)authenticated and has been signed out.

    Attributes:
        target: The address the failing request was sent to.
        status: The last 401/403 status seen, or None when reauthentication failed
            before the request could be retried.
    """

    def __init__(self, target: Optional[str] = None, status: Optional[int] = None):
        super().__init__("Unauthorized")
        self.target = target
        self.status = status


class ConfigError(AuthedFetchError, ValueError):
    """Invalid or unknown environment configuration."""
