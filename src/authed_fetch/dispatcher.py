"""Authenticated request dispatchers.

A dispatcher wraps a transport so that every request carries the current bearer token. When
the server answers with 401 or 403 the session is refreshed once through the session provider
and the request is replayed. If the session cannot be refreshed, or the replay is rejected
again, the session is signed out and ``UnauthorizedError`` is raised.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Collection, NoReturn, Optional

from authed_fetch import AUTH_FAILURE_STATUSES
from authed_fetch.errors import UnauthorizedError
from authed_fetch.options import RequestOptions, with_auth
from authed_fetch.session import access_token_of

if TYPE_CHECKING:
    from authed_fetch._protocols import AsyncSessionProvider, AsyncTransport, SessionProvider, Transport
    from authed_fetch.token_store import TokenStore

logger = logging.getLogger(__name__)


class Attempt(enum.Enum):
    FIRST = "first"
    RETRY = "retry"


class TokenSource(enum.Enum):
    """Where the bearer token attached to outgoing requests is read from."""

    STORE = "store"
    """The token store, kept up to date on reauthentication. Fast, but may serve a stale token."""
    SESSION = "session"
    """The session provider, queried before every request."""


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of ``try_dispatch``: either a response or an ``UnauthorizedError``."""

    response: Any = None
    error: Optional[UnauthorizedError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.response


def response_status(response: Any) -> Optional[int]:
    """Return the numeric status of a response, or None if it has none."""
    for attr in ("status_code", "status"):
        status = getattr(response, attr, None)
        if isinstance(status, int) and not isinstance(status, bool):
            return status
    return None


class _DispatcherBase:
    def __init__(
        self,
        transport,
        session_provider,
        *,
        token_store: Optional[TokenStore] = None,
        token_source: Optional[TokenSource] = None,
        auth_failure_statuses: Collection[int] = AUTH_FAILURE_STATUSES,
    ):
        """
        Args:
            transport: Sends ``(target, options)`` and returns a response.
            session_provider: Reads, refreshes and signs out the session.
            token_store: Store updated with the refreshed token and cleared on sign-out.
            token_source: Where to read the attached token from. Defaults to the token store when
                one is given, otherwise to the session provider.
            auth_failure_statuses: Response statuses that trigger reauthentication.
        """
        if token_source is None:
            token_source = TokenSource.STORE if token_store is not None else TokenSource.SESSION
        if token_source is TokenSource.STORE and token_store is None:
            raise ValueError("token_source=STORE requires a token_store")

        self.transport = transport
        self.session_provider = session_provider
        self.token_store = token_store
        self.token_source = token_source
        self.auth_failure_statuses = frozenset(auth_failure_statuses)

    def _is_auth_failure(self, response: Any) -> bool:
        return response_status(response) in self.auth_failure_statuses

    def _clear_store(self) -> None:
        if self.token_store is not None:
            self.token_store.remove()

    def _store_token(self, token: str) -> None:
        if self.token_store is not None:
            self.token_store.set(token)

    @staticmethod
    def _log_attached(target: str, token: Optional[str]) -> None:
        if token:
            logger.debug(f"Attaching bearer token to request for url={target}")
        else:
            logger.debug(f"No bearer token available for url={target}, sending without Authorization")


class AuthenticatedDispatcher(_DispatcherBase):
    """Blocking dispatcher for a ``Transport`` and ``SessionProvider``.

    Example:
        dispatcher = AuthenticatedDispatcher(RequestsTransport(), provider, token_store=MemoryTokenStore())
        response = dispatcher.dispatch("https://api.example.com/v1/me")
    """

    transport: Transport
    session_provider: SessionProvider

    def dispatch(self, target: str, options: Optional[RequestOptions] = None) -> Any:
        """Send a request with the current bearer token, reauthenticating once on 401/403.

        Raises:
            UnauthorizedError: The session could not be refreshed, or the retried request was
                rejected again. The session has been signed out.
        """
        attempt = Attempt.FIRST
        while True:
            response = self.transport.send(target, self._options_with_auth(target, options))
            if not self._is_auth_failure(response):
                return response
            status = response_status(response)
            if attempt is Attempt.RETRY:
                logger.warning(f"Request to url={target} rejected with status={status} after reauthentication")
                self._sign_out(target, status)
            logger.info(f"Got status={status} for request to url={target}, reauthenticating")
            self._reauthenticate(target)
            attempt = Attempt.RETRY

    __call__ = dispatch

    def try_dispatch(self, target: str, options: Optional[RequestOptions] = None) -> DispatchResult:
        try:
            return DispatchResult(response=self.dispatch(target, options))
        except UnauthorizedError as e:
            return DispatchResult(error=e)

    def _current_token(self) -> Optional[str]:
        if self.token_source is TokenSource.STORE:
            return self.token_store.get()
        return access_token_of(self.session_provider.get_session())

    def _options_with_auth(self, target: str, options: Optional[RequestOptions]) -> Optional[RequestOptions]:
        token = self._current_token()
        self._log_attached(target, token)
        return with_auth(options, token)

    def _reauthenticate(self, target: str) -> str:
        current = self.session_provider.get_session()
        if current is None:
            logger.warning("No current session to refresh")
            self._sign_out(target)
        token = access_token_of(self.session_provider.set_session(current))
        if not token:
            logger.warning("Refreshed session has no access token")
            self._sign_out(target)
        self._store_token(token)
        logger.info("Session refreshed")
        return token

    def _sign_out(self, target: str, status: Optional[int] = None) -> NoReturn:
        try:
            self.session_provider.sign_out()
        except Exception:
            logger.warning("Session provider failed to sign out", exc_info=True)
        self._clear_store()
        logger.warning(f"Signed out after failed authentication for url={target}")
        raise UnauthorizedError(target=target, status=status)


class AsyncAuthenticatedDispatcher(_DispatcherBase):
    """Async dispatcher for an ``AsyncTransport`` and ``AsyncSessionProvider``.

    Example:
        async with httpx.AsyncClient() as client:
            dispatcher = AsyncAuthenticatedDispatcher(HttpxTransport(client), provider)
            response = await dispatcher("https://api.example.com/v1/me", RequestOptions(method="GET"))

    Concurrent calls share the token store and the session provider. Calls that are rejected at
    the same time each refresh the session on their own.
    """

    transport: AsyncTransport
    session_provider: AsyncSessionProvider

    async def dispatch(self, target: str, options: Optional[RequestOptions] = None) -> Any:
        """Send a request with the current bearer token, reauthenticating once on 401/403.

        Raises:
            UnauthorizedError: The session could not be refreshed, or the retried request was
                rejected again. The session has been signed out.
        """
        attempt = Attempt.FIRST
        while True:
            response = await self.transport.send(target, await self._options_with_auth(target, options))
            if not self._is_auth_failure(response):
                return response
            status = response_status(response)
            if attempt is Attempt.RETRY:
                logger.warning(f"Request to url={target} rejected with status={status} after reauthentication")
                await self._sign_out(target, status)
            logger.info(f"Got status={status} for request to url={target}, reauthenticating")
            await self._reauthenticate(target)
            attempt = Attempt.RETRY

    __call__ = dispatch

    async def try_dispatch(self, target: str, options: Optional[RequestOptions] = None) -> DispatchResult:
        try:
            return DispatchResult(response=await self.dispatch(target, options))
        except UnauthorizedError as e:
            return DispatchResult(error=e)

    async def _current_token(self) -> Optional[str]:
        if self.token_source is TokenSource.STORE:
            return self.token_store.get()
        return access_token_of(await self.session_provider.get_session())

    async def _options_with_auth(self, target: str, options: Optional[RequestOptions]) -> Optional[RequestOptions]:
        token = await self._current_token()
        self._log_attached(target, token)
        return with_auth(options, token)

    async def _reauthenticate(self, target: str) -> str:
        current = await self.session_provider.get_session()
        if current is None:
            logger.warning("No current session to refresh")
            await self._sign_out(target)
        token = access_token_of(await self.session_provider.set_session(current))
        if not token:
            logger.warning("Refreshed session has no access token")
            await self._sign_out(target)
        self._store_token(token)
        logger.info("Session refreshed")
        return token

    async def _sign_out(self, target: str, status: Optional[int] = None) -> NoReturn:
        try:
            await self.session_provider.sign_out()
        except Exception:
            logger.warning("Session provider failed to sign out", exc_info=True)
        self._clear_store()
        logger.warning(f"Signed out after failed authentication for url={target}")
        raise UnauthorizedError(target=target, status=status)
