"""Protocol definitions for the dispatcher's collaborators."""

from typing import Any, Optional, Protocol, runtime_checkable

from authed_fetch.options import RequestOptions


@runtime_checkable
class Transport(Protocol):
    """Blocking transport sending a request and returning the response."""

    def send(self, target: str, options: Optional[RequestOptions] = None) -> Any:
        raise NotImplementedError


@runtime_checkable
class AsyncTransport(Protocol):
    async def send(self, target: str, options: Optional[RequestOptions] = None) -> Any:
        raise NotImplementedError


@runtime_checkable
class SessionProvider(Protocol):
    """Reads, refreshes and terminates the authentication session."""

    def get_session(self) -> Optional[Any]:
        raise NotImplementedError

    def set_session(self, session: Any) -> Optional[Any]:
        raise NotImplementedError

    def sign_out(self) -> None:
        raise NotImplementedError


@runtime_checkable
class AsyncSessionProvider(Protocol):
    async def get_session(self) -> Optional[Any]:
        raise NotImplementedError

    async def set_session(self, session: Any) -> Optional[Any]:
        raise NotImplementedError

    async def sign_out(self) -> None:
        raise NotImplementedError
