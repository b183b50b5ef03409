"""
Session Store Interface
Base class for all session storage drivers
"""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING
from sanic_mongodb_session.session.registry import SessionRegistry

if TYPE_CHECKING:
    from sanic_mongodb_session.session.session import Session, SessionResult


class SessionStore(ABC):
    """Base session store interface"""

    async def get(self, request, name: str) -> 'SessionResult':
        """
        Get the session called name for this request

        The first call per request delegates to new(); later calls return
        the same session object from the request's registry.

        Args:
            request: Sanic request (needs .cookies and .ctx)
            name: Session (cookie) name

        Returns:
            SessionResult with a usable session and an optional error
        """
        return await SessionRegistry.for_request(request).get(self, name)

    @abstractmethod
    async def new(self, request, name: str) -> 'SessionResult':
        """
        Create a session, loading it from storage when the request carries
        a cookie for name

        Never raises for missing, tampered or stale cookies: the result
        always holds a usable session, paired with the error if any.

        Args:
            request: Sanic request
            name: Session (cookie) name

        Returns:
            SessionResult
        """
        pass

    @abstractmethod
    async def save(self, request, response, session: 'Session') -> None:
        """
        Persist the session and set its cookie on the response

        A session whose max_age is <= 0 is deleted and its cookie cleared.

        Args:
            request: Sanic request
            response: Sanic response (needs .cookies.add_cookie)
            session: Session to persist

        Raises:
            SessionException: Persistence, encoding or deletion failed
        """
        pass
