"""
Session Registry
Per-request cache of sessions, stored on request.ctx
"""
from typing import Dict, List, TYPE_CHECKING

if TYPE_CHECKING:
    from sanic_mongodb_session.session.session import Session, SessionResult
    from sanic_mongodb_session.session.store import SessionStore


class SessionRegistry:
    """
    Sessions already resolved during one request

    Lets several handlers or middlewares ask for the same session name
    without a second database round trip or diverging copies.
    """

    CTX_ATTRIBUTE = '_session_registry'

    def __init__(self, request):
        self.request = request
        self._results: Dict[str, 'SessionResult'] = {}

    @classmethod
    def for_request(cls, request) -> 'SessionRegistry':
        """Get the registry attached to request, creating it if needed"""
        registry = getattr(request.ctx, cls.CTX_ATTRIBUTE, None)
        if registry is None:
            registry = cls(request)
            setattr(request.ctx, cls.CTX_ATTRIBUTE, registry)
        return registry

    async def get(self, store: 'SessionStore', name: str) -> 'SessionResult':
        """Resolve name through store.new() once per request"""
        if name not in self._results:
            self._results[name] = await store.new(self.request, name)
        return self._results[name]

    def sessions(self) -> List['Session']:
        return [result.session for result in self._results.values()]

    async def save_all(self, response, only_modified: bool = True) -> None:
        """
        Save the registered sessions onto response

        Args:
            response: Sanic response receiving the cookies
            only_modified: Skip sessions nobody changed

        Raises:
            SessionException: The first save that fails
        """
        for session in self.sessions():
            if only_modified and not session.modified:
                continue
            await session.save(self.request, response)
