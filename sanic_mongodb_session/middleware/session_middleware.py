"""
Session Middleware
Resolves the session before the handler runs and saves it afterwards
"""
from sanic import Request
from sanic_mongodb_session.defaults import DEFAULT_SESSION_COOKIE_NAME
from sanic_mongodb_session.exceptions import SessionException
from sanic_mongodb_session.logging import getLogger
from sanic_mongodb_session.session.registry import SessionRegistry
from sanic_mongodb_session.session.store import SessionStore

logger = getLogger(__name__)


class SessionMiddleware:
    """
    Session management middleware

    Exposes the session as request.ctx.session and any lookup error as
    request.ctx.session_error. After the handler, every session that was
    changed during the request is saved and its cookie set.

    Example:
        store = await MongoDBStore.create(...)
        SessionMiddleware(store, 'session').register(app)

        @app.get('/visit')
        async def visit(request):
            request.ctx.session.increment('visits')
            return json({'visits': request.ctx.session['visits']})
    """

    def __init__(self, store: SessionStore, session_name: str = DEFAULT_SESSION_COOKIE_NAME):
        """
        Args:
            store: Store resolving and saving sessions
            session_name: Cookie name
        """
        self.store = store
        self.session_name = session_name

    def register(self, app) -> None:
        """Attach the request and response hooks to a Sanic app"""
        app.register_middleware(self.before_request, 'request')
        app.register_middleware(self.after_response, 'response')

    async def before_request(self, request: Request):
        """
        Resolve the session and attach it to the request context

        Returns None so the request always continues to its handler.
        """
        session, error = await self.store.get(request, self.session_name)

        if error is not None:
            # A stale or tampered cookie just means a fresh session
            logger.debug(
                "Starting fresh session",
                extra={'session_name': self.session_name, 'error': str(error)}
            )

        request.ctx.session = session
        request.ctx.session_error = error
        return None

    async def after_response(self, request: Request, response):
        """Save modified sessions onto the response"""
        registry = getattr(request.ctx, SessionRegistry.CTX_ATTRIBUTE, None)
        if registry is None:
            return response

        try:
            await registry.save_all(response)
        except SessionException as e:
            logger.error(
                "Failed to save session",
                extra={'session_name': self.session_name, 'error': str(e)}
            )
            raise

        return response
