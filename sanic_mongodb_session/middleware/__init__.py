"""
Middleware Package
"""
from sanic_mongodb_session.middleware.session_middleware import SessionMiddleware

__all__ = [
    'SessionMiddleware',
]
