"""
Session Store Support Classes
"""

from sanic_mongodb_session.support.env_helper import EnvHelper
from sanic_mongodb_session.support.crypto import Crypto, SecurityError

__all__ = [
    'EnvHelper',
    'Crypto',
    'SecurityError',
]
