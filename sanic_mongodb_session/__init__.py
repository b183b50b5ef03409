"""
Sanic MongoDB Session Package
Export commonly used classes for easy import
"""

from sanic_mongodb_session.exceptions import (
    SessionException,
    InvalidTTLException,
    StoreConnectionException,
    TTLIndexException,
    InvalidSessionIDException,
    CodecException,
    SessionNotFoundException,
    StoreOperationException,
    SessionTimeoutException,
)
from sanic_mongodb_session.middleware import SessionMiddleware
from sanic_mongodb_session.session import (
    Codec,
    SignedCodec,
    EncryptedCodec,
    codecs_from_pairs,
    TTLOptions,
    CookieOptions,
    StoreOptions,
    Session,
    SessionResult,
    SessionStore,
    MongoDBStore,
)

__version__ = '0.1.0'

__all__ = [
    # Store
    'MongoDBStore',
    'SessionStore',
    'Session',
    'SessionResult',
    'SessionMiddleware',
    # Options
    'TTLOptions',
    'CookieOptions',
    'StoreOptions',
    # Codecs
    'Codec',
    'SignedCodec',
    'EncryptedCodec',
    'codecs_from_pairs',
    # Exceptions
    'SessionException',
    'InvalidTTLException',
    'StoreConnectionException',
    'TTLIndexException',
    'InvalidSessionIDException',
    'CodecException',
    'SessionNotFoundException',
    'StoreOperationException',
    'SessionTimeoutException',
]
