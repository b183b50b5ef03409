"""
Exceptions Package
Session store error hierarchy
"""
from sanic_mongodb_session.exceptions.custom import (
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

__all__ = [
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
