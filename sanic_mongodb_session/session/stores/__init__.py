"""
Session Stores
"""
from sanic_mongodb_session.session.stores.mongodb_store import MongoDBStore, ensure_connection

__all__ = [
    'MongoDBStore',
    'ensure_connection',
]
