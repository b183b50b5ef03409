"""
Session Management Package
MongoDB-backed server-side sessions for Sanic
"""
from sanic_mongodb_session.session.codec import (
    Codec,
    SignedCodec,
    EncryptedCodec,
    codecs_from_pairs,
    encode_multi,
    decode_multi,
)
from sanic_mongodb_session.session.expiry import TTLOptions, ensure_ttl_index, make_ttl_index_model
from sanic_mongodb_session.session.options import CookieOptions, StoreOptions
from sanic_mongodb_session.session.record import SessionRecord, new_session_id, parse_session_id
from sanic_mongodb_session.session.registry import SessionRegistry
from sanic_mongodb_session.session.session import Session, SessionResult
from sanic_mongodb_session.session.store import SessionStore
from sanic_mongodb_session.session.stores import MongoDBStore

__all__ = [
    'Codec',
    'SignedCodec',
    'EncryptedCodec',
    'codecs_from_pairs',
    'encode_multi',
    'decode_multi',
    'TTLOptions',
    'ensure_ttl_index',
    'make_ttl_index_model',
    'CookieOptions',
    'StoreOptions',
    'SessionRecord',
    'new_session_id',
    'parse_session_id',
    'SessionRegistry',
    'Session',
    'SessionResult',
    'SessionStore',
    'MongoDBStore',
]
