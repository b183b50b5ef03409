"""
MongoDB Session Store
Stores session values in a MongoDB collection; the cookie only carries the signed session ID
"""
import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, List, Optional, Sequence
from pymongo import ReadPreference
from pymongo.errors import PyMongoError
from sanic_mongodb_session.exceptions import (
    CodecException,
    InvalidSessionIDException,
    SessionException,
    SessionNotFoundException,
    SessionTimeoutException,
    StoreConnectionException,
    StoreOperationException,
    TTLIndexException,
)
from sanic_mongodb_session.logging import getLogger, null_logger
from sanic_mongodb_session.session.codec import Codec, decode_multi, encode_multi, set_max_age
from sanic_mongodb_session.session.expiry import ensure_ttl_index
from sanic_mongodb_session.session.options import CookieOptions, StoreOptions
from sanic_mongodb_session.session.record import SessionRecord, new_session_id, parse_session_id
from sanic_mongodb_session.session.session import Session, SessionResult
from sanic_mongodb_session.session.store import SessionStore

# Expires header value used to clear cookies
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _safe_log(logger: logging.Logger, level: int, message: str, **fields: Any) -> None:
    # A broken log sink must never change what the store returns
    try:
        logger.log(level, message, extra=fields)
    except Exception:
        pass


async def ensure_connection(collection, timeout: float) -> None:
    """
    Ping the deployment behind collection

    Raises:
        StoreConnectionException: Ping failed or took longer than timeout
    """
    admin = collection.database.client.admin
    try:
        await asyncio.wait_for(
            admin.command('ping', read_preference=ReadPreference.PRIMARY_PREFERRED),
            timeout,
        )
    except asyncio.TimeoutError as e:
        raise StoreConnectionException(f"MongoDB did not answer a ping within {timeout} seconds") from e
    except PyMongoError as e:
        raise StoreConnectionException(f"Failed to connect to MongoDB: {e}") from e


class MongoDBStore(SessionStore):
    """
    MongoDB-backed session store

    One document per session: {_id: ObjectId, data: str, last_modified: datetime}.
    data holds the codec-encoded values; the cookie holds the codec-encoded _id.

    Build with MongoDBStore.create(), which checks connectivity and
    configuration before handing out a store.

    Example:
        client = AsyncMongoClient('mongodb://localhost:27017')
        store = await MongoDBStore.create(
            client['app']['sessions'],
            StoreOptions(TTLOptions(ttl=3600, ensure_ttl_index=True)),
            None,
            None,
            *codecs_from_pairs(hash_key, block_key),
        )
    """

    def __init__(
        self,
        collection,
        store_options: StoreOptions,
        default_options: CookieOptions,
        logger: logging.Logger,
        codecs: Sequence[Codec],
    ):
        self.collection = collection
        self.store_options = store_options
        self.ttl = store_options.ttl
        self.default_options = default_options
        self.logger = logger
        self.codecs: List[Codec] = list(codecs)

    @classmethod
    async def create(
        cls,
        collection,
        store_options: StoreOptions,
        session_options: Optional[CookieOptions] = None,
        logger: Optional[logging.Logger] = None,
        *codecs: Codec,
    ) -> 'MongoDBStore':
        """
        Build a store after verifying the database and the configuration

        Args:
            collection: Async pymongo collection holding the sessions
            store_options: TTL, index and logging settings
            session_options: Default cookie options (path "/" and max_age=ttl when None)
            logger: Diagnostics sink (ignored when logging is disabled)
            *codecs: Codecs in priority order; the first one encodes

        Returns:
            Ready to use MongoDBStore

        Raises:
            StoreConnectionException: MongoDB unreachable
            InvalidTTLException: ttl <= 0
            TTLIndexException: Expiry index could not be created
        """
        if not store_options.enable_logging:
            logger = null_logger()
        elif logger is None:
            logger = getLogger(__name__)

        try:
            await ensure_connection(collection, store_options.connect_timeout)
        except StoreConnectionException as e:
            _safe_log(logger, logging.ERROR, "failed to create connection to mongo", error=str(e))
            raise

        store_options.validate()

        if store_options.ttl_options.ensure_ttl_index:
            try:
                await ensure_ttl_index(collection, store_options.ttl)
            except TTLIndexException as e:
                _safe_log(logger, logging.ERROR, "failed to ensure TTL index", error=str(e))
                raise

        if session_options is None:
            session_options = CookieOptions(path='/', max_age=store_options.ttl_options.seconds)
            _safe_log(logger, logging.DEBUG, "no cookie options given, using defaults")
        _safe_log(logger, logging.INFO, "session cookie options resolved", cookie_options=repr(session_options))

        if not codecs:
            _safe_log(logger, logging.WARNING, "no codecs configured, every save will fail to encode")

        return cls(collection, store_options, session_options, logger, codecs)

    # === Retrieval ===

    async def new(self, request, name: str) -> SessionResult:
        """
        Create a session, loading it from MongoDB when the request has a cookie for name

        See SessionStore.new()
        """
        session = Session(self, name, self.default_options.copy())
        session.id = new_session_id()
        session.is_new = True

        token = request.cookies.get(name)
        if token is None:
            return SessionResult(session)

        fresh_id = session.id
        try:
            session.id = decode_multi(name, token, self.codecs)
            await self.load(session)
        except SessionException as e:
            self._log(logging.DEBUG, "could not restore session from cookie", session_name=name, error=str(e))
            # Hand back the untouched fresh session, never the rejected ID
            session.id = fresh_id
            session.values = {}
            return SessionResult(session, e)

        session.is_new = False
        return SessionResult(session)

    async def load(self, session: Session) -> None:
        """
        Fill session.values from the stored record for session.id

        Raises:
            InvalidSessionIDException: session.id is not an ObjectId
            SessionNotFoundException: No record (never saved, deleted or expired)
            StoreOperationException / SessionTimeoutException: Database failure
            CodecException: Stored data does not verify with any codec
        """
        try:
            oid = parse_session_id(session.id)
        except InvalidSessionIDException as e:
            self._log(logging.DEBUG, "invalid session ID, must be an ObjectId", session_id=session.id, error=str(e))
            raise

        try:
            document = await self._execute('find session', self.collection.find_one({'_id': oid}))
        except SessionException as e:
            self._log(logging.ERROR, "failed to load allegedly existing session", session_id=session.id, error=str(e))
            raise

        if document is None:
            self._log(logging.DEBUG, "session not found", session_id=session.id)
            raise SessionNotFoundException(session.id)

        record = SessionRecord.from_document(document)
        session.values = decode_multi(session.name, record.data, self.codecs)

    # === Persistence ===

    async def save(self, request, response, session: Session) -> None:
        """
        Upsert the session and set its cookie, or delete it when max_age <= 0

        See SessionStore.save()
        """
        if session.options.max_age <= 0:
            await self._clear_session(response, session)
            return

        if not session.id:
            session.id = new_session_id()

        try:
            record = SessionRecord.from_session(session, self.codecs)
        except SessionException as e:
            self._log(logging.ERROR, "failed to transform session", session_id=session.id, error=str(e))
            raise

        try:
            encoded_id = encode_multi(session.name, session.id, self.codecs)
        except CodecException as e:
            self._log(logging.ERROR, "failed to encode session ID", session_id=session.id, error=str(e))
            raise

        await self._save_record(record)
        session.is_new = False
        session.modified = False

        response.cookies.add_cookie(session.name, encoded_id, **session.options.as_cookie_kwargs())

    async def _save_record(self, record: SessionRecord) -> None:
        try:
            await self._execute(
                'save session',
                self.collection.update_one({'_id': record.id}, record.to_update(), upsert=True),
            )
        except SessionException as e:
            self._log(logging.ERROR, "failed to save session in database", session_id=str(record.id), error=str(e))
            raise

    async def _clear_session(self, response, session: Session) -> None:
        try:
            if not session.is_new:
                await self.delete(session.id)
        except SessionException as e:
            self._log(logging.INFO, "failed to delete session ID", session_id=session.id, error=str(e))
            raise
        finally:
            self._clear_cookie(response, session)
            session.modified = False

    def _clear_cookie(self, response, session: Session) -> None:
        kwargs = session.options.as_cookie_kwargs()
        kwargs.update(max_age=0, expires=_EPOCH)
        response.cookies.add_cookie(session.name, '', **kwargs)

    async def delete(self, session_id: str) -> None:
        """
        Remove the record for session_id

        Raises:
            InvalidSessionIDException: Malformed ID
            SessionNotFoundException: Nothing to delete
            StoreOperationException / SessionTimeoutException: Database failure
        """
        oid = parse_session_id(session_id)
        document = await self._execute('delete session', self.collection.find_one_and_delete({'_id': oid}))
        if document is None:
            raise SessionNotFoundException(session_id)

    # === Configuration ===

    def max_age(self, age: int) -> None:
        """
        Set the default cookie max_age and every codec's token lifetime

        Sessions created afterwards pick up the new value.
        """
        self.default_options.max_age = age
        set_max_age(self.codecs, age)

    # === Helpers ===

    async def _execute(self, operation: str, awaitable):
        """Run one database call under the operation timeout, mapping driver errors"""
        timeout = self.store_options.operation_timeout
        try:
            return await asyncio.wait_for(awaitable, timeout)
        except asyncio.TimeoutError as e:
            raise SessionTimeoutException(f"{operation} timed out after {timeout} seconds") from e
        except PyMongoError as e:
            if getattr(e, 'timeout', False):
                raise SessionTimeoutException(f"{operation} timed out: {e}") from e
            raise StoreOperationException(f"{operation} failed: {e}") from e

    def _log(self, level: int, message: str, **fields: Any) -> None:
        _safe_log(self.logger, level, message, **fields)

    def __repr__(self) -> str:
        return f"<MongoDBStore collection={getattr(self.collection, 'name', '?')} ttl={self.ttl} codecs={len(self.codecs)}>"
