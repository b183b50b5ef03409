"""
Session Record
The document persisted for each session: {_id, data, last_modified}
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Sequence, TYPE_CHECKING
from bson import ObjectId
from bson.errors import InvalidId
from sanic_mongodb_session.exceptions import InvalidSessionIDException
from sanic_mongodb_session.session.codec import Codec, encode_multi

if TYPE_CHECKING:
    from sanic_mongodb_session.session.session import Session


def new_session_id() -> str:
    """Generate a fresh session ID (24 hex characters)"""
    return str(ObjectId())


def parse_session_id(session_id: Any) -> ObjectId:
    """
    Convert a session ID string into an ObjectId

    Raises:
        InvalidSessionIDException: Not a 24 character hex string
    """
    if isinstance(session_id, ObjectId):
        return session_id
    # ObjectId(None) would mint a new ID and 12 raw bytes are accepted too
    if not isinstance(session_id, str):
        raise InvalidSessionIDException(session_id)
    try:
        return ObjectId(session_id)
    except InvalidId as e:
        raise InvalidSessionIDException(session_id) from e


def current_time() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SessionRecord:
    """
    Durable form of a session

    Attributes:
        id: Primary key, also the value signed into the cookie
        data: Codec-encoded session values (opaque to the store)
        last_modified: UTC time of the last write; drives TTL expiry
    """
    id: ObjectId
    data: str
    last_modified: datetime

    @classmethod
    def from_session(cls, session: 'Session', codecs: Sequence[Codec]) -> 'SessionRecord':
        """
        Encode a session's values into a record

        Raises:
            InvalidSessionIDException: session.id is malformed
            CodecException: values could not be encoded
        """
        oid = parse_session_id(session.id)
        data = encode_multi(session.name, session.values, codecs)
        return cls(id=oid, data=data, last_modified=current_time())

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> 'SessionRecord':
        return cls(
            id=document['_id'],
            data=document['data'],
            last_modified=document['last_modified'],
        )

    def to_document(self) -> Dict[str, Any]:
        return {'_id': self.id, 'data': self.data, 'last_modified': self.last_modified}

    def to_update(self) -> Dict[str, Any]:
        """$set update used by the upsert; _id comes from the filter"""
        return {'$set': {'data': self.data, 'last_modified': self.last_modified}}
