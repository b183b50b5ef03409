"""
Session Expiry
TTL validation and the MongoDB index that removes stale sessions
"""
import asyncio
from dataclasses import dataclass
from datetime import timedelta
from typing import Union
from pymongo import ASCENDING, IndexModel
from pymongo.errors import PyMongoError
from sanic_mongodb_session.exceptions import InvalidTTLException, TTLIndexException

Duration = Union[timedelta, int, float]


def to_timedelta(value: Duration) -> timedelta:
    """Accept seconds or a timedelta"""
    if isinstance(value, timedelta):
        return value
    return timedelta(seconds=value)


@dataclass
class TTLOptions:
    """
    Session time-to-live settings

    Attributes:
        ttl: How long an unrefreshed session survives (seconds or timedelta)
        ensure_ttl_index: Create the expiry index when the store is built
    """
    ttl: Duration
    ensure_ttl_index: bool = False

    def __post_init__(self):
        self.ttl = to_timedelta(self.ttl)

    @property
    def seconds(self) -> int:
        return int(self.ttl.total_seconds())

    def validate(self) -> None:
        """
        Raises:
            InvalidTTLException: ttl is shorter than one whole second
        """
        # Cookie max_age and expireAfterSeconds are whole seconds; 0 would mean "delete on save"
        if self.seconds <= 0:
            raise InvalidTTLException(self.ttl)


def make_ttl_index_model(ttl: Duration) -> IndexModel:
    """
    Index on last_modified that lets MongoDB expire sessions

    Args:
        ttl: Expiry horizon

    Returns:
        Ascending last_modified index with expireAfterSeconds=ttl
    """
    from sanic_mongodb_session.defaults import DEFAULT_TTL_INDEX_NAME
    return IndexModel(
        [('last_modified', ASCENDING)],
        name=DEFAULT_TTL_INDEX_NAME,
        expireAfterSeconds=int(to_timedelta(ttl).total_seconds()),
    )


async def ensure_ttl_index(collection, ttl: Duration, timeout: float = None) -> str:
    """
    Create the TTL index if it does not exist yet

    Creating an identical index again is a no-op on the server, so this is
    safe to run on every start. Changing the TTL of an existing index is
    rejected by MongoDB and surfaces as TTLIndexException.

    Args:
        collection: Async pymongo collection
        ttl: Expiry horizon
        timeout: Provisioning bound in seconds (default 15)

    Returns:
        Name of the index

    Raises:
        TTLIndexException: Index could not be created in time
    """
    if timeout is None:
        from sanic_mongodb_session.defaults import DEFAULT_INDEX_TIMEOUT
        timeout = DEFAULT_INDEX_TIMEOUT

    model = make_ttl_index_model(ttl)
    try:
        names = await asyncio.wait_for(
            collection.create_indexes([model], maxTimeMS=int(timeout * 1000)),
            timeout,
        )
    except asyncio.TimeoutError as e:
        raise TTLIndexException(f"TTL index was not created within {timeout} seconds") from e
    except PyMongoError as e:
        raise TTLIndexException(f"Failed to ensure TTL index: {e}") from e

    return names[0]
