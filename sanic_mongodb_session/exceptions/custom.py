"""
Custom Exception Classes
Session store exceptions with HTTP status codes
"""
from datetime import timedelta
from typing import Optional, Union


class SessionException(Exception):
    """Base exception for all session store exceptions"""
    status_code = 500
    message = "A session error occurred"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.__class__.message
        self.status_code = status_code or self.__class__.status_code
        super().__init__(self.message)


class InvalidTTLException(SessionException):
    """
    Invalid TTL configuration

    Raised by store construction when the configured TTL is shorter than one second.
    The only construction failure a caller can fix by retrying with
    corrected configuration.

    Example:
        raise InvalidTTLException(timedelta(seconds=0))
    """
    message = "ttl cannot be 0 or fewer seconds"

    def __init__(self, ttl: Union[timedelta, int, float]):
        self.ttl = ttl
        seconds = ttl.total_seconds() if isinstance(ttl, timedelta) else ttl
        super().__init__(f"ttl cannot be 0 or fewer seconds; supplied ttl: {int(seconds)}")

    def __eq__(self, other):
        return isinstance(other, InvalidTTLException) and other.ttl == self.ttl

    def __hash__(self):
        return hash((InvalidTTLException, self.ttl))


class StoreConnectionException(SessionException):
    """
    Backing store unreachable

    Raised when the MongoDB deployment cannot be pinged during construction
    """
    status_code = 503
    message = "Failed to connect to the session database"


class TTLIndexException(SessionException):
    """
    Expiry index provisioning failed

    Raised when the last_modified TTL index cannot be created during construction
    """
    status_code = 503
    message = "Failed to ensure TTL index"


class InvalidSessionIDException(SessionException):
    """
    Malformed session identifier

    Raised when a session ID is not a 24 character hex ObjectId.
    Never retryable.

    Example:
        raise InvalidSessionIDException("abcdee")
    """
    status_code = 400
    message = "Session ID must be a valid ObjectId hex string"

    def __init__(self, session_id: Optional[str] = None):
        self.session_id = session_id
        super().__init__(f"invalid session ID {session_id!r}: must be a 24 character hex ObjectId")


class CodecException(SessionException):
    """
    Token encoding or decoding failed

    Deliberately opaque: never says which codec (or secret) failed.
    """
    status_code = 400
    message = "The value could not be encoded or decoded by any codec"


class SessionNotFoundException(SessionException):
    """
    Session record does not exist

    Raised on load or delete when no document matches the session ID
    """
    status_code = 404
    message = "Session not found"

    def __init__(self, session_id: Optional[str] = None):
        self.session_id = session_id
        super().__init__(f"session {session_id} not found" if session_id else None)


class StoreOperationException(SessionException):
    """
    Backing store operation failed

    Raised when a find, upsert or delete against MongoDB errors out
    """
    message = "Session database operation failed"


class SessionTimeoutException(SessionException):
    """
    Backing store operation timed out or was cancelled
    """
    status_code = 504
    message = "Session database operation timed out"
