"""
Session
Per-request view of a stored session
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, TYPE_CHECKING
from sanic_mongodb_session.defaults import DEFAULT_FLASH_KEY
from sanic_mongodb_session.exceptions import SessionException
from sanic_mongodb_session.session.options import CookieOptions

if TYPE_CHECKING:
    from sanic_mongodb_session.session.store import SessionStore


class Session:
    """
    Session handed to application code

    Behaves like a dict over `values`; every write flips `modified` so the
    middleware knows to save it. Besides the mapping protocol:
    - get(), put(), has(), all(), pull(), forget(), flush()
    - increment(), decrement(), push()
    - flash(), flashes()
    - expire(), save()

    Only the encoded values are ever persisted; id, options and flags
    live for the current request.
    """

    def __init__(self, store: 'SessionStore', name: str, options: Optional[CookieOptions] = None):
        """
        Args:
            store: Store that created the session and will save it
            name: Session (cookie) name
            options: Cookie attributes for this session
        """
        self.store = store
        self._name = name
        self.id: str = ''
        self.values: Dict[str, Any] = {}
        self.options = options or CookieOptions()
        self.is_new = True
        self.modified = False

    @property
    def name(self) -> str:
        return self._name

    # === Reading ===

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def all(self) -> Dict[str, Any]:
        """Values minus internal keys (those starting with an underscore, like flashes)"""
        return {k: v for k, v in self.values.items() if not k.startswith('_')}

    def has(self, key: str) -> bool:
        return key in self.values

    exists = has

    def missing(self, key: str) -> bool:
        return key not in self.values

    # === Writing ===

    def put(self, key: str, value: Any) -> None:
        """
        Set a value and mark the session dirty

        Args:
            key: String key (values are stored as JSON)
            value: Anything json.dumps accepts; anything else fails on save
        """
        self.values[key] = value
        self.modified = True

    def push(self, key: str, value: Any) -> None:
        """Append to the list under key, wrapping a scalar already stored there"""
        current = self.values.get(key, [])
        items = list(current) if isinstance(current, list) else [current]
        items.append(value)
        self.put(key, items)

    def increment(self, key: str, amount: int = 1) -> int:
        """Add amount to the counter under key (missing counts as 0) and return it"""
        total = int(self.values.get(key, 0)) + amount
        self.put(key, total)
        return total

    def decrement(self, key: str, amount: int = 1) -> int:
        return self.increment(key, -amount)

    # === Removing ===

    def forget(self, keys: str | List[str]) -> None:
        """Drop one key or a list of keys; unknown keys are ignored"""
        for key in [keys] if isinstance(keys, str) else keys:
            self.values.pop(key, None)
        self.modified = True

    def pull(self, key: str, default: Any = None) -> Any:
        """Remove key and return what it held"""
        value = self.values.get(key, default)
        self.forget(key)
        return value

    def flush(self) -> None:
        self.values.clear()
        self.modified = True

    # === Flash messages ===

    def flash(self, value: Any, key: str = DEFAULT_FLASH_KEY) -> None:
        """
        Queue a message that is read once by flashes()

        Args:
            value: Message
            key: Flash bucket
        """
        self.push(key, value)

    def flashes(self, key: str = DEFAULT_FLASH_KEY) -> List[Any]:
        """
        Read and clear the queued flash messages

        Returns:
            Messages in the order they were flashed
        """
        if key not in self.values:
            return []
        messages = self.pull(key, [])
        return messages if isinstance(messages, list) else [messages]

    # === Lifecycle ===

    def expire(self) -> None:
        """Mark the session for deletion on the next save (logout)"""
        self.options.max_age = 0
        self.modified = True

    async def save(self, request, response) -> None:
        """
        Persist through the owning store

        Raises:
            SessionException: See SessionStore.save()
        """
        await self.store.save(request, response, self)

    # === Mapping protocol ===

    def __getitem__(self, key: str) -> Any:
        return self.values[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.put(key, value)

    def __delitem__(self, key: str) -> None:
        self.forget(key)

    def __contains__(self, key: str) -> bool:
        return key in self.values

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self) -> str:
        return f"<Session name={self._name!r} id={self.id[:8]}... new={self.is_new} values={len(self.values)} keys>"


@dataclass
class SessionResult:
    """
    Outcome of looking a session up

    session is always usable; error is set when the cookie could not be
    turned back into a stored session and session is a fresh one instead.

    Example:
        session, error = await store.new(request, 'session')
    """
    session: Session
    error: Optional[SessionException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __iter__(self) -> Iterator[Any]:
        yield self.session
        yield self.error
