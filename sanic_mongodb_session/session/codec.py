"""
Session Codecs
Signed (and optionally encrypted) tokens for cookie values and stored session data
"""
import json
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence, Union
from cryptography.fernet import Fernet, InvalidToken
from itsdangerous import BadData
from sanic_mongodb_session.exceptions import CodecException
from sanic_mongodb_session.support import Crypto, SecurityError

Key = Union[str, bytes]


class Codec(ABC):
    """
    Base codec interface

    A codec turns a JSON-serializable value into an opaque, tamper-evident
    string bound to a session name, and back.
    """

    def __init__(self, max_age: Optional[int] = None):
        """
        Args:
            max_age: Token lifetime in seconds (0 disables the age check)
        """
        if max_age is None:
            from sanic_mongodb_session.defaults import DEFAULT_CODEC_MAX_AGE
            max_age = DEFAULT_CODEC_MAX_AGE
        self.max_age = max_age

    @abstractmethod
    def encode(self, name: str, value: Any) -> str:
        """
        Encode value into a token bound to name

        Raises:
            CodecException: If the value cannot be serialized
        """
        pass

    @abstractmethod
    def decode(self, name: str, token: str) -> Any:
        """
        Verify token for name and return the original value

        Raises:
            CodecException: If the token is tampered, expired or bound to another name
        """
        pass


class _EncryptedJSONSerializer:
    """itsdangerous payload serializer that encrypts JSON with Fernet"""

    def __init__(self, fernet: Fernet):
        self._fernet = fernet

    def dumps(self, obj: Any, **kwargs) -> str:
        plaintext = json.dumps(obj, separators=(',', ':')).encode('utf-8')
        return self._fernet.encrypt(plaintext).decode('ascii')

    def loads(self, payload: Union[str, bytes], **kwargs) -> Any:
        token = payload.encode('ascii') if isinstance(payload, str) else payload
        return json.loads(self._fernet.decrypt(token))


def ensure_json_round_trip(value: Any, path: str = 'value') -> None:
    """
    Reject values JSON would silently change

    json.dumps turns tuples into lists and non-string keys into strings,
    so the decoded session would no longer equal what was saved.

    Raises:
        CodecException: A tuple or a non-str dict key anywhere in value
    """
    if isinstance(value, tuple):
        raise CodecException(f"{path} is a tuple; store a list instead")
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise CodecException(f"{path} has non-string key {key!r}")
            ensure_json_round_trip(item, f"{path}[{key!r}]")
    elif isinstance(value, list):
        for index, item in enumerate(value):
            ensure_json_round_trip(item, f"{path}[{index}]")


class SignedCodec(Codec):
    """HMAC-signed JSON tokens (readable by the client, not forgeable)"""

    def __init__(self, hash_key: Key, max_age: Optional[int] = None):
        super().__init__(max_age)
        self._hash_key = hash_key

    def _serializer(self, name: str):
        return Crypto.create_serializer(self._hash_key, salt=name)

    def encode(self, name: str, value: Any) -> str:
        ensure_json_round_trip(value)
        try:
            return self._serializer(name).dumps(value)
        except SecurityError as e:
            raise CodecException(f"codec is not usable: {e}") from e
        except (TypeError, ValueError) as e:
            raise CodecException(f"value is not serializable: {e}") from e

    def decode(self, name: str, token: str) -> Any:
        try:
            return self._serializer(name).loads(token, max_age=self.max_age or None)
        except (BadData, SecurityError, ValueError, TypeError) as e:
            raise CodecException() from e

    def __repr__(self) -> str:
        return f"<SignedCodec max_age={self.max_age}>"


class EncryptedCodec(SignedCodec):
    """Signed tokens whose payload is encrypted with Fernet"""

    def __init__(self, hash_key: Key, block_key: Key, max_age: Optional[int] = None):
        super().__init__(hash_key, max_age)
        self._json = _EncryptedJSONSerializer(Crypto.create_fernet(block_key))

    def _serializer(self, name: str):
        return Crypto.create_serializer(self._hash_key, salt=name, serializer=self._json)

    def decode(self, name: str, token: str) -> Any:
        try:
            return super().decode(name, token)
        except InvalidToken as e:
            raise CodecException() from e

    def __repr__(self) -> str:
        return f"<EncryptedCodec max_age={self.max_age}>"


def codecs_from_pairs(*keys: Optional[Key], max_age: Optional[int] = None) -> List[Codec]:
    """
    Build codecs from (hash_key, block_key) pairs

    Pass the newest pair first to rotate secrets: tokens are always
    encoded with the first codec and decoded by whichever one verifies.
    A missing or empty block key yields a signing-only codec.

    Example:
        codecs = codecs_from_pairs(new_hash, new_block, old_hash, old_block)
    """
    codecs: List[Codec] = []
    for i in range(0, len(keys), 2):
        hash_key = keys[i]
        block_key = keys[i + 1] if i + 1 < len(keys) else None
        if block_key:
            codecs.append(EncryptedCodec(hash_key, block_key, max_age=max_age))
        else:
            codecs.append(SignedCodec(hash_key, max_age=max_age))
    return codecs


def encode_multi(name: str, value: Any, codecs: Sequence[Codec]) -> str:
    """
    Encode value with the first codec that succeeds

    Raises:
        CodecException: No codecs configured, or none could encode
    """
    if not codecs:
        raise CodecException("no codecs configured")

    for codec in codecs:
        try:
            return codec.encode(name, value)
        except CodecException:
            continue

    raise CodecException("the value could not be encoded by any codec")


def decode_multi(name: str, token: str, codecs: Sequence[Codec]) -> Any:
    """
    Decode token with the first codec that verifies it

    The error raised when every codec fails is the same whichever
    secret generation the token was (or wasn't) made with.

    Raises:
        CodecException: No codecs configured, or none could decode
    """
    if not codecs:
        raise CodecException("no codecs configured")

    for codec in codecs:
        try:
            return codec.decode(name, token)
        except CodecException:
            continue

    raise CodecException("the value could not be decoded by any codec")


def set_max_age(codecs: Sequence[Codec], max_age: int) -> None:
    """Set the token lifetime of every codec"""
    for codec in codecs:
        codec.max_age = max_age
