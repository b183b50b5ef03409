"""
Crypto - Key handling for session codecs
Signed serializers (itsdangerous), Fernet encryption (cryptography) and key generation
"""
import base64
import hashlib
import secrets
from typing import Any, Optional, Tuple, Union
from cryptography.fernet import Fernet
from itsdangerous import URLSafeTimedSerializer


class SecurityError(Exception):
    """Unusable key material (empty hash or block key)"""
    pass


def _to_bytes(key: Union[str, bytes]) -> bytes:
    return key.encode('utf-8') if isinstance(key, str) else key


class Crypto:
    """Factories for the primitives the codecs are built on"""

    # === Signed Data (itsdangerous) ===

    @staticmethod
    def create_serializer(
        secret_key: Union[str, bytes],
        salt: Optional[str] = None,
        serializer: Any = None
    ) -> URLSafeTimedSerializer:
        """
        Timestamped, HMAC-signed serializer producing cookie-safe strings

        Args:
            secret_key: Hash key the signature is derived from
            salt: Namespace the signature is bound to (the session name)
            serializer: Object with dumps/loads for the payload (defaults to JSON)

        Raises:
            SecurityError: Empty secret_key
        """
        if not secret_key:
            raise SecurityError("A non-empty secret key is required for signing")

        kwargs = {}
        if salt is not None:
            kwargs['salt'] = salt
        if serializer is not None:
            kwargs['serializer'] = serializer

        return URLSafeTimedSerializer(_to_bytes(secret_key), **kwargs)

    # === Symmetric Encryption (cryptography) ===

    @staticmethod
    def create_fernet(block_key: Union[str, bytes]) -> Fernet:
        """
        Create a Fernet cipher from an arbitrary-length key

        The key is stretched with SHA256 to the 32 bytes Fernet expects.

        Args:
            block_key: Encryption key

        Returns:
            Fernet instance
        """
        if not block_key:
            raise SecurityError("A non-empty block key is required for encryption")

        digest = hashlib.sha256(_to_bytes(block_key)).digest()
        return Fernet(base64.urlsafe_b64encode(digest))

    # === Key Material ===

    @staticmethod
    def generate_key(length: int = 32) -> str:
        """URL-safe random key of `length` bytes, usable as a hash or block key"""
        return secrets.token_urlsafe(length)

    @classmethod
    def generate_key_pair(cls) -> Tuple[str, str]:
        """
        Fresh (hash_key, block_key) pair for codecs_from_pairs()

        Example:
            hash_key, block_key = Crypto.generate_key_pair()
            codecs = codecs_from_pairs(hash_key, block_key, old_hash_key, old_block_key)
        """
        return cls.generate_key(), cls.generate_key()
