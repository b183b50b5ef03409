"""
EnvHelper - Typed access to environment variables backed by an optional .env file
"""

import os
import threading
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar, Union
from dotenv import load_dotenv

T = TypeVar('T')

_TRUTHY = frozenset({'true', '1', 'yes', 'on'})


class EnvHelper:
    """
    Read-only view of the process environment

    The .env file (working directory by default) is loaded lazily on the
    first read; values already in the environment win unless
    load(override=True) is called.

    Usage:
        ttl = EnvHelper.get_int('SESSION_TTL', 7200)
        secure = EnvHelper.get_bool('SESSION_COOKIE_SECURE')
        EnvHelper.load('/etc/app/.env')
    """

    _lock = threading.Lock()
    _env_path: Optional[Path] = None
    _loaded: bool = False

    @classmethod
    def path(cls) -> Path:
        """The .env file that is (or will be) loaded"""
        if cls._env_path is None:
            cls._env_path = Path.cwd() / '.env'
        return cls._env_path

    @classmethod
    def load(cls, env_path: Union[str, Path, None] = None, override: bool = False) -> bool:
        """
        Load a .env file into os.environ

        Args:
            env_path: File to load (default: .env in the working directory)
            override: Let the file replace variables that are already set

        Returns:
            False when the file does not exist; nothing is created
        """
        with cls._lock:
            if env_path is not None:
                cls._env_path = Path(env_path)
            target = cls.path()
            cls._loaded = True
            return target.exists() and load_dotenv(target, override=override)

    @classmethod
    def reset(cls) -> None:
        """Forget the file and loaded state; the next read loads again"""
        with cls._lock:
            cls._env_path = None
            cls._loaded = False

    @classmethod
    def get(cls, key: str, default: Any = None) -> Optional[str]:
        if not cls._loaded:
            cls.load()
        return os.environ.get(key, default)

    @classmethod
    def has(cls, key: str) -> bool:
        return cls.get(key) is not None

    @classmethod
    def _typed(cls, key: str, default: T, cast: Callable[[str], T]) -> T:
        raw = cls.get(key)
        if raw is None:
            return default
        try:
            return cast(raw.strip())
        except ValueError:
            # A malformed value behaves like an unset one
            return default

    @classmethod
    def get_bool(cls, key: str, default: bool = False) -> bool:
        return cls._typed(key, default, lambda raw: raw.lower() in _TRUTHY)

    @classmethod
    def get_int(cls, key: str, default: int = 0) -> int:
        return cls._typed(key, default, int)

    @classmethod
    def get_float(cls, key: str, default: float = 0.0) -> float:
        return cls._typed(key, default, float)
