"""
Session Options
Store configuration and per-session cookie attributes
"""
from dataclasses import dataclass, field, replace
from datetime import timedelta
from typing import Any, Dict, Optional
from sanic_mongodb_session.defaults import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_COOKIE_HTTP_ONLY,
    DEFAULT_COOKIE_PATH,
    DEFAULT_COOKIE_SAME_SITE,
    DEFAULT_COOKIE_SECURE,
    DEFAULT_OPERATION_TIMEOUT,
    DEFAULT_SESSION_TTL,
)
from sanic_mongodb_session.session.expiry import TTLOptions
from sanic_mongodb_session.support import EnvHelper


@dataclass
class CookieOptions:
    """
    Cookie attributes for a session

    max_age <= 0 on save means "terminate this session now".
    """
    path: str = DEFAULT_COOKIE_PATH
    domain: Optional[str] = None
    max_age: int = 0
    secure: bool = DEFAULT_COOKIE_SECURE
    http_only: bool = DEFAULT_COOKIE_HTTP_ONLY
    same_site: Optional[str] = DEFAULT_COOKIE_SAME_SITE

    def copy(self) -> 'CookieOptions':
        """Independent copy for a single session"""
        return replace(self)

    def as_cookie_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for Sanic's CookieJar.add_cookie"""
        kwargs = {
            'path': self.path,
            'domain': self.domain,
            'secure': self.secure,
            'httponly': self.http_only,
            'samesite': self.same_site,
        }
        if self.max_age > 0:
            kwargs['max_age'] = self.max_age
        return kwargs

    @classmethod
    def from_env(cls, prefix: str = 'SESSION_COOKIE_', max_age: int = 0) -> 'CookieOptions':
        """
        Build cookie options from environment variables

        Reads {prefix}PATH, DOMAIN, MAX_AGE, SECURE, HTTP_ONLY and SAME_SITE.
        """
        return cls(
            path=EnvHelper.get(f'{prefix}PATH', DEFAULT_COOKIE_PATH),
            domain=EnvHelper.get(f'{prefix}DOMAIN'),
            max_age=EnvHelper.get_int(f'{prefix}MAX_AGE', max_age),
            secure=EnvHelper.get_bool(f'{prefix}SECURE', DEFAULT_COOKIE_SECURE),
            http_only=EnvHelper.get_bool(f'{prefix}HTTP_ONLY', DEFAULT_COOKIE_HTTP_ONLY),
            same_site=EnvHelper.get(f'{prefix}SAME_SITE', DEFAULT_COOKIE_SAME_SITE),
        )


@dataclass
class StoreOptions:
    """
    Session store configuration

    Attributes:
        ttl_options: Session lifetime and expiry index toggle
        enable_logging: Emit store diagnostics (a null logger is used otherwise)
        operation_timeout: Bound in seconds for each find/upsert/delete
        connect_timeout: Bound in seconds for the construction-time ping
    """
    ttl_options: TTLOptions = field(default_factory=lambda: TTLOptions(DEFAULT_SESSION_TTL))
    enable_logging: bool = False
    operation_timeout: Optional[float] = DEFAULT_OPERATION_TIMEOUT
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT

    @property
    def ttl(self) -> timedelta:
        return self.ttl_options.ttl

    def validate(self) -> None:
        """
        Raises:
            InvalidTTLException: ttl is shorter than one whole second
        """
        self.ttl_options.validate()

    @classmethod
    def from_env(cls, prefix: str = 'SESSION_') -> 'StoreOptions':
        """
        Build store options from environment variables

        Reads {prefix}TTL, ENSURE_TTL_INDEX, ENABLE_LOGGING,
        OPERATION_TIMEOUT and CONNECT_TIMEOUT.
        """
        return cls(
            ttl_options=TTLOptions(
                ttl=EnvHelper.get_int(f'{prefix}TTL', DEFAULT_SESSION_TTL),
                ensure_ttl_index=EnvHelper.get_bool(f'{prefix}ENSURE_TTL_INDEX', False),
            ),
            enable_logging=EnvHelper.get_bool(f'{prefix}ENABLE_LOGGING', False),
            operation_timeout=EnvHelper.get_float(f'{prefix}OPERATION_TIMEOUT', DEFAULT_OPERATION_TIMEOUT),
            connect_timeout=EnvHelper.get_float(f'{prefix}CONNECT_TIMEOUT', DEFAULT_CONNECT_TIMEOUT),
        )
