"""
Tests for cookie and store options, including environment configuration
"""
from datetime import timedelta

from sanic_mongodb_session.session.options import CookieOptions, StoreOptions


class TestCookieOptions:
    def test_defaults(self):
        options = CookieOptions()

        assert options.path == '/'
        assert options.domain is None
        assert options.max_age == 0
        assert options.http_only is True
        assert options.secure is False
        assert options.same_site == 'Lax'

    def test_copy_is_independent(self):
        options = CookieOptions(max_age=60)
        copied = options.copy()
        copied.max_age = 0

        assert options.max_age == 60
        assert copied == CookieOptions(max_age=0)

    def test_cookie_kwargs(self):
        kwargs = CookieOptions(path='/app', domain='example.com', max_age=30, secure=True).as_cookie_kwargs()

        assert kwargs == {
            'path': '/app',
            'domain': 'example.com',
            'secure': True,
            'httponly': True,
            'samesite': 'Lax',
            'max_age': 30,
        }

    def test_cookie_kwargs_omit_unset_max_age(self):
        assert 'max_age' not in CookieOptions().as_cookie_kwargs()

    def test_from_env(self, clean_env):
        clean_env.setenv('SESSION_COOKIE_PATH', '/api')
        clean_env.setenv('SESSION_COOKIE_DOMAIN', 'example.org')
        clean_env.setenv('SESSION_COOKIE_SECURE', 'true')
        clean_env.setenv('SESSION_COOKIE_HTTP_ONLY', 'false')
        clean_env.setenv('SESSION_COOKIE_SAME_SITE', 'Strict')

        options = CookieOptions.from_env(max_age=900)

        assert options == CookieOptions(
            path='/api', domain='example.org', max_age=900, secure=True, http_only=False, same_site='Strict'
        )

    def test_from_dotenv_file(self, clean_env, tmp_path):
        clean_env.delenv('SESSION_COOKIE_MAX_AGE', raising=False)
        (tmp_path / '.env').write_text('SESSION_COOKIE_MAX_AGE=1234\n')

        try:
            assert CookieOptions.from_env().max_age == 1234
        finally:
            clean_env.delenv('SESSION_COOKIE_MAX_AGE', raising=False)


class TestStoreOptions:
    def test_defaults(self):
        options = StoreOptions()

        assert options.ttl == timedelta(seconds=7200)
        assert options.ttl_options.ensure_ttl_index is False
        assert options.enable_logging is False
        assert options.operation_timeout == 10.0
        assert options.connect_timeout == 15.0

    def test_from_env(self, clean_env):
        clean_env.setenv('SESSION_TTL', '600')
        clean_env.setenv('SESSION_ENSURE_TTL_INDEX', 'yes')
        clean_env.setenv('SESSION_ENABLE_LOGGING', '1')
        clean_env.setenv('SESSION_OPERATION_TIMEOUT', '2.5')

        options = StoreOptions.from_env()

        assert options.ttl == timedelta(seconds=600)
        assert options.ttl_options.ensure_ttl_index is True
        assert options.enable_logging is True
        assert options.operation_timeout == 2.5
        assert options.connect_timeout == 15.0

    def test_from_env_ignores_malformed_numbers(self, clean_env):
        clean_env.setenv('SESSION_TTL', 'soon')

        assert StoreOptions.from_env().ttl == timedelta(seconds=7200)
