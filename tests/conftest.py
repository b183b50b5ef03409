"""
Shared fixtures for the session store tests
"""
import pytest

from sanic_mongodb_session.session.codec import codecs_from_pairs
from sanic_mongodb_session.session.expiry import TTLOptions
from sanic_mongodb_session.session.options import StoreOptions
from sanic_mongodb_session.session.stores.mongodb_store import MongoDBStore
from sanic_mongodb_session.support import EnvHelper
from tests.mocks import FakeCollection, FakeRequest, FakeResponse

HASH_KEY = 'test-hash-key-0123456789abcdef'
BLOCK_KEY = 'test-block-key-0123456789abcdef'
SESSION_NAME = 'session'


@pytest.fixture
def collection():
    return FakeCollection()


@pytest.fixture
def codecs():
    return codecs_from_pairs(HASH_KEY, BLOCK_KEY)


@pytest.fixture
def store_options():
    return StoreOptions(ttl_options=TTLOptions(ttl=3600))


@pytest.fixture
async def store(collection, store_options, codecs):
    return await MongoDBStore.create(collection, store_options, None, None, *codecs)


@pytest.fixture
def request_():
    return FakeRequest()


@pytest.fixture
def response():
    return FakeResponse()


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run with an empty working directory so no stray .env is picked up"""
    monkeypatch.chdir(tmp_path)
    EnvHelper.reset()
    yield monkeypatch
    EnvHelper.reset()
