"""
Tests for TTL validation and the expiry index
"""
import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from pymongo.errors import OperationFailure

from sanic_mongodb_session.exceptions import InvalidTTLException, TTLIndexException
from sanic_mongodb_session.session.expiry import (
    TTLOptions,
    ensure_ttl_index,
    make_ttl_index_model,
    to_timedelta,
)
from tests.mocks import FakeCollection


class TestTTLOptions:
    def test_accepts_seconds(self):
        options = TTLOptions(ttl=90)

        assert options.ttl == timedelta(seconds=90)
        assert options.seconds == 90
        assert options.ensure_ttl_index is False

    def test_accepts_timedelta(self):
        assert TTLOptions(ttl=timedelta(minutes=2)).seconds == 120

    @pytest.mark.parametrize('ttl', [1, 3600, 1.5, timedelta(minutes=1)])
    def test_positive_ttl_is_valid(self, ttl):
        TTLOptions(ttl=ttl).validate()

    @pytest.mark.parametrize('ttl', [0, -5, timedelta(0), 0.5, timedelta(milliseconds=999)])
    def test_ttl_below_one_second_is_invalid(self, ttl):
        with pytest.raises(InvalidTTLException) as exc_info:
            TTLOptions(ttl=ttl).validate()

        assert exc_info.value.ttl == to_timedelta(ttl)

    def test_error_message_carries_ttl(self):
        error = InvalidTTLException(timedelta(seconds=-5))

        assert str(error) == 'ttl cannot be 0 or fewer seconds; supplied ttl: -5'


class TestIndexModel:
    def test_model_shape(self):
        document = make_ttl_index_model(timedelta(hours=1)).document

        assert dict(document['key']) == {'last_modified': 1}
        assert document['name'] == 'last_modified_ttl'
        assert document['expireAfterSeconds'] == 3600


class TestEnsureTTLIndex:
    async def test_creates_index(self):
        collection = FakeCollection()

        name = await ensure_ttl_index(collection, 300)

        assert name == 'last_modified_ttl'
        _, kwargs = collection.index_calls[0]
        assert kwargs == {'maxTimeMS': 15000}

    async def test_custom_timeout(self):
        collection = FakeCollection()

        await ensure_ttl_index(collection, 300, timeout=2)

        assert collection.index_calls[0][1] == {'maxTimeMS': 2000}

    async def test_server_rejects_index(self):
        collection = FakeCollection()
        collection.create_indexes = AsyncMock(side_effect=OperationFailure('IndexOptionsConflict', code=85))

        with pytest.raises(TTLIndexException):
            await ensure_ttl_index(collection, 300)

    async def test_provisioning_timeout(self):
        collection = FakeCollection()

        async def slow_create(*args, **kwargs):
            await asyncio.sleep(1)

        collection.create_indexes = slow_create

        with pytest.raises(TTLIndexException):
            await ensure_ttl_index(collection, 300, timeout=0.01)
