"""
Tests for the signed and encrypted session codecs
"""
from unittest.mock import patch

import pytest

from sanic_mongodb_session.exceptions import CodecException
from sanic_mongodb_session.session.codec import (
    EncryptedCodec,
    SignedCodec,
    codecs_from_pairs,
    decode_multi,
    encode_multi,
    set_max_age,
)
from sanic_mongodb_session.support import SecurityError


class TestSignedCodec:
    def test_round_trip(self):
        codec = SignedCodec('hash-key')
        value = {'user_id': 1, 'tags': ['a', 'b'], 'nested': {'ok': True}}

        assert codec.decode('session', codec.encode('session', value)) == value

    def test_token_is_bound_to_name(self):
        codec = SignedCodec('hash-key')
        token = codec.encode('session', 'abc')

        with pytest.raises(CodecException):
            codec.decode('other', token)

    def test_tampered_token(self):
        codec = SignedCodec('hash-key')
        token = codec.encode('session', 'abc')

        with pytest.raises(CodecException):
            codec.decode('session', token[:-2] + ('AA' if not token.endswith('AA') else 'BB'))

    def test_wrong_key(self):
        token = SignedCodec('hash-key').encode('session', 'abc')

        with pytest.raises(CodecException):
            SignedCodec('another-key').decode('session', token)

    def test_expired_token(self):
        codec = SignedCodec('hash-key', max_age=10)
        with patch('itsdangerous.timed.time.time', return_value=1_000_000):
            token = codec.encode('session', 'abc')

        with patch('itsdangerous.timed.time.time', return_value=1_000_100):
            with pytest.raises(CodecException):
                codec.decode('session', token)

    def test_zero_max_age_disables_expiry(self):
        codec = SignedCodec('hash-key', max_age=0)
        with patch('itsdangerous.timed.time.time', return_value=1_000_000):
            token = codec.encode('session', 'abc')

        with patch('itsdangerous.timed.time.time', return_value=9_000_000):
            assert codec.decode('session', token) == 'abc'

    def test_unserializable_value(self):
        with pytest.raises(CodecException):
            SignedCodec('hash-key').encode('session', {'when': object()})

    def test_empty_key_fails_as_codec_error(self):
        codec = SignedCodec('')

        with pytest.raises(CodecException) as exc_info:
            codec.encode('session', 'abc')
        assert isinstance(exc_info.value.__cause__, SecurityError)

        with pytest.raises(CodecException):
            codec.decode('session', SignedCodec('hash-key').encode('session', 'abc'))

    @pytest.mark.parametrize('value', [
        {1: 'apple', 2: 'pear'},
        {'cart': {1: 'apple'}},
        {'pair': ('a', 'b')},
        [{'ok': [(1, 2)]}],
        ('a', 'b'),
        {None: 1},
    ])
    def test_rejects_values_json_would_change(self, value):
        with pytest.raises(CodecException):
            SignedCodec('hash-key').encode('session', value)

    def test_nested_string_keyed_values_round_trip(self):
        codec = SignedCodec('hash-key')
        value = {'cart': {'1': 'apple'}, 'items': [[1, 2], {'a': None}], 'n': 1.5}

        assert codec.decode('session', codec.encode('session', value)) == value


class TestEncryptedCodec:
    def test_round_trip(self):
        codec = EncryptedCodec('hash-key', 'block-key')

        assert codec.decode('session', codec.encode('session', {'secret': 'value'})) == {'secret': 'value'}

    def test_payload_is_not_readable(self):
        token = EncryptedCodec('hash-key', 'block-key').encode('session', {'secret': 'plaintext-marker'})

        assert 'plaintext-marker' not in token

    def test_rejects_tuples(self):
        with pytest.raises(CodecException):
            EncryptedCodec('hash-key', 'block-key').encode('session', {'pair': ('a', 'b')})

    def test_wrong_block_key(self):
        token = EncryptedCodec('hash-key', 'block-key').encode('session', 'abc')

        with pytest.raises(CodecException):
            EncryptedCodec('hash-key', 'other-block-key').decode('session', token)


class TestCodecsFromPairs:
    def test_builds_codec_per_pair(self):
        codecs = codecs_from_pairs('h1', 'b1', 'h2', None, 'h3')

        assert [type(codec) for codec in codecs] == [EncryptedCodec, SignedCodec, SignedCodec]

    def test_applies_max_age(self):
        codecs = codecs_from_pairs('h1', 'b1', max_age=60)

        assert codecs[0].max_age == 60

    def test_set_max_age(self):
        codecs = codecs_from_pairs('h1', 'b1', 'h2')

        set_max_age(codecs, 5)

        assert [codec.max_age for codec in codecs] == [5, 5]


class TestMulti:
    def test_encodes_with_first_codec(self):
        first, second = codecs_from_pairs('h1', None, 'h2', None)
        token = encode_multi('session', 'abc', [first, second])

        assert first.decode('session', token) == 'abc'
        with pytest.raises(CodecException):
            second.decode('session', token)

    def test_decodes_with_any_codec(self):
        old = SignedCodec('old-key')
        token = old.encode('session', 'abc')

        assert decode_multi('session', token, [SignedCodec('new-key'), old]) == 'abc'

    def test_failure_does_not_reveal_codec(self):
        codecs = codecs_from_pairs('h1', None, 'h2', None)
        foreign = SignedCodec('h3').encode('session', 'abc')

        with pytest.raises(CodecException) as garbage:
            decode_multi('session', 'garbage', codecs)
        with pytest.raises(CodecException) as wrong_key:
            decode_multi('session', foreign, codecs)

        assert str(garbage.value) == str(wrong_key.value)

    def test_empty_hash_key_in_rotation_list(self):
        codecs = codecs_from_pairs('')

        with pytest.raises(CodecException):
            encode_multi('session', 'abc', codecs)
        with pytest.raises(CodecException):
            decode_multi('session', 'whatever', codecs)

    @pytest.mark.parametrize('operation', [
        lambda: encode_multi('session', 'abc', []),
        lambda: decode_multi('session', 'abc', []),
    ])
    def test_no_codecs(self, operation):
        with pytest.raises(CodecException):
            operation()
