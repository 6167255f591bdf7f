"""
Tests for content digests and the signing payload.
"""
import hashlib

import pytest

from edunews.errors import InvalidContentHash
from edunews.utils.hashing import (
    ContentDigest,
    PAYLOAD_CLOSE,
    PAYLOAD_OPEN,
    count_words,
    hash_content,
    signing_payload,
)


class TestHashContent:

    def test_deterministic(self):
        assert hash_content("hello world") == hash_content("hello world")

    def test_digest_is_32_bytes(self):
        digest = hash_content("hello world")
        assert len(digest.raw) == 32
        assert len(digest.hex()) == 66
        assert digest.hex().startswith('0x')

    def test_blake2b_256(self):
        expected = hashlib.blake2b(b"hello world", digest_size=32).digest()
        assert hash_content("hello world").raw == expected

    def test_str_and_bytes_agree(self):
        assert hash_content("héllo") == hash_content("héllo".encode('utf-8'))

    def test_different_content_different_digest(self):
        assert hash_content("hello world") != hash_content("hello world!")


class TestContentDigest:

    def test_hex_round_trip_with_and_without_prefix(self):
        digest = hash_content("article")
        assert ContentDigest.from_hex(digest.hex()) == digest
        assert ContentDigest.from_hex(digest.hex()[2:]) == digest

    @pytest.mark.parametrize("value", [
        "",
        "0x",
        "0x1234",
        "0x" + "zz" * 32,
        "0x" + "00" * 33,
    ])
    def test_malformed_hex_rejected(self, value):
        with pytest.raises(InvalidContentHash):
            ContentDigest.from_hex(value)

    def test_wrong_length_bytes_rejected(self):
        with pytest.raises(InvalidContentHash):
            ContentDigest(b"\x00" * 31)

    def test_immutable(self):
        digest = hash_content("x")
        with pytest.raises(AttributeError):
            digest.raw = b"\x00" * 32


class TestSigningPayload:

    def test_payload_wraps_raw_digest(self):
        digest = hash_content("hello world")
        payload = signing_payload(digest)
        assert payload == b"<Bytes>" + digest.raw + b"</Bytes>"
        assert payload.startswith(PAYLOAD_OPEN)
        assert payload.endswith(PAYLOAD_CLOSE)
        assert len(payload) == len(PAYLOAD_OPEN) + 32 + len(PAYLOAD_CLOSE)

    def test_different_digests_different_payloads(self):
        a = signing_payload(hash_content("a"))
        b = signing_payload(hash_content("b"))
        assert a != b


def test_count_words():
    assert count_words("hello world") == 2
    assert count_words("  one\ttwo\n three  ") == 3
    assert count_words("") == 0
