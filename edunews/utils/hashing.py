"""
Content digests and the signature-binding payload.

Digest: BLAKE2b with a 32-byte output, rendered as 0x-prefixed hex.
The digest is the join key between the registry and issuance ledgers.
"""
import hashlib
import re
from dataclasses import dataclass
from typing import Union

from edunews.errors import InvalidContentHash

DIGEST_SIZE = 32

# Delimiters wrapped around the raw digest before signing
PAYLOAD_OPEN = b"<Bytes>"
PAYLOAD_CLOSE = b"</Bytes>"

HEX_PATTERN = re.compile(r'^(0x)?[0-9a-fA-F]{64}$')


@dataclass(frozen=True)
class ContentDigest:
    """Fixed-size digest of article content."""
    raw: bytes

    def __post_init__(self):
        if not isinstance(self.raw, bytes) or len(self.raw) != DIGEST_SIZE:
            raise InvalidContentHash(repr(self.raw))

    @classmethod
    def from_hex(cls, value: str) -> 'ContentDigest':
        """Parse a 0x-prefixed (or bare) 64 character hex string."""
        if not isinstance(value, str) or not HEX_PATTERN.match(value):
            raise InvalidContentHash(str(value))
        if value.startswith('0x'):
            value = value[2:]
        return cls(bytes.fromhex(value))

    def hex(self) -> str:
        return '0x' + self.raw.hex()

    def __str__(self) -> str:
        return self.hex()


def hash_content(content: Union[str, bytes]) -> ContentDigest:
    """
    Hash article content with BLAKE2b-256.

    Args:
        content: Article text (UTF-8 encoded) or raw bytes

    Returns:
        ContentDigest
    """
    if isinstance(content, str):
        content = content.encode('utf-8')
    return ContentDigest(hashlib.blake2b(content, digest_size=DIGEST_SIZE).digest())


def signing_payload(digest: ContentDigest) -> bytes:
    """Message signed by the publisher to bind a registry record to its mint."""
    return PAYLOAD_OPEN + digest.raw + PAYLOAD_CLOSE


def count_words(content: str) -> int:
    return len(content.split())
