"""
Shared helpers: hashing, addresses, content loading
"""
from .hashing import ContentDigest, hash_content, signing_payload, count_words
from .address import validate_address, is_valid_address
from .content import load_content

__all__ = [
    'ContentDigest',
    'hash_content',
    'signing_payload',
    'count_words',
    'validate_address',
    'is_valid_address',
    'load_content',
]
