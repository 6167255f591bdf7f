"""
Ed25519 signer derived from a mnemonic phrase.

The signer owns the secret key and only ever hands out signatures and its
public address. Derivation:

    seed = PBKDF2-HMAC-SHA512(NFKD(phrase), b"mnemonic", 2048)[:32]
    for each //junction:
        seed = BLAKE2b-256(b"Ed25519HDKD" || seed || junction)

Dev URIs such as "<phrase>//Alice" are accepted.

Only the phrase format is checked (word count, lowercase ASCII words). There is
no BIP39 wordlist or checksum validation, and keys derived here are not the
sr25519 keys a Substrate wallet derives from the same phrase.
"""
import hashlib
import re
import unicodedata

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519

from edunews.errors import InvalidAddress, InvalidMnemonic
from edunews.utils.address import address_to_public_key

VALID_WORD_COUNTS = {12, 15, 18, 21, 24}
WORD_PATTERN = re.compile(r'^[a-z]+$')
PBKDF2_ROUNDS = 2048
HDKD_TAG = b"Ed25519HDKD"


def _derive_seed(uri: str) -> bytes:
    phrase, *junctions = uri.strip().split('//')
    words = phrase.split()
    if len(words) not in VALID_WORD_COUNTS or not all(WORD_PATTERN.match(w) for w in words):
        raise InvalidMnemonic()
    if any(not j for j in junctions):
        raise InvalidMnemonic()

    normalized = unicodedata.normalize('NFKD', ' '.join(words))
    seed = hashlib.pbkdf2_hmac('sha512', normalized.encode('utf-8'), b'mnemonic', PBKDF2_ROUNDS)[:32]

    for junction in junctions:
        seed = hashlib.blake2b(HDKD_TAG + seed + junction.encode('utf-8'), digest_size=32).digest()
    return seed


class Ed25519Signer:
    """Signs byte messages; exposes only the public address."""

    def __init__(self, private_key: ed25519.Ed25519PrivateKey):
        self._key = private_key
        public = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw
        )
        self._address = '0x' + public.hex()

    @classmethod
    def from_mnemonic(cls, uri: str) -> 'Ed25519Signer':
        """
        Create a signer from a mnemonic phrase with optional //junctions.

        Raises:
            InvalidMnemonic: Phrase is empty or not 12-24 lowercase words
                (format only; words are not checked against a wordlist)
        """
        if not uri or not isinstance(uri, str):
            raise InvalidMnemonic()
        return cls.from_seed(_derive_seed(uri))

    @classmethod
    def from_seed(cls, seed: bytes) -> 'Ed25519Signer':
        return cls(ed25519.Ed25519PrivateKey.from_private_bytes(seed))

    @property
    def address(self) -> str:
        return self._address

    def public_key(self) -> str:
        return self._address

    def sign(self, message: bytes) -> bytes:
        return self._key.sign(message)

    def __repr__(self) -> str:
        return f"Ed25519Signer({self._address})"


def verify_signature(address: str, message: bytes, signature: bytes) -> bool:
    """
    Check an Ed25519 signature against a publisher address.

    Returns False for bad signatures and for addresses that are not valid keys.
    """
    try:
        public_key = ed25519.Ed25519PublicKey.from_public_bytes(address_to_public_key(address))
    except (InvalidAddress, ValueError):
        return False

    try:
        public_key.verify(signature, message)
        return True
    except InvalidSignature:
        return False
