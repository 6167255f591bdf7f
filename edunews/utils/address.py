"""
Publisher address helpers.

Format: 0x + 64 lowercase hex chars (the 32-byte Ed25519 public key)
"""
import re

from edunews.errors import InvalidAddress

ADDRESS_PATTERN = re.compile(r'^0x[0-9a-fA-F]{64}$')


def validate_address(address: str) -> str:
    """
    Check and normalize a publisher address.

    Returns:
        Lowercased address

    Raises:
        InvalidAddress: If the string is not a 0x-prefixed 32-byte hex key
    """
    if not isinstance(address, str) or not ADDRESS_PATTERN.match(address.strip()):
        raise InvalidAddress(str(address))
    return address.strip().lower()


def is_valid_address(address: str) -> bool:
    return isinstance(address, str) and bool(ADDRESS_PATTERN.match(address.strip()))


def address_to_public_key(address: str) -> bytes:
    return bytes.fromhex(validate_address(address)[2:])
