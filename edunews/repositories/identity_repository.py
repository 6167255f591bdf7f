"""
Identity Repository - publisher identities on PeopleHub

Storage read (Identity pallet):
- IdentityOf(address) -> {info: {display, legal, ...}, judgements: [...]}

Verification policy: ANY identity record counts as verified. Registrar
judgements are not inspected.
"""
import logging
from typing import Any, Optional

from edunews.models.domain.identity import IdentityAttestation
from edunews.services.ledger_client import BoundedLedger, StorageQuery
from edunews.utils.address import validate_address

logger = logging.getLogger(__name__)

PALLET = 'Identity'


def decode_identity_data(value: Any) -> Optional[str]:
    """
    Decode an identity Data field.

    Accepts None / "None", {"Raw": "..."} (or {"RawN": ...}) and plain strings.
    Hash-typed data ({"Sha256": ...} etc.) has no readable form and decodes to None.
    """
    if value is None or value == 'None':
        return None
    if isinstance(value, str):
        return value or None
    if isinstance(value, dict):
        for key, inner in value.items():
            if key.startswith('Raw') and isinstance(inner, str):
                if inner.startswith('0x'):
                    try:
                        return bytes.fromhex(inner[2:]).decode('utf-8')
                    except ValueError:
                        return inner
                return inner
    return None


class IdentityRepository:
    """Repository for publisher identity attestations"""

    def __init__(self, ledger: BoundedLedger):
        self.ledger = ledger

    async def resolve(self, address: str) -> IdentityAttestation:
        """
        Identity attestation for an address.

        Returns:
            Verified attestation when a record exists, unverified otherwise

        Raises:
            InvalidAddress: Malformed address (before any read)
        """
        address = validate_address(address)
        registration = await self.ledger.read(StorageQuery(PALLET, 'IdentityOf', (address,)))

        # Newer runtimes store (registration, username)
        if isinstance(registration, (list, tuple)):
            registration = registration[0] if registration else None

        if not registration:
            logger.debug(f"No identity for {address}")
            return IdentityAttestation.unverified(address)

        info = registration.get('info') or {}
        return IdentityAttestation(
            address=address,
            display_name=decode_identity_data(info.get('display')),
            legal_name=decode_identity_data(info.get('legal')),
            verified=True,
        )

    async def is_verified(self, address: str) -> bool:
        return (await self.resolve(address)).verified
