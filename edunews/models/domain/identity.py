"""
Identity domain model
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class IdentityAttestation:
    """
    Publisher identity as seen on the identity ledger.

    `verified` only means an identity record exists. Registrar judgements are
    not inspected, so this is a weak signal and callers should treat it as one.
    """
    address: str
    display_name: Optional[str] = None
    legal_name: Optional[str] = None
    verified: bool = False

    @classmethod
    def unverified(cls, address: str) -> 'IdentityAttestation':
        return cls(address=address)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
