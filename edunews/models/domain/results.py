"""
Operation results returned to front ends
"""
from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class RegistrationResult:
    collection_id: int
    item_id: int
    tx_hash: str
    content_hash: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class VerificationResult:
    """
    Cross-ledger verification flags.

    A flag is False both when the thing is absent and when its ledger could
    not be reached; `unavailable` names the ledgers whose checks degraded.
    """
    collection_id: int
    item_id: int
    article_exists: bool = False
    nft_exists: bool = False
    publisher_verified: bool = False
    unavailable: List[str] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return bool(self.unavailable)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BindingAudit:
    """Result of checking a registry record against the unit it claims."""
    collection_id: int
    item_id: int
    record_found: bool = False
    unit_owner: Optional[str] = None
    publisher: Optional[str] = None
    owner_matches: bool = False
    signature_valid: bool = False

    @property
    def consistent(self) -> bool:
        return self.record_found and self.owner_matches and self.signature_valid

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['consistent'] = self.consistent
        return data
