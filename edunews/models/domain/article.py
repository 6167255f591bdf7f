"""
Article domain models

RegistryRecord is what the registry ledger stores under a content digest.
Article is the read-side composite: a registry record plus verification flags
recomputed from the issuance and identity ledgers on every read.
"""
from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class RegistryRecord:
    """Registry ledger record keyed by content hash."""
    content_hash: str  # 0x-prefixed hex digest
    container_id: int
    unit_id: int
    title: str
    canonical_url: str
    publisher: str
    signature: Optional[str] = None  # 0x-prefixed hex
    timestamp: int = 0  # block number of last update
    word_count: int = 0

    @classmethod
    def from_ledger(cls, content_hash: str, value: Dict[str, Any]) -> 'RegistryRecord':
        """Build from the ArticleByHash storage value."""
        signature = value.get('signature')
        if isinstance(signature, dict):
            # MultiSignature: {"Ed25519": "0x..."}
            signature = next(iter(signature.values()), None)

        return cls(
            content_hash=content_hash,
            container_id=int(value['collection_id']),
            unit_id=int(value['item_id']),
            title=value.get('title', ''),
            canonical_url=value.get('canonical_url', ''),
            publisher=value['publisher'],
            signature=signature,
            timestamp=int(value.get('last_updated_at') or 0),
            word_count=int(value.get('word_count') or 0),
        )


@dataclass
class Article:
    """Article view model (never persisted)"""
    container_id: int
    unit_id: int
    title: str
    url: str
    content_hash: str
    publisher: str
    timestamp: int
    verified_nft: bool = False
    verified_identity: bool = False
    # Ledgers whose check degraded to False because they were unreachable
    unavailable: List[str] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return bool(self.unavailable)

    @classmethod
    def from_record(
        cls,
        record: RegistryRecord,
        verified_nft: bool = False,
        verified_identity: bool = False,
        unavailable: Optional[List[str]] = None
    ) -> 'Article':
        return cls(
            container_id=record.container_id,
            unit_id=record.unit_id,
            title=record.title,
            url=record.canonical_url,
            content_hash=record.content_hash,
            publisher=record.publisher,
            timestamp=record.timestamp,
            verified_nft=verified_nft,
            verified_identity=verified_identity,
            unavailable=list(unavailable or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
