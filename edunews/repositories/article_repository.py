"""
Article Repository - article records on EduChain

Storage read (News pallet):
- RootByItem(collection, item)    -> content hash   (secondary index)
- ArticleByHash(content hash)     -> article record  (primary map)
- ArticlesByPublisher(address)    -> [content hash]  (publisher index)

Lookups by ids go through the index first, then the primary map. This keeps a
single copy of each record while allowing lookups by hash, ids or publisher.
"""
import logging
from typing import List, Optional, Union

from edunews.errors import LedgerUnavailable
from edunews.models.domain.article import RegistryRecord
from edunews.services.ledger_client import BoundedLedger, ExtrinsicReceipt, LedgerCall, StorageQuery
from edunews.utils.address import validate_address
from edunews.utils.hashing import ContentDigest

logger = logging.getLogger(__name__)

PALLET = 'News'
HASH_ALGO = 'Blake2b256'


class ArticleRepository:
    """Repository for registry records"""

    def __init__(self, ledger: BoundedLedger):
        self.ledger = ledger

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get_root(self, container_id: int, unit_id: int) -> Optional[str]:
        """Content hash registered for (collection, item), if any."""
        return await self.ledger.read(StorageQuery(PALLET, 'RootByItem', (container_id, unit_id)))

    async def get_by_hash(self, content_hash: str) -> Optional[RegistryRecord]:
        value = await self.ledger.read(StorageQuery(PALLET, 'ArticleByHash', (content_hash,)))
        if value is None:
            return None
        return RegistryRecord.from_ledger(content_hash, value)

    async def exists(self, container_id: int, unit_id: int) -> bool:
        return await self.get_root(container_id, unit_id) is not None

    async def lookup_by_ids(self, container_id: int, unit_id: int) -> Optional[RegistryRecord]:
        """
        Retrieve the record for a collection/item pair.

        1. RootByItem: (collection, item) -> content hash
        2. ArticleByHash: content hash -> record

        Returns:
            RegistryRecord or None when either step finds nothing
        """
        content_hash = await self.get_root(container_id, unit_id)
        if content_hash is None:
            return None

        record = await self.get_by_hash(content_hash)
        if record is None:
            logger.warning(
                f"⚠️  {self.ledger.chain} inconsistency: collection {container_id}, "
                f"item {unit_id} maps to {content_hash} but no record exists"
            )
        return record

    async def lookup_by_publisher(self, publisher: str) -> List[RegistryRecord]:
        """
        All records of a publisher, in index order.

        Each hash resolves on its own: hashes with no record, or whose read
        fails, are skipped and the rest are still returned.

        Raises:
            InvalidAddress: Malformed publisher address
            LedgerUnavailable: The publisher index itself could not be read
        """
        publisher = validate_address(publisher)
        hashes = await self.ledger.read(StorageQuery(PALLET, 'ArticlesByPublisher', (publisher,)))
        if not hashes:
            return []

        records = []
        for content_hash in hashes:
            try:
                record = await self.get_by_hash(content_hash)
            except LedgerUnavailable as e:
                logger.warning(f"⚠️  Skipping {content_hash} for {publisher}: {e}")
                continue
            if record is None:
                logger.warning(
                    f"⚠️  {self.ledger.chain} inconsistency: publisher {publisher} lists "
                    f"{content_hash} but no record exists"
                )
                continue
            records.append(record)
        return records

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    async def register(
        self,
        container_id: int,
        unit_id: int,
        digest: Union[ContentDigest, str],
        signature: bytes,
        title: str,
        url: str,
        signer,
        word_count: int
    ) -> ExtrinsicReceipt:
        """
        Record an article bound to its minted item.

        The digest is validated before anything is submitted.

        Raises:
            InvalidContentHash: Digest is not a 32-byte hash
            SubmissionRejected: Ledger refused the record
        """
        if not isinstance(digest, ContentDigest):
            digest = ContentDigest.from_hex(digest)

        call = LedgerCall(PALLET, 'record_article', {
            'content_hash': digest.hex(),
            'collection_id': container_id,
            'item_id': unit_id,
            'title': title,
            'canonical_url': url,
            'signature': {'Ed25519': '0x' + signature.hex()},
            'hash_algo': HASH_ALGO,
            'word_count': word_count,
        })
        receipt = await self.ledger.submit(call, signer)

        logger.info(
            f"✅ Article recorded on {self.ledger.chain}: {digest.hex()[:10]}… "
            f"→ collection {container_id}, item {unit_id}"
        )
        return receipt
