"""
Collectible Repository - publisher containers and article units on AssetHub

Storage read (Nfts pallet):
- NextCollectionId             -> next free collection id (absent = 0)
- Collection(collection)       -> {owner, items, ...}
- Item(collection, item)       -> {owner, ...}

Calls submitted:
- create / set_collection_metadata   (two-step container write)
- mint / set_metadata                (two-step unit write)

Collection ids are assigned by the ledger and read back from the Created
event of the finalized create.

Item ids are derived from the collection's `items` count right before
minting. That is only safe while a single writer mints into a collection,
which the registration service guarantees per publisher.
"""
import json
import logging
from typing import Optional

from edunews.errors import (
    CollectionNotFound,
    LedgerUnavailable,
    PartialWriteInconsistency,
    SubmissionRejected,
)
from edunews.models.domain.collectible import ContainerWrite, UnitWrite, WritePhase
from edunews.services.ledger_client import BoundedLedger, ExtrinsicReceipt, LedgerCall, StorageQuery
from edunews.utils.hashing import ContentDigest

logger = logging.getLogger(__name__)

PALLET = 'Nfts'

# Collection settings: issuer-only minting, items transferable by default
MINT_TYPE_ISSUER = 'Issuer'
ITEM_SETTING_TRANSFERABLE = 1
COLLECTION_SETTINGS_NONE = 0


class CollectibleRepository:
    """
    Repository for publisher collections and article NFTs

    Every write reaches finality before the next one is submitted.
    """

    def __init__(self, ledger: BoundedLedger, collection_label: str = 'news'):
        self.ledger = ledger
        self.collection_label = collection_label

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def next_collection_id(self) -> int:
        value = await self.ledger.read(StorageQuery(PALLET, 'NextCollectionId'))
        return int(value or 0)

    async def get_collection(self, container_id: int) -> Optional[dict]:
        return await self.ledger.read(StorageQuery(PALLET, 'Collection', (container_id,)))

    async def find_container(self, publisher: str) -> Optional[int]:
        """
        Find the first collection owned by `publisher`.

        Linear scan over 0..NextCollectionId; collection counts are small.
        """
        next_id = await self.next_collection_id()
        for container_id in range(next_id):
            details = await self.get_collection(container_id)
            if details and details.get('owner') == publisher:
                return container_id
        return None

    async def next_unit_id(self, container_id: int) -> int:
        """
        Next item id for a collection (its current `items` count).

        Raises:
            CollectionNotFound: Collection does not exist
        """
        details = await self.get_collection(container_id)
        if details is None:
            raise CollectionNotFound(container_id)
        return int(details.get('items', 0))

    async def unit_owner(self, container_id: int, unit_id: int) -> Optional[str]:
        item = await self.ledger.read(StorageQuery(PALLET, 'Item', (container_id, unit_id)))
        if item is None:
            return None
        return item.get('owner')

    async def unit_exists(self, container_id: int, unit_id: int) -> bool:
        item = await self.ledger.read(StorageQuery(PALLET, 'Item', (container_id, unit_id)))
        return item is not None

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    async def ensure_container(self, signer) -> int:
        """
        Return the signer's collection, creating and labelling it if needed.

        Idempotent per publisher: later calls find the existing collection.

        Raises:
            PartialWriteInconsistency: Collection created but label not set
        """
        publisher = signer.address
        existing = await self.find_container(publisher)
        if existing is not None:
            logger.info(f"✅ Using existing NFT collection {existing} on {self.ledger.chain}")
            return existing

        create = LedgerCall(PALLET, 'create', {
            'admin': publisher,
            'config': {
                'settings': COLLECTION_SETTINGS_NONE,
                'max_supply': None,
                'mint_settings': {
                    'mint_type': MINT_TYPE_ISSUER,
                    'price': None,
                    'start_block': None,
                    'end_block': None,
                    'default_item_settings': ITEM_SETTING_TRANSFERABLE,
                },
            },
        })
        receipt = await self.ledger.submit(create, signer)
        container_id = self.created_collection(receipt)
        if container_id is None:
            # No event in the receipt: the creator owns exactly one collection now
            container_id = await self.find_container(publisher)
        if container_id is None:
            raise SubmissionRejected(self.ledger.chain, create.name, "collection not found after create")

        write = ContainerWrite(
            container_id=container_id,
            owner=publisher,
            label=self.collection_label,
            phase=WritePhase.CREATED,
        )

        await self._finish(write, self.label_container(container_id, signer))

        logger.info(
            f"✅ Created NFT collection {container_id} with '{self.collection_label}' "
            f"metadata on {self.ledger.chain}"
        )
        return container_id

    @staticmethod
    def created_collection(receipt: ExtrinsicReceipt) -> Optional[int]:
        """Collection id from the Nfts.Created event of a finalized create."""
        for event in receipt.events:
            if event.get('pallet') == PALLET and event.get('name') == 'Created':
                return int(event.get('data', {})['collection'])
        return None

    async def label_container(self, container_id: int, signer):
        """Set the purpose label on a collection (second half of ensure_container)."""
        call = LedgerCall(PALLET, 'set_collection_metadata', {
            'collection': container_id,
            'data': self.collection_label,
        })
        return await self.ledger.submit(call, signer)

    async def mint_unit(
        self,
        container_id: int,
        signer,
        title: str,
        digest: ContentDigest
    ) -> int:
        """
        Mint the next item of a collection to the signer and attach metadata.

        Returns:
            The minted item id

        Raises:
            CollectionNotFound: Collection does not exist
            PartialWriteInconsistency: Item minted but metadata not set
        """
        unit_id = await self.next_unit_id(container_id)
        write = UnitWrite(
            container_id=container_id,
            unit_id=unit_id,
            owner=signer.address,
            title=title,
            content_hash=digest.hex(),
        )

        mint = LedgerCall(PALLET, 'mint', {
            'collection': container_id,
            'item': unit_id,
            'mint_to': signer.address,
            'witness_data': None,
        })
        await self.ledger.submit(mint, signer)
        write.phase = WritePhase.CREATED

        await self._finish(write, self.label_unit(container_id, unit_id, title, digest, signer))

        logger.info(f"✅ Minted NFT on {self.ledger.chain}: collection {container_id}, item {unit_id}")
        return unit_id

    async def label_unit(
        self,
        container_id: int,
        unit_id: int,
        title: str,
        digest: ContentDigest,
        signer
    ):
        """Attach {title, content_hash} metadata to a minted item."""
        metadata = json.dumps(
            {'title': title, 'content_hash': digest.hex()},
            separators=(',', ':'),
            ensure_ascii=False
        )
        call = LedgerCall(PALLET, 'set_metadata', {
            'collection': container_id,
            'item': unit_id,
            'data': metadata,
        })
        return await self.ledger.submit(call, signer)

    async def _finish(self, write, second_step):
        """Await the labelling step; a failure leaves a partial write."""
        try:
            await second_step
        except (LedgerUnavailable, SubmissionRejected) as e:
            logger.warning(f"⚠️  {self.ledger.chain}: {write.describe()}, labelling failed: {e}")
            raise PartialWriteInconsistency(write, e) from e
        write.phase = WritePhase.LABELED
        return write
