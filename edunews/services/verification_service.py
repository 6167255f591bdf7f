"""
VerificationService - cross-ledger view of registered articles

Each read goes to its own ledger and fails on its own:
- EduChain: does a record exist for (collection, item)?
- AssetHub: does the item exist?
- PeopleHub: does the publisher have an identity? (only if the record exists)

An unreachable ledger degrades the flag it feeds to False and is named in
VerificationResult.unavailable; it never fails the whole verification.
Nothing is cached: flags are recomputed on every call.

verify() does not check that the record's signature belongs to the item's
owner. audit_binding() performs that check on demand.
"""
import asyncio
import logging
from typing import Any, Awaitable, List, Optional

from edunews.errors import LedgerUnavailable, MalformedInput
from edunews.models.domain.article import Article, RegistryRecord
from edunews.models.domain.results import BindingAudit, VerificationResult
from edunews.repositories.article_repository import ArticleRepository
from edunews.repositories.collectible_repository import CollectibleRepository
from edunews.repositories.identity_repository import IdentityRepository
from edunews.services.signer import verify_signature
from edunews.utils.hashing import ContentDigest, signing_payload

logger = logging.getLogger(__name__)


class VerificationService:

    def __init__(
        self,
        articles: ArticleRepository,
        collectibles: CollectibleRepository,
        identities: IdentityRepository
    ):
        self.articles = articles
        self.collectibles = collectibles
        self.identities = identities

    async def _degrade(
        self,
        check: Awaitable[Any],
        chain: str,
        unavailable: List[str],
        default: Any = False
    ) -> Any:
        """Run one sub-query; an unreachable ledger yields `default`."""
        try:
            return await check
        except LedgerUnavailable as e:
            logger.warning(f"⚠️  {chain} unavailable, degrading check: {e}")
            if chain not in unavailable:
                unavailable.append(chain)
            return default

    async def _identity_verified(self, publisher: str, unavailable: List[str]) -> bool:
        try:
            return await self._degrade(
                self.identities.is_verified(publisher),
                self.identities.ledger.chain,
                unavailable
            )
        except MalformedInput as e:
            logger.warning(f"⚠️  Record publisher is not a valid address: {e}")
            return False

    async def verify(self, container_id: int, unit_id: int) -> VerificationResult:
        unavailable: List[str] = []

        article_exists, nft_exists = await asyncio.gather(
            self._degrade(self.articles.exists(container_id, unit_id), self.articles.ledger.chain, unavailable),
            self._degrade(self.collectibles.unit_exists(container_id, unit_id), self.collectibles.ledger.chain, unavailable),
        )

        publisher_verified = False
        if article_exists:
            record = await self._degrade(
                self.articles.lookup_by_ids(container_id, unit_id),
                self.articles.ledger.chain,
                unavailable,
                default=None
            )
            if record is not None:
                publisher_verified = await self._identity_verified(record.publisher, unavailable)

        result = VerificationResult(
            collection_id=container_id,
            item_id=unit_id,
            article_exists=article_exists,
            nft_exists=nft_exists,
            publisher_verified=publisher_verified,
            unavailable=unavailable,
        )
        logger.info(
            f"🔍 Verified collection {container_id}, item {unit_id}: "
            f"article={article_exists} nft={nft_exists} identity={publisher_verified}"
        )
        return result

    async def _to_article(self, record: RegistryRecord) -> Article:
        """Fresh unit + identity checks for one record."""
        unavailable: List[str] = []
        verified_nft, verified_identity = await asyncio.gather(
            self._degrade(
                self.collectibles.unit_exists(record.container_id, record.unit_id),
                self.collectibles.ledger.chain,
                unavailable
            ),
            self._identity_verified(record.publisher, unavailable),
        )
        return Article.from_record(
            record,
            verified_nft=verified_nft,
            verified_identity=verified_identity,
            unavailable=unavailable,
        )

    async def show(self, container_id: int, unit_id: int) -> Optional[Article]:
        """Article for (collection, item), or None if not registered."""
        record = await self.articles.lookup_by_ids(container_id, unit_id)
        if record is None:
            return None
        return await self._to_article(record)

    async def list_for_publisher(self, publisher: str) -> List[Article]:
        """
        All articles of a publisher in registry order.

        Raises:
            InvalidAddress: Malformed address
            LedgerUnavailable: EduChain unreachable (nothing to list from)
        """
        records = await self.articles.lookup_by_publisher(publisher)
        articles = []
        for record in records:
            articles.append(await self._to_article(record))
        return articles

    async def audit_binding(self, container_id: int, unit_id: int) -> BindingAudit:
        """
        Check that a record is bound to the item it names.

        - the item's current owner is the record's publisher
        - the record signature verifies over <Bytes>digest</Bytes>
          under the publisher's key
        """
        record = await self.articles.lookup_by_ids(container_id, unit_id)
        if record is None:
            return BindingAudit(collection_id=container_id, item_id=unit_id)

        owner = await self.collectibles.unit_owner(container_id, unit_id)

        signature_valid = False
        if record.signature:
            try:
                payload = signing_payload(ContentDigest.from_hex(record.content_hash))
                signature = bytes.fromhex(record.signature[2:] if record.signature.startswith('0x') else record.signature)
                signature_valid = verify_signature(record.publisher, payload, signature)
            except (MalformedInput, ValueError) as e:
                logger.warning(f"⚠️  Unreadable binding on {record.content_hash}: {e}")

        audit = BindingAudit(
            collection_id=container_id,
            item_id=unit_id,
            record_found=True,
            unit_owner=owner,
            publisher=record.publisher,
            owner_matches=owner is not None and owner == record.publisher,
            signature_valid=signature_valid,
        )
        if not audit.consistent:
            logger.warning(f"⚠️  Binding audit failed for collection {container_id}, item {unit_id}: {audit}")
        return audit
