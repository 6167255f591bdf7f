"""
RegistrationService - publishes an article across AssetHub and EduChain

Write sequence (strictly in order, each step finalized before the next):
1. Hash content (BLAKE2b-256)                      - local
2. Ensure the publisher's collection exists         - AssetHub
3. Mint the article item + attach metadata          - AssetHub
4. Sign <Bytes>digest</Bytes> with the publisher    - local
5. Record the article with ids + signature          - EduChain

The signature binds the EduChain record to the publisher that minted the item
on AssetHub, since the two ledgers share no transaction. Any error aborts the
remaining steps; nothing is retried here.

Only one registration per publisher may run at a time (item ids are derived
from the collection's item count). The publisher lock enforces this.
"""
import logging
from typing import Optional

from edunews.errors import LedgerUnavailable, NoContentProvided, PartialWriteInconsistency, SubmissionRejected
from edunews.models.domain.collectible import RegistrationWrite, WritePhase
from edunews.models.domain.results import RegistrationResult
from edunews.repositories.article_repository import ArticleRepository
from edunews.repositories.collectible_repository import CollectibleRepository
from edunews.services.publisher_lock import InProcessPublisherLock, PublisherLock
from edunews.utils.hashing import ContentDigest, count_words, hash_content, signing_payload

logger = logging.getLogger(__name__)


class RegistrationService:

    def __init__(
        self,
        collectibles: CollectibleRepository,
        articles: ArticleRepository,
        lock: Optional[PublisherLock] = None
    ):
        self.collectibles = collectibles
        self.articles = articles
        self.lock = lock or InProcessPublisherLock()

    async def register(self, title: str, url: str, content: str, signer) -> RegistrationResult:
        """
        Register an article for the signer.

        Raises:
            NoContentProvided: Empty content (before any network call)
            RegistrationContention: Signer already has a registration in flight
            PartialWriteInconsistency: A two-step write stopped halfway; `write`
                is a ContainerWrite, UnitWrite or RegistrationWrite
            LedgerUnavailable / SubmissionRejected: Failed before the unit was minted
        """
        if not content:
            raise NoContentProvided()

        digest = hash_content(content)
        word_count = count_words(content)
        publisher = signer.address

        async with self.lock.hold(publisher):
            logger.info(f"📰 Registering '{title}' for {publisher} ({digest.hex()})")

            container_id = await self.collectibles.ensure_container(signer)
            unit_id = await self.collectibles.mint_unit(container_id, signer, title, digest)

            write = RegistrationWrite(
                container_id=container_id,
                unit_id=unit_id,
                publisher=publisher,
                title=title,
                content_hash=digest.hex(),
                phase=WritePhase.CREATED,
            )
            try:
                receipt = await self._bind_and_record(
                    container_id, unit_id, digest, title, url, signer, word_count
                )
            except (LedgerUnavailable, SubmissionRejected) as e:
                logger.warning(
                    f"⚠️  Item minted (collection {container_id}, item {unit_id}) but the "
                    f"article record was not written; retry with complete_registration()"
                )
                raise PartialWriteInconsistency(write, e) from e

        return RegistrationResult(
            collection_id=container_id,
            item_id=unit_id,
            tx_hash=receipt.tx_hash,
            content_hash=digest.hex(),
        )

    async def complete_registration(
        self,
        container_id: int,
        unit_id: int,
        title: str,
        url: str,
        content: str,
        signer
    ) -> RegistrationResult:
        """
        Write only the EduChain record for an item that is already minted.

        Used to resume a registration whose last step failed.
        """
        if not content:
            raise NoContentProvided()

        digest = hash_content(content)
        async with self.lock.hold(signer.address):
            receipt = await self._bind_and_record(
                container_id, unit_id, digest, title, url, signer, count_words(content)
            )

        return RegistrationResult(
            collection_id=container_id,
            item_id=unit_id,
            tx_hash=receipt.tx_hash,
            content_hash=digest.hex(),
        )

    async def _bind_and_record(
        self,
        container_id: int,
        unit_id: int,
        digest: ContentDigest,
        title: str,
        url: str,
        signer,
        word_count: int
    ):
        signature = signer.sign(signing_payload(digest))
        return await self.articles.register(
            container_id=container_id,
            unit_id=unit_id,
            digest=digest,
            signature=signature,
            title=title,
            url=url,
            signer=signer,
            word_count=word_count,
        )
