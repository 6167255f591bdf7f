"""
ArticleService - the five operations offered to front ends

    register(title, url, content, mnemonic) -> RegistrationResult
    verify(collection_id, item_id)          -> VerificationResult
    list(publisher)                         -> [Article]
    identity(address)                       -> IdentityAttestation
    show(collection_id, item_id)            -> Article | None

Usage:
    service = await ArticleService.connect(get_ledger_endpoints(settings))
    try:
        result = await service.verify(0, 0)
    finally:
        await service.close()
"""
import logging
from typing import List, Optional

import httpx

from edunews.config.networks import LedgerEndpoints
from edunews.models.domain.article import Article
from edunews.models.domain.identity import IdentityAttestation
from edunews.models.domain.results import BindingAudit, RegistrationResult, VerificationResult
from edunews.repositories.article_repository import ArticleRepository
from edunews.repositories.collectible_repository import CollectibleRepository
from edunews.repositories.identity_repository import IdentityRepository
from edunews.services.ledger_client import BoundedLedger, LedgerClient
from edunews.services.publisher_lock import PublisherLock
from edunews.services.registration_service import RegistrationService
from edunews.services.rpc_client import JsonRpcLedgerClient
from edunews.services.signer import Ed25519Signer
from edunews.services.verification_service import VerificationService

logger = logging.getLogger(__name__)

REGISTRY_CHAIN = 'EduChain'
ISSUANCE_CHAIN = 'AssetHub'
IDENTITY_CHAIN = 'PeopleHub'


class ArticleService:

    def __init__(
        self,
        registry: LedgerClient,
        issuance: LedgerClient,
        identity: LedgerClient,
        read_timeout: float = 30.0,
        finality_timeout: float = 120.0,
        collection_label: str = 'news',
        lock: Optional[PublisherLock] = None
    ):
        self.clients = [registry, issuance, identity]

        def bound(client):
            return BoundedLedger(client, read_timeout=read_timeout, finality_timeout=finality_timeout)

        self.articles = ArticleRepository(bound(registry))
        self.collectibles = CollectibleRepository(bound(issuance), collection_label=collection_label)
        self.identities = IdentityRepository(bound(identity))

        self.registration = RegistrationService(self.collectibles, self.articles, lock=lock)
        self.verification = VerificationService(self.articles, self.collectibles, self.identities)

    @classmethod
    async def connect(
        cls,
        endpoints: LedgerEndpoints,
        collection_label: str = 'news',
        lock: Optional[PublisherLock] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> 'ArticleService':
        """
        Connect to all three ledgers.

        Raises:
            LedgerUnavailable: A ledger did not answer (already opened
                connections are closed again)
        """
        clients = [
            JsonRpcLedgerClient(
                REGISTRY_CHAIN, endpoints.registry,
                timeout=endpoints.read_timeout,
                transport=transport,
                finality_timeout=endpoints.finality_timeout,
            ),
            JsonRpcLedgerClient(
                ISSUANCE_CHAIN, endpoints.issuance,
                timeout=endpoints.read_timeout,
                transport=transport,
                finality_timeout=endpoints.finality_timeout,
            ),
            JsonRpcLedgerClient(
                IDENTITY_CHAIN, endpoints.identity,
                timeout=endpoints.read_timeout,
                transport=transport,
                finality_timeout=endpoints.finality_timeout,
            ),
        ]
        connected = []
        try:
            for client in clients:
                await client.connect()
                connected.append(client)
        except BaseException:
            for client in connected:
                await client.close()
            raise

        logger.info(f"🔗 Connected to {endpoints.network} ledgers")
        return cls(
            *clients,
            read_timeout=endpoints.read_timeout,
            finality_timeout=endpoints.finality_timeout,
            collection_label=collection_label,
            lock=lock,
        )

    async def close(self):
        for client in self.clients:
            await client.close()

    async def register(self, title: str, url: str, content: str, mnemonic: str) -> RegistrationResult:
        # Key derivation fails before any ledger is touched
        signer = Ed25519Signer.from_mnemonic(mnemonic)
        return await self.registration.register(title, url, content, signer)

    async def verify(self, collection_id: int, item_id: int) -> VerificationResult:
        return await self.verification.verify(collection_id, item_id)

    async def list(self, publisher: str) -> List[Article]:
        return await self.verification.list_for_publisher(publisher)

    async def identity(self, address: str) -> IdentityAttestation:
        return await self.identities.resolve(address)

    async def show(self, collection_id: int, item_id: int) -> Optional[Article]:
        return await self.verification.show(collection_id, item_id)

    async def audit(self, collection_id: int, item_id: int) -> BindingAudit:
        return await self.verification.audit_binding(collection_id, item_id)
