"""
Pytest configuration for EduNews tests.
"""
from types import SimpleNamespace

import pytest

from edunews.repositories.article_repository import ArticleRepository
from edunews.repositories.collectible_repository import CollectibleRepository
from edunews.repositories.identity_repository import IdentityRepository
from edunews.services.article_service import ArticleService
from edunews.services.ledger_client import BoundedLedger
from edunews.services.signer import Ed25519Signer
from edunews.tests.fakes import ALICE_URI, BOB_URI, FakeAssetHub, FakeEduChain, FakePeopleHub


TIMEOUT = 1.0


def pytest_configure(config):
    """Configure pytest with asyncio marker."""
    config.addinivalue_line(
        "markers", "asyncio: mark test as an async test."
    )


@pytest.fixture
def alice():
    return Ed25519Signer.from_mnemonic(ALICE_URI)


@pytest.fixture
def bob():
    return Ed25519Signer.from_mnemonic(BOB_URI)


@pytest.fixture
def ledgers():
    return SimpleNamespace(
        registry=FakeEduChain(),
        issuance=FakeAssetHub(),
        identity=FakePeopleHub(),
    )


def bounded(client, timeout: float = TIMEOUT) -> BoundedLedger:
    return BoundedLedger(client, read_timeout=timeout, finality_timeout=timeout)


@pytest.fixture
def collectibles(ledgers):
    return CollectibleRepository(bounded(ledgers.issuance))


@pytest.fixture
def articles(ledgers):
    return ArticleRepository(bounded(ledgers.registry))


@pytest.fixture
def identities(ledgers):
    return IdentityRepository(bounded(ledgers.identity))


@pytest.fixture
def service(ledgers):
    return ArticleService(
        ledgers.registry,
        ledgers.issuance,
        ledgers.identity,
        read_timeout=TIMEOUT,
        finality_timeout=TIMEOUT,
    )
