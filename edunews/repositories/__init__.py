"""
Repository Pattern - Ledger abstraction layer

Repositories hide ledger storage layouts and call formats from business logic.
Consumers work with domain models, not storage values.

Ledger split:
- CollectibleRepository: AssetHub (publisher collections, article NFTs)
- ArticleRepository: EduChain (article records and their indexes)
- IdentityRepository: PeopleHub (publisher identities)
"""
from .collectible_repository import CollectibleRepository
from .article_repository import ArticleRepository
from .identity_repository import IdentityRepository

__all__ = [
    'CollectibleRepository',
    'ArticleRepository',
    'IdentityRepository',
]
