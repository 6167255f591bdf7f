"""
Article API Endpoints
=====================

Endpoints:
- POST /api/articles                                   - Register an article
- GET  /api/articles/{collection_id}/{item_id}         - Show article details
- GET  /api/articles/{collection_id}/{item_id}/verify  - Cross-ledger verification
- GET  /api/articles/{collection_id}/{item_id}/audit   - Signature binding audit
- GET  /api/publishers/{address}/articles              - List a publisher's articles
- GET  /api/identity/{address}                         - Publisher identity

Error mapping:
- invalid input        -> 400
- not found            -> 404
- contention           -> 409
- ledger rejected      -> 502
- partial write        -> 502 (detail carries the phase reached)
- ledger unreachable   -> 503
"""
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
import logging

from edunews.config.networks import get_ledger_endpoints
from edunews.config.settings import get_settings
from edunews.errors import ArticleNotFound, EduNewsError, PartialWriteInconsistency
from edunews.services.article_service import ArticleService
from edunews.services.publisher_lock import create_publisher_lock

logger = logging.getLogger(__name__)
router = APIRouter()

# Global (initialized on first request)
article_service: Optional[ArticleService] = None

STATUS_BY_CATEGORY = {
    'invalid_input': 400,
    'not_found': 404,
    'contention': 409,
    'rejected': 502,
    'partial_write': 502,
    'ledger_unreachable': 503,
}


class RegisterRequest(BaseModel):
    title: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    mnemonic: str = Field(..., min_length=1)


async def init_services() -> ArticleService:
    """Connect to the ledgers once and reuse the service"""
    global article_service

    if article_service is None:
        settings = get_settings()
        article_service = await ArticleService.connect(
            get_ledger_endpoints(settings),
            collection_label=settings.collection_label,
            lock=create_publisher_lock(settings.redis_url, settings.registration_lock_ttl_seconds),
        )
    return article_service


async def close_services():
    global article_service
    if article_service is not None:
        await article_service.close()
        article_service = None


def to_http_error(error: EduNewsError) -> HTTPException:
    status = STATUS_BY_CATEGORY.get(error.category, 500)
    detail = {'error': str(error), 'category': error.category}
    if isinstance(error, PartialWriteInconsistency):
        write = asdict(error.write)
        write['phase'] = error.write.phase.value
        detail['write'] = write
    if status >= 500:
        logger.warning(f"⚠️  {error.category}: {error}")
    return HTTPException(status_code=status, detail=detail)


@router.post("/articles")
async def register_article(request: RegisterRequest):
    """
    Register an article across AssetHub and EduChain.

    Returns collection_id, item_id, tx_hash and content_hash.
    """
    try:
        service = await init_services()
        result = await service.register(request.title, request.url, request.content, request.mnemonic)
    except EduNewsError as e:
        raise to_http_error(e)
    return result.to_dict()


@router.get("/articles/{collection_id}/{item_id}")
async def show_article(collection_id: int, item_id: int):
    try:
        service = await init_services()
        article = await service.show(collection_id, item_id)
        if article is None:
            raise ArticleNotFound(collection_id, item_id)
    except EduNewsError as e:
        raise to_http_error(e)
    return article.to_dict()


@router.get("/articles/{collection_id}/{item_id}/verify")
async def verify_article(collection_id: int, item_id: int):
    try:
        service = await init_services()
        result = await service.verify(collection_id, item_id)
    except EduNewsError as e:
        raise to_http_error(e)
    return result.to_dict()


@router.get("/articles/{collection_id}/{item_id}/audit")
async def audit_article(collection_id: int, item_id: int):
    try:
        service = await init_services()
        audit = await service.audit(collection_id, item_id)
    except EduNewsError as e:
        raise to_http_error(e)
    return audit.to_dict()


@router.get("/publishers/{address}/articles")
async def list_articles(address: str):
    try:
        service = await init_services()
        articles = await service.list(address)
    except EduNewsError as e:
        raise to_http_error(e)
    return {
        "publisher": address,
        "articles": [article.to_dict() for article in articles],
        "total": len(articles),
    }


@router.get("/identity/{address}")
async def get_identity(address: str):
    try:
        service = await init_services()
        identity = await service.identity(address)
    except EduNewsError as e:
        raise to_http_error(e)
    return identity.to_dict()
