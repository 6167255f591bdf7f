#!/usr/bin/env python3
"""
EduNews command line

Usage:
    edunews register --title T --url U --content "..." [--mnemonic M]
    edunews register --title T --url U --content-file article.txt
    edunews verify --collection-id 0 --item-id 0
    edunews show --collection-id 0 --item-id 0
    edunews audit --collection-id 0 --item-id 0
    edunews list --publisher 0x...
    edunews identity --address 0x...

Global options: --network NAME, --json
The mnemonic falls back to EDUNEWS_MNEMONIC (environment or .env).
"""
import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from edunews.config.networks import get_ledger_endpoints
from edunews.config.settings import get_settings
from edunews.errors import ArticleNotFound, EduNewsError, InvalidMnemonic
from edunews.services.article_service import ArticleService
from edunews.services.publisher_lock import create_publisher_lock
from edunews.utils.content import load_content

logger = logging.getLogger('edunews')


def _yes_no(flag: bool, yes: str = "✅ Yes", no: str = "❌ No") -> str:
    return yes if flag else no


def render_registration(result) -> str:
    return (
        "Registration Successful\n"
        f"  Collection ID: {result.collection_id}\n"
        f"  Item ID: {result.item_id}\n"
        f"  Transaction Hash: {result.tx_hash}\n"
        f"  Content Hash: {result.content_hash}"
    )


def render_verification(result) -> str:
    text = (
        "Verification Result\n"
        f"  Collection ID: {result.collection_id}\n"
        f"  Item ID: {result.item_id}\n"
        f"  Article Exists: {_yes_no(result.article_exists)}\n"
        f"  NFT Exists: {_yes_no(result.nft_exists)}\n"
        f"  Publisher Verified: {_yes_no(result.publisher_verified)}"
    )
    if result.unavailable:
        text += f"\n  ⚠️  Unreachable: {', '.join(result.unavailable)}"
    return text


def render_article(article) -> str:
    text = (
        "Article Details\n"
        f"  Collection ID: {article.container_id}\n"
        f"  Item ID: {article.unit_id}\n"
        f"  Title: {article.title}\n"
        f"  URL: {article.url}\n"
        f"  Publisher: {article.publisher}\n"
        f"  Content Hash: {article.content_hash}\n"
        f"  NFT Status: {_yes_no(article.verified_nft, '✅ Verified', '❌ Not Found')}\n"
        f"  Identity Status: {_yes_no(article.verified_identity, '✅ Verified', '❌ Unverified')}\n"
        f"  Timestamp: {article.timestamp}"
    )
    if article.unavailable:
        text += f"\n  ⚠️  Unreachable: {', '.join(article.unavailable)}"
    return text


def render_identity(identity) -> str:
    return (
        "Publisher Identity\n"
        f"  Address: {identity.address}\n"
        f"  Display Name: {identity.display_name or 'Not set'}\n"
        f"  Legal Name: {identity.legal_name or 'Not set'}\n"
        f"  Verification Status: {_yes_no(identity.verified, '✅ Verified', '❌ Unverified')}"
    )


def render_audit(audit) -> str:
    return (
        "Binding Audit\n"
        f"  Collection ID: {audit.collection_id}\n"
        f"  Item ID: {audit.item_id}\n"
        f"  Record Found: {_yes_no(audit.record_found)}\n"
        f"  NFT Owner: {audit.unit_owner or 'Not found'}\n"
        f"  Publisher: {audit.publisher or 'Not found'}\n"
        f"  Owner Matches: {_yes_no(audit.owner_matches)}\n"
        f"  Signature Valid: {_yes_no(audit.signature_valid)}"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='edunews',
        description='Blockchain article verification for Polkadot ecosystem'
    )
    parser.add_argument('--network', default=None, help='Network to connect to (default: settings)')
    parser.add_argument('--json', action='store_true', help='Output in JSON format')

    commands = parser.add_subparsers(dest='command', required=True)

    register = commands.add_parser('register', help='Register a new article across multiple chains')
    register.add_argument('--title', required=True, help='Article title')
    register.add_argument('--url', required=True, help='Article URL')
    source = register.add_mutually_exclusive_group()
    source.add_argument('--content', help='Article content (inline)')
    source.add_argument('--content-file', help='Path to file containing article content')
    register.add_argument('--mnemonic', help='Mnemonic phrase for signing (or EDUNEWS_MNEMONIC)')

    for name, text in [
        ('verify', 'Verify an existing article'),
        ('show', 'Show article details'),
        ('audit', 'Check the signature binding of an article'),
    ]:
        sub = commands.add_parser(name, help=text)
        sub.add_argument('--collection-id', type=int, required=True, help='Collection ID')
        sub.add_argument('--item-id', type=int, required=True, help='Item ID')

    list_cmd = commands.add_parser('list', help='List all articles by a publisher')
    list_cmd.add_argument('--publisher', required=True, help='Publisher address')

    identity = commands.add_parser('identity', help='Check publisher identity')
    identity.add_argument('--address', required=True, help='Address to check identity for')

    return parser


def emit(data, text: str, as_json: bool):
    if as_json:
        print(json.dumps(data, indent=2, ensure_ascii=False))
    else:
        print(text)


async def run(args, settings) -> int:
    # Inputs are checked before any ledger connection is made
    content = None
    mnemonic = None
    if args.command == 'register':
        content = load_content(args.content, args.content_file)
        mnemonic = args.mnemonic or settings.edunews_mnemonic
        if not mnemonic:
            raise InvalidMnemonic()

    service = await ArticleService.connect(
        get_ledger_endpoints(settings),
        collection_label=settings.collection_label,
        lock=create_publisher_lock(settings.redis_url, settings.registration_lock_ttl_seconds),
    )
    try:
        if args.command == 'register':
            result = await service.register(args.title, args.url, content, mnemonic)
            if not args.json:
                print("✅ Article registered successfully!")
            emit(result.to_dict(), render_registration(result), args.json)

        elif args.command == 'verify':
            result = await service.verify(args.collection_id, args.item_id)
            emit(result.to_dict(), render_verification(result), args.json)

        elif args.command == 'show':
            article = await service.show(args.collection_id, args.item_id)
            if article is None:
                if args.json:
                    print("null")
                    return 0
                raise ArticleNotFound(args.collection_id, args.item_id)
            emit(article.to_dict(), render_article(article), args.json)

        elif args.command == 'audit':
            audit = await service.audit(args.collection_id, args.item_id)
            emit(audit.to_dict(), render_audit(audit), args.json)

        elif args.command == 'list':
            articles = await service.list(args.publisher)
            if args.json:
                print(json.dumps([a.to_dict() for a in articles], indent=2, ensure_ascii=False))
            elif not articles:
                print(f"ℹ️  No articles found for publisher: {args.publisher}")
            else:
                print(f"ℹ️  Found {len(articles)} articles:\n")
                print("\n\n".join(f"{i}. {render_article(a)}" for i, a in enumerate(articles, 1)))

        elif args.command == 'identity':
            identity = await service.identity(args.address)
            emit(identity.to_dict(), render_identity(identity), args.json)
    finally:
        await service.close()

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    if args.network:
        settings = settings.model_copy(update={'network': args.network.strip().lower()})

    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s [%(name)s] %(levelname)s: %(message)s'
    )

    try:
        return asyncio.run(run(args, settings))
    except EduNewsError as e:
        print(f"❌ [{e.category}] {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        # Endpoint configuration errors
        print(f"❌ {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
