"""
Tests for ArticleRepository: records, the id index and the publisher index.
"""
import logging

import pytest

from edunews.errors import InvalidAddress, InvalidContentHash
from edunews.utils.hashing import hash_content, signing_payload


async def record(articles, signer, content, container_id=0, unit_id=0, title="Title"):
    digest = hash_content(content)
    await articles.register(
        container_id=container_id,
        unit_id=unit_id,
        digest=digest,
        signature=signer.sign(signing_payload(digest)),
        title=title,
        url=f"http://example.com/{unit_id}",
        signer=signer,
        word_count=len(content.split()),
    )
    return digest


@pytest.mark.asyncio
async def test_register_and_lookup_by_ids(articles, ledgers, alice):
    digest = await record(articles, alice, "hello world", container_id=3, unit_id=4)

    found = await articles.lookup_by_ids(3, 4)

    assert found.content_hash == digest.hex()
    assert (found.container_id, found.unit_id) == (3, 4)
    assert found.publisher == alice.address
    assert found.canonical_url == "http://example.com/4"
    assert found.word_count == 2
    assert found.signature.startswith('0x')
    assert found.timestamp > 0

    call = ledgers.registry.submitted[0]
    assert call.name == 'News.record_article'
    assert call.args['hash_algo'] == 'Blake2b256'


@pytest.mark.asyncio
async def test_register_accepts_hex_digest(articles, alice):
    digest = hash_content("text")
    await articles.register(0, 0, digest.hex(), alice.sign(b"x"), "T", "http://x", alice, 1)
    assert await articles.exists(0, 0)


@pytest.mark.asyncio
@pytest.mark.parametrize("bad_hash", ["0x1234", "not-a-hash", "0x" + "g" * 64])
async def test_malformed_digest_rejected_before_submission(articles, ledgers, alice, bad_hash):
    with pytest.raises(InvalidContentHash) as exc:
        await articles.register(0, 0, bad_hash, b"sig", "T", "http://x", alice, 1)
    assert exc.value.category == 'invalid_input'
    assert ledgers.registry.submitted == []


@pytest.mark.asyncio
async def test_lookup_unregistered_pair_is_none(articles):
    assert await articles.lookup_by_ids(0, 0) is None
    assert await articles.lookup_by_ids(12, 99) is None
    assert not await articles.exists(0, 0)


@pytest.mark.asyncio
async def test_dangling_index_entry_logs_warning(articles, ledgers, caplog):
    ledgers.registry.put('News', 'RootByItem', 1, 1, value='0x' + '11' * 32)

    with caplog.at_level(logging.WARNING):
        assert await articles.lookup_by_ids(1, 1) is None

    assert "inconsistency" in caplog.text
    assert await articles.exists(1, 1)


@pytest.mark.asyncio
async def test_lookup_by_publisher_in_index_order(articles, alice, bob):
    first = await record(articles, alice, "first", unit_id=0)
    await record(articles, bob, "bob's", container_id=1, unit_id=0)
    second = await record(articles, alice, "second", unit_id=1)

    records = await articles.lookup_by_publisher(alice.address)

    assert [r.content_hash for r in records] == [first.hex(), second.hex()]


@pytest.mark.asyncio
async def test_lookup_by_publisher_returns_resolvable_subset(articles, ledgers, alice, caplog):
    first = await record(articles, alice, "first", unit_id=0)
    second = await record(articles, alice, "second", unit_id=1)
    ledgers.registry.remove('News', 'ArticleByHash', first.hex())

    with caplog.at_level(logging.WARNING):
        records = await articles.lookup_by_publisher(alice.address)

    assert [r.content_hash for r in records] == [second.hex()]
    assert first.hex() in caplog.text


@pytest.mark.asyncio
async def test_lookup_by_publisher_skips_unreadable_record(articles, ledgers, alice, caplog):
    first = await record(articles, alice, "first", unit_id=0)
    second = await record(articles, alice, "second", unit_id=1)
    third = await record(articles, alice, "third", unit_id=2)
    ledgers.registry.fail_reads.add(('ArticleByHash', (second.hex(),)))

    with caplog.at_level(logging.WARNING):
        records = await articles.lookup_by_publisher(alice.address)

    assert [r.content_hash for r in records] == [first.hex(), third.hex()]
    assert second.hex() in caplog.text


@pytest.mark.asyncio
async def test_lookup_by_publisher_without_articles(articles, alice):
    assert await articles.lookup_by_publisher(alice.address) == []


@pytest.mark.asyncio
async def test_lookup_by_publisher_invalid_address(articles, ledgers):
    with pytest.raises(InvalidAddress):
        await articles.lookup_by_publisher("5GrwvaEF")
    assert ledgers.registry.reads == []
