"""
Tests for BoundedLedger and the JSON-RPC gateway client.
"""
import json

import httpx
import pytest

from edunews.errors import LedgerTimeout, LedgerUnavailable, SubmissionRejected
from edunews.services.ledger_client import BoundedLedger, LedgerCall, StorageQuery
from edunews.services.rpc_client import JsonRpcLedgerClient, encode_call
from edunews.services.signer import verify_signature
from edunews.tests.fakes import FakeAssetHub


# =============================================================================
# BoundedLedger
# =============================================================================

@pytest.mark.asyncio
async def test_read_passes_value_through():
    ledger = FakeAssetHub()
    ledger.put('Nfts', 'NextCollectionId', value=3)
    bounded = BoundedLedger(ledger, read_timeout=1.0)
    assert await bounded.read(StorageQuery('Nfts', 'NextCollectionId')) == 3
    assert await bounded.read(StorageQuery('Nfts', 'Collection', (0,))) is None


@pytest.mark.asyncio
async def test_slow_read_times_out():
    ledger = FakeAssetHub()
    ledger.delay = 0.5
    bounded = BoundedLedger(ledger, read_timeout=0.05)
    with pytest.raises(LedgerTimeout) as exc:
        await bounded.read(StorageQuery('Nfts', 'NextCollectionId'))
    assert exc.value.chain == 'AssetHub'
    assert exc.value.category == 'ledger_unreachable'


@pytest.mark.asyncio
async def test_slow_submit_times_out(alice):
    ledger = FakeAssetHub()
    ledger.delay = 0.5
    bounded = BoundedLedger(ledger, read_timeout=1.0, finality_timeout=0.05)
    with pytest.raises(LedgerTimeout):
        await bounded.submit(LedgerCall('Nfts', 'create', {'admin': alice.address, 'config': {}}), alice)
    assert ledger.submitted == []


@pytest.mark.asyncio
async def test_connection_error_becomes_ledger_unavailable():
    ledger = FakeAssetHub()
    ledger.down = True
    bounded = BoundedLedger(ledger)
    with pytest.raises(LedgerUnavailable) as exc:
        await bounded.read(StorageQuery('Nfts', 'NextCollectionId'))
    assert "AssetHub" in str(exc.value)


@pytest.mark.asyncio
async def test_rejection_passes_through(alice):
    ledger = FakeAssetHub()
    ledger.reject.add('Nfts.create')
    bounded = BoundedLedger(ledger)
    with pytest.raises(SubmissionRejected):
        await bounded.submit(LedgerCall('Nfts', 'create', {'admin': alice.address, 'config': {}}), alice)


# =============================================================================
# JsonRpcLedgerClient
# =============================================================================

def gateway(handler):
    """MockTransport answering JSON-RPC requests with handler(method, params)."""
    requests = []

    def respond(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        requests.append(body)
        outcome = handler(body['method'], body['params'])
        if isinstance(outcome, httpx.Response):
            return outcome
        kind, value = outcome
        return httpx.Response(200, json={'jsonrpc': '2.0', 'id': body['id'], kind: value})

    return httpx.MockTransport(respond), requests


@pytest.mark.asyncio
async def test_rpc_read_latest():
    def handler(method, params):
        if method == 'system_health':
            return 'result', {'peers': 3}
        assert params == {'pallet': 'News', 'item': 'RootByItem', 'keys': [0, 1]}
        return 'result', '0x' + 'ab' * 32

    transport, requests = gateway(handler)
    client = JsonRpcLedgerClient('EduChain', 'http://gateway', transport=transport)
    await client.connect()
    try:
        value = await client.read_latest(StorageQuery('News', 'RootByItem', (0, 1)))
    finally:
        await client.close()

    assert value == '0x' + 'ab' * 32
    assert [r['method'] for r in requests] == ['system_health', 'edunews_readLatest']


@pytest.mark.asyncio
async def test_rpc_submit_signs_canonical_call(alice):
    call = LedgerCall('Nfts', 'mint', {'collection': 0, 'item': 0, 'mint_to': alice.address, 'witness_data': None})

    def handler(method, params):
        if method == 'system_health':
            return 'result', {}
        return 'result', {'tx_hash': '0xfeed', 'block_hash': '0xbeef', 'block_number': 7}

    transport, requests = gateway(handler)
    client = JsonRpcLedgerClient('AssetHub', 'http://gateway', transport=transport)
    await client.connect()
    receipt = await client.submit_and_await_finality(call, alice)
    await client.close()

    assert receipt.tx_hash == '0xfeed'
    assert receipt.block_number == 7

    params = requests[-1]['params']
    assert params['signer'] == alice.address
    signature = bytes.fromhex(params['signature'][2:])
    assert verify_signature(alice.address, encode_call(call), signature)


@pytest.mark.asyncio
async def test_rpc_submit_error_is_rejection(alice):
    def handler(method, params):
        if method == 'system_health':
            return 'result', {}
        return 'error', {'code': 1010, 'message': 'Invalid Transaction'}

    transport, _ = gateway(handler)
    client = JsonRpcLedgerClient('AssetHub', 'http://gateway', transport=transport)
    await client.connect()
    with pytest.raises(SubmissionRejected) as exc:
        await client.submit_and_await_finality(LedgerCall('Nfts', 'create', {}), alice)
    await client.close()
    assert exc.value.reason == 'Invalid Transaction'


@pytest.mark.asyncio
async def test_rpc_http_failure_is_unavailable():
    def handler(method, params):
        return httpx.Response(502, text='bad gateway')

    transport, _ = gateway(handler)
    client = JsonRpcLedgerClient('PeopleHub', 'http://gateway', transport=transport)
    with pytest.raises(LedgerUnavailable):
        await client.connect()
    assert client.http is None


@pytest.mark.asyncio
async def test_rpc_read_without_connect_is_unavailable():
    client = JsonRpcLedgerClient('PeopleHub', 'http://gateway')
    with pytest.raises(LedgerUnavailable):
        await client.read_latest(StorageQuery('Identity', 'IdentityOf', ('0x00',)))


@pytest.mark.asyncio
async def test_rpc_transport_error_is_unavailable():
    def respond(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = JsonRpcLedgerClient('EduChain', 'http://gateway', transport=httpx.MockTransport(respond))
    with pytest.raises(LedgerUnavailable) as exc:
        await client.connect()
    assert not isinstance(exc.value, LedgerTimeout)


@pytest.mark.asyncio
async def test_rpc_timeout_is_ledger_timeout():
    def respond(request):
        raise httpx.ReadTimeout("slow", request=request)

    client = JsonRpcLedgerClient('EduChain', 'http://gateway', transport=httpx.MockTransport(respond))
    with pytest.raises(LedgerTimeout):
        await client.connect()


@pytest.mark.asyncio
async def test_rpc_submit_waits_for_finality_timeout(alice):
    timeouts = {}

    def respond(request):
        method = json.loads(request.content)['method']
        timeouts[method] = request.extensions['timeout']['read']
        result = {'tx_hash': '0xfeed'} if method == 'edunews_submitAndWatch' else {}
        return httpx.Response(200, json={'jsonrpc': '2.0', 'id': 1, 'result': result})

    client = JsonRpcLedgerClient(
        'AssetHub', 'http://gateway',
        timeout=30.0,
        transport=httpx.MockTransport(respond),
        finality_timeout=120.0,
    )
    await client.connect()
    await client.read_latest(StorageQuery('Nfts', 'NextCollectionId'))
    await client.submit_and_await_finality(LedgerCall('Nfts', 'create', {}), alice)
    await client.close()

    assert timeouts == {
        'system_health': 30.0,
        'edunews_readLatest': 30.0,
        'edunews_submitAndWatch': 120.0,
    }


@pytest.mark.asyncio
async def test_rpc_slow_submit_reports_finality_timeout(alice):
    def respond(request):
        if json.loads(request.content)['method'] == 'edunews_submitAndWatch':
            raise httpx.ReadTimeout("slow", request=request)
        return httpx.Response(200, json={'jsonrpc': '2.0', 'id': 1, 'result': {}})

    client = JsonRpcLedgerClient(
        'AssetHub', 'http://gateway',
        transport=httpx.MockTransport(respond),
        finality_timeout=90.0,
    )
    await client.connect()
    with pytest.raises(LedgerTimeout) as exc:
        await client.submit_and_await_finality(LedgerCall('Nfts', 'create', {}), alice)
    await client.close()

    assert exc.value.timeout == 90.0
    assert exc.value.operation == 'edunews_submitAndWatch'
