"""
JsonRpcLedgerClient - LedgerClient over a JSON-RPC 2.0 ledger gateway.

Methods used:
- system_health                 connectivity check on connect()
- edunews_readLatest            {pallet, item, keys} -> value | null
- edunews_submitAndWatch        {call, signer, signature} -> {tx_hash, block_hash, block_number, events}
                                (returns once the extrinsic is finalized)

The call is signed over its canonical JSON encoding (sorted keys, no spaces).
"""
import json
import logging
from typing import Any, Optional

import httpx

from edunews.errors import LedgerTimeout, LedgerUnavailable, SubmissionRejected
from edunews.services.ledger_client import ExtrinsicReceipt, LedgerCall, LedgerClient, StorageQuery

logger = logging.getLogger(__name__)


class JsonRpcError(Exception):
    """Error object returned by the gateway."""

    def __init__(self, code: int, message: str, data: Any = None):
        self.code = code
        self.message = message
        self.data = data
        super().__init__(f"[{code}] {message}")


def encode_call(call: LedgerCall) -> bytes:
    """Canonical bytes of a call (what the signer signs)."""
    return json.dumps(
        {'pallet': call.pallet, 'function': call.function, 'args': call.args},
        sort_keys=True,
        separators=(',', ':')
    ).encode('utf-8')


class JsonRpcLedgerClient(LedgerClient):
    """httpx-based client for one ledger gateway."""

    def __init__(
        self,
        chain: str,
        url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        finality_timeout: float = 120.0
    ):
        self.chain = chain
        self.url = url
        self.timeout = timeout
        self.finality_timeout = finality_timeout
        self._transport = transport
        self.http: Optional[httpx.AsyncClient] = None
        self._request_id = 0

    async def connect(self):
        """Open the HTTP client and verify the gateway answers."""
        if self.http is None:
            self.http = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        try:
            await self._request('system_health', [])
        except (LedgerUnavailable, JsonRpcError) as e:
            await self.close()
            if isinstance(e, LedgerUnavailable):
                raise
            raise LedgerUnavailable(self.chain, str(e)) from e
        logger.info(f"✅ Connected to {self.chain} at {self.url}")

    async def close(self):
        if self.http is not None:
            await self.http.aclose()
            self.http = None
            logger.info(f"🔌 Closed {self.chain} connection")

    async def _request(self, method: str, params: Any, timeout: Optional[float] = None) -> Any:
        if self.http is None:
            raise LedgerUnavailable(self.chain, "client is not connected")
        if timeout is None:
            timeout = self.timeout

        self._request_id += 1
        payload = {
            'jsonrpc': '2.0',
            'id': self._request_id,
            'method': method,
            'params': params,
        }

        try:
            response = await self.http.post(self.url, json=payload, timeout=timeout)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise LedgerTimeout(self.chain, method, timeout) from e
        except httpx.HTTPError as e:
            raise LedgerUnavailable(self.chain, f"{method}: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise LedgerUnavailable(self.chain, f"{method}: invalid JSON response") from e

        error = body.get('error')
        if error:
            raise JsonRpcError(error.get('code', -1), error.get('message', 'unknown error'), error.get('data'))
        return body.get('result')

    async def read_latest(self, query: StorageQuery) -> Optional[Any]:
        params = {'pallet': query.pallet, 'item': query.item, 'keys': list(query.keys)}
        try:
            return await self._request('edunews_readLatest', params)
        except JsonRpcError as e:
            raise LedgerUnavailable(self.chain, f"read {query.describe()} failed: {e}") from e

    async def submit_and_await_finality(self, call: LedgerCall, signer) -> ExtrinsicReceipt:
        signature = signer.sign(encode_call(call))
        params = {
            'call': {'pallet': call.pallet, 'function': call.function, 'args': call.args},
            'signer': signer.address,
            'signature': '0x' + signature.hex(),
        }

        try:
            # Held open until finality, so bounded by the finality timeout
            result = await self._request('edunews_submitAndWatch', params, timeout=self.finality_timeout)
        except JsonRpcError as e:
            raise SubmissionRejected(self.chain, call.name, e.message) from e

        if not result or not result.get('tx_hash'):
            raise SubmissionRejected(self.chain, call.name, "no finalized receipt returned")

        return ExtrinsicReceipt(
            tx_hash=result['tx_hash'],
            block_hash=result.get('block_hash'),
            block_number=result.get('block_number'),
            events=result.get('events') or [],
        )
