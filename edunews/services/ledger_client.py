"""
Ledger Client - the capability each ledger exposes to this package

A ledger is reached only through two operations:
- read_latest(query): read storage at the latest finalized state
- submit_and_await_finality(call, signer): sign, submit and wait for finality

Concrete clients (JSON-RPC gateway, in-memory fakes) implement LedgerClient.
Repositories never talk to a client directly; they go through BoundedLedger,
which bounds every round trip with a timeout and maps transport failures onto
the package error taxonomy.
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from edunews.errors import EduNewsError, LedgerTimeout, LedgerUnavailable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StorageQuery:
    """Storage item address: pallet, item name and map keys."""
    pallet: str
    item: str
    keys: Tuple[Any, ...] = ()

    def describe(self) -> str:
        keys = ", ".join(str(k) for k in self.keys)
        return f"{self.pallet}.{self.item}({keys})"


@dataclass(frozen=True)
class LedgerCall:
    """An unsigned call; the client signs and wraps it into an extrinsic."""
    pallet: str
    function: str
    args: Dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return f"{self.pallet}.{self.function}"


@dataclass(frozen=True)
class ExtrinsicReceipt:
    """Proof that a submitted call reached finality."""
    tx_hash: str
    block_hash: Optional[str] = None
    block_number: Optional[int] = None
    events: List[Dict[str, Any]] = field(default_factory=list)


class LedgerClient(ABC):
    """Connection to one ledger. Stateless after connect, safe for concurrent reads."""

    chain: str = "ledger"

    async def connect(self):
        """Establish the connection (no-op by default)."""

    async def close(self):
        """Release the connection (no-op by default)."""

    @abstractmethod
    async def read_latest(self, query: StorageQuery) -> Optional[Any]:
        """Return the storage value at the latest finalized block, or None."""

    @abstractmethod
    async def submit_and_await_finality(self, call: LedgerCall, signer) -> ExtrinsicReceipt:
        """Sign `call` with `signer`, submit it and wait until it is finalized."""


class BoundedLedger:
    """
    Timeout-bounded access to a LedgerClient.

    - Reads are bounded by read_timeout, submissions by finality_timeout
    - asyncio timeouts become LedgerTimeout
    - OSError / ConnectionError become LedgerUnavailable
    - Package errors (SubmissionRejected, ...) pass through unchanged
    - Cancellation propagates to the caller
    """

    def __init__(
        self,
        client: LedgerClient,
        read_timeout: float = 30.0,
        finality_timeout: float = 120.0
    ):
        self.client = client
        self.read_timeout = read_timeout
        self.finality_timeout = finality_timeout

    @property
    def chain(self) -> str:
        return self.client.chain

    async def read(self, query: StorageQuery) -> Optional[Any]:
        try:
            return await asyncio.wait_for(
                self.client.read_latest(query),
                timeout=self.read_timeout
            )
        except asyncio.TimeoutError:
            logger.warning(f"⏱️  [{self.chain}] read {query.describe()} timed out")
            raise LedgerTimeout(self.chain, f"read {query.describe()}", self.read_timeout)
        except EduNewsError:
            raise
        except (OSError, ConnectionError) as e:
            raise LedgerUnavailable(self.chain, str(e)) from e

    async def submit(self, call: LedgerCall, signer) -> ExtrinsicReceipt:
        logger.debug(f"[{self.chain}] submitting {call.name}")
        try:
            receipt = await asyncio.wait_for(
                self.client.submit_and_await_finality(call, signer),
                timeout=self.finality_timeout
            )
        except asyncio.TimeoutError:
            logger.warning(f"⏱️  [{self.chain}] {call.name} not finalized in time")
            raise LedgerTimeout(self.chain, call.name, self.finality_timeout)
        except EduNewsError:
            raise
        except (OSError, ConnectionError) as e:
            raise LedgerUnavailable(self.chain, str(e)) from e

        logger.debug(f"[{self.chain}] {call.name} finalized: {receipt.tx_hash}")
        return receipt
