"""
Error taxonomy for cross-ledger article publishing.

Every failure a caller can observe falls into one of a few categories:
- invalid_input: the request was malformed (rejected before any network call)
- ledger_unreachable: a ledger could not be reached or timed out
- not_found: a record does not exist (usually modelled as None, not raised)
- partial_write: a two-step write finalized step 1 but not step 2
- rejected: a ledger refused a submitted transaction
- contention: another registration for the same publisher is in flight
"""
from typing import Optional


class EduNewsError(Exception):
    """Base class for all errors raised by this package."""

    category = "error"


# =============================================================================
# Malformed input
# =============================================================================

class MalformedInput(EduNewsError):
    category = "invalid_input"


class InvalidContentHash(MalformedInput):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid content hash: {value}")


class InvalidAddress(MalformedInput):
    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Invalid address: {address}")


class InvalidMnemonic(MalformedInput):
    """Phrase format is wrong. Words are not checked against a wordlist."""

    def __init__(self):
        super().__init__(
            "Invalid mnemonic phrase: expected 12, 15, 18, 21 or 24 lowercase words "
            "and non-empty //junctions (format check only, no wordlist or checksum)"
        )


class NoContentProvided(MalformedInput):
    def __init__(self):
        super().__init__("Content must be provided either via content or content_file")


class ContentFileError(MalformedInput):
    def __init__(self, path: str, cause: Exception):
        self.path = path
        super().__init__(f"Failed to read file {path}: {cause}")


# =============================================================================
# Ledger availability
# =============================================================================

class LedgerUnavailable(EduNewsError):
    """A ledger could not be reached. Never retried by this package."""

    category = "ledger_unreachable"

    def __init__(self, chain: str, reason: str):
        self.chain = chain
        self.reason = reason
        super().__init__(f"Failed to connect to {chain}: {reason}")


class LedgerTimeout(LedgerUnavailable):
    def __init__(self, chain: str, operation: str, timeout: float):
        self.operation = operation
        self.timeout = timeout
        super().__init__(chain, f"{operation} timed out after {timeout:g}s")


class SubmissionRejected(EduNewsError):
    category = "rejected"

    def __init__(self, chain: str, call: str, reason: str):
        self.chain = chain
        self.call = call
        self.reason = reason
        super().__init__(f"{chain} rejected {call}: {reason}")


# =============================================================================
# Not found
# =============================================================================

class NotFound(EduNewsError):
    category = "not_found"


class ArticleNotFound(NotFound):
    def __init__(self, container_id: int, unit_id: int):
        self.container_id = container_id
        self.unit_id = unit_id
        super().__init__(f"Article not found: collection {container_id}, item {unit_id}")


class CollectionNotFound(NotFound):
    def __init__(self, container_id: int):
        self.container_id = container_id
        super().__init__(f"Collection not found: {container_id}")


# =============================================================================
# Write path
# =============================================================================

class PartialWriteInconsistency(EduNewsError):
    """
    Step 1 of a two-step write reached finality, step 2 did not.

    `write` is the ContainerWrite/UnitWrite marker describing what exists on
    the ledger, so the caller can re-run only the missing half.
    """

    category = "partial_write"

    def __init__(self, write, cause: Optional[Exception] = None):
        self.write = write
        self.cause = cause
        super().__init__(f"Partial write: {write.describe()} ({cause})")


class RegistrationContention(EduNewsError):
    category = "contention"

    def __init__(self, publisher: str):
        self.publisher = publisher
        super().__init__(f"A registration for publisher {publisher} is already in progress")
