"""
Ledger Endpoint Configuration
=============================

Resolves the three ledger endpoints for a network. The result is an explicit
value handed to client construction; nothing reads the network globally.
"""
from dataclasses import dataclass
from typing import Dict

from .settings import Settings

# Per-network defaults: (registry, issuance, identity)
NETWORK_ENDPOINTS: Dict[str, Dict[str, str]] = {
    'local': {
        'registry': 'http://127.0.0.1:9944',
        'issuance': 'http://127.0.0.1:9945',
        'identity': 'http://127.0.0.1:9946',
    },
}


@dataclass(frozen=True)
class LedgerEndpoints:
    """RPC endpoints and timeouts for the three ledgers."""
    network: str
    registry: str
    issuance: str
    identity: str
    read_timeout: float = 30.0
    finality_timeout: float = 120.0


def get_ledger_endpoints(settings: Settings) -> LedgerEndpoints:
    """
    Build endpoints from settings.

    Explicit *_rpc_url settings win over the network defaults.

    Raises:
        ValueError: Unknown network and no explicit URL for some ledger
    """
    defaults = NETWORK_ENDPOINTS.get(settings.network, {})
    urls = {
        'registry': settings.registry_rpc_url or defaults.get('registry'),
        'issuance': settings.issuance_rpc_url or defaults.get('issuance'),
        'identity': settings.identity_rpc_url or defaults.get('identity'),
    }
    missing = [name for name, url in urls.items() if not url]
    if missing:
        raise ValueError(
            f"No endpoint for {', '.join(missing)} on network '{settings.network}'. "
            f"Set {', '.join(m.upper() + '_RPC_URL' for m in missing)}"
        )

    return LedgerEndpoints(
        network=settings.network,
        read_timeout=settings.read_timeout_seconds,
        finality_timeout=settings.finality_timeout_seconds,
        **urls
    )
