"""
Configuration module for settings and ledger endpoints.
"""
from .settings import Settings, get_settings
from .networks import LedgerEndpoints, NETWORK_ENDPOINTS, get_ledger_endpoints

__all__ = [
    'Settings',
    'get_settings',
    'LedgerEndpoints',
    'NETWORK_ENDPOINTS',
    'get_ledger_endpoints',
]
