"""
Domain Models - Storage-agnostic data structures

These models represent articles, collectibles and identities independent of
the ledger each one lives on. Repositories produce them; services and front
ends consume them.
"""
from .domain import (
    WritePhase,
    ContainerWrite,
    UnitWrite,
    RegistrationWrite,
    RegistryRecord,
    Article,
    IdentityAttestation,
    RegistrationResult,
    VerificationResult,
    BindingAudit,
)

__all__ = [
    # Write path
    'WritePhase',
    'ContainerWrite',
    'UnitWrite',
    'RegistrationWrite',
    'RegistrationResult',

    # Read path
    'RegistryRecord',
    'Article',
    'IdentityAttestation',
    'VerificationResult',
    'BindingAudit',
]
