"""
Domain Models - Ledger-agnostic data structures

Repositories translate ledger storage values into these models; services and
front ends only see these.
"""
from .collectible import WritePhase, ContainerWrite, UnitWrite, RegistrationWrite
from .article import RegistryRecord, Article
from .identity import IdentityAttestation
from .results import RegistrationResult, VerificationResult, BindingAudit

__all__ = [
    'WritePhase',
    'ContainerWrite',
    'UnitWrite',
    'RegistrationWrite',
    'RegistryRecord',
    'Article',
    'IdentityAttestation',
    'RegistrationResult',
    'VerificationResult',
    'BindingAudit',
]
