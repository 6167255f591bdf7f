from pydantic_settings import BaseSettings
from pydantic import field_validator
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables can come from:
    - .env file (for the signing mnemonic)
    - System environment

    Endpoint URLs default per network (see config.networks) and can be
    overridden one ledger at a time:
    - REGISTRY_RPC_URL (EduChain news pallet)
    - ISSUANCE_RPC_URL (AssetHub NFT pallet)
    - IDENTITY_RPC_URL (PeopleHub identity pallet)
    """

    # Network selection
    network: str = "local"
    registry_rpc_url: Optional[str] = None
    issuance_rpc_url: Optional[str] = None
    identity_rpc_url: Optional[str] = None

    # Timeouts (seconds)
    read_timeout_seconds: float = 30.0
    finality_timeout_seconds: float = 120.0

    # Metadata label set on newly created publisher collections
    collection_label: str = "news"

    # Publisher registration lock (in-process unless redis_url is set)
    redis_url: Optional[str] = None
    registration_lock_ttl_seconds: int = 600

    # Signing (from .env)
    edunews_mnemonic: Optional[str] = None

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore extra env vars

    @field_validator('network', mode='before')
    @classmethod
    def normalize_network(cls, v):
        """Network names are case-insensitive"""
        return (v or "local").strip().lower()

    @field_validator('read_timeout_seconds', 'finality_timeout_seconds')
    @classmethod
    def positive_timeout(cls, v):
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
