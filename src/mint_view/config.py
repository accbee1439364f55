"""
Configuration management for mint_view
"""

import os
from typing import Optional
from dataclasses import dataclass
from pathlib import Path
from dotenv import load_dotenv

from .networks import DEFAULT_ASSET_PROVIDER, rpc_endpoint

# Load environment variables
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_path)


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    """Main configuration class"""

    network: str = "localhost"
    alchemy_api_key: Optional[str] = None
    infura_project_id: Optional[str] = None
    rpc_url: Optional[str] = None  # overrides the provider selection

    # Contracts
    address_book_path: Optional[str] = None
    token_address: Optional[str] = None
    token_gate_address: Optional[str] = None
    token_gated: bool = False
    asset_provider: str = DEFAULT_ASSET_PROVIDER

    # Request settings
    timeout: int = 30
    max_retries: int = 3
    max_concurrency: int = 10

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables"""
        return cls(
            network=os.getenv("NETWORK", "localhost"),
            alchemy_api_key=os.getenv("ALCHEMY_API_KEY") or None,
            infura_project_id=os.getenv("INFURA_PROJECT_ID") or None,
            rpc_url=os.getenv("RPC_URL") or None,
            address_book_path=os.getenv("ADDRESS_BOOK_PATH") or None,
            token_address=os.getenv("TOKEN_ADDRESS") or None,
            token_gate_address=os.getenv("TOKEN_GATE_ADDRESS") or None,
            token_gated=_get_bool("TOKEN_GATED"),
            asset_provider=os.getenv("ASSET_PROVIDER", DEFAULT_ASSET_PROVIDER),
            timeout=int(os.getenv("TIMEOUT", "30")),
            max_retries=int(os.getenv("MAX_RETRIES", "3")),
            max_concurrency=int(os.getenv("MAX_CONCURRENCY", "10")),
        )

    def get_rpc_url(self, network: Optional[str] = None) -> str:
        """Explicit RPC_URL if set, otherwise the provider endpoint for the network"""
        if self.rpc_url:
            return self.rpc_url
        return rpc_endpoint(
            network or self.network,
            alchemy_key=self.alchemy_api_key,
            infura_key=self.infura_project_id,
        )


# Global config instance
config = Config.from_env()
