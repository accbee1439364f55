"""
Pydantic models for collection and token-gate state
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


class Token(BaseModel):
    """A minted token as shown in the recent-tokens strip"""

    model_config = ConfigDict(frozen=True)

    token_id: int = Field(ge=0)
    image: str  # data URI taken from the token metadata


class DecodedTokenURI(BaseModel):
    """Result of decoding an on-chain token URI"""

    model_config = ConfigDict(frozen=True)

    metadata: Dict[str, Any]
    image: bytes

    @property
    def svg(self) -> str:
        """Image payload as text (SVG markup)"""
        return self.image.decode("utf-8")


class CollectionState(BaseModel):
    """Snapshot of a collection's supply, next preview and latest tokens"""

    total_supply: int = Field(ge=0)
    mint_limit: int = Field(ge=0)
    next_image: Optional[str] = None
    generation_gas: Optional[int] = None
    recent_tokens: List[Token] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_minted_out(self) -> "CollectionState":
        if self.total_supply >= self.mint_limit and self.next_image is not None:
            raise ValueError("next_image must be absent once total_supply reaches mint_limit")
        return self

    @property
    def is_minted_out(self) -> bool:
        return self.total_supply >= self.mint_limit

    @property
    def remaining(self) -> int:
        return max(0, self.mint_limit - self.total_supply)


class GateState(BaseModel):
    """Per-account balances and price used to decide mint eligibility"""

    total_balance_at_gate_contract: int = Field(default=0, ge=0)
    balance_at_token_contract: int = Field(default=0, ge=0)
    mint_price: int = Field(default=0, ge=0)  # wei


class ExplorerLinks(BaseModel):
    """Block explorer and marketplace URLs for a content contract"""

    etherscan_base: str
    opensea_base: str
    etherscan_token: str
    opensea_path: str
