"""Interfaces for the remote contracts consumed by the fetcher and gate checker"""

from abc import ABC, abstractmethod
from typing import Any, NamedTuple, Tuple


class SVGPart(NamedTuple):
    """Output of the SVG helper: a <defs> fragment, the id to <use>, and gas used"""
    svg_part: str
    tag: str
    gas: int


class TokenContract(ABC):
    """Read surface of the collection's token contract"""

    address: str

    @abstractmethod
    async def total_supply(self) -> int:
        pass

    @abstractmethod
    async def mint_limit(self) -> int:
        pass

    @abstractmethod
    async def balance_of(self, account: str) -> int:
        pass

    @abstractmethod
    async def mint_price_for(self, account: str) -> int:
        """Price in wei that ``account`` pays for the next mint"""
        pass

    @abstractmethod
    async def debug_token_uri(self, token_id: int) -> Tuple[str, int]:
        """Token URI of ``token_id`` and the gas spent generating it"""
        pass


class TokenGateContract(ABC):
    """Auxiliary contract whose balance grants extra mint eligibility"""

    address: str

    @abstractmethod
    async def balance_of(self, account: str) -> Any:
        """Raw uint256 balance; callers widen it before use"""
        pass


class SVGHelperContract(ABC):
    """Renders the SVG part an asset provider would produce for a token index"""

    address: str

    @abstractmethod
    async def generate_svg_part(self, provider_address: str, asset_id: int) -> SVGPart:
        pass


class ContractFactory(ABC):
    """Binds contract addresses to typed contract proxies"""

    @abstractmethod
    def token(self, address: str) -> TokenContract:
        pass

    @abstractmethod
    def token_gate(self, address: str) -> TokenGateContract:
        pass

    @abstractmethod
    def svg_helper(self, address: str) -> SVGHelperContract:
        pass
