"""
Collection state fetcher

Reads supply and mint limit from the token contract, previews the next
token through the SVG helper while the collection is still open, and loads
the most recently minted tokens.
"""

from typing import List, Optional
from loguru import logger

from .contracts.base import ContractFactory, TokenContract
from .decoder import decode_token_uri
from .exceptions import (
    ConfigurationError,
    MintViewError,
    TokenFetchFailed,
    UnknownAssetProvider,
)
from .models import CollectionState, Token
from .networks import DEFAULT_ASSET_PROVIDER, SVG_HELPER, AddressBook
from .svg import svg_image_from_svg_part
from .utils import gather_settled, to_count

RECENT_TOKENS = 4


class CollectionStateFetcher:
    """Builds a CollectionState snapshot from on-chain reads"""

    def __init__(
        self,
        address_book: AddressBook,
        contracts: ContractFactory,
        recent_tokens: int = RECENT_TOKENS,
    ):
        self.address_book = address_book
        self.contracts = contracts
        self.recent_tokens = recent_tokens

    def _provider_address(self, name: str, network: str) -> str:
        address = self.address_book.address_of(name, network)
        if address is None:
            raise UnknownAssetProvider(name, network)
        return address

    async def fetch_collection_state(
        self,
        network: str,
        asset_provider_name: Optional[str],
        token_contract: TokenContract,
    ) -> CollectionState:
        """
        Fetch supply, limit, next-token preview and recent tokens

        Every call reads fresh chain state and builds its own result. Any
        failure aborts the whole fetch; no partial state is returned.

        Raises:
            UnknownAssetProvider: the provider has no address on ``network``
            ContractCallFailed: a supply, limit or generation call failed
            TokenFetchFailed: one of the recent tokens could not be loaded
        """
        provider_name = asset_provider_name or DEFAULT_ASSET_PROVIDER
        provider_address = self._provider_address(provider_name, network)

        supply, limit = await gather_settled(
            token_contract.total_supply(),
            token_contract.mint_limit(),
        )
        total_supply = to_count(supply)
        mint_limit = to_count(limit)
        logger.info(f"totalSupply/mintLimit {total_supply}/{mint_limit} on {network}")

        next_image = None
        generation_gas = None
        if total_supply < mint_limit:
            next_image, generation_gas = await self._generate_next_image(
                network, provider_address, total_supply
            )
        else:
            logger.warning(f"Collection at {token_contract.address} is minted out")

        recent = await self._fetch_recent_tokens(token_contract, total_supply)

        return CollectionState(
            total_supply=total_supply,
            mint_limit=mint_limit,
            next_image=next_image,
            generation_gas=generation_gas,
            recent_tokens=recent,
        )

    async def _generate_next_image(self, network: str, provider_address: str, index: int):
        helper_address = self.address_book.address_of(SVG_HELPER, network)
        if helper_address is None:
            raise ConfigurationError(f"No {SVG_HELPER} address on network '{network}'")

        svg_helper = self.contracts.svg_helper(helper_address)
        part = await svg_helper.generate_svg_part(provider_address, index)
        gas = to_count(part.gas)
        logger.debug(f"generateSVGPart({provider_address}, {index}) gas: {gas}")
        return svg_image_from_svg_part(part.svg_part, part.tag), gas

    async def _fetch_recent_tokens(self, token_contract: TokenContract, total_supply: int) -> List[Token]:
        tokens: List[Token] = []
        # Sequential and ascending; the first failure aborts the batch
        for token_id in range(max(0, total_supply - self.recent_tokens), total_supply):
            tokens.append(await self._fetch_token(token_contract, token_id))
        return tokens

    async def _fetch_token(self, token_contract: TokenContract, token_id: int) -> Token:
        try:
            token_uri, gas = await token_contract.debug_token_uri(token_id)
            decoded = decode_token_uri(token_uri)
        except MintViewError as e:
            logger.error(f"Token {token_id} could not be loaded: {e}")
            raise TokenFetchFailed(token_id) from e

        logger.debug(f"debugTokenURI({token_id}) gas: {gas}")
        return Token(token_id=token_id, image=decoded.metadata["image"])
