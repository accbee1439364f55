"""
Contract proxies backed by ``eth_call`` over JSON-RPC
"""

import asyncio
from typing import Any, Tuple
import aiohttp
from eth_abi.exceptions import DecodingError, EncodingError
from eth_utils import to_checksum_address
from loguru import logger

from ..clients.base import BaseRPCClient
from ..exceptions import ContractCallFailed, RPCError
from .abi import PROVIDER_TOKEN_ABI, SVG_HELPER_ABI, TOKEN_GATE_ABI, ContractABI
from .base import (
    ContractFactory,
    SVGHelperContract,
    SVGPart,
    TokenContract,
    TokenGateContract,
)

CALL_ERRORS = (
    RPCError,
    aiohttp.ClientError,
    asyncio.TimeoutError,
    DecodingError,
    EncodingError,
    ValueError,
    TypeError,
)


class BoundContract:
    """A contract address paired with its ABI and an RPC client"""

    def __init__(self, address: str, abi: ContractABI, client: BaseRPCClient):
        self.address = to_checksum_address(address)
        self.abi = abi
        self.client = client

    def __repr__(self) -> str:
        return f"<{self.abi.name} at {self.address}>"

    async def call(self, function_name: str, *args: Any) -> Tuple[Any, ...]:
        """Call a view function and return its decoded outputs"""
        function = self.abi.function(function_name)
        try:
            data = function.encode_call(*args)
            raw = await self.client.eth_call(self.address, data)
            return function.decode_result(raw)
        except CALL_ERRORS as e:
            logger.error(f"{self.abi.name}.{function.signature} at {self.address} failed: {e!r}")
            raise ContractCallFailed(function_name, args) from e


class EVMTokenContract(BoundContract, TokenContract):
    """Token contract binding"""

    def __init__(self, address: str, client: BaseRPCClient, abi: ContractABI = PROVIDER_TOKEN_ABI):
        super().__init__(address, abi, client)

    async def total_supply(self) -> int:
        (supply,) = await self.call("totalSupply")
        return supply

    async def mint_limit(self) -> int:
        (limit,) = await self.call("mintLimit")
        return limit

    async def balance_of(self, account: str) -> int:
        (balance,) = await self.call("balanceOf", account)
        return balance

    async def mint_price_for(self, account: str) -> int:
        (price,) = await self.call("mintPriceFor", account)
        return price

    async def debug_token_uri(self, token_id: int) -> Tuple[str, int]:
        token_uri, gas = await self.call("debugTokenURI", token_id)
        return token_uri, gas


class EVMTokenGateContract(BoundContract, TokenGateContract):
    """Token gate binding"""

    def __init__(self, address: str, client: BaseRPCClient, abi: ContractABI = TOKEN_GATE_ABI):
        super().__init__(address, abi, client)

    async def balance_of(self, account: str) -> Any:
        (balance,) = await self.call("balanceOf", account)
        return balance


class EVMSVGHelperContract(BoundContract, SVGHelperContract):
    """SVG helper binding"""

    def __init__(self, address: str, client: BaseRPCClient, abi: ContractABI = SVG_HELPER_ABI):
        super().__init__(address, abi, client)

    async def generate_svg_part(self, provider_address: str, asset_id: int) -> SVGPart:
        svg_part, tag, gas = await self.call("generateSVGPart", provider_address, asset_id)
        return SVGPart(svg_part, tag, gas)


class EVMContractFactory(ContractFactory):
    """Creates contract bindings sharing one RPC client"""

    def __init__(
        self,
        client: BaseRPCClient,
        token_abi: ContractABI = PROVIDER_TOKEN_ABI,
        token_gate_abi: ContractABI = TOKEN_GATE_ABI,
        svg_helper_abi: ContractABI = SVG_HELPER_ABI,
    ):
        self.client = client
        self.token_abi = token_abi
        self.token_gate_abi = token_gate_abi
        self.svg_helper_abi = svg_helper_abi

    def token(self, address: str) -> EVMTokenContract:
        return EVMTokenContract(address, self.client, self.token_abi)

    def token_gate(self, address: str) -> EVMTokenGateContract:
        return EVMTokenGateContract(address, self.client, self.token_gate_abi)

    def svg_helper(self, address: str) -> EVMSVGHelperContract:
        return EVMSVGHelperContract(address, self.client, self.svg_helper_abi)
