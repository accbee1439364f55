"""
Pytest configuration and fixtures for mint_view tests.

Contracts are replaced by in-memory fakes that count their calls.
"""

from collections import Counter
from typing import Dict, List, Optional, Tuple

import pytest

from mint_view.contracts.base import (
    ContractFactory,
    SVGHelperContract,
    SVGPart,
    TokenContract,
    TokenGateContract,
)
from mint_view.decoder import encode_token_uri
from mint_view.exceptions import ContractCallFailed
from mint_view.networks import AddressBook

TOKEN_ADDRESS = "0x1111111111111111111111111111111111111111"
PROVIDER_ADDRESS = "0x2222222222222222222222222222222222222222"
SVG_HELPER_ADDRESS = "0x3333333333333333333333333333333333333333"
GATE_ADDRESS = "0x4444444444444444444444444444444444444444"
ACCOUNT = "0x5555555555555555555555555555555555555555"
OTHER_PROVIDER_ADDRESS = "0x6666666666666666666666666666666666666666"


def make_svg(token_id: int) -> bytes:
    return f'<svg xmlns="http://www.w3.org/2000/svg"><text>{token_id}</text></svg>'.encode()


def make_token_uri(token_id: int) -> str:
    return encode_token_uri({"name": f"Token #{token_id}", "description": "test"}, make_svg(token_id))


class FakeTokenContract(TokenContract):
    """Token contract serving canned values"""

    def __init__(
        self,
        total_supply: int = 0,
        mint_limit: int = 10,
        balance: int = 0,
        mint_price: int = 0,
        token_uris: Optional[Dict[int, str]] = None,
        failing: Optional[Dict[str, Exception]] = None,
        address: str = TOKEN_ADDRESS,
    ):
        self.address = address
        self._total_supply = total_supply
        self._mint_limit = mint_limit
        self._balance = balance
        self._mint_price = mint_price
        self.token_uris = token_uris or {}
        self.failing = failing or {}
        self.calls: Counter = Counter()
        self.requested_ids: List[int] = []

    def _record(self, method: str):
        self.calls[method] += 1
        if method in self.failing:
            raise self.failing[method]

    async def total_supply(self) -> int:
        self._record("totalSupply")
        return self._total_supply

    async def mint_limit(self) -> int:
        self._record("mintLimit")
        return self._mint_limit

    async def balance_of(self, account: str) -> int:
        self._record("balanceOf")
        return self._balance

    async def mint_price_for(self, account: str) -> int:
        self._record("mintPriceFor")
        return self._mint_price

    async def debug_token_uri(self, token_id: int) -> Tuple[str, int]:
        self.requested_ids.append(token_id)
        self._record("debugTokenURI")
        uri = self.token_uris.get(token_id, make_token_uri(token_id))
        if isinstance(uri, Exception):
            raise uri
        return uri, 100_000 + token_id


class FakeSVGHelper(SVGHelperContract):
    def __init__(self, address: str = SVG_HELPER_ADDRESS, error: Optional[Exception] = None):
        self.address = address
        self.error = error
        self.requests: List[Tuple[str, int]] = []

    async def generate_svg_part(self, provider_address: str, asset_id: int) -> SVGPart:
        self.requests.append((provider_address, asset_id))
        if self.error is not None:
            raise self.error
        return SVGPart(f'<defs><g id="s{asset_id}"/></defs>', f"s{asset_id}", 2_500_000)


class FakeTokenGate(TokenGateContract):
    def __init__(self, balance=0, address: str = GATE_ADDRESS, error: Optional[Exception] = None):
        self.address = address
        self.balance = balance
        self.error = error
        self.calls = 0

    async def balance_of(self, account: str):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.balance


class FakeContractFactory(ContractFactory):
    def __init__(self, svg_helper=None, token_gate=None):
        self.svg_helper_contract = svg_helper or FakeSVGHelper()
        self.token_gate_contract = token_gate or FakeTokenGate()
        self.svg_helper_addresses: List[str] = []
        self.token_gate_addresses: List[str] = []

    def token(self, address: str) -> TokenContract:
        return FakeTokenContract(address=address)

    def token_gate(self, address: str) -> TokenGateContract:
        self.token_gate_addresses.append(address)
        return self.token_gate_contract

    def svg_helper(self, address: str) -> SVGHelperContract:
        self.svg_helper_addresses.append(address)
        return self.svg_helper_contract


@pytest.fixture
def address_book():
    """Address book with one provider and the SVG helper on goerli"""
    return AddressBook({
        "dotNouns": {"goerli": PROVIDER_ADDRESS},
        "paperNouns": {"goerli": OTHER_PROVIDER_ADDRESS},
        "svgHelper": {"goerli": SVG_HELPER_ADDRESS},
    })


@pytest.fixture
def contracts():
    return FakeContractFactory()


@pytest.fixture
def call_failed():
    return ContractCallFailed("balanceOf", (ACCOUNT,))


def uint_result(value: int) -> dict:
    """JSON-RPC body returning a single ABI-encoded uint256"""
    return {"jsonrpc": "2.0", "id": 1, "result": "0x" + value.to_bytes(32, "big").hex()}


class FakeResponse:
    def __init__(self, body, status=200):
        self.body = body
        self.status = status

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    def raise_for_status(self):
        pass

    async def json(self, content_type="application/json"):
        return self.body


class FakeSession:
    """
    Stand-in for aiohttp.ClientSession

    Each queued item is either a JSON body or an exception raised by post().
    """

    def __init__(self, bodies=None, error=None):
        self.bodies = list(bodies or [])
        self.error = error
        self.closed = False
        self.requests = []

    def post(self, url, json=None):
        self.requests.append((url, json))
        if self.error is not None:
            raise self.error
        item = self.bodies.pop(0)
        if isinstance(item, Exception):
            raise item
        return FakeResponse(item)

    async def close(self):
        self.closed = True
