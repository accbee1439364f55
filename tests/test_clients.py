"""
Tests for the JSON-RPC transport using a fake aiohttp session
"""

import asyncio

import aiohttp
import pytest
from tenacity import wait_none

from mint_view.clients import EthereumRPCClient
from mint_view.contracts import EVMTokenContract
from mint_view.exceptions import ContractCallFailed, RPCError

from conftest import TOKEN_ADDRESS, FakeSession, uint_result


class TestEthereumRPCClient:

    @pytest.mark.asyncio
    async def test_eth_call_payload(self):
        session = FakeSession([{"jsonrpc": "2.0", "id": 1, "result": "0x" + "00" * 31 + "2a"}])
        client = EthereumRPCClient("http://node", session=session)

        result = await client.eth_call(TOKEN_ADDRESS, bytes.fromhex("18160ddd"))

        assert result == (42).to_bytes(32, "big")
        (url, payload), = session.requests
        assert url == "http://node"
        assert payload["method"] == "eth_call"
        assert payload["params"] == [{"to": TOKEN_ADDRESS, "data": "0x18160ddd"}, "latest"]

    @pytest.mark.asyncio
    async def test_request_ids_increase(self):
        body = {"jsonrpc": "2.0", "result": "0x"}
        session = FakeSession([body, body])
        client = EthereumRPCClient("http://node", session=session)

        await client.eth_call(TOKEN_ADDRESS, b"\x00")
        await client.eth_call(TOKEN_ADDRESS, b"\x00")

        assert [p["id"] for _, p in session.requests] == [1, 2]

    @pytest.mark.asyncio
    async def test_rpc_error_is_not_retried(self):
        session = FakeSession([{"jsonrpc": "2.0", "error": {"code": 3, "message": "execution reverted"}}])
        client = EthereumRPCClient("http://node", session=session, max_retries=3)

        with pytest.raises(RPCError) as exc_info:
            await client.eth_call(TOKEN_ADDRESS, b"\x00")

        assert exc_info.value.code == 3
        assert len(session.requests) == 1

    @pytest.mark.asyncio
    async def test_connection_error_surfaces(self):
        session = FakeSession(error=aiohttp.ClientConnectionError("refused"))
        client = EthereumRPCClient("http://node", session=session, max_retries=1)

        with pytest.raises(aiohttp.ClientConnectionError):
            await client.eth_call(TOKEN_ADDRESS, b"\x00")

        assert len(session.requests) == 1

    @pytest.mark.asyncio
    async def test_non_string_result(self):
        session = FakeSession([{"jsonrpc": "2.0", "result": None}])
        client = EthereumRPCClient("http://node", session=session)

        with pytest.raises(ValueError):
            await client.eth_call(TOKEN_ADDRESS, b"\x00")

    @pytest.mark.asyncio
    async def test_borrowed_session_is_not_closed(self):
        session = FakeSession()

        async with EthereumRPCClient("http://node", session=session):
            pass

        assert session.closed is False


def _status_error(status: int) -> aiohttp.ClientResponseError:
    return aiohttp.ClientResponseError(request_info=None, history=(), status=status)


class TestMalformedResponses:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [None, [], "ok", {"jsonrpc": "2.0", "error": "rate limited"}])
    async def test_malformed_body_is_rpc_error(self, body):
        client = EthereumRPCClient("http://node", session=FakeSession([body]))

        with pytest.raises(RPCError):
            await client.eth_call(TOKEN_ADDRESS, b"\x00")

    @pytest.mark.asyncio
    async def test_null_body_becomes_call_failure(self):
        client = EthereumRPCClient("http://node", session=FakeSession([None]))

        with pytest.raises(ContractCallFailed) as exc_info:
            await EVMTokenContract(TOKEN_ADDRESS, client).total_supply()

        assert exc_info.value.method == "totalSupply"
        assert isinstance(exc_info.value.__cause__, RPCError)


class TestRetries:

    @pytest.mark.asyncio
    async def test_dropped_connection_is_retried(self):
        session = FakeSession([aiohttp.ClientConnectionError("reset"), uint_result(7)])
        client = EthereumRPCClient("http://node", session=session, max_retries=2, retry_wait=wait_none())

        result = await client.eth_call(TOKEN_ADDRESS, b"\x00")

        assert int.from_bytes(result, "big") == 7
        assert len(session.requests) == 2

    @pytest.mark.asyncio
    async def test_timeout_is_retried(self):
        session = FakeSession([asyncio.TimeoutError(), uint_result(1)])
        client = EthereumRPCClient("http://node", session=session, max_retries=3, retry_wait=wait_none())

        await client.eth_call(TOKEN_ADDRESS, b"\x00")

        assert len(session.requests) == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [429, 502, 503, 504])
    async def test_throttling_and_gateway_errors_are_retried(self, status):
        session = FakeSession([_status_error(status), uint_result(3)])
        client = EthereumRPCClient("http://node", session=session, max_retries=2, retry_wait=wait_none())

        result = await client.eth_call(TOKEN_ADDRESS, b"\x00")

        assert int.from_bytes(result, "big") == 3
        assert len(session.requests) == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 401, 500])
    async def test_other_statuses_are_not_retried(self, status):
        session = FakeSession([_status_error(status), uint_result(3)])
        client = EthereumRPCClient("http://node", session=session, max_retries=3, retry_wait=wait_none())

        with pytest.raises(aiohttp.ClientResponseError) as exc_info:
            await client.eth_call(TOKEN_ADDRESS, b"\x00")

        assert exc_info.value.status == status
        assert len(session.requests) == 1

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self):
        session = FakeSession(error=aiohttp.ClientConnectionError("down"))
        client = EthereumRPCClient("http://node", session=session, max_retries=3, retry_wait=wait_none())

        with pytest.raises(aiohttp.ClientConnectionError):
            await client.eth_call(TOKEN_ADDRESS, b"\x00")

        assert len(session.requests) == 3
