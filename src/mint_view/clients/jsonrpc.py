"""Ethereum JSON-RPC client"""

from eth_utils import decode_hex, encode_hex

from .base import BaseRPCClient


class EthereumRPCClient(BaseRPCClient):
    """Read-only Ethereum node client"""

    async def eth_call(self, to: str, data: bytes, block: str = "latest") -> bytes:
        """Run ``eth_call`` and return the raw return data"""
        result = await self._request(
            "eth_call",
            [{"to": to, "data": encode_hex(data)}, block],
        )
        if not isinstance(result, str):
            raise ValueError(f"Unexpected eth_call result: {result!r}")
        return decode_hex(result)
