"""Utility functions for address validation and numeric normalization"""

import asyncio
import re
from typing import Any, Awaitable, List, Optional, Tuple
from eth_utils import is_checksum_address, to_checksum_address
from loguru import logger

UINT256_MAX = 2**256 - 1


def validate_ethereum_address(address: str) -> Tuple[bool, Optional[str]]:
    """
    Validate Ethereum address format

    Returns:
        (is_valid, checksum_address or None)
    """
    if not address or not isinstance(address, str):
        return False, None

    address = address.strip()

    if not re.match(r'^0x[a-fA-F0-9]{40}$', address):
        return False, None

    hex_part = address[2:]
    if hex_part != hex_part.lower() and hex_part != hex_part.upper():
        # Mixed case carries an EIP-55 checksum that must match
        if not is_checksum_address(address):
            logger.debug(f"Address checksum mismatch: {address}")
            return False, None

    return True, to_checksum_address(address)


def require_address(address: str) -> str:
    """Return the checksummed form of an address or raise ValueError"""
    is_valid, checksummed = validate_ethereum_address(address)
    if not is_valid or checksummed is None:
        raise ValueError(f"Invalid Ethereum address: {address!r}")
    return checksummed


def to_count(value: Any) -> int:
    """Normalize a decoded uint result (token supply, balances) into an int"""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Expected an integer result, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"Expected a non-negative result, got {value}")
    return value


def widen_uint256(value: Any) -> int:
    """
    Widen a fixed-width uint256 result into an arbitrary-precision int

    Accepts a Python int, a 0x-prefixed hex string or big-endian bytes
    (up to 32 of them), as returned by different node and ABI layers.
    """
    if isinstance(value, (bytes, bytearray)):
        if len(value) > 32:
            raise ValueError(f"uint256 payload too long: {len(value)} bytes")
        widened = int.from_bytes(value, "big")
    elif isinstance(value, str):
        widened = int(value, 16) if value.lower().startswith("0x") else int(value)
    elif isinstance(value, int) and not isinstance(value, bool):
        widened = value
    else:
        raise TypeError(f"Cannot widen {type(value).__name__} to uint256")

    if widened < 0 or widened > UINT256_MAX:
        raise ValueError(f"Value out of uint256 range: {widened}")
    return widened


async def gather_settled(*aws: Awaitable[Any]) -> List[Any]:
    """
    Run awaitables concurrently and wait for all of them to settle

    Unlike a plain gather, no sibling is left running when one fails: the
    first failure (in argument order) is raised after everything finished.
    """
    results = await asyncio.gather(*aws, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)
