"""RPC clients for Ethereum nodes"""

from .base import BaseRPCClient
from .jsonrpc import EthereumRPCClient

__all__ = ["BaseRPCClient", "EthereumRPCClient"]
