"""
mint_view - on-chain collection state for fully on-chain NFT minting pages
"""

__version__ = "0.1.0"

from .decoder import decode_token_uri
from .fetcher import CollectionStateFetcher
from .gate import TokenGateChecker
from .models import CollectionState, DecodedTokenURI, GateState, Token
from .networks import AddressBook, explorer_links, rpc_endpoint

__all__ = [
    "AddressBook",
    "CollectionState",
    "CollectionStateFetcher",
    "DecodedTokenURI",
    "GateState",
    "Token",
    "TokenGateChecker",
    "decode_token_uri",
    "explorer_links",
    "rpc_endpoint",
]
