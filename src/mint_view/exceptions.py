"""
Exception hierarchy for collection state resolution
"""

from typing import Any, Tuple


class MintViewError(Exception):
    """Base class for all errors raised by mint_view"""


class ConfigurationError(MintViewError):
    """Missing or unusable configuration (address book, RPC endpoint)"""


class UnknownAssetProvider(MintViewError):
    """No address is registered for an asset provider on a network"""

    def __init__(self, name: str, network: str):
        self.name = name
        self.network = network
        super().__init__(f"No address for asset provider '{name}' on network '{network}'")


class ContractCallFailed(MintViewError):
    """A remote contract call rejected, timed out or returned undecodable data"""

    def __init__(self, method: str, args: Tuple[Any, ...] = ()):
        self.method = method
        self.call_args = tuple(args)
        rendered = ", ".join(str(a) for a in self.call_args)
        super().__init__(f"Contract call {method}({rendered}) failed")


class RPCError(MintViewError):
    """JSON-RPC error object returned by the node"""

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(f"RPC error {code}: {message}")


class MalformedTokenURI(MintViewError):
    """Token URI does not follow the data-URI scheme"""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class MalformedMetadata(MalformedTokenURI):
    """Outer JSON payload is missing, not base64 or not JSON"""


class MalformedImage(MalformedTokenURI):
    """Inner image field is absent or not a base64 image data URI"""


class TokenFetchFailed(MintViewError):
    """Fetching or decoding one token of the recent-tokens window failed"""

    def __init__(self, token_id: int):
        self.token_id = token_id
        super().__init__(f"Failed to fetch token {token_id}")
