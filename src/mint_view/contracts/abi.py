"""
ABI configuration for the contracts the minting UI reads from

Each contract kind gets one ContractABI describing only the functions this
package calls. They are passed to the contract bindings at construction.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple
from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from eth_utils import function_signature_to_4byte_selector

from ..exceptions import ConfigurationError


@dataclass(frozen=True)
class FunctionABI:
    """A single view function: name, input types and output types"""
    name: str
    inputs: Tuple[str, ...] = ()
    outputs: Tuple[str, ...] = ()

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.inputs)})"

    @property
    def selector(self) -> bytes:
        return function_signature_to_4byte_selector(self.signature)

    def encode_call(self, *args: Any) -> bytes:
        """Calldata: 4-byte selector followed by the ABI-encoded arguments"""
        if len(args) != len(self.inputs):
            raise ValueError(f"{self.signature} takes {len(self.inputs)} arguments, got {len(args)}")
        if not self.inputs:
            return self.selector
        return self.selector + abi_encode(list(self.inputs), list(args))

    def decode_result(self, data: bytes) -> Tuple[Any, ...]:
        return tuple(abi_decode(list(self.outputs), data))


@dataclass(frozen=True)
class ContractABI:
    """Named set of functions for one contract kind"""
    name: str
    functions: Dict[str, FunctionABI] = field(default_factory=dict)

    @classmethod
    def of(cls, name: str, *functions: FunctionABI) -> "ContractABI":
        return cls(name=name, functions={f.name: f for f in functions})

    def function(self, name: str) -> FunctionABI:
        try:
            return self.functions[name]
        except KeyError:
            raise ConfigurationError(f"{self.name} ABI has no function '{name}'") from None


PROVIDER_TOKEN_ABI = ContractABI.of(
    "ProviderToken",
    FunctionABI("totalSupply", (), ("uint256",)),
    FunctionABI("mintLimit", (), ("uint256",)),
    FunctionABI("balanceOf", ("address",), ("uint256",)),
    FunctionABI("mintPriceFor", ("address",), ("uint256",)),
    FunctionABI("debugTokenURI", ("uint256",), ("string", "uint256")),
)

TOKEN_GATE_ABI = ContractABI.of(
    "ITokenGate",
    FunctionABI("balanceOf", ("address",), ("uint256",)),
)

SVG_HELPER_ABI = ContractABI.of(
    "ISVGHelper",
    FunctionABI("generateSVGPart", ("address", "uint256"), ("string", "string", "uint256")),
)
