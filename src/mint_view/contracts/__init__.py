"""Contract interfaces, ABI configuration and JSON-RPC bindings"""

from .abi import PROVIDER_TOKEN_ABI, SVG_HELPER_ABI, TOKEN_GATE_ABI, ContractABI, FunctionABI
from .base import ContractFactory, SVGHelperContract, SVGPart, TokenContract, TokenGateContract
from .evm import (
    BoundContract,
    EVMContractFactory,
    EVMSVGHelperContract,
    EVMTokenContract,
    EVMTokenGateContract,
)

__all__ = [
    "BoundContract",
    "ContractABI",
    "ContractFactory",
    "EVMContractFactory",
    "EVMSVGHelperContract",
    "EVMTokenContract",
    "EVMTokenGateContract",
    "FunctionABI",
    "PROVIDER_TOKEN_ABI",
    "SVG_HELPER_ABI",
    "SVGHelperContract",
    "SVGPart",
    "TOKEN_GATE_ABI",
    "TokenContract",
    "TokenGateContract",
]
