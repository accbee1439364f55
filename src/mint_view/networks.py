"""
Network resolution: contract address book, RPC endpoints and explorer links
"""

import json
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union
from loguru import logger

from .exceptions import ConfigurationError
from .models import ExplorerLinks
from .utils import validate_ethereum_address

DEFAULT_ASSET_PROVIDER = "dotNouns"
SVG_HELPER = "svgHelper"
LOCALHOST_RPC_URL = "http://localhost:8545"

# Logical network names that need a different name at the RPC provider
NETWORK_ALIASES = {
    "mumbai": "maticmum",
}

ALCHEMY_SUBDOMAINS = {
    "mainnet": "eth-mainnet",
    "homestead": "eth-mainnet",
    "rinkeby": "eth-rinkeby",
    "goerli": "eth-goerli",
    "sepolia": "eth-sepolia",
    "matic": "polygon-mainnet",
    "maticmum": "polygon-mumbai",
}

INFURA_SUBDOMAINS = {
    "mainnet": "mainnet",
    "homestead": "mainnet",
    "rinkeby": "rinkeby",
    "goerli": "goerli",
    "sepolia": "sepolia",
    "matic": "polygon-mainnet",
    "maticmum": "polygon-mumbai",
}

ETHERSCAN_BASES = {
    "rinkeby": "https://rinkeby.etherscan.io/address",
    "goerli": "https://goerli.etherscan.io/address",
    "mumbai": "https://mumbai.polygonscan.com/address",
}
DEFAULT_ETHERSCAN_BASE = "https://etherscan.io/address"

OPENSEA_BASES = {
    "rinkeby": "https://testnets.opensea.io/assets/rinkeby",
    "goerli": "https://testnets.opensea.io/assets/goerli",
    "mumbai": "https://testnets.opensea.io/assets/mumbai",
}
DEFAULT_OPENSEA_BASE = "https://opensea.io/assets/ethereum"


class AddressBook:
    """
    Read-only table of deployed contract addresses

    Shaped as ``{logical_name: {network: address}}``, the same layout the
    deployment scripts write out.
    """

    def __init__(self, entries: Mapping[str, Mapping[str, str]]):
        table: Dict[str, Mapping[str, str]] = {}
        for name, by_network in entries.items():
            checked = {}
            for network, address in by_network.items():
                is_valid, checksummed = validate_ethereum_address(address)
                if not is_valid:
                    raise ConfigurationError(f"Invalid address for {name} on {network}: {address!r}")
                checked[network] = checksummed
            table[name] = MappingProxyType(checked)
        self._table = MappingProxyType(table)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "AddressBook":
        """Load an address book from a JSON file"""
        path = Path(path)
        try:
            with open(path) as f:
                entries = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"Cannot load address book {path}: {e}") from e
        if not isinstance(entries, dict):
            raise ConfigurationError(f"Address book {path} must be a JSON object")
        logger.debug(f"Loaded {len(entries)} contract entries from {path}")
        return cls(entries)

    def address_of(self, name: str, network: str) -> Optional[str]:
        """Deployed address of contract ``name`` on ``network``, or None"""
        return self._table.get(name, {}).get(network)

    def names(self):
        return list(self._table)

    def __contains__(self, name: str) -> bool:
        return name in self._table


def rpc_endpoint(
    network: str,
    alchemy_key: Optional[str] = None,
    infura_key: Optional[str] = None,
) -> str:
    """Pick the read endpoint for ``network``: local node, Alchemy, then Infura"""
    network_name = NETWORK_ALIASES.get(network, network)
    if network_name == "localhost":
        return LOCALHOST_RPC_URL

    if alchemy_key:
        subdomain = ALCHEMY_SUBDOMAINS.get(network_name)
        if subdomain is None:
            raise ConfigurationError(f"Alchemy does not serve network '{network}'")
        return f"https://{subdomain}.g.alchemy.com/v2/{alchemy_key}"

    subdomain = INFURA_SUBDOMAINS.get(network_name)
    if subdomain is None:
        raise ConfigurationError(f"Infura does not serve network '{network}'")
    if not infura_key:
        raise ConfigurationError("Neither ALCHEMY_API_KEY nor INFURA_PROJECT_ID is configured")
    return f"https://{subdomain}.infura.io/v3/{infura_key}"


def explorer_links(network: str, content_address: str) -> ExplorerLinks:
    """Etherscan and OpenSea URLs for a content contract on ``network``"""
    etherscan_base = ETHERSCAN_BASES.get(network, DEFAULT_ETHERSCAN_BASE)
    opensea_base = OPENSEA_BASES.get(network, DEFAULT_OPENSEA_BASE)
    return ExplorerLinks(
        etherscan_base=etherscan_base,
        opensea_base=opensea_base,
        etherscan_token=f"{etherscan_base}/{content_address}",
        opensea_path=f"{opensea_base}/{content_address}",
    )
