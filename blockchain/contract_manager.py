"""
Contract Manager
Loads compiled artifacts and creates contract factories / instances
"""

import os
import json
from typing import Dict, List, Tuple
from web3 import Web3
from loguru import logger

from utils.config import DEFAULT_ARTIFACT
from utils.exceptions import ConfigurationError


def load_artifact(path: str) -> Tuple[List[Dict], str]:
    """
    Load ABI and creation bytecode from a compiled artifact

    Both Hardhat ("bytecode": "0x...") and Foundry
    ("bytecode": {"object": "0x..."}) layouts are accepted.

    Args:
        path: Artifact JSON path

    Returns:
        (abi, bytecode) with bytecode 0x-prefixed

    Raises:
        ConfigurationError: if the artifact is missing or unusable
    """
    if not os.path.exists(path):
        raise ConfigurationError(
            f"Contract artifact not found: {path} (compile the contract first)"
        )

    try:
        with open(path, 'r') as f:
            contract_json = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Contract artifact is not valid JSON: {path}") from e

    abi = contract_json.get('abi')
    bytecode = contract_json.get('bytecode')

    if isinstance(bytecode, dict):
        bytecode = bytecode.get('object')

    if not isinstance(abi, list):
        raise ConfigurationError(f"Artifact has no ABI: {path}")

    if not isinstance(bytecode, str) or bytecode in ('', '0x'):
        raise ConfigurationError(f"Artifact has no creation bytecode: {path}")

    if not bytecode.startswith('0x'):
        bytecode = '0x' + bytecode

    logger.debug(f"Loaded artifact {path} ({len(bytecode) // 2 - 1} bytes)")
    return abi, bytecode



class ContractManager:
    """
    Manages the token artifact and contract instances
    """

    def __init__(self, w3: Web3, artifact_path: str = DEFAULT_ARTIFACT):
        """
        Initialize Contract Manager

        Args:
            w3: Web3 instance
            artifact_path: Compiled MyToken artifact
        """
        self.w3 = w3
        self.artifact_path = artifact_path

    def get_factory(self):
        """Deployable contract factory for the configured artifact"""
        abi, bytecode = load_artifact(self.artifact_path)
        return self.w3.eth.contract(abi=abi, bytecode=bytecode)

    def get_token(self, address: str):
        """
        Bound token instance at address

        Falls back to a minimal ERC20 ABI when no artifact is available.
        """
        if os.path.exists(self.artifact_path):
            abi, _ = load_artifact(self.artifact_path)
        else:
            logger.warning(f"Artifact {self.artifact_path} not found, using minimal ERC20 ABI")
            abi = minimal_erc20_abi()

        return self.w3.eth.contract(
            address=Web3.to_checksum_address(address),
            abi=abi
        )


def minimal_erc20_abi() -> List[Dict]:
    """
    Read-only ABI subset of MyToken
    Used when compiled artifacts are not available
    """
    def view(name: str, inputs: List[Dict], output: str) -> Dict:
        return {
            "inputs": inputs,
            "name": name,
            "outputs": [{"name": "", "type": output}],
            "stateMutability": "view",
            "type": "function"
        }

    return [
        view("name", [], "string"),
        view("symbol", [], "string"),
        view("decimals", [], "uint8"),
        view("totalSupply", [], "uint256"),
        view("balanceOf", [{"name": "account", "type": "address"}], "uint256"),
        view("owner", [], "address"),
    ]
