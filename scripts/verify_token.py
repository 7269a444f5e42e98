"""
Token Verification Script
Checks a freshly deployed MyToken against its expected initial state

Run from the project root: python -m scripts.verify_token
"""

import sys
from typing import Dict, Optional
from web3 import Web3
from eth_account import Account
from loguru import logger

from blockchain.contract_manager import ContractManager
from utils.config import DeployConfig, key_to_bytes
from utils.exceptions import DeployerError
from utils.rpc_manager import RPCManager

EXPECTED_NAME = "MyToken"
EXPECTED_SYMBOL = "MTK"
EXPECTED_DECIMALS = 18
EXPECTED_SUPPLY = 1_000_000 * 10 ** EXPECTED_DECIMALS


def read_token_state(token, owner: str) -> Dict:
    """Read name, symbol, decimals, supply and owner balance"""
    return {
        'name': token.functions.name().call(),
        'symbol': token.functions.symbol().call(),
        'decimals': token.functions.decimals().call(),
        'total_supply': token.functions.totalSupply().call(),
        'owner_balance': token.functions.balanceOf(owner).call()
    }


def verify_token_state(state: Dict) -> Dict[str, bool]:
    """
    Compare token state with the expected initial state

    Args:
        state: Output of read_token_state

    Returns:
        Check name -> passed
    """
    return {
        'name': state['name'] == EXPECTED_NAME,
        'symbol': state['symbol'] == EXPECTED_SYMBOL,
        'decimals': state['decimals'] == EXPECTED_DECIMALS,
        'total_supply': state['total_supply'] == EXPECTED_SUPPLY,
        'owner_balance': state['owner_balance'] == state['total_supply']
    }


def verify_token(
    config: Optional[DeployConfig] = None,
    w3: Optional[Web3] = None,
    address: Optional[str] = None
) -> bool:
    """
    Verify the token at address (default: TOKEN_CONTRACT_ADDRESS)

    The owner is the address derived from PRIVATE_KEY.

    Returns:
        True if every check passes
    """
    config = config if config else DeployConfig()
    address = address if address else config.token_address()
    owner = Account.from_key(key_to_bytes(config.private_key())).address

    if w3 is None:
        w3 = RPCManager(config.rpc_url).connect()

    if w3.eth.get_code(Web3.to_checksum_address(address)) in (b'', '0x'):
        logger.error(f"No contract at {address}")
        return False

    token = ContractManager(w3, config.artifact_path).get_token(address)
    state = read_token_state(token, owner)
    results = verify_token_state(state)

    logger.info(f"Token at {address}")
    for check, passed in results.items():
        if passed:
            logger.success(f"  ✓ {check}: {state[check]}")
        else:
            logger.error(f"  ✗ {check}: {state[check]}")

    return all(results.values())


def main() -> int:
    """Exit code: 0 verified, 1 mismatch, 2 configuration or network error"""
    try:
        ok = verify_token()
    except DeployerError as e:
        logger.error(str(e))
        return 2
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
