"""
Smart Contract Deployment Script
Deploys the MyToken ERC20 contract with the deployer as initial owner

Run from the project root: python -m scripts.deploy_contract (or python deploy.py)
"""

import os
from typing import Optional
from web3 import Web3
from eth_account import Account
from loguru import logger

from blockchain.broadcast_session import BroadcastSession, DeploymentResult
from blockchain.contract_manager import ContractManager
from blockchain.transaction_builder import TransactionBuilder
from utils.config import DeployConfig, key_to_bytes
from utils.exceptions import RPC_ERRORS, TransactionError
from utils.rpc_manager import RPCManager


def deploy_contract(
    config: Optional[DeployConfig] = None,
    w3: Optional[Web3] = None
) -> DeploymentResult:
    """
    Deploy MyToken

    Args:
        config: Deployment settings (default: read from environment)
        w3: Connected Web3 instance (default: connect to config.rpc_url)

    Returns:
        DeploymentResult with the deployed contract address

    Raises:
        ConfigurationError: missing/malformed PRIVATE_KEY or artifact
        TransactionError: broadcast or network failure
    """
    config = config if config else DeployConfig()

    logger.info("Starting contract deployment...")

    # Key is validated before anything touches the network
    signer = Account.from_key(key_to_bytes(config.private_key()))
    deployer = signer.address
    logger.info(f"Deploying from: {deployer}")

    if w3 is None:
        w3 = RPCManager(config.rpc_url).connect()

    factory = ContractManager(w3, config.artifact_path).get_factory()

    try:
        balance = w3.eth.get_balance(deployer)
    except RPC_ERRORS as e:
        raise TransactionError(f"Could not read balance of {deployer}: {e}") from e
    logger.info(f"Account balance: {w3.from_wei(balance, 'ether')} ETH")

    tx_builder = TransactionBuilder(w3, config.gas_price_gwei)

    # The session owns the signer from here on and releases it on close
    session = BroadcastSession(w3, signer, tx_builder, config.receipt_timeout)
    del signer

    with session:
        result = session.deploy(factory, session.address)

    logger.success("✅ Contract deployed successfully!")
    logger.success(f"Contract address: {result.address}")
    logger.success(f"Transaction hash: {result.tx_hash}")
    logger.success(f"Gas used: {result.gas_used}")

    if config.update_env_file:
        update_env_file(result.address, config.env_path)

    return result


def update_env_file(contract_address: str, env_path: str = ".env"):
    """Update .env file with contract address"""
    try:
        lines = []
        if os.path.exists(env_path):
            with open(env_path, 'r') as f:
                lines = f.readlines()

        # Update or add TOKEN_CONTRACT_ADDRESS
        found = False
        for i, line in enumerate(lines):
            if line.startswith('TOKEN_CONTRACT_ADDRESS='):
                lines[i] = f'TOKEN_CONTRACT_ADDRESS={contract_address}\n'
                found = True
                break

        if not found:
            if lines and not lines[-1].endswith('\n'):
                lines[-1] += '\n'
            lines.append(f'TOKEN_CONTRACT_ADDRESS={contract_address}\n')

        with open(env_path, 'w') as f:
            f.writelines(lines)

        logger.success(f"Updated {env_path} with contract address")

    except OSError as e:
        logger.error(f"Error updating {env_path}: {e}")


if __name__ == "__main__":
    deploy_contract()
