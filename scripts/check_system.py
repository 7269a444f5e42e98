"""
System Check Script
Verifies configuration, node connection and deployer funds before deploying

Run from the project root: python -m scripts.check_system
"""

import os
import sys
from typing import Optional
from eth_account import Account
from loguru import logger

from blockchain.contract_manager import load_artifact
from utils.config import DeployConfig, key_to_bytes
from utils.exceptions import DeployerError
from utils.rpc_manager import RPCManager


def check_private_key(config: DeployConfig) -> bool:
    """Check that PRIVATE_KEY is set and parses"""
    logger.info("Checking deployer key...")

    try:
        account = Account.from_key(key_to_bytes(config.private_key()))
    except DeployerError as e:
        logger.error(f"  ✗ {e}")
        return False

    logger.success(f"  ✓ Deployer: {account.address}")
    return True


def check_artifact(config: DeployConfig) -> bool:
    """Check that the compiled contract artifact is usable"""
    logger.info("Checking contract artifact...")

    try:
        abi, bytecode = load_artifact(config.artifact_path)
    except DeployerError as e:
        logger.error(f"  ✗ {e}")
        logger.info("  Compile the contract first (forge build / npx hardhat compile)")
        return False

    constructors = [item for item in abi if item.get('type') == 'constructor']
    inputs = constructors[0].get('inputs', []) if constructors else []

    if [i.get('type') for i in inputs] != ['address']:
        logger.error("  ✗ Expected constructor(address initialOwner)")
        return False

    logger.success(f"  ✓ {config.artifact_path} ({len(bytecode) // 2 - 1} bytes)")
    return True


def check_rpc_connection(rpc: RPCManager) -> bool:
    """Check RPC endpoint connection"""
    logger.info("Checking RPC connection...")

    status = rpc.get_status()

    if not status['connected']:
        logger.error(f"  ✗ {status['url']}: Connection failed")
        return False

    logger.success(
        f"  ✓ {status['url']}: Connected "
        f"(Chain: {status['chain_id']}, Block: {status['block_number']})"
    )
    return True


def check_deployer_balance(config: DeployConfig, rpc: RPCManager) -> bool:
    """Check deployer balance against MIN_DEPLOYER_BALANCE_ETH"""
    logger.info("Checking deployer balance...")

    try:
        account = Account.from_key(key_to_bytes(config.private_key()))
    except DeployerError:
        logger.warning("  No valid deployer key - skipping balance check")
        return False

    if not rpc.is_healthy():
        logger.warning("  No RPC connection - skipping balance check")
        return False

    w3 = rpc.connect()
    balance_eth = w3.from_wei(w3.eth.get_balance(account.address), 'ether')
    logger.info(f"  Deployer: {balance_eth:.4f} ETH")

    if config.min_balance_eth is not None and balance_eth < config.min_balance_eth:
        logger.warning(f"  ⚠ Deployer balance low (need at least {config.min_balance_eth} ETH)")
        return False

    logger.success("  ✓ Deployer balance sufficient")
    return True


def check_directories() -> bool:
    """Make sure the log directory exists"""
    logger.info("Checking directories...")

    dir_path = 'data/logs'
    if not os.path.exists(dir_path):
        os.makedirs(dir_path, exist_ok=True)
        logger.info(f"  Created: {dir_path}")
    else:
        logger.success(f"  ✓ {dir_path}")

    return True


def main(config: Optional[DeployConfig] = None, rpc: Optional[RPCManager] = None) -> int:
    """Run all system checks"""
    logger.info("=" * 70)
    logger.info("MyToken Deployment System Check")
    logger.info("=" * 70)

    config = config if config else DeployConfig()
    rpc = rpc if rpc else RPCManager(config.rpc_url)

    checks = [
        ("Deployer Key", lambda: check_private_key(config)),
        ("Contract Artifact", lambda: check_artifact(config)),
        ("Directories", check_directories),
        ("RPC Connection", lambda: check_rpc_connection(rpc)),
        ("Deployer Balance", lambda: check_deployer_balance(config, rpc))
    ]

    results = []

    for name, check_func in checks:
        logger.info("")
        try:
            result = check_func()
            results.append((name, result))
        except Exception as e:
            logger.error(f"Error in {name}: {e}")
            results.append((name, False))

    # Summary
    logger.info("")
    logger.info("=" * 70)
    logger.info("Summary")
    logger.info("=" * 70)

    passed = sum(1 for _, result in results if result)
    total = len(results)

    for name, result in results:
        status = "✓ PASS" if result else "✗ FAIL"
        logger.info(f"  {status}: {name}")

    logger.info("")
    logger.info(f"Total: {passed}/{total} checks passed")

    if passed == total:
        logger.success("=" * 70)
        logger.success("✅ Ready to deploy!")
        logger.success("=" * 70)
        logger.info("Deploy: python deploy.py")
        return 0
    else:
        logger.error("=" * 70)
        logger.error("❌ Not ready - fix issues above")
        logger.error("=" * 70)
        return 1


if __name__ == "__main__":
    sys.exit(main())
