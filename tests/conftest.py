"""
Shared fixtures
"""

import pytest
from unittest.mock import MagicMock
from web3 import Web3
from eth_account import Account


# First default Anvil/Hardhat account
DEPLOYER_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
DEPLOYER_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
CONTRACT_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"

ENV_VARS = [
    'PRIVATE_KEY',
    'RPC_URL',
    'CONTRACT_ARTIFACT',
    'GAS_PRICE_GWEI',
    'RECEIPT_TIMEOUT',
    'UPDATE_ENV_FILE',
    'ENV_FILE',
    'MIN_DEPLOYER_BALANCE_ETH',
    'TOKEN_CONTRACT_ADDRESS'
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from the developer's environment / .env"""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def deployer():
    """Deployer account"""
    return Account.from_key(DEPLOYER_KEY)


@pytest.fixture
def receipt():
    """Successful deployment receipt"""
    return {
        'status': 1,
        'contractAddress': CONTRACT_ADDRESS,
        'blockNumber': 1,
        'gasUsed': 1_234_567
    }


@pytest.fixture
def w3(receipt):
    """Mock Web3 instance"""
    w3 = MagicMock()
    w3.eth.chain_id = 31337
    w3.eth.get_transaction_count.return_value = 0
    w3.eth.get_balance.return_value = 10 ** 18
    w3.eth.send_raw_transaction.return_value = b'\x11' * 32
    w3.eth.wait_for_transaction_receipt.return_value = receipt
    w3.to_wei.side_effect = Web3.to_wei
    w3.from_wei.side_effect = Web3.from_wei
    return w3


@pytest.fixture
def factory():
    """Mock contract factory whose constructor builds a signable transaction"""
    factory = MagicMock()
    constructor = factory.constructor.return_value
    constructor.estimate_gas.return_value = 1_000_000
    constructor.build_transaction.side_effect = lambda params: {
        **params,
        'value': 0,
        'data': '0x60006000f3'
    }
    return factory


@pytest.fixture
def deploy_tx():
    """Unsigned legacy deployment transaction"""
    return {
        'from': DEPLOYER_ADDRESS,
        'nonce': 0,
        'gas': 1_200_000,
        'gasPrice': 2_000_000_000,
        'chainId': 31337,
        'value': 0,
        'data': '0x60006000f3'
    }
