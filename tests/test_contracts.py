"""
MyToken Contract Tests
Deploys the compiled contract to a local node and exercises the ERC20 surface
"""

import os
import pytest
from web3 import Web3

from blockchain.contract_manager import ContractManager
from scripts.deploy_contract import deploy_contract
from scripts.verify_token import EXPECTED_SUPPLY, verify_token
from utils.config import DEFAULT_ARTIFACT, DeployConfig

from conftest import DEPLOYER_KEY


# Note: These tests require a local Anvil or Hardhat node and a compiled artifact
# Run: anvil (or npx hardhat node), compile MyToken
# Then: pytest tests/test_contracts.py

NODE_URL = 'http://127.0.0.1:8545'


@pytest.fixture(scope='module')
def node():
    """Connect to local node"""
    w3 = Web3(Web3.HTTPProvider(NODE_URL))
    if not w3.is_connected():
        pytest.skip(f"No local node at {NODE_URL}")
    if not os.path.exists(DEFAULT_ARTIFACT):
        pytest.skip(f"Artifact {DEFAULT_ARTIFACT} not compiled")
    return w3


@pytest.fixture
def w3(node):
    return node


@pytest.fixture
def config(monkeypatch):
    monkeypatch.setenv('PRIVATE_KEY', DEPLOYER_KEY)
    monkeypatch.setenv('RPC_URL', NODE_URL)
    monkeypatch.setenv('GAS_PRICE_GWEI', '2')
    return DeployConfig()


@pytest.fixture
def deployment(w3, config):
    """Deploy a fresh MyToken"""
    return deploy_contract(config, w3)


@pytest.fixture
def token(w3, config, deployment):
    return ContractManager(w3, config.artifact_path).get_token(deployment.address)


@pytest.fixture
def owner(deployment):
    return deployment.deployer


@pytest.fixture
def accounts(w3):
    """Unlocked node accounts (accounts[0] is the default deployer)"""
    return w3.eth.accounts


class TestMyTokenContract:
    """Test MyToken after deployment"""

    def test_initial_state(self, w3, config, deployment):
        assert verify_token(config, w3, deployment.address)

    def test_owner_is_deployer(self, token, owner):
        assert token.functions.owner().call() == owner

    def test_transfer(self, w3, token, owner, accounts):
        recipient = accounts[1]

        tx_hash = token.functions.transfer(recipient, 100).transact({'from': owner})
        w3.eth.wait_for_transaction_receipt(tx_hash)

        assert token.functions.balanceOf(recipient).call() == 100
        assert token.functions.balanceOf(owner).call() == EXPECTED_SUPPLY - 100

    def test_approve_and_transfer_from(self, w3, token, owner, accounts):
        spender = accounts[1]
        recipient = accounts[2]

        tx_hash = token.functions.approve(spender, 200).transact({'from': owner})
        w3.eth.wait_for_transaction_receipt(tx_hash)
        assert token.functions.allowance(owner, spender).call() == 200

        tx_hash = token.functions.transferFrom(owner, recipient, 150).transact({'from': spender})
        w3.eth.wait_for_transaction_receipt(tx_hash)

        assert token.functions.balanceOf(recipient).call() == 150
        assert token.functions.allowance(owner, spender).call() == 50

    def test_insufficient_balance(self, token, owner, accounts):
        with pytest.raises(Exception):
            token.functions.transfer(accounts[1], EXPECTED_SUPPLY + 1).call({'from': owner})

    def test_insufficient_allowance(self, token, owner, accounts):
        with pytest.raises(Exception):
            token.functions.transferFrom(owner, accounts[3], 100).call({'from': accounts[4]})

    def test_redeploy_gives_new_address(self, w3, config, deployment):
        again = deploy_contract(config, w3)

        assert again.address != deployment.address


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
