"""
Transaction Builder
Constructs the contract-creation transaction for a deployment
"""

from decimal import Decimal
from typing import Dict, Optional, Sequence
from web3 import Web3
from web3.exceptions import ContractLogicError
from loguru import logger

# Used when the node cannot estimate the constructor
DEFAULT_DEPLOY_GAS = 3_000_000
GAS_BUFFER = 1.2


class TransactionBuilder:
    """
    Builds deployment transactions
    """

    def __init__(self, w3: Web3, gas_price_gwei: Optional[Decimal] = None):
        """
        Initialize Transaction Builder

        Args:
            w3: Web3 instance
            gas_price_gwei: Fixed legacy gas price (None = EIP-1559 fees from the node)
        """
        self.w3 = w3
        self.gas_price_gwei = gas_price_gwei

    def estimate_gas(self, constructor, sender: str) -> int:
        """
        Estimate constructor gas with a 20% buffer

        Args:
            constructor: Bound constructor (factory.constructor(*args))
            sender: Deployer address

        Returns:
            Gas limit

        Raises:
            ContractLogicError: if the node predicts the constructor reverts
        """
        try:
            gas_estimate = constructor.estimate_gas({'from': sender})
            return int(gas_estimate * GAS_BUFFER)
        except ContractLogicError:
            raise
        except Exception as e:
            if 'revert' in str(e).lower():
                raise ContractLogicError(str(e)) from e
            logger.warning(f"Gas estimation failed: {e}, using default")
            return DEFAULT_DEPLOY_GAS

    def build_deployment_tx(
        self,
        factory,
        args: Sequence,
        sender: str,
        nonce: int
    ) -> Dict:
        """
        Build the creation transaction for factory(*args)

        Args:
            factory: Contract factory (ABI + bytecode)
            args: Constructor arguments
            sender: Deployer address
            nonce: Nonce to use

        Returns:
            Unsigned transaction dict
        """
        constructor = factory.constructor(*args)
        gas_limit = self.estimate_gas(constructor, sender)

        params = {
            'from': sender,
            'nonce': nonce,
            'gas': gas_limit,
            'chainId': self.w3.eth.chain_id
        }

        if self.gas_price_gwei is not None:
            params['gasPrice'] = self.w3.to_wei(self.gas_price_gwei, 'gwei')

        transaction = constructor.build_transaction(params)

        logger.info(f"Gas limit: {gas_limit}")
        if 'gasPrice' in transaction:
            logger.info(f"Gas price: {self.w3.from_wei(transaction['gasPrice'], 'gwei')} gwei")
        elif 'maxFeePerGas' in transaction:
            logger.info(f"Max fee: {self.w3.from_wei(transaction['maxFeePerGas'], 'gwei')} gwei")

        return transaction

    @staticmethod
    def estimate_cost(transaction: Dict) -> int:
        """Worst-case cost of the transaction in wei"""
        fee = transaction.get('gasPrice', transaction.get('maxFeePerGas', 0))
        return transaction['gas'] * fee
