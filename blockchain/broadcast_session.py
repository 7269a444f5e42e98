"""
Broadcast Session
Scoped signer that builds, signs and submits deployment transactions
"""

from typing import Dict, List, Optional
from web3 import Web3
from eth_account.signers.local import LocalAccount
from loguru import logger

from utils.exceptions import RPC_ERRORS, SessionClosedError, TransactionError
from .transaction_builder import TransactionBuilder


class DeploymentResult:
    """Outcome of one contract-creation transaction"""

    def __init__(
        self,
        contract_name: str,
        address: str,
        tx_hash: str,
        deployer: str,
        constructor_args: tuple,
        block_number: int,
        gas_used: int,
        chain_id: int
    ):
        self.contract_name = contract_name
        self.address = address
        self.tx_hash = tx_hash
        self.deployer = deployer
        self.constructor_args = constructor_args
        self.block_number = block_number
        self.gas_used = gas_used
        self.chain_id = chain_id

    def to_dict(self) -> Dict:
        return {
            'contract_name': self.contract_name,
            'address': self.address,
            'tx_hash': self.tx_hash,
            'deployer': self.deployer,
            'constructor_args': list(self.constructor_args),
            'block_number': self.block_number,
            'gas_used': self.gas_used,
            'chain_id': self.chain_id
        }

    def __repr__(self):
        return f"DeploymentResult({self.contract_name} at {self.address}, tx {self.tx_hash})"


class BroadcastSession:
    """
    Signing/broadcast context for a single deployer account

    The account is passed in explicitly and released when the session
    closes, on success and on error alike:

        with BroadcastSession(w3, account) as session:
            result = session.deploy(factory, session.address)
    """

    def __init__(
        self,
        w3: Web3,
        account: LocalAccount,
        tx_builder: Optional[TransactionBuilder] = None,
        receipt_timeout: int = 300
    ):
        """
        Initialize Broadcast Session

        Args:
            w3: Connected Web3 instance
            account: Signer (eth_account LocalAccount)
            tx_builder: Transaction builder (default: EIP-1559 fees from the node)
            receipt_timeout: Seconds to wait for each receipt
        """
        self.w3 = w3
        self.account = account
        self.tx_builder = tx_builder if tx_builder else TransactionBuilder(w3)
        self.receipt_timeout = receipt_timeout

        self.address = account.address
        self.current_nonce = None
        self.deployments: List[DeploymentResult] = []
        self.opened = False
        self.closed = False

    def __enter__(self) -> 'BroadcastSession':
        self.open()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if exc_type is not None:
            logger.error(f"Broadcast session aborted: {exc_type.__name__}: {exc_value}")
        self.close()
        return False

    def open(self):
        """Start broadcasting: sync the nonce from the chain"""
        self._ensure_usable()

        try:
            self._sync_nonce()
        except BaseException:
            self.close()
            raise

        self.opened = True
        logger.info(f"Broadcast session opened for {self.address} (nonce {self.current_nonce})")

    def close(self):
        """Release the signer; idempotent"""
        if self.closed:
            return

        self.account = None
        self.closed = True
        logger.info(
            f"Broadcast session closed for {self.address} "
            f"({len(self.deployments)} deployment(s))"
        )

    def _ensure_usable(self):
        if self.closed:
            raise SessionClosedError("Broadcast session is closed")

    def _sync_nonce(self):
        """Sync nonce with blockchain (pending included)"""
        try:
            self.current_nonce = self.w3.eth.get_transaction_count(self.address, 'pending')
        except RPC_ERRORS as e:
            raise TransactionError(f"Could not read nonce for {self.address}: {e}") from e
        logger.debug(f"Nonce synced: {self.current_nonce}")

    def deploy(self, factory, *args, contract_name: str = 'MyToken') -> DeploymentResult:
        """
        Send one contract-creation transaction and wait for it to be mined

        Args:
            factory: Contract factory (ABI + bytecode)
            *args: Constructor arguments
            contract_name: Name used in logs and in the result

        Returns:
            DeploymentResult

        Raises:
            SessionClosedError: if the session is not open
            TransactionError: on broadcast failure or reverted deployment
        """
        self._ensure_usable()
        if not self.opened:
            raise SessionClosedError("Broadcast session has not been opened")

        nonce = self.current_nonce

        logger.info(f"Building {contract_name} deployment transaction...")
        try:
            transaction = self.tx_builder.build_deployment_tx(factory, args, self.address, nonce)
        except RPC_ERRORS as e:
            raise TransactionError(f"Could not build {contract_name} deployment: {e}") from e

        cost = TransactionBuilder.estimate_cost(transaction)
        logger.info(f"Estimated deployment cost: {Web3.from_wei(cost, 'ether')} ETH")

        logger.info("Signing transaction...")
        signed_tx = self.account.sign_transaction(transaction)

        logger.info("Sending deployment transaction...")
        try:
            tx_hash = self.w3.eth.send_raw_transaction(signed_tx.rawTransaction)
        except RPC_ERRORS as e:
            raise TransactionError(f"Failed to broadcast {contract_name} deployment: {e}") from e

        self.current_nonce = nonce + 1
        tx_hash_hex = Web3.to_hex(tx_hash)

        logger.info(f"Transaction sent: {tx_hash_hex}")
        logger.info("Waiting for confirmation...")

        try:
            receipt = self.w3.eth.wait_for_transaction_receipt(
                tx_hash,
                timeout=self.receipt_timeout
            )
        except RPC_ERRORS as e:
            raise TransactionError(
                f"No receipt for {contract_name} deployment: {e}",
                tx_hash=tx_hash_hex
            ) from e

        if receipt['status'] != 1:
            raise TransactionError(
                f"{contract_name} deployment reverted",
                tx_hash=tx_hash_hex
            )

        result = DeploymentResult(
            contract_name=contract_name,
            address=receipt['contractAddress'],
            tx_hash=tx_hash_hex,
            deployer=self.address,
            constructor_args=args,
            block_number=receipt['blockNumber'],
            gas_used=receipt['gasUsed'],
            chain_id=transaction['chainId']
        )
        self.deployments.append(result)

        return result
