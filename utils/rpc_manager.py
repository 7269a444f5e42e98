"""
RPC Manager
Creates and health-checks the Web3 connection the deployment runs against
"""

from typing import Dict, Optional
from web3 import Web3
from loguru import logger

from .exceptions import RPC_ERRORS, TransactionError


class RPCManager:
    """
    Single-endpoint RPC connection

    Network selection is purely a matter of which RPC_URL is configured.
    """

    def __init__(self, rpc_url: str, request_timeout: int = 30):
        """
        Initialize RPC Manager

        Args:
            rpc_url: HTTP(S) endpoint of the node
            request_timeout: Per-request timeout in seconds
        """
        self.rpc_url = rpc_url
        self.request_timeout = request_timeout
        self.w3: Optional[Web3] = None

    def connect(self) -> Web3:
        """
        Connect to the configured node

        Returns:
            Connected Web3 instance

        Raises:
            TransactionError: if the node is unreachable
        """
        if self.w3 is not None:
            return self.w3

        w3 = Web3(Web3.HTTPProvider(
            self.rpc_url,
            request_kwargs={'timeout': self.request_timeout}
        ))

        if not w3.is_connected():
            raise TransactionError(f"Failed to connect to RPC at {self.rpc_url}")

        try:
            chain_id = w3.eth.chain_id
        except RPC_ERRORS as e:
            raise TransactionError(f"Could not read chain id from {self.rpc_url}: {e}") from e

        self.w3 = w3
        logger.success(f"Connected to {self.rpc_url} (chain id {chain_id})")
        return w3

    def is_healthy(self) -> bool:
        """Check if the node still answers"""
        try:
            w3 = self.connect()
            w3.eth.block_number
            return True
        except Exception as e:
            logger.debug(f"RPC health check failed: {e}")
            return False

    def get_status(self) -> Dict:
        """Connection summary for pre-flight reports"""
        if not self.is_healthy():
            return {'url': self.rpc_url, 'connected': False}

        return {
            'url': self.rpc_url,
            'connected': True,
            'chain_id': self.w3.eth.chain_id,
            'block_number': self.w3.eth.block_number
        }
