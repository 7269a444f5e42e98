"""
Deployer Exceptions
Error taxonomy for the deployment tooling
"""

from typing import Optional
import requests
from web3.exceptions import Web3Exception


class DeployerError(Exception):
    """Base class for all deployer errors"""


class ConfigurationError(DeployerError):
    """Missing or malformed configuration (raised before any network call)"""


class TransactionError(DeployerError):
    """
    Broadcast or network failure while deploying

    The underlying web3 error, if any, is chained as __cause__.
    """

    def __init__(self, message: str, tx_hash: Optional[str] = None):
        super().__init__(message)
        self.tx_hash = tx_hash


class SessionClosedError(DeployerError):
    """Broadcast session used after its signer was released"""


# What web3 raises for RPC, network and timeout failures (RPC errors are ValueError in v6)
RPC_ERRORS = (Web3Exception, ValueError, requests.exceptions.RequestException)
