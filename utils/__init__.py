"""
Utilities Package
Configuration, error taxonomy, and RPC connection handling
"""

from .config import DeployConfig, parse_private_key
from .exceptions import (
    DeployerError,
    ConfigurationError,
    TransactionError,
    SessionClosedError
)
from .rpc_manager import RPCManager

__all__ = [
    'DeployConfig',
    'parse_private_key',
    'DeployerError',
    'ConfigurationError',
    'TransactionError',
    'SessionClosedError',
    'RPCManager'
]
