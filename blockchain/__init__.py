"""
Blockchain Interaction Package
Handles artifacts, deployment transaction building, and the broadcast session
"""

from .contract_manager import ContractManager, load_artifact
from .transaction_builder import TransactionBuilder
from .broadcast_session import BroadcastSession, DeploymentResult

__all__ = [
    'ContractManager',
    'load_artifact',
    'TransactionBuilder',
    'BroadcastSession',
    'DeploymentResult'
]
