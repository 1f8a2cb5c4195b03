"""
Blockchain Interaction Package
Handles artifact lookup, transaction signing, and contract deployment
"""

from .artifacts import ArtifactStore
from .contract_factory import ContractFactory, ContractFactoryProvider, DeployedContract
from .signer import LocalKeySigner, NodeAccountSigner, Signer, create_signer

__all__ = [
    'ArtifactStore',
    'ContractFactory',
    'ContractFactoryProvider',
    'DeployedContract',
    'LocalKeySigner',
    'NodeAccountSigner',
    'Signer',
    'create_signer'
]
