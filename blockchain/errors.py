"""
Deployment Errors
Every failure raised while resolving, submitting or confirming a deployment
"""


class DeploymentError(Exception):
    """Base class for all deployment failures"""


class ConfigError(DeploymentError):
    """Invalid or incomplete deployment configuration"""


class ArtifactNotFoundError(DeploymentError):
    """No compiled artifact exists for the requested contract"""

    def __init__(self, contract_name: str, root: str):
        self.contract_name = contract_name
        self.root = root
        super().__init__(
            f"Artifact for contract {contract_name} not found under {root}. "
            f"Run 'npx hardhat compile' first"
        )


class AmbiguousArtifactError(DeploymentError):
    """Several source files define a contract with the same name"""

    def __init__(self, contract_name: str, paths: list):
        self.contract_name = contract_name
        self.paths = paths
        super().__init__(
            f"Multiple artifacts found for contract {contract_name}: "
            + ", ".join(str(p) for p in paths)
        )


class NetworkUnreachableError(DeploymentError):
    """The configured RPC endpoint did not answer"""


class TransactionRevertedError(DeploymentError):
    """The deployment transaction was mined with a failure status"""

    def __init__(self, tx_hash: str, message: str = "transaction reverted"):
        self.tx_hash = tx_hash
        super().__init__(message)
