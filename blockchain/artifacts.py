"""
Artifact Store
Resolves compiled Hardhat artifacts by contract name
"""

import json
from pathlib import Path
from typing import Dict, List
from loguru import logger

from .errors import AmbiguousArtifactError, ArtifactNotFoundError, DeploymentError


class ArtifactStore:
    """
    Looks up artifacts written by `npx hardhat compile`

    Layout: <root>/contracts/<File>.sol/<ContractName>.json
    Debug files (<ContractName>.dbg.json) sit next to them and are ignored.
    """

    def __init__(self, root: str = "artifacts"):
        """
        Initialize Artifact Store

        Args:
            root: Hardhat artifacts directory
        """
        self.root = Path(root)

    def find(self, contract_name: str) -> Path:
        """
        Locate the artifact file for a contract

        Args:
            contract_name: Contract name as declared in Solidity

        Returns:
            Path to the artifact JSON
        """
        matches = self._candidates(contract_name)

        if not matches:
            raise ArtifactNotFoundError(contract_name, str(self.root))

        if len(matches) > 1:
            raise AmbiguousArtifactError(contract_name, matches)

        return matches[0]

    def load(self, contract_name: str) -> Dict:
        """
        Load ABI and bytecode for a contract

        Args:
            contract_name: Contract name

        Returns:
            Artifact dict with at least 'abi' and 'bytecode'
        """
        path = self.find(contract_name)

        with open(path, 'r') as f:
            artifact = json.load(f)

        if 'abi' not in artifact or 'bytecode' not in artifact:
            raise DeploymentError(f"Malformed artifact {path}: missing abi or bytecode")

        bytecode = artifact['bytecode']
        if not bytecode or bytecode in ('0x', '0x0'):
            # Interfaces and abstract contracts compile to empty bytecode
            raise DeploymentError(
                f"Contract {contract_name} has no bytecode and cannot be deployed"
            )

        logger.debug(f"Loaded artifact for {contract_name} from {path}")

        return artifact

    def _candidates(self, contract_name: str) -> List[Path]:
        """All non-debug artifact files named after the contract"""
        if not self.root.is_dir():
            return []

        return sorted(
            path for path in self.root.rglob(f"{contract_name}.json")
            if path.parent.suffix == '.sol'
        )
