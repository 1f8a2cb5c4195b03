"""
Contract Factory
Builds, submits and confirms contract deployments from compiled artifacts
"""

from typing import Dict, List, Optional
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3
from web3.exceptions import ContractLogicError
from loguru import logger

from .artifacts import ArtifactStore
from .errors import ConfigError, NetworkUnreachableError, TransactionRevertedError
from .signer import Signer, create_signer


def _to_hex(value) -> str:
    """Normalize a transaction hash to a 0x-prefixed string"""
    if isinstance(value, str):
        return value if value.startswith('0x') else '0x' + value
    return Web3.to_hex(value)


class DeployedContract:
    """
    A contract instance whose deployment transaction has been submitted

    `address` stays None until `deployed()` has seen a successful receipt.
    """

    def __init__(
        self,
        w3: AsyncWeb3,
        contract_name: str,
        abi: List[Dict],
        tx_hash,
        receipt_timeout: float = 120,
        poll_latency: float = 0.1
    ):
        self.w3 = w3
        self.contract_name = contract_name
        self.abi = abi
        self.transaction_hash = _to_hex(tx_hash)
        self.receipt_timeout = receipt_timeout
        self.poll_latency = poll_latency

        self.receipt = None
        self._address: Optional[str] = None

    @property
    def address(self) -> Optional[str]:
        return self._address

    async def deployed(self) -> "DeployedContract":
        """
        Wait until the deployment transaction is mined

        Returns:
            self, with address and receipt populated
        """
        if self.receipt is not None:
            return self

        logger.debug(f"Waiting for confirmation of {self.transaction_hash}...")

        receipt = await self.w3.eth.wait_for_transaction_receipt(
            self.transaction_hash,
            timeout=self.receipt_timeout,
            poll_latency=self.poll_latency
        )

        if receipt['status'] != 1:
            logger.debug(f"Deployment of {self.contract_name} reverted: {self.transaction_hash}")
            raise TransactionRevertedError(self.transaction_hash)

        self.receipt = receipt
        self._address = Web3.to_checksum_address(receipt['contractAddress'])

        logger.debug(f"Gas used: {receipt.get('gasUsed')}")
        return self


class ContractFactory:
    """
    Deploys new instances of one compiled contract
    """

    def __init__(
        self,
        w3: AsyncWeb3,
        contract_name: str,
        artifact: Dict,
        signer: Signer,
        default_gas_limit: int = 3000000,
        gas_buffer: float = 1.2,
        receipt_timeout: float = 120,
        poll_latency: float = 0.1
    ):
        """
        Initialize Contract Factory

        Args:
            w3: AsyncWeb3 instance
            contract_name: Contract name
            artifact: Hardhat artifact (abi + bytecode)
            signer: Signer submitting the deployment
            default_gas_limit: Used when gas estimation fails
            gas_buffer: Multiplier applied to the gas estimate
            receipt_timeout: Seconds to wait for the receipt
            poll_latency: Seconds between receipt polls
        """
        self.w3 = w3
        self.contract_name = contract_name
        self.abi = artifact['abi']
        self.bytecode = artifact['bytecode']
        self.signer = signer
        self.default_gas_limit = default_gas_limit
        self.gas_buffer = gas_buffer
        self.receipt_timeout = receipt_timeout
        self.poll_latency = poll_latency

        self._contract = w3.eth.contract(abi=self.abi, bytecode=self.bytecode)

    async def deploy(self, *args) -> DeployedContract:
        """
        Submit one deployment transaction

        Args:
            *args: Constructor arguments

        Returns:
            Pending DeployedContract
        """
        constructor = self._contract.constructor(*args)
        base_tx = {'from': self.signer.address}

        gas_limit = await self._estimate_gas(constructor, base_tx)
        logger.debug(f"Gas limit: {gas_limit}")

        transaction = await constructor.build_transaction({**base_tx, 'gas': gas_limit})

        tx_hash = await self.signer.send_transaction(transaction)

        deployed = DeployedContract(
            self.w3,
            self.contract_name,
            self.abi,
            tx_hash,
            receipt_timeout=self.receipt_timeout,
            poll_latency=self.poll_latency
        )
        logger.debug(f"Transaction sent: {deployed.transaction_hash}")
        return deployed

    async def _estimate_gas(self, constructor, base_tx: Dict) -> int:
        """
        Estimate deployment gas with a safety buffer

        A reverting constructor fails the deployment here, before anything is sent.
        """
        try:
            gas_estimate = await constructor.estimate_gas(base_tx)
            return int(gas_estimate * self.gas_buffer)
        except ContractLogicError:
            raise
        except Exception as e:
            logger.debug(f"Gas estimation failed: {e}, using default")
            return self.default_gas_limit


class ContractFactoryProvider:
    """
    Hands out contract factories bound to one network and one signer
    """

    def __init__(self, w3: AsyncWeb3, artifacts: ArtifactStore, config,
                 signer: Optional[Signer] = None):
        """
        Initialize provider

        Args:
            w3: AsyncWeb3 instance
            artifacts: Artifact store
            config: DeployConfig
            signer: Signer (None = resolved on first use)
        """
        self.w3 = w3
        self.artifacts = artifacts
        self.config = config
        self.signer = signer

    @classmethod
    def from_config(cls, config) -> "ContractFactoryProvider":
        """Create a provider from an explicit DeployConfig"""
        w3 = AsyncWeb3(AsyncHTTPProvider(config.rpc_url))
        logger.debug(f"Using network {config.network} at {config.rpc_url}")
        return cls(w3, ArtifactStore(config.artifacts_dir), config)

    async def get_contract_factory(self, contract_name: str) -> ContractFactory:
        """
        Resolve a factory for a compiled contract

        Args:
            contract_name: Contract name

        Returns:
            ContractFactory
        """
        if not await self.w3.is_connected():
            raise NetworkUnreachableError("network unreachable")

        if self.config.chain_id is not None:
            node_chain_id = await self.w3.eth.chain_id
            if node_chain_id != self.config.chain_id:
                raise ConfigError(
                    f"Network '{self.config.network}' expects chain id {self.config.chain_id}, "
                    f"but the node at {self.config.rpc_url} reports {node_chain_id}"
                )

        artifact = self.artifacts.load(contract_name)

        if self.signer is None:
            self.signer = await create_signer(
                self.w3, self.config.private_key, self.config.chain_id
            )

        return ContractFactory(
            self.w3,
            contract_name,
            artifact,
            self.signer,
            default_gas_limit=self.config.default_gas_limit,
            gas_buffer=self.config.gas_buffer,
            receipt_timeout=self.config.receipt_timeout,
            poll_latency=self.config.poll_latency
        )
