"""
Deployment Signer
Submits transactions either with a local private key or through a node-managed account
"""

from typing import Dict, Optional
from web3 import AsyncWeb3, Web3
from eth_account import Account
from loguru import logger

from .errors import DeploymentError


class Signer:
    """
    Base signer: owns an address and submits transactions from it
    """

    def __init__(self, w3: AsyncWeb3, address: str):
        self.w3 = w3
        self.address = Web3.to_checksum_address(address)

    async def send_transaction(self, transaction: Dict) -> bytes:
        """
        Submit a transaction exactly once

        Args:
            transaction: Transaction dict (gas and fee fields already set)

        Returns:
            Transaction hash
        """
        raise NotImplementedError


class LocalKeySigner(Signer):
    """
    Signs locally with eth_account and broadcasts the raw transaction
    """

    def __init__(self, w3: AsyncWeb3, private_key: str, chain_id: Optional[int] = None):
        """
        Initialize local key signer

        Args:
            w3: AsyncWeb3 instance
            private_key: Hex private key
            chain_id: Chain id to sign for (None = ask the node)
        """
        try:
            self.account = Account.from_key(private_key)
        except (ValueError, TypeError) as e:
            # Do not echo the key back
            raise DeploymentError("DEPLOYER_PRIVATE_KEY is not a valid private key") from e

        super().__init__(w3, self.account.address)
        self.chain_id = chain_id

    async def send_transaction(self, transaction: Dict) -> bytes:
        tx = dict(transaction)
        tx['from'] = self.address

        if 'nonce' not in tx:
            # Include pending transactions
            tx['nonce'] = await self.w3.eth.get_transaction_count(self.address, 'pending')

        if 'chainId' not in tx:
            tx['chainId'] = self.chain_id if self.chain_id is not None else await self.w3.eth.chain_id

        if 'gasPrice' not in tx and 'maxFeePerGas' not in tx:
            tx['gasPrice'] = await self.w3.eth.gas_price

        logger.debug(f"Signing transaction with nonce {tx['nonce']} on chain {tx['chainId']}")

        signed_tx = self.account.sign_transaction(tx)
        return await self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)


class NodeAccountSigner(Signer):
    """
    Uses an account unlocked on the node (e.g. `npx hardhat node`)
    """

    async def send_transaction(self, transaction: Dict) -> bytes:
        tx = dict(transaction)
        tx['from'] = self.address
        return await self.w3.eth.send_transaction(tx)


async def create_signer(w3: AsyncWeb3, private_key: Optional[str] = None,
                        chain_id: Optional[int] = None) -> Signer:
    """
    Pick the signer for a deployment

    Args:
        w3: AsyncWeb3 instance
        private_key: Local key (None = first node-managed account)
        chain_id: Chain id for local signing

    Returns:
        Signer
    """
    if private_key:
        signer = LocalKeySigner(w3, private_key, chain_id)
        logger.debug(f"Deploying from: {signer.address}")
        return signer

    accounts = await w3.eth.accounts
    if not accounts:
        raise DeploymentError(
            "No DEPLOYER_PRIVATE_KEY set and the node exposes no unlocked accounts"
        )

    signer = NodeAccountSigner(w3, accounts[0])
    logger.debug(f"Deploying from node account: {signer.address}")
    return signer
