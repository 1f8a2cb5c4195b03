"""
Smart Contract Deployment Script
Deploys the SimpleVoting contract and prints its address
"""

import sys
import asyncio
from typing import Optional
from loguru import logger

from blockchain.contract_factory import ContractFactoryProvider
from utils.config_loader import DeployConfig, load_config
from utils.log_config import configure_logging


CONTRACT_NAME = "SimpleVoting"


async def main(config: DeployConfig, provider: Optional[ContractFactoryProvider] = None) -> str:
    """
    Deploy one SimpleVoting instance

    Args:
        config: Target network and signer
        provider: Factory provider (None = built from config)

    Returns:
        Deployed contract address
    """
    logger.info(f"Deploying {CONTRACT_NAME} contract...")

    if provider is None:
        provider = ContractFactoryProvider.from_config(config)

    factory = await provider.get_contract_factory(CONTRACT_NAME)
    contract = await factory.deploy()

    await contract.deployed()

    logger.info(f"{CONTRACT_NAME} deployed to: {contract.address}")
    return contract.address


def run(config: Optional[DeployConfig] = None,
        provider: Optional[ContractFactoryProvider] = None) -> int:
    """
    Run the deployment and map the outcome to a process exit code

    Returns:
        0 on success, 1 on any error
    """
    configure_logging()

    try:
        if config is None:
            config = load_config()

        if config.log_file:
            configure_logging(config.log_file)

        asyncio.run(main(config, provider))

    except Exception as e:
        logger.error(f"{type(e).__name__}: {e}")
        logger.opt(exception=e).debug("Deployment failed")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(run())
