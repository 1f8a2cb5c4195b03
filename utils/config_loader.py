"""
Deployment Configuration
Resolves the target network and signing credentials into one explicit object
"""

import os
import json
from typing import Dict, Optional
from dotenv import load_dotenv

from blockchain.errors import ConfigError


DEFAULT_CONFIG_PATH = "config/networks.json"
DEFAULT_RECEIPT_TIMEOUT = 120
DEFAULT_POLL_LATENCY = 0.1
DEFAULT_GAS_LIMIT = 3000000
DEFAULT_GAS_BUFFER = 1.2


class DeployConfig:
    """
    Everything a deployment needs to know about where and as whom to deploy
    """

    def __init__(
        self,
        network: str,
        rpc_url: str,
        chain_id: Optional[int] = None,
        private_key: Optional[str] = None,
        artifacts_dir: str = "artifacts",
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
        poll_latency: float = DEFAULT_POLL_LATENCY,
        default_gas_limit: int = DEFAULT_GAS_LIMIT,
        gas_buffer: float = DEFAULT_GAS_BUFFER,
        log_file: Optional[str] = None
    ):
        if not rpc_url:
            raise ConfigError(f"No RPC URL configured for network '{network}'")

        self.network = network
        self.rpc_url = rpc_url
        self.chain_id = chain_id
        self.private_key = private_key
        self.artifacts_dir = artifacts_dir
        self.receipt_timeout = receipt_timeout
        self.poll_latency = poll_latency
        self.default_gas_limit = default_gas_limit
        self.gas_buffer = gas_buffer
        self.log_file = log_file

    def __repr__(self) -> str:
        # Never print the key
        signer = "local key" if self.private_key else "node account"
        return (
            f"DeployConfig(network={self.network!r}, rpc_url={self.rpc_url!r}, "
            f"chain_id={self.chain_id}, signer={signer})"
        )


def load_config(
    network: Optional[str] = None,
    config_path: str = DEFAULT_CONFIG_PATH,
    env: Optional[Dict[str, str]] = None
) -> DeployConfig:
    """
    Build a DeployConfig from environment variables over config/networks.json

    Args:
        network: Network name (None = DEPLOY_NETWORK or file default)
        config_path: Path to the networks JSON file
        env: Environment mapping (None = os.environ after loading .env)

    Returns:
        DeployConfig
    """
    if env is None:
        load_dotenv()
        env = dict(os.environ)

    file_config = _read_config_file(config_path)
    networks = file_config.get('networks', {})
    deployment = file_config.get('deployment', {})

    network = network or env.get('DEPLOY_NETWORK') or file_config.get('default_network', 'localhost')

    if network in networks:
        entry = networks[network]
    elif env.get('DEPLOY_RPC_URL'):
        # Ad-hoc network defined entirely by the environment
        entry = {}
    else:
        known = ", ".join(sorted(networks)) or "none"
        raise ConfigError(f"Unknown network '{network}' (known: {known})")

    rpc_url = env.get('DEPLOY_RPC_URL') or entry.get('rpc_url')
    if not rpc_url and entry.get('rpc_url_env'):
        rpc_url = env.get(entry['rpc_url_env'])

    chain_id = _parse_number(env, 'DEPLOY_CHAIN_ID', int, entry.get('chain_id'))

    return DeployConfig(
        network=network,
        rpc_url=rpc_url,
        chain_id=chain_id,
        private_key=env.get('DEPLOYER_PRIVATE_KEY') or None,
        artifacts_dir=env.get('DEPLOY_ARTIFACTS_DIR', 'artifacts'),
        receipt_timeout=_parse_number(
            env, 'DEPLOY_RECEIPT_TIMEOUT', float,
            entry.get('receipt_timeout', DEFAULT_RECEIPT_TIMEOUT)
        ),
        poll_latency=_parse_number(
            env, 'DEPLOY_POLL_LATENCY', float,
            entry.get('poll_latency', DEFAULT_POLL_LATENCY)
        ),
        default_gas_limit=_parse_number(
            env, 'DEPLOY_GAS_LIMIT', int,
            deployment.get('default_gas_limit', DEFAULT_GAS_LIMIT)
        ),
        gas_buffer=deployment.get('gas_buffer', DEFAULT_GAS_BUFFER),
        log_file=env.get('DEPLOY_LOG_FILE') or None
    )


def _read_config_file(config_path: str) -> Dict:
    """Read the networks file; a missing file means no predefined networks"""
    if not os.path.exists(config_path):
        return {}

    try:
        with open(config_path, 'r') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e


def _parse_number(env: Dict[str, str], name: str, cast, default):
    """Read a numeric environment variable, falling back to default"""
    raw = env.get(name)

    if raw is None or raw == '':
        return default

    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got '{raw}'") from e
