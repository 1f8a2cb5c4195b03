"""
Utilities Package
Configuration loading and logging setup
"""

from .config_loader import DeployConfig, load_config
from .log_config import configure_logging

__all__ = [
    'DeployConfig',
    'load_config',
    'configure_logging'
]
