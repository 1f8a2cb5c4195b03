"""
Contract Deployment Wrapper
Runs scripts/deploy_contract.py against the selected network
"""

import os
import argparse
import subprocess
import sys
from pathlib import Path


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Deploy the SimpleVoting contract")
    parser.add_argument(
        "--network",
        help="Network name from config/networks.json (default: DEPLOY_NETWORK or localhost)"
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    print("=" * 70)
    print("SimpleVoting Contract Deployment")
    print("=" * 70)
    print()

    env = dict(os.environ)
    if args.network:
        env['DEPLOY_NETWORK'] = args.network

    # Run deployment script
    result = subprocess.run(
        [sys.executable, "-m", "scripts.deploy_contract"],
        cwd=str(Path(__file__).resolve().parent),
        env=env
    )

    return result.returncode


if __name__ == "__main__":
    sys.exit(main())
