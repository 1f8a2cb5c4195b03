"""
Deployment Script Tests
Exercises the SimpleVoting deployment flow against a mocked contract factory
"""

import pytest
from unittest.mock import Mock, AsyncMock

from blockchain.errors import NetworkUnreachableError, TransactionRevertedError
from scripts.deploy_contract import CONTRACT_NAME, main, run
from utils.config_loader import DeployConfig


ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"


@pytest.fixture
def config():
    """Local Hardhat node configuration"""
    return DeployConfig(
        network="localhost",
        rpc_url="http://127.0.0.1:8545",
        chain_id=31337
    )


def make_provider(factory_error=None, deploy_error=None, confirm_error=None, address=ADDRESS):
    """Build a provider -> factory -> contract chain of mocks"""
    contract = Mock()
    contract.address = address
    contract.deployed = AsyncMock(return_value=contract, side_effect=confirm_error)

    factory = Mock()
    factory.deploy = AsyncMock(return_value=contract, side_effect=deploy_error)

    provider = Mock()
    provider.get_contract_factory = AsyncMock(return_value=factory, side_effect=factory_error)

    return provider, factory, contract


class TestDeploySuccess:
    """Successful deployment"""

    def test_prints_address_and_exits_zero(self, config, capsys):
        provider, _, _ = make_provider()

        exit_code = run(config, provider)
        out, err = capsys.readouterr()

        assert exit_code == 0
        assert f"SimpleVoting deployed to: {ADDRESS}" in out
        assert out.count(ADDRESS) == 1
        assert err == ""

    def test_start_message_comes_first(self, config, capsys):
        provider, _, _ = make_provider()

        run(config, provider)
        lines = capsys.readouterr().out.splitlines()

        assert lines == [
            "Deploying SimpleVoting contract...",
            f"SimpleVoting deployed to: {ADDRESS}"
        ]

    def test_requests_named_factory_and_deploys_once(self, config):
        provider, factory, contract = make_provider()

        assert run(config, provider) == 0

        provider.get_contract_factory.assert_awaited_once_with(CONTRACT_NAME)
        factory.deploy.assert_awaited_once_with()
        contract.deployed.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_main_returns_address(self, config):
        provider, _, _ = make_provider()

        address = await main(config, provider)

        assert address == ADDRESS


class TestDeployFailure:
    """Every failure maps to exit code 1"""

    def test_factory_lookup_failure(self, config, capsys):
        provider, factory, _ = make_provider(factory_error=RuntimeError("network unreachable"))

        exit_code = run(config, provider)
        out, err = capsys.readouterr()

        assert exit_code == 1
        assert "network unreachable" in err
        assert "deployed to" not in out
        factory.deploy.assert_not_awaited()

    def test_deploy_submission_failure(self, config, capsys):
        provider, factory, contract = make_provider(
            deploy_error=ValueError("insufficient funds for gas * price + value")
        )

        exit_code = run(config, provider)
        _, err = capsys.readouterr()

        assert exit_code == 1
        assert "insufficient funds" in err
        factory.deploy.assert_awaited_once()
        contract.deployed.assert_not_awaited()

    def test_confirmation_failure(self, config, capsys):
        provider, factory, _ = make_provider(
            confirm_error=TransactionRevertedError("0x" + "ab" * 32)
        )

        exit_code = run(config, provider)
        out, err = capsys.readouterr()

        assert exit_code == 1
        assert "transaction reverted" in err
        assert "deployed to" not in out
        # No resubmission after a failed confirmation
        factory.deploy.assert_awaited_once()

    def test_error_type_is_reported(self, config, capsys):
        provider, _, _ = make_provider(factory_error=NetworkUnreachableError("network unreachable"))

        assert run(config, provider) == 1
        assert "NetworkUnreachableError: network unreachable" in capsys.readouterr().err

    def test_config_error_exits_one(self, capsys, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DEPLOY_NETWORK", "nowhere")
        monkeypatch.delenv("DEPLOY_RPC_URL", raising=False)

        assert run() == 1
        assert "Unknown network 'nowhere'" in capsys.readouterr().err


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
