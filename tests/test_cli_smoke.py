"""Smoke tests for CLI commands.

Tests that CLI commands parse correctly and don't crash. Uses Click's
CliRunner with fake sockets so nothing is sent on the network.
"""

import json

import pytest
from click.testing import CliRunner

from ledgrid.cli.main import cli


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def cli_args(temp_dir):
    """Global options keeping config and logs inside a temp directory."""
    config_path = temp_dir / "config.json"
    config_path.write_text(json.dumps({
        "layouts_dir": str(temp_dir / "layouts"),
        "min_send_interval": 0.0,
        "turn_off_interval": 0.0,
    }))
    return ["--config", str(config_path), "--log-file", str(temp_dir / "ledgrid.log")]


@pytest.mark.integration
class TestCLIHelp:
    """Test that all commands have working help text."""

    def test_main_help(self, runner):
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'WLED' in result.output
        assert '--verbose' in result.output

    def test_version_flag(self, runner):
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert '0.1.0' in result.output

    @pytest.mark.parametrize("command", ["layouts", "show", "test", "off", "config"])
    def test_command_help(self, runner, command):
        result = runner.invoke(cli, [command, '--help'])
        assert result.exit_code == 0


@pytest.mark.integration
class TestCLICommands:
    """Test commands end to end with fake sockets."""

    def test_layouts(self, runner, cli_args):
        result = runner.invoke(cli, [*cli_args, 'layouts'])
        assert result.exit_code == 0
        assert 'TwoGrids' in result.output
        assert 'built-in' in result.output

    def test_show(self, runner, cli_args):
        result = runner.invoke(cli, [*cli_args, 'show', 'FourGrids'])
        assert result.exit_code == 0
        assert 'Grid01' in result.output
        assert 'mirror' in result.output
        assert '4 panel(s)' in result.output

    def test_show_unknown_layout(self, runner, cli_args):
        result = runner.invoke(cli, [*cli_args, 'show', 'Nope'])
        assert result.exit_code == 1
        assert "Layout 'Nope' not found" in result.output

    def test_test_pattern(self, runner, cli_args, socket_factory):
        result = runner.invoke(
            cli,
            [*cli_args, 'test', 'TwoGrids', '--seconds', '0.05', '--fps', '100'],
            obj={"socket_factory": socket_factory},
        )
        assert result.exit_code == 0, result.output
        assert 'Panels turned off' in result.output
        assert len(socket_factory.sockets) == 2
        # Pattern frames plus five black frames per panel
        assert len(socket_factory.sent(0)) > 5

    def test_off_artnet(self, runner, cli_args, socket_factory):
        result = runner.invoke(
            cli,
            [*cli_args, 'off', 'TwoGrids', '--protocol', 'artnet'],
            obj={"socket_factory": socket_factory},
        )
        assert result.exit_code == 0, result.output
        packets = socket_factory.sent(1)
        assert len(packets) == 5
        assert packets[0].startswith(b"Art-Net\x00")
        assert packets[0][14:16] == b"\x01\x00"

    def test_off_reports_failed_sends(self, runner, cli_args, failing_socket_factory):
        result = runner.invoke(
            cli,
            [*cli_args, 'off', 'OneGrid'],
            obj={"socket_factory": failing_socket_factory},
        )
        assert result.exit_code == 1
        assert '[FAIL]' in result.output
        assert '[OK]' not in result.output
        assert failing_socket_factory.sockets[0].sendto.call_count == 5

    def test_test_pattern_reports_failed_turn_off(self, runner, cli_args, failing_socket_factory):
        result = runner.invoke(
            cli,
            [*cli_args, 'test', 'OneGrid', '--seconds', '0'],
            obj={"socket_factory": failing_socket_factory},
        )
        assert result.exit_code == 1
        assert '[FAIL]' in result.output

    def test_config_init_and_show(self, runner, temp_dir):
        config_path = temp_dir / "new" / "config.json"
        args = ["--config", str(config_path), "--log-file", str(temp_dir / "ledgrid.log")]

        result = runner.invoke(cli, [*args, 'config', 'init'])
        assert result.exit_code == 0
        assert config_path.exists()

        result = runner.invoke(cli, [*args, 'config', 'init'])
        assert 'already exists' in result.output

        result = runner.invoke(cli, [*args, 'config', 'show'])
        assert result.exit_code == 0
        assert 'ddp_port' in result.output
        assert '4048' in result.output

    def test_invalid_config_reports_hint(self, runner, temp_dir):
        config_path = temp_dir / "config.json"
        config_path.write_text('{"protocol": "sacn"}')

        result = runner.invoke(
            cli,
            ["--config", str(config_path), "--log-file", str(temp_dir / "l.log"), 'config', 'show'],
        )

        assert result.exit_code == 1
        assert 'Valid protocols' in result.output
