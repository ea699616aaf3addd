"""
Tests for the fpmmonitor command-line interface.
"""

import asyncio
import signal
import pytest
from unittest.mock import AsyncMock, Mock, patch

from fpmmonitor import __version__
from fpmmonitor.cli.main import apply_cli_overrides, build_parser, main_cli, run_agent
from fpmmonitor.config import get_config, set_config_path
from fpmmonitor.metrics.base import DryRunSink


class TestArgumentParsing:
    """Tests for argument parsing and overrides."""

    def test_defaults(self):
        args = build_parser().parse_args([])

        assert args.config is None
        assert args.interval is None
        assert args.dimension is None
        assert args.dry_run is False
        assert args.log_level == "INFO"

    def test_all_options(self):
        args = build_parser().parse_args([
            "-i", "30", "-r", "eu-west-1", "-n", "Fpm",
            "-d", "env=prod", "--dimension", "role=web", "--dry-run",
        ])

        assert args.interval == 30
        assert args.region == "eu-west-1"
        assert args.namespace == "Fpm"
        assert args.dimension == ["env=prod", "role=web"]
        assert args.dry_run is True

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_non_integer_interval_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--interval", "ten"])

    def test_cli_overrides_config_file(self, config_file):
        set_config_path(config_file)
        apply_cli_overrides(build_parser().parse_args(["-i", "20", "-d", "env=prod"]))

        config = get_config()

        assert config.interval_seconds == 20
        assert config.dimensions == ["env=prod"]
        # Not given on the command line, so the file wins.
        assert config.namespace == "TestFpm"
        assert config.dry_run is True

    def test_unset_dry_run_does_not_disable_file_setting(self, config_file):
        set_config_path(config_file)
        apply_cli_overrides(build_parser().parse_args([]))

        assert get_config().dry_run is True


class TestMainCli:
    """Tests for the main entry point."""

    def test_missing_config_file_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main_cli(["--config", str(tmp_path / "absent.toml")])
        assert exc_info.value.code == 1

    def test_unreadable_config_path_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main_cli(["--config", str(tmp_path), "--dry-run"])
        assert exc_info.value.code == 1

    def test_invalid_interval_exits(self, config_file):
        with pytest.raises(SystemExit) as exc_info:
            main_cli(["--config", str(config_file), "--interval", "0"])
        assert exc_info.value.code == 1

    def test_sink_setup_failure_exits(self, config_file):
        with patch("fpmmonitor.cli.main.create_sink", side_effect=RuntimeError("no region")):
            with pytest.raises(SystemExit) as exc_info:
                main_cli(["--config", str(config_file)])
        assert exc_info.value.code == 1

    @patch("fpmmonitor.cli.main.find_missing_tools", return_value=[])
    @patch("fpmmonitor.cli.main.asyncio.run")
    @patch("fpmmonitor.cli.main.run_agent", new_callable=Mock)
    def test_wires_reporting_loop(self, mock_run_agent, mock_asyncio_run, mock_tools, config_file):
        main_cli(["--config", str(config_file), "--interval", "7"])

        mock_asyncio_run.assert_called_once_with(mock_run_agent.return_value)
        reporting_loop = mock_run_agent.call_args[0][0]
        assert isinstance(reporting_loop.sink, DryRunSink)
        assert reporting_loop.sink.dimensions == [("env", "test"), ("role", "web")]
        assert reporting_loop.scheduler.interval == 7
        assert reporting_loop.aggregator.max_workers == 4

    @patch("fpmmonitor.cli.main.find_missing_tools", return_value=["nsenter"])
    @patch("fpmmonitor.cli.main.asyncio.run")
    @patch("fpmmonitor.cli.main.run_agent", new_callable=Mock)
    def test_missing_tools_only_warn(self, mock_run_agent, mock_asyncio_run, mock_tools, config_file, caplog):
        with caplog.at_level("WARNING"):
            main_cli(["--config", str(config_file)])

        assert "nsenter" in caplog.text
        mock_asyncio_run.assert_called_once()


class TestRunAgent:
    """Tests for signal handling around the reporting loop."""

    @pytest.mark.asyncio
    async def test_signal_sets_stop_event(self):
        reporting_loop = Mock()

        async def fake_run(stop_event):
            signal.raise_signal(signal.SIGTERM)
            await asyncio.wait_for(stop_event.wait(), timeout=2)

        reporting_loop.run = fake_run

        await run_agent(reporting_loop)

    @pytest.mark.asyncio
    async def test_runs_loop_with_stop_event(self):
        reporting_loop = Mock()
        reporting_loop.run = AsyncMock()

        await run_agent(reporting_loop)

        reporting_loop.run.assert_awaited_once()
        assert isinstance(reporting_loop.run.await_args.args[0], asyncio.Event)
