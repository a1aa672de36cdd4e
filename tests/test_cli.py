"""Tests for the command-line entry point (kirimase.cli)."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from kirimase.cli import _options_from_args, build_parser, main
from kirimase.config import ConfigStore
from kirimase.packages import AvailablePackage, ORMType, PMType
from kirimase.utils import KirimaseError


pytestmark = pytest.mark.unit


class TestParser:
    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_add_options(self):
        args = build_parser().parse_args(
            ["add", "--orm", "drizzle", "--db", "pg", "--db-provider", "neon", "--misc", "trpc", "resend"]
        )
        options = _options_from_args(args)
        assert options.orm == ORMType.DRIZZLE
        assert options.misc_packages == [AvailablePackage.TRPC, AvailablePackage.RESEND]
        assert options.skip_orm is False

    def test_none_choice_sets_skip(self):
        args = build_parser().parse_args(["add", "--auth", "none", "--misc"])
        options = _options_from_args(args)
        assert options.auth is None
        assert options.skip_auth is True
        assert options.misc_packages == []

    def test_unknown_misc_package_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["add", "--misc", "left-pad"])

    def test_init_options(self):
        args = build_parser().parse_args(["init", "-p", "bun", "--no-analytics"])
        options = _options_from_args(args)
        assert options.package_manager == PMType.BUN
        assert options.analytics is False

    def test_generate_options(self):
        args = build_parser().parse_args(["generate", "--type", "hook", "--name", "toggle"])
        assert args.element == "hook"
        assert args.name == "toggle"


class TestMain:
    def test_dispatches_with_cwd(self, project_root: Path):
        with patch("kirimase.cli.generate", new_callable=AsyncMock) as mock_generate:
            code = main(["--cwd", str(project_root), "generate", "--type", "component", "--name", "Card"])
        assert code == 0
        store = mock_generate.await_args.args[0]
        assert isinstance(store, ConfigStore)
        assert store.root == project_root
        assert mock_generate.await_args.kwargs == {"element": "component", "name": "Card"}

    def test_update_config_dispatch(self, project_root: Path):
        with patch("kirimase.cli.update_config") as mock_update:
            assert main(["--cwd", str(project_root), "update-config"]) == 0
        mock_update.assert_called_once()

    def test_kirimase_error_exit_code(self, project_root: Path):
        with patch("kirimase.cli.add_packages", new=AsyncMock(side_effect=KirimaseError("no config"))), \
                patch("kirimase.cli.console") as mock_console:
            assert main(["--cwd", str(project_root), "add"]) == 1
        assert "no config" in mock_console.print.call_args.args[0]

    def test_missing_config_exit_code(self, project_root: Path):
        with patch("kirimase.cli.console") as mock_console:
            assert main(["--cwd", str(project_root), "update-config"]) == 1
        assert "kirimase init" in mock_console.print.call_args.args[0]

    def test_invalid_config_exit_code(self, project_root: Path, raw_config_writer):
        raw_config_writer(project_root, {"packages": []})
        with patch("kirimase.cli.console"):
            assert main(["--cwd", str(project_root), "update-config"]) == 1

    def test_interrupt_exit_code(self, project_root: Path):
        with patch("kirimase.cli.init_project", new=AsyncMock(side_effect=KeyboardInterrupt)), \
                patch("kirimase.cli.console", MagicMock()):
            assert main(["--cwd", str(project_root), "init"]) == 130
