"""Tests for dependency installation (kirimase.installer).

Covers:
- install subcommand per package manager
- install_packages: regular / dev ordering, empty lists skipped, failures swallowed
- install_shadcn_ui_components: existence checks, pnpm dlx prefix, no-op path
- build_install_plan: catalog lookups, driver and adapter packages, de-duplication
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, call, patch

import pytest

from kirimase.config import Config
from kirimase.installer import (
    PM_INSTALL_COMMAND,
    build_install_plan,
    install_packages,
    install_shadcn_ui_components,
    install_subcommand,
)
from kirimase.packages import AuthType, AvailablePackage, DBProvider, ORMType, PMType
from kirimase.utils import CommandError


pytestmark = pytest.mark.unit


@pytest.fixture
def mock_run():
    with patch("kirimase.installer.run_command", new_callable=AsyncMock) as mock:
        yield mock


# ---------------------------------------------------------------------------
# install_subcommand
# ---------------------------------------------------------------------------


class TestInstallSubcommand:
    def test_npm_uses_install(self):
        assert install_subcommand(PMType.NPM) == "install"

    @pytest.mark.parametrize("pm", ["yarn", "pnpm", "bun"])
    def test_others_use_add(self, pm: str):
        assert install_subcommand(pm) == "add"


# ---------------------------------------------------------------------------
# install_packages
# ---------------------------------------------------------------------------


class TestInstallPackages:
    @pytest.mark.asyncio
    async def test_regular_only(self, mock_run: AsyncMock):
        await install_packages({"regular": "a b", "dev": ""}, "npm")
        mock_run.assert_awaited_once_with("npm", ["install", "a", "b"], cwd=None)

    @pytest.mark.asyncio
    async def test_regular_then_dev(self, mock_run: AsyncMock):
        await install_packages({"regular": "zod", "dev": "tsx dotenv"}, PMType.PNPM)
        assert mock_run.await_args_list == [
            call("pnpm", ["add", "zod"], cwd=None),
            call("pnpm", ["add", "-D", "tsx", "dotenv"], cwd=None),
        ]

    @pytest.mark.asyncio
    async def test_dev_only(self, mock_run: AsyncMock):
        await install_packages({"regular": "", "dev": "prisma"}, "bun")
        mock_run.assert_awaited_once_with("bun", ["add", "-D", "prisma"], cwd=None)

    @pytest.mark.asyncio
    async def test_nothing_to_install(self, mock_run: AsyncMock):
        await install_packages({"regular": "", "dev": ""}, "yarn")
        mock_run.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_passes_cwd(self, mock_run: AsyncMock, tmp_path: Path):
        await install_packages({"regular": "zod"}, "npm", cwd=tmp_path)
        mock_run.assert_awaited_once_with("npm", ["install", "zod"], cwd=tmp_path)

    @pytest.mark.asyncio
    async def test_failure_is_logged_not_raised(self, mock_run: AsyncMock):
        mock_run.side_effect = CommandError("npm", ["install", "zod"], 1)
        with patch("kirimase.installer.print_error") as mock_error:
            await install_packages({"regular": "zod", "dev": "tsx"}, "npm")
        mock_error.assert_called_once()
        assert "exited with code 1" in mock_error.call_args.args[0]
        # The dev step is not attempted after a failed regular step.
        assert mock_run.await_count == 1

    @pytest.mark.asyncio
    async def test_stops_spinner(self, mock_run: AsyncMock):
        with patch("kirimase.installer.spinner") as mock_spinner:
            await install_packages({"regular": "zod"}, "npm")
        mock_spinner.stop.assert_called_once()


# ---------------------------------------------------------------------------
# install_shadcn_ui_components
# ---------------------------------------------------------------------------


class TestInstallShadcnUIComponents:
    @pytest.mark.asyncio
    async def test_installs_only_missing(self, mock_run, project_root: Path, base_config: Config):
        ui_dir = project_root / "components" / "ui"
        ui_dir.mkdir(parents=True)
        (ui_dir / "button.tsx").write_text("", encoding="utf-8")

        missing = await install_shadcn_ui_components(["button", "input"], base_config, root=project_root)

        assert missing == ["input"]
        mock_run.assert_awaited_once_with(
            "npx", ["shadcn-ui@latest", "add", "input"], cwd=project_root
        )

    @pytest.mark.asyncio
    async def test_src_prefix_respected(self, mock_run, project_root: Path, src_config: Config):
        ui_dir = project_root / "src" / "components" / "ui"
        ui_dir.mkdir(parents=True)
        (ui_dir / "label.tsx").write_text("", encoding="utf-8")

        missing = await install_shadcn_ui_components(["label"], src_config, root=project_root)

        assert missing == []
        mock_run.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_pnpm_uses_dlx(self, mock_run, project_root: Path, base_config: Config):
        config = base_config.model_copy(update={"preferred_package_manager": PMType.PNPM})
        await install_shadcn_ui_components(["card"], config, root=project_root)
        mock_run.assert_awaited_once_with(
            "pnpm", ["dlx", "shadcn-ui@latest", "add", "card"], cwd=project_root
        )

    @pytest.mark.asyncio
    async def test_bun_uses_bunx(self, mock_run, project_root: Path, base_config: Config):
        config = base_config.model_copy(update={"preferred_package_manager": PMType.BUN})
        await install_shadcn_ui_components(["card"], config, root=project_root)
        assert mock_run.await_args.args[0] == "bunx"

    @pytest.mark.asyncio
    async def test_nothing_missing_is_noop(self, mock_run, project_root: Path, base_config: Config):
        with patch("kirimase.installer.print_info") as mock_info:
            assert await install_shadcn_ui_components([], base_config, root=project_root) == []
        mock_run.assert_not_awaited()
        mock_info.assert_called_once()

    @pytest.mark.asyncio
    async def test_failure_swallowed(self, mock_run, project_root: Path, base_config: Config):
        mock_run.side_effect = CommandError("npx", ["shadcn-ui@latest"], 1)
        with patch("kirimase.installer.print_error") as mock_error:
            missing = await install_shadcn_ui_components(["toast"], base_config, root=project_root)
        assert missing == ["toast"]
        assert "Failed to install components" in mock_error.call_args.args[0]

    def test_prefix_map(self):
        assert PM_INSTALL_COMMAND == {
            PMType.PNPM: "pnpm",
            PMType.NPM: "npx",
            PMType.YARN: "npx",
            PMType.BUN: "bunx",
        }


# ---------------------------------------------------------------------------
# build_install_plan
# ---------------------------------------------------------------------------


class TestBuildInstallPlan:
    def test_misc_package(self, base_config: Config):
        plan = build_install_plan([AvailablePackage.RESEND], base_config)
        assert plan == {"regular": "resend @react-email/components", "dev": ""}

    def test_orm_adds_driver(self, base_config: Config):
        config = base_config.model_copy(
            update={"orm": ORMType.DRIZZLE, "provider": DBProvider.NODE_POSTGRES}
        )
        plan = build_install_plan([AvailablePackage.DRIZZLE], config)
        assert "drizzle-orm" in plan["regular"].split()
        assert "pg" in plan["regular"].split()
        assert "@types/pg" in plan["dev"].split()

    def test_bun_sqlite_adds_nothing(self, base_config: Config):
        config = base_config.model_copy(
            update={"orm": ORMType.DRIZZLE, "provider": DBProvider.BUN_SQLITE}
        )
        plan = build_install_plan([AvailablePackage.DRIZZLE], config)
        assert "" not in plan["regular"].split(" ")
        assert plan["dev"] == "drizzle-kit tsx dotenv"

    def test_auth_adds_adapter_for_orm(self, base_config: Config):
        config = base_config.model_copy(update={"orm": ORMType.PRISMA, "auth": AuthType.NEXT_AUTH})
        plan = build_install_plan([AvailablePackage.NEXT_AUTH], config)
        assert plan["regular"] == "next-auth @auth/prisma-adapter"

    def test_auth_without_adapter(self, base_config: Config):
        config = base_config.model_copy(update={"orm": ORMType.DRIZZLE})
        plan = build_install_plan([AvailablePackage.CLERK], config)
        assert plan["regular"] == "@clerk/nextjs"

    def test_duplicates_dropped(self, base_config: Config):
        plan = build_install_plan([AvailablePackage.DRIZZLE, AvailablePackage.PRISMA], base_config)
        assert plan["regular"].split().count("zod") == 1
