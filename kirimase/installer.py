"""Dependency installation through the project's package manager.

Installation is best effort: a failed ``npm install`` (or ``shadcn-ui add``)
is reported on the console and the calling command carries on.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping

from .config import Config
from .packages import (
    AUTH_ADAPTERS,
    CATALOG,
    DB_DRIVER_PACKAGES,
    AvailablePackage,
    PackageCategory,
    PMType,
)
from .utils import CommandError, print_error, print_info, run_command, spinner

# Binary used to run one-off CLIs, per package manager.
PM_INSTALL_COMMAND: dict[PMType, str] = {
    PMType.PNPM: "pnpm",
    PMType.NPM: "npx",
    PMType.YARN: "npx",
    PMType.BUN: "bunx",
}

SHADCN_CLI = "shadcn-ui@latest"


def install_subcommand(pm_type: PMType | str) -> str:
    """``install`` for npm, ``add`` for yarn, pnpm and bun."""
    return "install" if PMType(pm_type) == PMType.NPM else "add"


async def install_packages(
    packages: Mapping[str, str],
    pm_type: PMType | str,
    cwd: str | Path | None = None,
) -> None:
    """Install regular then dev dependencies with *pm_type*.

    Args:
        packages: Mapping with space-separated ``"regular"`` and ``"dev"``
            package lists.  An empty list skips that step.
        pm_type: The package manager binary to invoke.
        cwd: Project directory to run in.  Defaults to the current directory.
    """
    pm = PMType(pm_type)
    command = install_subcommand(pm)
    regular = packages.get("regular", "").split()
    dev = packages.get("dev", "").split()

    try:
        spinner.stop()
        print_info("Installing Dependencies")
        if regular:
            await run_command(pm.value, [command, *regular], cwd=cwd)
        if dev:
            await run_command(pm.value, [command, "-D", *dev], cwd=cwd)
    except CommandError as exc:
        print_error(f"An error occurred: {exc}")


async def install_shadcn_ui_components(
    components: Iterable[str],
    config: Config,
    root: str | Path | None = None,
) -> list[str]:
    """Run the shadcn-ui CLI for every component not yet generated.

    A component counts as installed when
    ``<root>/<root_path>components/ui/<name>.tsx`` exists.

    Returns:
        The components that were passed to the CLI (empty if none were missing).
    """
    base = Path(root) if root is not None else Path.cwd()
    ui_dir = base / f"{config.root_path}components" / "ui"
    missing = [c for c in components if not (ui_dir / f"{c}.tsx").exists()]

    if not missing:
        print_info("All shadcn-ui components already installed.")
        return []

    pm = config.preferred_package_manager
    args = [SHADCN_CLI, "add", *missing]
    if pm == PMType.PNPM:
        args = ["dlx", *args]

    try:
        spinner.stop()
        print_info("Installing ShadcnUI Components")
        await run_command(PM_INSTALL_COMMAND[pm], args, cwd=base)
    except CommandError as exc:
        print_error(f"Failed to install components: {exc}")
    return missing


def build_install_plan(
    packages: Iterable[AvailablePackage],
    config: Config,
) -> dict[str, str]:
    """Collect the npm dependencies for *packages* from the catalog.

    When an ORM is among *packages* the driver for the configured database
    provider is added too, and an auth package brings the adapter for the
    configured ORM.  Duplicates are dropped, order is kept.

    Returns:
        ``{"regular": "...", "dev": "..."}`` ready for :func:`install_packages`.
    """
    regular: list[str] = []
    dev: list[str] = []

    def _extend(target: list[str], names: Iterable[str]) -> None:
        for name in names:
            if name and name not in target:
                target.append(name)

    for package in packages:
        info = CATALOG[AvailablePackage(package)]
        _extend(regular, info.regular)
        _extend(dev, info.dev)
        if info.category == PackageCategory.ORM and config.provider is not None:
            driver, driver_dev = DB_DRIVER_PACKAGES[config.provider]
            _extend(regular, [driver])
            _extend(dev, [driver_dev])
        if info.category == PackageCategory.AUTH and config.orm is not None:
            _extend(regular, [AUTH_ADAPTERS.get((info.id.value, config.orm.value), "")])

    return {"regular": " ".join(regular), "dev": " ".join(dev)}
