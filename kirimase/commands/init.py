"""``kirimase init`` -- inspect the project and write the initial config."""

from __future__ import annotations

from pathlib import Path

from ..analytics import AnalyticsEvent, AnalyticsReporter
from ..config import Config, ConfigStore
from ..packages import PMType
from ..prompts import InitOptions, ask_package_manager
from ..utils import print_info

# Checked in order; the first lockfile found decides the package manager.
LOCKFILES: dict[str, PMType] = {
    "pnpm-lock.yaml": PMType.PNPM,
    "yarn.lock": PMType.YARN,
    "bun.lockb": PMType.BUN,
    "package-lock.json": PMType.NPM,
}


def detect_package_manager(root: Path) -> PMType | None:
    for lockfile, pm in LOCKFILES.items():
        if (root / lockfile).exists():
            return pm
    return None


def detect_t3(root: Path, has_src: bool) -> bool:
    """A create-t3-app project keeps its tRPC root router at ``server/api/root.ts``."""
    prefix = "src/" if has_src else ""
    return (root / f"{prefix}server/api/root.ts").exists()


async def init_project(
    store: ConfigStore,
    options: InitOptions,
    reporter: AnalyticsReporter | None = None,
) -> Config:
    """Detect the project layout, ask what cannot be detected, write the config."""
    root = store.root
    if store.exists():
        print_info(f"Replacing existing config at {store.path}")

    has_src = (root / "src").is_dir()
    t3 = detect_t3(root, has_src)

    pm = options.package_manager or detect_package_manager(root)
    if pm is None:
        pm = await ask_package_manager(options)

    config = store.create(
        Config(
            has_src=has_src,
            packages=[],
            preferred_package_manager=pm,
            t3=t3,
            alias="~" if t3 else "@",
            analytics=options.analytics if options.analytics is not None else True,
        )
    )

    reporter = reporter or AnalyticsReporter(config)
    reporter.notify(AnalyticsEvent.INIT_CONFIG, {})
    await reporter.flush()
    return config
