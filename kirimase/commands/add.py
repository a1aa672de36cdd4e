"""``kirimase add`` -- choose packages, install them, record them in the config.

Only categories with no choice recorded yet are asked about: a project that
already has an ORM is not offered another one.
"""

from __future__ import annotations

from typing import Any

from ..analytics import AnalyticsEvent, AnalyticsReporter
from ..config import Config, ConfigStore, ConfigUpdate
from ..installer import build_install_plan, install_packages, install_shadcn_ui_components
from ..packages import CATALOG, AuthType, AvailablePackage, DBProvider, DBType
from ..prompts import (
    InitOptions,
    ask_auth,
    ask_auth_provider,
    ask_component_lib,
    ask_db_provider,
    ask_db_type,
    ask_misc_packages,
    ask_orm,
    ask_pscale,
    misc_package_choices,
)
from ..utils import print_info, print_success, print_warning, spinner


async def _choose_misc(
    options: InitOptions,
    selected: list[str],
    has_orm_and_auth: bool,
    config: Config,
) -> list[AvailablePackage]:
    if options.misc_packages is None:
        return await ask_misc_packages(selected, has_orm_and_auth, config)

    allowed = {
        c.value
        for c in misc_package_choices(selected, has_orm_and_auth, config)
        if c.disabled is None
    }
    chosen = []
    for package in options.misc_packages:
        if package in allowed:
            chosen.append(package)
        else:
            print_warning(f"Skipping {package.value}: already installed or missing prerequisites.")
    return chosen


async def add_packages(
    store: ConfigStore,
    options: InitOptions,
    reporter: AnalyticsReporter | None = None,
) -> Config:
    """Run the add flow and return the updated config."""
    config = store.require()
    updates: dict[str, Any] = {}
    new_packages: list[AvailablePackage] = []

    if config.component_lib is None:
        component_lib = await ask_component_lib(options)
        if component_lib is not None:
            updates["component_lib"] = component_lib
            new_packages.append(AvailablePackage(component_lib.value))

    orm = config.orm
    if orm is None:
        orm = await ask_orm(options)
        if orm is not None:
            db_type = await ask_db_type(options)
            if db_type == DBType.MYSQL and options.db_provider is None:
                provider = DBProvider.PLANETSCALE if await ask_pscale(options) else DBProvider.MYSQL_2
            else:
                provider = await ask_db_provider(options, db_type, config.preferred_package_manager)
            updates.update(orm=orm, driver=db_type, provider=provider)
            new_packages.append(AvailablePackage(orm.value))

    auth = config.auth
    if auth is None:
        auth = await ask_auth(options)
        if auth is not None:
            updates["auth"] = auth
            new_packages.append(AvailablePackage(auth.value))
            if auth == AuthType.NEXT_AUTH:
                providers = await ask_auth_provider()
                if providers:
                    names = ", ".join(p.value for p in providers)
                    print_info(f"Add client id and secret for {names} to your .env file.")

    has_orm_and_auth = orm is not None and auth is not None
    misc = await _choose_misc(
        options, [*config.packages, *new_packages], has_orm_and_auth, config
    )
    to_install = [p for p in [*new_packages, *misc] if p not in config.packages]

    if updates:
        config = store.update(ConfigUpdate(**updates))

    if not to_install:
        print_info("Nothing new to add.")
        return config

    spinner.start()
    try:
        await install_packages(
            build_install_plan(to_install, config),
            config.preferred_package_manager,
            cwd=store.root,
        )
        if AvailablePackage.SHADCN_UI in to_install:
            await install_shadcn_ui_components(
                CATALOG[AvailablePackage.SHADCN_UI].shadcn_components, config, root=store.root
            )
    finally:
        spinner.stop()

    for package in to_install:
        config = store.add_package(package)
    print_success(f"Added {', '.join(p.value for p in to_install)}")

    reporter = reporter or AnalyticsReporter(config)
    reporter.notify(AnalyticsEvent.ADD_PACKAGE, {"packages": [p.value for p in to_install]})
    await reporter.flush()
    return config
