"""Interactive question flows.

Each ``ask_*`` coroutine returns the value supplied non-interactively through
:class:`InitOptions` when there is one, and otherwise asks the user with a
questionary select, checkbox, confirm or text prompt.  A prompt the user
cancels (Ctrl-C) raises :class:`PromptAborted`.
"""

from __future__ import annotations

from typing import Any, Optional

import questionary
from pydantic import BaseModel, Field

from .config import Config
from .generators.elements import ElementType, validate_element_name
from .packages import (
    DB_PROVIDERS,
    DB_TYPE_NAMES,
    AuthProvider,
    AuthType,
    AvailablePackage,
    ComponentLibType,
    DBProvider,
    DBType,
    ORMType,
    PackageCategory,
    PackageChoice,
    PMType,
    packages_in,
)
from .utils import KirimaseError, print_info

# questionary substitutes the title for a ``None`` value, so "None" choices
# carry this marker instead and are mapped back.
_NONE = "__none__"


class PromptAborted(KirimaseError):
    """Raised when the user cancels a prompt."""

    def __init__(self) -> None:
        super().__init__("Prompt cancelled.")


class InitOptions(BaseModel):
    """Answers supplied up front (CLI flags); ``None`` means "ask"."""

    package_manager: Optional[PMType] = None
    component_lib: Optional[ComponentLibType] = None
    orm: Optional[ORMType] = None
    db: Optional[DBType] = None
    db_provider: Optional[DBProvider] = None
    auth: Optional[AuthType] = None
    misc_packages: Optional[list[AvailablePackage]] = None
    analytics: Optional[bool] = None
    skip_component_lib: bool = Field(default=False, description="Answer 'None' without asking")
    skip_orm: bool = Field(default=False, description="Answer 'None' without asking")
    skip_auth: bool = Field(default=False, description="Answer 'None' without asking")


async def _ask(question: Any) -> Any:
    answer = await question.ask_async()
    if answer is None:
        raise PromptAborted()
    return answer


def _package_choices(category: PackageCategory) -> list[Any]:
    choices: list[Any] = [
        questionary.Choice(title=info.name, value=info.id.value)
        for info in packages_in(category)
    ]
    choices.append(questionary.Separator())
    choices.append(questionary.Choice(title="None", value=_NONE))
    return choices


async def _select_package(message: str, category: PackageCategory) -> Optional[str]:
    answer = await _ask(questionary.select(message, choices=_package_choices(category)))
    return None if answer == _NONE else answer


# ---------------------------------------------------------------------------
# Stack choices
# ---------------------------------------------------------------------------


async def ask_package_manager(options: InitOptions) -> PMType:
    if options.package_manager is not None:
        return options.package_manager
    answer = await _ask(
        questionary.select(
            "Please pick your preferred package manager",
            choices=[questionary.Choice(title=pm.value, value=pm.value) for pm in PMType],
        )
    )
    return PMType(answer)


async def ask_component_lib(options: InitOptions) -> Optional[ComponentLibType]:
    if options.component_lib is not None or options.skip_component_lib:
        return options.component_lib
    answer = await _select_package(
        "Select a component library to use:", PackageCategory.COMPONENT_LIB
    )
    return ComponentLibType(answer) if answer else None


async def ask_orm(options: InitOptions) -> Optional[ORMType]:
    if options.orm is not None or options.skip_orm:
        return options.orm
    answer = await _select_package("Select an ORM to use:", PackageCategory.ORM)
    return ORMType(answer) if answer else None


async def ask_db_type(options: InitOptions) -> DBType:
    if options.db is not None:
        return options.db
    answer = await _ask(
        questionary.select(
            "Please choose your DB type",
            choices=[
                questionary.Choice(title=name, value=db.value)
                for db, name in DB_TYPE_NAMES.items()
            ],
        )
    )
    return DBType(answer)


def db_provider_choices(db_type: DBType, pm: PMType) -> list[DBProvider]:
    """Providers offered for *db_type*.

    Bun ships its own SQLite driver, so ``better-sqlite3`` is hidden under bun
    and ``bun-sqlite`` is hidden everywhere else.
    """
    excluded = DBProvider.BETTER_SQLITE3 if pm == PMType.BUN else DBProvider.BUN_SQLITE
    return [p.value for p in DB_PROVIDERS[DBType(db_type)] if p.value != excluded]


async def ask_db_provider(options: InitOptions, db_type: DBType, pm: PMType) -> DBProvider:
    """Ask for the database provider, filtered by package-manager compatibility."""
    if options.db_provider is not None:
        return options.db_provider
    allowed = set(db_provider_choices(db_type, pm))
    answer = await _ask(
        questionary.select(
            "Please choose your DB Provider",
            choices=[
                questionary.Choice(title=p.name, value=p.value.value)
                for p in DB_PROVIDERS[DBType(db_type)]
                if p.value in allowed
            ],
        )
    )
    return DBProvider(answer)


async def ask_pscale(options: InitOptions) -> bool:
    """Ask whether the MySQL database is hosted on PlanetScale."""
    if options.db_provider is not None:
        return options.db_provider == DBProvider.PLANETSCALE
    return await _ask(questionary.confirm("Are you using PlanetScale?", default=False))


async def ask_auth(options: InitOptions) -> Optional[AuthType]:
    """Ask which authentication package to use, or none."""
    if options.auth is not None or options.skip_auth:
        return options.auth
    answer = await _select_package("Select an authentication package to use:", PackageCategory.AUTH)
    return AuthType(answer) if answer else None


async def ask_auth_provider() -> list[AuthProvider]:
    answer = await _ask(
        questionary.checkbox(
            "Select a provider to add",
            choices=[questionary.Choice(title=p.value, value=p.value) for p in AuthProvider],
        )
    )
    return [AuthProvider(a) for a in answer]


def misc_package_choices(
    existing_packages: list[str],
    has_orm_and_auth: bool,
    config: Config | None = None,
) -> list[PackageChoice]:
    """Miscellaneous packages not yet installed.

    When *existing_packages* is empty the installed set is taken from
    ``config.packages``.  Packages needing an ORM and auth are returned
    disabled when *has_orm_and_auth* is false.
    """
    installed = list(existing_packages)
    if not installed and config is not None:
        installed = list(config.packages)
    return [
        info.choice(has_orm_and_auth)
        for info in packages_in(PackageCategory.MISC)
        if info.id not in installed
    ]


async def ask_misc_packages(
    existing_packages: list[str],
    has_orm_and_auth: bool,
    config: Config | None = None,
) -> list[AvailablePackage]:
    """Ask which miscellaneous packages to add.

    Returns an empty list without prompting when every package is installed.
    """
    choices = misc_package_choices(existing_packages, has_orm_and_auth, config)
    if not choices:
        print_info("All available packages already installed.")
        return []

    answer = await _ask(
        questionary.checkbox(
            "Select any miscellaneous packages to add:",
            choices=[
                questionary.Choice(title=c.name, value=c.value.value, disabled=c.disabled)
                for c in choices
            ],
        )
    )
    return [AvailablePackage(a) for a in answer]


# ---------------------------------------------------------------------------
# Generate
# ---------------------------------------------------------------------------


async def ask_element_type() -> ElementType:
    answer = await _ask(
        questionary.select(
            "Please select the element you would like to generate:",
            choices=[
                questionary.Choice(title="Components", value=ElementType.COMPONENT.value),
                questionary.Choice(title="Hooks", value=ElementType.HOOK.value),
            ],
        )
    )
    return ElementType(answer)


async def ask_element_name(element: ElementType) -> str:
    label = "component" if element == ElementType.COMPONENT else "hook"
    return await _ask(questionary.text(f"Name of {label}:", validate=validate_element_name))
