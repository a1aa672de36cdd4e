"""Project configuration persisted in ``kirimase.config.json``.

The config file records the stack chosen for a Next.js project: package
manager, source-directory convention, database, ORM, auth, component library
and the list of packages added so far.  It is created by ``kirimase init``,
merge-updated whenever a package is added, and read at the start of every
other command.  It belongs to the user; kirimase never deletes it.

Keys are stored in camelCase to stay compatible with existing config files;
the Python models use snake_case attributes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .packages import (
    AuthType,
    AvailablePackage,
    ComponentLibType,
    DBProvider,
    DBType,
    ORMType,
    PMType,
)
from .utils import KirimaseError, create_file, print_info, print_success, replace_file

CONFIG_FILE_NAME = "kirimase.config.json"


class ConfigNotFoundError(KirimaseError):
    """Raised when a command needs ``kirimase.config.json`` and there is none."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"No config file found at {path}. Run `kirimase init` first."
        )


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


def _package_ids(value: Any) -> Any:
    """Store package enum members by their plain identifier."""
    if isinstance(value, (list, tuple)):
        return [p.value if isinstance(p, Enum) else p for p in value]
    return value


class Config(BaseModel):
    """The stack recorded for a project.

    At most one database, ORM, auth and component library may be chosen;
    ``packages`` lists every package added so far, without duplicates.
    Identifiers kirimase does not know (added by hand, or by a newer
    version) are kept as they are.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    has_src: bool
    packages: list[str] = Field(default_factory=list)
    preferred_package_manager: PMType
    t3: bool = False
    alias: str = "@"
    analytics: bool = True
    component_lib: Optional[ComponentLibType] = None
    driver: Optional[DBType] = None
    provider: Optional[DBProvider] = None
    orm: Optional[ORMType] = None
    auth: Optional[AuthType] = None

    @field_validator("packages", mode="before")
    @classmethod
    def _plain_ids(cls, value: Any) -> Any:
        return _package_ids(value)

    @property
    def root_path(self) -> str:
        """Prefix applied to generated file paths (``"src/"`` or ``""``)."""
        return "src/" if self.has_src else ""

    @property
    def has_orm_and_auth(self) -> bool:
        return self.orm is not None and self.auth is not None

    def to_json(self) -> str:
        """Serialise with camelCase keys and 2-space indentation."""
        return self.model_dump_json(indent=2, by_alias=True)


class ConfigUpdate(BaseModel):
    """A partial config.  Only fields explicitly set take part in a merge.

    Unknown keys are rejected so a typo cannot silently land in the file.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    has_src: Optional[bool] = None
    packages: Optional[list[str]] = None
    preferred_package_manager: Optional[PMType] = None
    t3: Optional[bool] = None
    alias: Optional[str] = None
    analytics: Optional[bool] = None
    component_lib: Optional[ComponentLibType] = None
    driver: Optional[DBType] = None
    provider: Optional[DBProvider] = None
    orm: Optional[ORMType] = None
    auth: Optional[AuthType] = None

    @field_validator("packages", mode="before")
    @classmethod
    def _plain_ids(cls, value: Any) -> Any:
        return _package_ids(value)


def merge_config(current: Config, update: ConfigUpdate) -> Config:
    """Return *current* with every field set on *update* overriding it.

    Fields never set on *update* keep their current value.  A field set to
    ``None`` clears the choice.  Lists are replaced wholesale.
    """
    merged: dict[str, Any] = current.model_dump()
    for name in ConfigUpdate.model_fields:
        if name not in update.model_fields_set:
            continue
        value = getattr(update, name)
        if name == "packages":
            value = list(value or [])
        merged[name] = value
    return Config.model_validate(merged)


# ---------------------------------------------------------------------------
# File locations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FileLocations:
    """Import alias and tRPC router paths for one project convention."""

    alias: str
    trpc_root_dir: str
    create_router_invocation: str
    root_router_relative_path: str
    root_router_name: str


T3_LOCATIONS = FileLocations(
    alias="~",
    trpc_root_dir="server/api/",
    create_router_invocation="createTRPCRouter",
    root_router_relative_path="root.ts",
    root_router_name="root.ts",
)

REGULAR_LOCATIONS = FileLocations(
    alias="@",
    trpc_root_dir="lib/server/",
    create_router_invocation="router",
    root_router_relative_path="routers/_app.ts",
    root_router_name="_app.ts",
)


def get_file_locations(config: Config) -> FileLocations:
    """Return the path conventions for *config* (t3 or regular)."""
    return T3_LOCATIONS if config.t3 else REGULAR_LOCATIONS


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class ConfigStore:
    """Reads and writes ``kirimase.config.json`` under a project root.

    There is no locking; one kirimase process per project is assumed.
    """

    def __init__(self, root: str | Path | None = None) -> None:
        self.root = Path(root) if root is not None else Path.cwd()

    @property
    def path(self) -> Path:
        return self.root / CONFIG_FILE_NAME

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> Config | None:
        """Load the config, or return ``None`` if the file does not exist.

        Malformed JSON and missing required fields raise
        ``pydantic.ValidationError``.
        """
        if not self.path.exists():
            return None
        raw = self.path.read_text(encoding="utf-8")
        return Config.model_validate_json(raw)

    def require(self) -> Config:
        """Like :meth:`read` but raises :class:`ConfigNotFoundError`."""
        config = self.read()
        if config is None:
            raise ConfigNotFoundError(self.path)
        return config

    def create(self, config: Config) -> Config:
        """Write *config* to disk, replacing any existing file."""
        create_file(self.path, config.to_json())
        print_success(f"Config file created at {self.path}")
        return config

    def update(self, update: Union[ConfigUpdate, dict[str, Any]]) -> Config:
        """Merge *update* over the stored config and write the result back."""
        if not isinstance(update, ConfigUpdate):
            update = ConfigUpdate.model_validate(update)
        merged = merge_config(self.require(), update)
        replace_file(self.path, merged.to_json())
        return merged

    def add_package(self, package: Union[AvailablePackage, str]) -> Config:
        """Append *package* to ``packages`` unless it is already recorded.

        Entries already in the file are kept in order, including identifiers
        kirimase does not know.
        """
        config = self.require()
        package = package.value if isinstance(package, Enum) else package
        if package in config.packages:
            return config
        return self.update(ConfigUpdate(packages=[*config.packages, package]))

    def update_after_upgrade(self) -> Config:
        """Backfill ``orm`` and ``auth`` for config files written before they existed."""
        config = self.require()
        if {"orm", "auth"} <= config.model_fields_set:
            print_info("Config file already up to date.")
            return config

        orm = ORMType.DRIZZLE if AvailablePackage.DRIZZLE in config.packages else None
        auth = AuthType.NEXT_AUTH if AvailablePackage.NEXT_AUTH in config.packages else None
        updated = self.update(ConfigUpdate(orm=orm, auth=auth))
        print_info("Config file updated.")
        return updated

