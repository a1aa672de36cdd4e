"""Command-line entry point.

Usage::

    kirimase init
    kirimase add --orm drizzle --db pg --db-provider postgresjs --auth next-auth
    kirimase generate --type component --name UserCard
    kirimase update-config
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Sequence

from pydantic import ValidationError
from rich.markup import escape

from . import __version__
from .commands import add_packages, generate, init_project, update_config
from .config import ConfigStore
from .generators.elements import ElementType
from .packages import AuthType, AvailablePackage, ComponentLibType, DBProvider, DBType, ORMType, PMType
from .prompts import InitOptions
from .utils import KirimaseError, console, spinner


def _values(enum_cls: type) -> list[str]:
    return [member.value for member in enum_cls]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kirimase",
        description="Scaffold a Next.js project: pick a stack, record it, install its packages.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  kirimase init\n"
            "  kirimase add --orm drizzle --db pg --db-provider postgresjs\n"
            "  kirimase generate --type component --name UserCard\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--cwd",
        default=None,
        help="Project root (default: current directory)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init", help="Write kirimase.config.json for this project")
    init.add_argument("--package-manager", "-p", choices=_values(PMType), default=None)
    init.add_argument(
        "--no-analytics",
        dest="analytics",
        action="store_false",
        default=None,
        help="Disable anonymous usage reporting",
    )

    add = sub.add_parser("add", help="Add packages to the project")
    add.add_argument("--component-lib", choices=_values(ComponentLibType) + ["none"], default=None)
    add.add_argument("--orm", choices=_values(ORMType) + ["none"], default=None)
    add.add_argument("--db", choices=_values(DBType), default=None)
    add.add_argument("--db-provider", choices=_values(DBProvider), default=None)
    add.add_argument("--auth", choices=_values(AuthType) + ["none"], default=None)
    add.add_argument(
        "--misc",
        nargs="*",
        type=AvailablePackage,
        default=None,
        help="Miscellaneous packages to add (pass with no values for none)",
    )

    gen = sub.add_parser("generate", help="Generate a component or hook")
    gen.add_argument("--type", dest="element", choices=_values(ElementType), default=None)
    gen.add_argument("--name", default=None)

    sub.add_parser("update-config", help="Backfill fields missing from an older config file")

    return parser


def _options_from_args(args: argparse.Namespace) -> InitOptions:
    def _choice(name: str) -> str | None:
        value = getattr(args, name, None)
        return None if value == "none" else value

    return InitOptions(
        package_manager=getattr(args, "package_manager", None),
        analytics=getattr(args, "analytics", None),
        component_lib=_choice("component_lib"),
        orm=_choice("orm"),
        db=getattr(args, "db", None),
        db_provider=getattr(args, "db_provider", None),
        auth=_choice("auth"),
        misc_packages=getattr(args, "misc", None),
        skip_component_lib=getattr(args, "component_lib", None) == "none",
        skip_orm=getattr(args, "orm", None) == "none",
        skip_auth=getattr(args, "auth", None) == "none",
    )


async def _dispatch(args: argparse.Namespace) -> None:
    store = ConfigStore(Path(args.cwd) if args.cwd else None)
    options = _options_from_args(args)

    if args.command == "init":
        await init_project(store, options)
    elif args.command == "add":
        await add_packages(store, options)
    elif args.command == "generate":
        await generate(store, element=args.element, name=args.name)
    elif args.command == "update-config":
        update_config(store)


def main(argv: Sequence[str] | None = None) -> int:
    """Parse *argv*, run the command, and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        asyncio.run(_dispatch(args))
    except KirimaseError as exc:
        spinner.stop()
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        return 1
    except ValidationError as exc:
        spinner.stop()
        console.print(f"[bold red]Invalid kirimase.config.json:[/bold red] {escape(str(exc))}")
        return 1
    except KeyboardInterrupt:
        spinner.stop()
        console.print("[bold red]Interrupted.[/bold red]")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
