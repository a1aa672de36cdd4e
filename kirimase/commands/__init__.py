"""Subcommand implementations.  Each takes a ``ConfigStore`` for the project root."""

from kirimase.commands.add import add_packages
from kirimase.commands.generate import generate
from kirimase.commands.init import init_project
from kirimase.commands.update import update_config

__all__ = [
    "add_packages",
    "generate",
    "init_project",
    "update_config",
]
