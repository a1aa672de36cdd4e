"""Generators for standalone React elements (components and hooks).

Each generator renders its template with the element name, works out the
destination from the project config, and writes the file only when nothing
exists there yet.  An existing file is left untouched, even if the template
has changed since it was generated.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..config import Config, get_file_locations
from ..utils import KirimaseError, create_file, print_success
from .renderer import TemplateRenderer, pascal_case

# The whole name must match: it becomes a file name inside the element directory.
ELEMENT_NAME_PATTERN = re.compile(r"[a-z][a-zA-Z0-9]*(?:_[a-z0-9]+)*|[A-Z][a-zA-Z0-9]*")

ELEMENT_NAME_HINT = "Component name must be in snake_case if more than one word, and plural."


class ElementType(str, Enum):
    COMPONENT = "component"
    HOOK = "hook"


# Destination directory (below the root path) and file extension per element.
ELEMENT_DIRS: dict[ElementType, tuple[str, str]] = {
    ElementType.COMPONENT: ("components", ".tsx"),
    ElementType.HOOK: ("lib/hooks", ".ts"),
}


@dataclass(frozen=True)
class GeneratedFile:
    """Where an element was generated and whether this run wrote it."""

    path: Path
    relative_path: str
    written: bool


def validate_element_name(name: str) -> bool | str:
    """Validator in the shape questionary expects: ``True`` or an error message."""
    return True if ELEMENT_NAME_PATTERN.fullmatch(name) else ELEMENT_NAME_HINT


def element_relative_path(element: ElementType, name: str, config: Config) -> str:
    directory, extension = ELEMENT_DIRS[ElementType(element)]
    return f"{config.root_path}{directory}/{name}{extension}"


def hook_name_for(name: str) -> str:
    """React hooks must start with ``use``; prefix the name when it does not."""
    if name.startswith("use") and name[3:4].isupper():
        return name
    return "use" + pascal_case(name)


def render_component(name: str, renderer: TemplateRenderer | None = None) -> str:
    renderer = renderer or TemplateRenderer()
    return renderer.render("component.tsx.j2", {"component_name": pascal_case(name)})


def render_hook(name: str, renderer: TemplateRenderer | None = None) -> str:
    renderer = renderer or TemplateRenderer()
    return renderer.render("hook.ts.j2", {"hook_name": hook_name_for(name)})


_RENDERERS = {
    ElementType.COMPONENT: render_component,
    ElementType.HOOK: render_hook,
}


def generate_element(
    element: ElementType | str,
    name: str,
    config: Config,
    root: str | Path | None = None,
    renderer: TemplateRenderer | None = None,
) -> GeneratedFile:
    """Render and write one element unless its file already exists.

    The success line is printed in both cases.

    Args:
        element: Which kind of element to generate.
        name: Element name as typed by the user; also the file name.
        config: Project config (provides the ``src/`` prefix).
        root: Project root directory.  Defaults to the current directory.
        renderer: Optional renderer, mainly for tests.

    Raises:
        KirimaseError: If *name* is not a valid element name.
    """
    if validate_element_name(name) is not True:
        raise KirimaseError(ELEMENT_NAME_HINT)
    element = ElementType(element)
    base = Path(root) if root is not None else Path.cwd()
    relative_path = element_relative_path(element, name, config)
    target = base / relative_path

    written = False
    if not target.exists():
        create_file(target, _RENDERERS[element](name, renderer))
        written = True

    print_success(f"File generate: {relative_path}")
    return GeneratedFile(path=target, relative_path=relative_path, written=written)


def create_hello_file(name: str, config: Config, root: str | Path | None = None) -> GeneratedFile:
    """Generate the hello-world component called *name*."""
    return generate_element(ElementType.COMPONENT, name, config, root=root)


def import_path_for(generated: GeneratedFile, config: Config) -> str:
    """Aliased import specifier for a generated element, e.g. ``@/components/card``."""
    alias = get_file_locations(config).alias
    without_root = generated.relative_path[len(config.root_path):]
    return f"{alias}/{without_root.rsplit('.', 1)[0]}"
