"""Template generators for files written into the user's project.

Quick usage::

    from kirimase.generators import ElementType, generate_element

    generate_element(ElementType.COMPONENT, "UserCard", config)
"""

from kirimase.generators.elements import (
    ElementType,
    GeneratedFile,
    create_hello_file,
    generate_element,
    validate_element_name,
)
from kirimase.generators.renderer import TemplateRenderer

__all__ = [
    "ElementType",
    "GeneratedFile",
    "TemplateRenderer",
    "create_hello_file",
    "generate_element",
    "validate_element_name",
]
