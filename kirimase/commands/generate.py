"""``kirimase generate`` -- quickly generate standalone elements."""

from __future__ import annotations

from ..analytics import AnalyticsEvent, AnalyticsReporter
from ..config import ConfigStore
from ..generators.elements import (
    ELEMENT_NAME_HINT,
    ElementType,
    GeneratedFile,
    generate_element,
    import_path_for,
    validate_element_name,
)
from ..prompts import ask_element_name, ask_element_type
from ..utils import KirimaseError, print_info


async def generate(
    store: ConfigStore,
    element: ElementType | str | None = None,
    name: str | None = None,
    reporter: AnalyticsReporter | None = None,
) -> GeneratedFile:
    """Ask for whatever was not passed on the command line, then generate."""
    config = store.require()
    print_info("Quickly generate elements")

    element = ElementType(element) if element else await ask_element_type()
    if name is None:
        name = await ask_element_name(element)
    elif validate_element_name(name) is not True:
        raise KirimaseError(ELEMENT_NAME_HINT)

    generated = generate_element(element, name, config, root=store.root)
    if generated.written:
        print_info(f'Import it from "{import_path_for(generated, config)}"')

    reporter = reporter or AnalyticsReporter(config)
    reporter.notify(AnalyticsEvent.GENERATE, {"type": element.value, "name": name})
    await reporter.flush()
    return generated
