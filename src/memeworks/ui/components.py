"""Reusable UI components for the Memeworks Gradio interface."""

import gradio as gr

from memeworks.core.catalog import TemplateCatalog

from .models import NO_TEMPLATE_LABEL, NO_TEMPLATE_VALUE


def template_choices(
    catalog: TemplateCatalog | None, selected: str | None = None
) -> list[tuple[str, str]]:
    """Build template dropdown choices.

    The first entry selects no template; the rest follow catalog order. A
    selection the catalog does not know (such as the initial template before
    the fetch completes, or after it fails) is appended under its raw value
    so the picker always shows what is being rendered.

    Args:
        catalog: Loaded catalog, or None before the fetch completes
        selected: Currently selected template id

    Returns:
        List of (label, value) pairs
    """
    choices = [(NO_TEMPLATE_LABEL, NO_TEMPLATE_VALUE)]
    if catalog:
        choices.extend(catalog.options())
    value = dropdown_value(selected, catalog)
    if value and (catalog is None or catalog.get(value) is None):
        choices.append((value, value))
    return choices


def dropdown_value(template_id: str | None, catalog: TemplateCatalog | None) -> str:
    """Pick the dropdown value that represents the current selection.

    Catalog entries map to their canonical id. Anything else (including
    everything selected before the catalog loads) keeps its raw value, the
    same value the controller renders.
    """
    if not template_id or not template_id.strip():
        return NO_TEMPLATE_VALUE
    descriptor = catalog.get(template_id) if catalog is not None else None
    return descriptor.id if descriptor is not None else template_id.strip()


class MemeFormUI:
    """The template picker and the two caption inputs.

    Groups the three input controls so the app layout and its event wiring
    can refer to them as one unit.
    """

    def __init__(self, initial_template: str | None = None):
        """Initialize the form controls.

        Args:
            initial_template: Template the session starts with, shown until
                the catalog replaces the choices
        """
        with gr.Group():
            self.template = gr.Dropdown(
                label="Meme template",
                choices=template_choices(None, initial_template),
                value=dropdown_value(initial_template, None),
                allow_custom_value=True,
                filterable=True,
                info="Choose Template",
            )
            self.top_text = gr.Textbox(
                label="Top text", placeholder="Enter top text", lines=1, value=""
            )
            self.bottom_text = gr.Textbox(
                label="Bottom text", placeholder="Enter bottom text", lines=1, value=""
            )
