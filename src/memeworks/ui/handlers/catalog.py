"""Template catalog handlers."""

import logging

import gradio as gr

from memeworks.core.catalog import load_templates
from memeworks.core.config import config

from ..components import dropdown_value, template_choices
from ..models import STATUS_READY, UIState
from ..state import apply_catalog_result, initialize_ui_state

logger = logging.getLogger(__name__)


async def load_catalog(state: UIState) -> tuple[dict, str, str, str, UIState]:
    """Fetch the template catalog once and populate the template dropdown.

    Runs on page load. A failed fetch leaves the dropdown with the "Choose
    meme" entry and the current selection; the form keeps working with the
    initial template.

    Args:
        state: UI state

    Returns:
        Tuple of (dropdown_update, image_url, url_text, status_message, updated_state)
    """
    state = initialize_ui_state(state)

    if not state.catalog_loaded:
        result = await load_templates(config.catalog_endpoint, timeout=config.request_timeout)
        state = apply_catalog_result(state, result)

    catalog = state.controller.catalog
    selected = state.controller.state.selected_template_id
    dropdown = gr.update(
        choices=template_choices(catalog, selected),
        value=dropdown_value(selected, catalog),
    )
    return dropdown, state.output_url, state.output_url, _catalog_status(state), state


def _catalog_status(state: UIState) -> str:
    if state.catalog_error:
        return f"⚠️ Could not load meme templates: {state.catalog_error}"
    return STATUS_READY
