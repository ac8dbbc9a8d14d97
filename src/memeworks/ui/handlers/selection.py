"""Template and caption change handlers.

Each handler applies exactly one field change through the session's
SelectionController and returns the URL it derived from the updated state.
"""

import logging

from ..models import UIState
from ..state import initialize_ui_state

logger = logging.getLogger(__name__)


def select_template(template_id: str | None, state: UIState) -> tuple[str, str, UIState]:
    """Handle a template dropdown change.

    Args:
        template_id: Selected catalog id ("" or None for no template)
        state: UI state

    Returns:
        Tuple of (image_url, url_text, updated_state)
    """
    state = initialize_ui_state(state)
    url = state.controller.set_selected_template(template_id)
    logger.debug(f"Template changed to {template_id!r}: {url}")
    return url, url, state


def update_top_text(text: str, state: UIState) -> tuple[str, str, UIState]:
    """Handle a top text change.

    Returns:
        Tuple of (image_url, url_text, updated_state)
    """
    state = initialize_ui_state(state)
    url = state.controller.set_top_text(text)
    return url, url, state


def update_bottom_text(text: str, state: UIState) -> tuple[str, str, UIState]:
    """Handle a bottom text change.

    Returns:
        Tuple of (image_url, url_text, updated_state)
    """
    state = initialize_ui_state(state)
    url = state.controller.set_bottom_text(text)
    return url, url, state
