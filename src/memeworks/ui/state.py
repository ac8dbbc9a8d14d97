"""State management utilities for Memeworks UI.

This module handles the initialization of per-session UI state and the
installation of the fetched template catalog.
"""

import logging

from memeworks.core.catalog import CatalogLoadResult
from memeworks.core.config import config
from memeworks.core.selection import SelectionController

from .models import UIState

logger = logging.getLogger(__name__)


def initialize_ui_state(state: UIState | None = None) -> UIState:
    """Initialize or ensure UI state is ready.

    Creates the selection controller on first use. The controller starts with
    an empty catalog so the form is usable before the catalog fetch completes.

    Args:
        state: Existing UIState or None

    Returns:
        Initialized UIState instance
    """
    if state is None:
        logger.info("Creating new UIState")
        state = UIState()

    if state.is_initialized():
        logger.debug("UIState already initialized")
        return state

    logger.info("Initializing SelectionController")
    state.controller = SelectionController(config)
    logger.info(f"UIState initialization complete: {state}")
    return state


def apply_catalog_result(state: UIState, result: CatalogLoadResult) -> UIState:
    """Install a catalog fetch result into the session.

    A failed fetch leaves the controller's catalog empty and records the
    message for display.

    Args:
        state: UI state
        result: Outcome of load_templates()

    Returns:
        Updated state
    """
    state = initialize_ui_state(state)
    state.controller.attach_catalog(result.catalog)
    state.catalog_loaded = True
    state.catalog_error = "" if result.ok else result.message

    if result.ok:
        logger.info(f"Catalog installed with {len(result.catalog)} templates")
    else:
        logger.warning(f"Continuing without catalog: {result.message}")
    return state
