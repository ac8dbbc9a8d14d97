"""Data models for Memeworks UI state."""

import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class UIState:
    """Session state for the Gradio UI.

    Each browser session gets its own UIState (via ``gr.State``), so every
    user has an independent selection and catalog.

    Attributes
    ----------
    controller : Any | None
        SelectionController owning the selection and the output URL
    catalog_loaded : bool
        True once a catalog fetch has completed (successfully or not)
    catalog_error : str
        Failure message from the catalog fetch, empty on success
    """

    controller: Any | None = None  # SelectionController instance
    catalog_loaded: bool = False
    catalog_error: str = ""

    def is_initialized(self) -> bool:
        """Check if the selection controller has been created."""
        return self.controller is not None

    @property
    def output_url(self) -> str:
        """Current output URL, empty before initialization."""
        if self.controller is None:
            return ""
        return self.controller.output_url

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"UIState(initialized={self.is_initialized()}, "
            f"catalog_loaded={self.catalog_loaded}, "
            f"catalog_error={bool(self.catalog_error)})"
        )


# Dropdown entry meaning "no template"
NO_TEMPLATE_LABEL = "Choose meme"
NO_TEMPLATE_VALUE = ""

# Status messages
STATUS_CATALOG_LOADING = "*Loading meme templates...*"
STATUS_READY = "*Ready*"
