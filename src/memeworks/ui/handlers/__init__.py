"""UI event handlers organized by feature area.

This package provides handlers for all Gradio UI events:
- catalog: Template catalog loading on page load
- selection: Template and caption changes
- download: Saving the rendered image locally
"""

from .catalog import load_catalog
from .download import download_meme
from .selection import select_template, update_bottom_text, update_top_text

__all__ = [
    # Catalog handlers
    "load_catalog",
    # Selection handlers
    "select_template",
    "update_bottom_text",
    "update_top_text",
    # Download handlers
    "download_meme",
]
