"""Download handler."""

import logging

from memeworks.core.config import config
from memeworks.core.downloader import Downloader

from ..models import UIState
from ..state import initialize_ui_state

logger = logging.getLogger(__name__)


async def download_meme(state: UIState) -> tuple[str | None, str, UIState]:
    """Download the current meme image.

    The output URL is read once when the click is handled; edits made while
    the download runs do not change what gets saved.

    Args:
        state: UI state

    Returns:
        Tuple of (saved_file_path or None, status_message, updated_state)
    """
    state = initialize_ui_state(state)
    url = state.output_url

    outcome = await Downloader(config).download(url)
    if not outcome.ok:
        return None, f"❌ Download failed: {outcome.message}", state

    logger.info(f"Meme downloaded to {outcome.path}")
    return str(outcome.path), f"✅ Saved to `{outcome.path}`", state
