"""Shared pytest fixtures for Memeworks tests."""

import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Generator

import httpx
import pytest

from memeworks.core.catalog import TemplateCatalog, TemplateDescriptor
from memeworks.core.config import MemeworksConfig
from memeworks.ui.models import UIState

RENDER_BASE = "https://api.memegen.link/images"
CATALOG_URL = "https://api.memegen.link/templates"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> MemeworksConfig:
    """Create a test configuration pinned to the public memegen defaults.

    Args:
        temp_dir: Temporary directory from fixture

    Returns:
        MemeworksConfig instance for testing
    """
    return MemeworksConfig(
        _env_file=None,
        catalog_endpoint=CATALOG_URL,
        render_base_url=RENDER_BASE,
        image_format="png",
        blank_sentinel="_",
        default_template="noidea",
        placeholder_image_url=f"{RENDER_BASE}/noidea/highly_professional/meme_generator.jpg",
        initial_template="doge",
        download_filename="meme_image.png",
        downloads_dir=temp_dir / "downloads",
        request_timeout=5.0,
    )


@pytest.fixture
def catalog_payload() -> list[dict]:
    """Catalog JSON as returned by the render service."""
    return [
        {
            "id": "doge",
            "name": "Doge",
            "blank": f"{RENDER_BASE}/doge.png",
            "lines": 2,
        },
        {
            "id": "Drake",
            "name": "Drakeposting",
            "blank": f"{RENDER_BASE}/drake.png",
        },
        {
            "id": "fry",
            "name": "Futurama Fry",
            "blank": f"{RENDER_BASE}/fry.png",
        },
    ]


@pytest.fixture
def catalog(catalog_payload: list[dict]) -> TemplateCatalog:
    """Loaded catalog built from catalog_payload."""
    return TemplateCatalog(TemplateDescriptor.model_validate(entry) for entry in catalog_payload)


@pytest.fixture
def make_client() -> Callable[..., httpx.AsyncClient]:
    """Factory for httpx clients backed by a MockTransport.

    Usage:
        client = make_client(lambda request: httpx.Response(200, json=[]))
    """

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def ui_state() -> UIState:
    """Create empty UI state for testing.

    Returns:
        UIState instance
    """
    return UIState()
