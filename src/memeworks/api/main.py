"""Memeworks — FastAPI Application.

This module defines the FastAPI ``app`` instance, the REST routes over the
Memeworks core, and the ``main()`` CLI function that launches the uvicorn
server.

Architecture
------------
- **Catalog** is fetched once during application startup and kept on
  ``app.state.catalog``.  A failed fetch leaves an empty catalog and the
  error message on ``app.state.catalog_error``; the API stays up.
- **URL synthesis** runs each request's inputs through a fresh
  :class:`~memeworks.core.selection.SelectionController` bound to the loaded
  catalog, so the API and the Gradio UI derive identical URLs.
- **Downloads** fetch image bytes with the shared httpx client and return
  them as an attachment; the browser performs the actual save.

Endpoints
---------
========  ==================  ==========================================
Method    Path                Purpose
========  ==================  ==========================================
GET       ``/api/config``     Version and synthesis defaults
GET       ``/api/templates``  Loaded template catalog
POST      ``/api/url``        Synthesize a render URL
POST      ``/api/download``   Fetch a rendered image as an attachment
========  ==================  ==========================================

Usage
-----
CLI (installed entry point)::

    memeworks

Direct invocation::

    python -m memeworks.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from memeworks import __version__
from memeworks.api.models import DownloadRequest, MemeRequest
from memeworks.core.catalog import TemplateCatalog, load_templates
from memeworks.core.config import config
from memeworks.core.downloader import Downloader
from memeworks.core.errors import DownloadError
from memeworks.core.selection import SelectionController, SetBottomText, SetTopText, initial_state
from memeworks.core.synthesizer import UrlSynthesizer

logger = logging.getLogger(__name__)


def create_http_client() -> httpx.AsyncClient:
    """Build the client shared by the catalog fetch and downloads."""
    return httpx.AsyncClient(timeout=config.request_timeout, follow_redirects=True)


# ---------------------------------------------------------------------------
# Application lifecycle — catalog fetch and HTTP client teardown.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown lifecycle.

    On startup:
        Creates the shared HTTP client and performs the single catalog
        fetch.  Failure is logged and the app starts with an empty catalog.

    On shutdown:
        Closes the HTTP client.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    # --- Startup -----------------------------------------------------------
    client = create_http_client()
    app.state.http_client = client

    result = await load_templates(config.catalog_endpoint, client=client)
    app.state.catalog = result.catalog
    app.state.catalog_error = result.message
    logger.info(f"Catalog ready ({len(result.catalog)} templates).")

    yield  # Application runs here.

    # --- Shutdown ----------------------------------------------------------
    await client.aclose()
    logger.info("HTTP client closed on shutdown.")


# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Memeworks",
    description="Meme template catalog and render URL synthesis API.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Helpers.
# ---------------------------------------------------------------------------


def _catalog() -> TemplateCatalog:
    return getattr(app.state, "catalog", None) or TemplateCatalog()


def _controller_for(req: MemeRequest) -> SelectionController:
    """Build a controller holding the request's selection.

    Args:
        req: Validated selection inputs.

    Returns:
        Controller whose ``output_url`` reflects all three inputs.
    """
    controller = SelectionController(
        config,
        catalog=_catalog(),
        state=initial_state(req.template),
    )
    controller.dispatch(SetTopText(req.top_text))
    controller.dispatch(SetBottomText(req.bottom_text))
    return controller


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get("/api/config")
async def get_config() -> dict:
    """Return the version and synthesis defaults for clients.

    Returns:
        Dictionary with ``version``, ``render_base_url``,
        ``default_template``, ``initial_template``, ``placeholder_image_url``,
        ``blank_sentinel`` and ``download_filename``.
    """
    return {
        "version": __version__,
        "render_base_url": config.render_base_url,
        "default_template": config.default_template,
        "initial_template": config.initial_template,
        "placeholder_image_url": config.placeholder_image_url,
        "blank_sentinel": config.blank_sentinel,
        "download_filename": config.download_filename,
    }


@app.get("/api/templates")
async def get_templates() -> dict:
    """Return the template catalog loaded at startup.

    Returns:
        Dictionary with ``total``, ``templates`` (list of ``id``,
        ``display_name``, ``preview_image_url``) and ``error`` (empty string
        unless the startup fetch failed).
    """
    catalog = _catalog()
    return {
        "total": len(catalog),
        "templates": [t.model_dump() for t in catalog],
        "error": getattr(app.state, "catalog_error", ""),
    }


@app.post("/api/url")
async def synthesize_url(req: MemeRequest) -> dict:
    """Synthesize the render URL for a selection.

    Args:
        req: Validated :class:`MemeRequest` payload.

    Returns:
        Dictionary with ``url``, ``mode`` (which synthesis rule applied) and
        ``template`` (the matching catalog entry, or ``None``).
    """
    controller = _controller_for(req)
    selected = controller.selected_template
    return {
        "url": controller.output_url,
        "mode": controller.synthesis.mode.value,
        "template": selected.model_dump() if selected else None,
    }


@app.post("/api/download")
async def download_image(req: DownloadRequest) -> Response:
    """Fetch a rendered image and return it as a file attachment.

    Uses ``req.url`` when given, otherwise the URL synthesized from the
    selection inputs. Only URLs under the render endpoint are fetched;
    external template images are left for the client to fetch itself.

    Args:
        req: Validated :class:`DownloadRequest` payload.

    Returns:
        The image bytes with a ``Content-Disposition: attachment`` header.

    Raises:
        HTTPException: 400 when the URL is blank or outside the render
            endpoint, 502 when the image fetch fails.
    """
    if req.url is not None:
        url = req.url.strip()
    else:
        url = _controller_for(req).output_url

    if not url:
        raise HTTPException(status_code=400, detail="No image URL to download")
    if not UrlSynthesizer(config).is_render_url(url):
        logger.warning(f"Refusing to download non-render URL: {url}")
        raise HTTPException(
            status_code=400,
            detail=f"Only images under {config.render_base_url} can be downloaded",
        )

    downloader = Downloader(config, client=app.state.http_client)
    try:
        result = await downloader.fetch(url)
    except DownloadError as e:
        logger.error(f"Error downloading the meme: {e}")
        raise HTTPException(status_code=502, detail=str(e)) from e

    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host and port from :data:`~memeworks.core.config.config` (which
    loads from ``MEMEWORKS_SERVER_HOST`` and ``MEMEWORKS_SERVER_PORT``).

    This function is registered as the ``memeworks`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "memeworks.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
