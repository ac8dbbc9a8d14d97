"""Download of rendered images.

:class:`Downloader` fetches the bytes behind an output URL and hands them to a
saver, which persists them under the configured filename. Synthesized render
URLs and external image URLs are handled the same way.

The URL passed to :meth:`Downloader.download` is the snapshot that gets
fetched. Changing the selection while a download is in flight does not
affect it.
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import httpx

from .errors import DownloadError, ErrorKind

if TYPE_CHECKING:
    from .config import MemeworksConfig

logger = logging.getLogger(__name__)

Saver = Callable[[bytes, str], Path]


@dataclass(frozen=True)
class DownloadResult:
    """Image bytes held in memory for the duration of one download."""

    content: bytes
    filename: str
    media_type: str = "application/octet-stream"


@dataclass(frozen=True)
class DownloadOutcome:
    """Report returned by :meth:`Downloader.download`.

    Attributes:
        url: The URL snapshot that was requested
        path: Where the image was saved (None on failure)
        error_kind: ErrorKind.DOWNLOAD_FAILED on failure
        message: Human readable failure reason
    """

    url: str
    path: Path | None = None
    error_kind: ErrorKind | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error_kind is None


class FileSaver:
    """Write downloaded images into a directory.

    Every save gets its own subdirectory, so the returned path stays valid
    when later downloads reuse the same filename.

    Args:
        directory: Target directory, created on first save if missing
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def __call__(self, content: bytes, filename: str) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        save_dir = Path(tempfile.mkdtemp(prefix="meme-", dir=self.directory))
        # keep only the final path component
        target = save_dir / Path(filename).name
        target.write_bytes(content)
        logger.info(f"Saved {len(content)} bytes to {target}")
        return target


async def fetch_image(client: httpx.AsyncClient, url: str, filename: str) -> DownloadResult:
    """Fetch image bytes for a URL.

    Raises:
        DownloadError: On transport errors or a non-success status
    """
    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise DownloadError(f"Image request failed with status {e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise DownloadError(f"Image request failed: {e}") from e
    return DownloadResult(
        content=response.content,
        filename=filename,
        media_type=response.headers.get("content-type", "application/octet-stream"),
    )


class Downloader:
    """Fetch the current output URL and save it locally.

    Args:
        config: Provides the filename, downloads directory and timeout
        saver: Callable persisting ``(bytes, filename)``; defaults to a FileSaver
        client: Optional shared client (left open); otherwise one per download
    """

    def __init__(
        self,
        config: MemeworksConfig,
        saver: Saver | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.filename = config.download_filename
        self.timeout = config.request_timeout
        self.saver = saver or FileSaver(config.downloads_dir)
        self.client = client

    async def fetch(self, url: str) -> DownloadResult:
        if self.client is not None:
            return await fetch_image(self.client, url, self.filename)
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            return await fetch_image(client, url, self.filename)

    async def download(self, output_url: str | None) -> DownloadOutcome:
        """Download the image at ``output_url`` and persist it.

        Args:
            output_url: Snapshot of the output URL at invocation time

        Returns:
            DownloadOutcome describing the saved file or the failure
        """
        url = (output_url or "").strip()
        try:
            if not url:
                raise DownloadError("No image URL to download")

            logger.info(f"Downloading {url}")
            result = await self.fetch(url)
            try:
                path = self.saver(result.content, result.filename)
            except OSError as e:
                raise DownloadError(f"Could not save image: {e}") from e
            finally:
                del result
        except DownloadError as e:
            logger.error(f"Error downloading the meme: {e}")
            return DownloadOutcome(url=url, error_kind=e.kind, message=str(e))

        return DownloadOutcome(url=url, path=path)
