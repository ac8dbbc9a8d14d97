"""Pydantic request models for the Memeworks API.

Models
------
MemeRequest
    Payload for ``POST /api/url`` — the three selection inputs.
DownloadRequest
    Payload for ``POST /api/download`` — either an explicit ``url`` or the
    selection inputs to synthesize one from.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class MemeRequest(BaseModel):
    """Selection inputs for URL synthesis.

    Attributes:
        template: Catalog id or full image URL.  ``None`` or empty means no
            template is selected.
        top_text: Top caption line.
        bottom_text: Bottom caption line.
    """

    template: str | None = Field(
        default=None,
        description="Template id (case-insensitive) or full image URL; empty for none.",
    )
    top_text: str = Field(default="", max_length=500, description="Top caption line.")
    bottom_text: str = Field(default="", max_length=500, description="Bottom caption line.")


class DownloadRequest(MemeRequest):
    """Request body for ``POST /api/download``.

    Attributes:
        url: Image URL to fetch.  When omitted the URL is synthesized from the
            selection inputs.
    """

    url: str | None = Field(
        default=None,
        description="Explicit image URL; synthesized from the selection when omitted.",
    )
