"""Render URL synthesis.

Turns a template reference and two lines of text into the URL that the render
service draws. Synthesis is pure: it reads nothing but its arguments and the
injected configuration, so it never needs the catalog.

Rules
-----
1. Each line is trimmed; an empty line becomes the blank sentinel (``_``) so
   the service draws nothing instead of a literal word.
2. Lines are percent-encoded as single path segments. Spaces always become
   ``%20``; underscores are never substituted for spaces.
3. A template reference that starts with a URI scheme is a pre-rendered image
   and is returned unchanged, text ignored. Anything else is a template key,
   lowercased into ``{base}/{key}/{top}/{bottom}.{ext}``.
4. Without a template, text falls back to the default template key, and no
   text at all falls back to the placeholder image.

Example
-------
    >>> synthesizer = UrlSynthesizer(MemeworksConfig())
    >>> synthesizer.synthesize("DOGE", "hello world", "")
    'https://api.memegen.link/images/doge/hello%20world/_.png'
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING
from urllib.parse import quote, urlsplit

if TYPE_CHECKING:
    from .config import MemeworksConfig

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")


class SynthesisMode(str, Enum):
    """Which rule produced a URL.

    Only ``TEMPLATE`` is the regular path. The others are intentional
    fallbacks, not errors.
    """

    TEMPLATE = "template"
    EXTERNAL = "external"
    DEFAULT_TEMPLATE = "default_template"
    PLACEHOLDER = "placeholder"


@dataclass(frozen=True)
class SynthesisResult:
    url: str
    mode: SynthesisMode

    @property
    def degraded(self) -> bool:
        return self.mode in (SynthesisMode.DEFAULT_TEMPLATE, SynthesisMode.PLACEHOLDER)


def is_external_ref(template_ref: str | None) -> bool:
    """Check whether a template reference is a full URL (``scheme://...``)."""
    return bool(template_ref) and _SCHEME_RE.match(template_ref.strip()) is not None


def normalize_line(text: str | None) -> str:
    """Trim surrounding whitespace; ``None`` becomes an empty string."""
    return (text or "").strip()


def encode_line(text: str | None, sentinel: str = "_") -> str:
    """Encode one line of text as a render URL path segment.

    The segment decodes back to the trimmed text. The render service gives
    some text a meaning of its own: a line consisting of just ``_`` is the
    blank sentinel and draws nothing, and ``_`` or ``-`` inside a line are
    drawn as spaces.

    Args:
        text: Raw user text
        sentinel: Segment used for an empty line

    Returns:
        Percent-encoded segment, or the sentinel when the trimmed text is empty
    """
    normalized = normalize_line(text)
    if not normalized:
        return sentinel
    return quote(normalized, safe="")


def normalize_template_key(template_ref: str) -> str:
    return template_ref.strip().lower()


class UrlSynthesizer:
    """Build render URLs from a template reference and two text lines.

    Args:
        config: Configuration providing the render endpoint and fallbacks
    """

    def __init__(self, config: MemeworksConfig):
        self.render_base_url = config.render_base_url.rstrip("/")
        self.image_format = config.image_format
        self.blank_sentinel = config.blank_sentinel
        self.default_template = normalize_template_key(config.default_template)
        self.placeholder_image_url = config.placeholder_image_url

    def template_url(self, template_key: str, top_text: str | None, bottom_text: str | None) -> str:
        """Build ``{base}/{key}/{top}/{bottom}.{ext}`` for a catalog key."""
        key = quote(normalize_template_key(template_key), safe="")
        top = encode_line(top_text, self.blank_sentinel)
        bottom = encode_line(bottom_text, self.blank_sentinel)
        return f"{self.render_base_url}/{key}/{top}/{bottom}.{self.image_format}"

    def resolve(
        self, template_ref: str | None, top_text: str | None, bottom_text: str | None
    ) -> SynthesisResult:
        """Synthesize a URL and report which rule produced it.

        Args:
            template_ref: Template key, full image URL, or None/blank for no template
            top_text: Top line
            bottom_text: Bottom line

        Returns:
            SynthesisResult with the URL and its SynthesisMode
        """
        ref = (template_ref or "").strip()

        if ref and is_external_ref(ref):
            return SynthesisResult(ref, SynthesisMode.EXTERNAL)

        if ref:
            return SynthesisResult(
                self.template_url(ref, top_text, bottom_text), SynthesisMode.TEMPLATE
            )

        if normalize_line(top_text) or normalize_line(bottom_text):
            logger.debug(f"No template selected, using default template '{self.default_template}'")
            return SynthesisResult(
                self.template_url(self.default_template, top_text, bottom_text),
                SynthesisMode.DEFAULT_TEMPLATE,
            )

        logger.debug("No template or text, using placeholder image")
        return SynthesisResult(self.placeholder_image_url, SynthesisMode.PLACEHOLDER)

    def synthesize(
        self, template_ref: str | None, top_text: str | None, bottom_text: str | None
    ) -> str:
        """Return the render URL for the given inputs."""
        return self.resolve(template_ref, top_text, bottom_text).url

    def is_render_url(self, url: str) -> bool:
        """Check whether ``url`` points at an image under the render endpoint.

        Scheme and host must match the render base URL exactly and the path
        must lie below its path. Used to limit what the server fetches on a
        client's behalf.
        """
        target = urlsplit(url.strip())
        base = urlsplit(self.render_base_url)
        if target.scheme.lower() not in ("http", "https"):
            return False
        return (
            target.scheme.lower() == base.scheme.lower()
            and target.netloc.lower() == base.netloc.lower()
            and target.path.startswith(base.path.rstrip("/") + "/")
        )
