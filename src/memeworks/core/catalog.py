"""Template catalog loading.

The catalog is fetched once per session from the render service's
``/templates`` endpoint. The response is a JSON array of template objects; only
``id``, ``name`` and ``blank`` are used, anything else is ignored.

A failed fetch is not fatal: :func:`load_templates` returns an empty
:class:`TemplateCatalog` together with :attr:`ErrorKind.CATALOG_FETCH_FAILED`,
and everything downstream keeps working with raw template keys.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import CatalogFetchError, ErrorKind

logger = logging.getLogger(__name__)


class TemplateDescriptor(BaseModel):
    """A single selectable template as described by the catalog.

    Attributes:
        id: Catalog key, stripped and lowercased
        display_name: Human readable name (``name`` in the catalog JSON)
        preview_image_url: Blank template image (``blank`` in the catalog JSON)
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(..., min_length=1)
    display_name: str = Field(..., alias="name")
    preview_image_url: str = Field(..., alias="blank")

    @field_validator("id", mode="before")
    @classmethod
    def _normalize_id(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class TemplateCatalog:
    """Immutable, ordered collection of templates with unique ids.

    Order follows the catalog response. When the same id appears more than
    once, the first occurrence wins.
    """

    def __init__(self, templates: Iterable[TemplateDescriptor] = ()):
        by_id: dict[str, TemplateDescriptor] = {}
        for template in templates:
            if template.id in by_id:
                logger.warning(f"Duplicate template id in catalog: {template.id}")
                continue
            by_id[template.id] = template
        self._by_id = by_id
        self._templates = tuple(by_id.values())

    @property
    def templates(self) -> tuple[TemplateDescriptor, ...]:
        return self._templates

    def get(self, template_id: str | None) -> TemplateDescriptor | None:
        """Look up a template by id, ignoring case and surrounding whitespace."""
        if not template_id:
            return None
        return self._by_id.get(template_id.strip().lower())

    def ids(self) -> list[str]:
        return list(self._by_id)

    def options(self) -> list[tuple[str, str]]:
        """Dropdown choices as ``(display_name, id)`` pairs in catalog order."""
        return [(template.display_name, template.id) for template in self._templates]

    def __contains__(self, template_id: object) -> bool:
        return isinstance(template_id, str) and self.get(template_id) is not None

    def __iter__(self) -> Iterator[TemplateDescriptor]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def __bool__(self) -> bool:
        return bool(self._templates)

    def __repr__(self) -> str:
        return f"TemplateCatalog(templates={len(self._templates)})"


@dataclass(frozen=True)
class CatalogLoadResult:
    """Outcome of a catalog fetch.

    ``catalog`` is always usable; it is empty when ``error_kind`` is set.
    """

    catalog: TemplateCatalog = field(default_factory=TemplateCatalog)
    error_kind: ErrorKind | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error_kind is None


def parse_catalog(payload: Any) -> TemplateCatalog:
    """Build a catalog from a decoded JSON payload.

    Args:
        payload: Decoded catalog response

    Returns:
        TemplateCatalog with every valid entry

    Raises:
        CatalogFetchError: If the payload is not a JSON array
    """
    if not isinstance(payload, list):
        raise CatalogFetchError(
            f"Expected a JSON array of templates, got {type(payload).__name__}"
        )

    templates = []
    for index, entry in enumerate(payload):
        try:
            templates.append(TemplateDescriptor.model_validate(entry))
        except ValidationError as e:
            logger.warning(f"Skipping malformed catalog entry #{index}: {e.error_count()} error(s)")
    return TemplateCatalog(templates)


async def fetch_catalog(client: httpx.AsyncClient, endpoint: str) -> TemplateCatalog:
    """Fetch and parse the catalog with an existing client.

    Raises:
        CatalogFetchError: On transport errors, non-success status or bad JSON
    """
    try:
        response = await client.get(endpoint, headers={"Accept": "application/json"})
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise CatalogFetchError(
            f"Catalog request failed with status {e.response.status_code}"
        ) from e
    except httpx.HTTPError as e:
        raise CatalogFetchError(f"Catalog request failed: {e}") from e

    try:
        payload = response.json()
    except ValueError as e:
        raise CatalogFetchError("Catalog response is not valid JSON") from e

    return parse_catalog(payload)


async def load_templates(
    endpoint: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = 10.0,
) -> CatalogLoadResult:
    """Load the template catalog with a single request.

    No retry is attempted. On failure the error is logged and an empty catalog
    is returned alongside the error kind.

    Args:
        endpoint: Catalog URL
        client: Optional client to reuse (left open)
        timeout: Request timeout when a client is created here

    Returns:
        CatalogLoadResult with the catalog or the failure reason
    """
    logger.info(f"Loading template catalog from {endpoint}")
    try:
        if client is not None:
            catalog = await fetch_catalog(client, endpoint)
        else:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as own_client:
                catalog = await fetch_catalog(own_client, endpoint)
    except CatalogFetchError as e:
        logger.error(f"Error fetching meme templates: {e}")
        return CatalogLoadResult(error_kind=e.kind, message=str(e))

    logger.info(f"Loaded {len(catalog)} templates")
    return CatalogLoadResult(catalog=catalog)
