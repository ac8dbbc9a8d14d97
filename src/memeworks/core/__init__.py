"""Core functionality for meme URL synthesis.

This module provides the core components of Memeworks:

- **MemeworksConfig**: Configuration management using Pydantic Settings
- **load_templates / TemplateCatalog**: One-shot async catalog fetch
- **UrlSynthesizer**: Pure (template, top, bottom) -> render URL function
- **SelectionController**: Selection state with an always-current output URL
- **Downloader**: Fetches the output URL and saves the image locally

Architecture Overview
---------------------
1. **Configuration Layer** (config.py):
   - Environment-based configuration, MEMEWORKS_ prefix
   - Endpoints and fallback constants injected into every component

2. **Catalog Layer** (catalog.py):
   - httpx-based fetch, pydantic-validated descriptors
   - Failures return an empty catalog and an error kind

3. **Synthesis Layer** (synthesizer.py, selection.py):
   - Pure URL synthesis with encoding and fallback rules
   - Reducer-based state transitions; the URL is re-derived on every change

4. **Download Layer** (downloader.py):
   - Byte fetch of a URL snapshot, saved through a pluggable saver

Usage Example
-------------
    from memeworks.core import SelectionController, config, load_templates

    controller = SelectionController(config)
    result = await load_templates(config.catalog_endpoint)
    controller.attach_catalog(result.catalog)
    controller.set_top_text("such wow")
    print(controller.output_url)
"""

from memeworks.core.catalog import (
    CatalogLoadResult,
    TemplateCatalog,
    TemplateDescriptor,
    load_templates,
)
from memeworks.core.config import MemeworksConfig, config
from memeworks.core.downloader import Downloader, DownloadOutcome, DownloadResult, FileSaver
from memeworks.core.errors import CatalogFetchError, DownloadError, ErrorKind, MemeworksError
from memeworks.core.selection import SelectionController, SelectionState, reduce
from memeworks.core.synthesizer import SynthesisMode, SynthesisResult, UrlSynthesizer

__all__ = [
    "CatalogFetchError",
    "CatalogLoadResult",
    "DownloadError",
    "DownloadOutcome",
    "DownloadResult",
    "Downloader",
    "ErrorKind",
    "FileSaver",
    "MemeworksConfig",
    "MemeworksError",
    "SelectionController",
    "SelectionState",
    "SynthesisMode",
    "SynthesisResult",
    "TemplateCatalog",
    "TemplateDescriptor",
    "UrlSynthesizer",
    "config",
    "load_templates",
    "reduce",
]
