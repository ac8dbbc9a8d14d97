"""Memeworks - pick a meme template, add two lines of text, get a render URL."""

__version__ = "0.1.0"

from memeworks.core.config import MemeworksConfig, config
from memeworks.core.selection import SelectionController
from memeworks.core.synthesizer import UrlSynthesizer

__all__ = [
    "MemeworksConfig",
    "SelectionController",
    "UrlSynthesizer",
    "config",
]
