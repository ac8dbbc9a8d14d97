"""Configuration management for Memeworks.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the MEMEWORKS_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (MEMEWORKS_* prefix)
2. .env file in the project root
3. Default values defined in MemeworksConfig

Example .env file:
    MEMEWORKS_CATALOG_ENDPOINT=https://api.memegen.link/templates
    MEMEWORKS_RENDER_BASE_URL=https://api.memegen.link/images
    MEMEWORKS_INITIAL_TEMPLATE=doge
    MEMEWORKS_DOWNLOADS_DIR=downloads

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
Components never read it implicitly: the UI and API entry points pass it to
the synthesizer, controller and downloader when constructing them, and tests
pass their own instance.

Usage Example
-------------
    from memeworks.core.config import config
    from memeworks.core.synthesizer import UrlSynthesizer

    synthesizer = UrlSynthesizer(config)
    print(synthesizer.synthesize("doge", "such wow", ""))

Render Service Conventions
--------------------------
The defaults target the public memegen.link API:
- Templates are listed at /templates as a JSON array
- Images are rendered at /images/{key}/{top}/{bottom}.png
- A single underscore renders as an empty line
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MemeworksConfig(BaseSettings):
    """Main configuration for Memeworks.

    Values are loaded from environment variables with the MEMEWORKS_ prefix,
    with fallback to defaults defined here.

    Attributes
    ----------
    Remote Service:
        catalog_endpoint : str
            URL returning the JSON template catalog
        render_base_url : str
            Base URL of the render endpoint (no trailing slash required)
        image_format : Literal["png", "jpg", "gif", "webp"]
            File extension requested from the render endpoint
        request_timeout : float
            Timeout in seconds for catalog and image requests

    Synthesis Defaults:
        blank_sentinel : str
            Path segment the render service draws as an empty line
        default_template : str
            Template key used when text is entered without a template
        placeholder_image_url : str
            Image shown when neither a template nor text is present
        initial_template : str
            Template selected when a session starts (empty for none)

    Downloads:
        download_filename : str
            Filename suggested for downloaded images
        downloads_dir : Path
            Directory that receives downloaded images

    Servers:
        server_host / server_port : REST API bind address
        gradio_server_name / gradio_server_port / gradio_share : Gradio UI launch options
        log_level : root logging level used by the entry points

    Examples
    --------
        >>> custom_config = MemeworksConfig(
        ...     render_base_url="http://localhost:5000/images",
        ...     initial_template="",
        ... )
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MEMEWORKS_",
        case_sensitive=False,
    )

    # Remote service
    catalog_endpoint: str = Field(
        default="https://api.memegen.link/templates",
        description="URL of the JSON template catalog",
    )
    render_base_url: str = Field(
        default="https://api.memegen.link/images",
        description="Base URL of the image render endpoint",
    )
    image_format: Literal["png", "jpg", "gif", "webp"] = Field(
        default="png",
        description="Extension requested from the render endpoint",
    )
    request_timeout: float = Field(
        default=10.0,
        description="Timeout in seconds for outbound HTTP requests",
        gt=0,
    )

    # Synthesis defaults
    blank_sentinel: str = Field(
        default="_",
        description="Path segment rendered as a blank line",
        min_length=1,
    )
    default_template: str = Field(
        default="noidea",
        description="Template key used when text is entered without a template",
        min_length=1,
    )
    placeholder_image_url: str = Field(
        default="https://api.memegen.link/images/noidea/highly_professional/meme_generator.jpg",
        description="Image shown when no template and no text are present",
    )
    initial_template: str = Field(
        default="doge",
        description="Template selected at session start (empty for none)",
    )

    # Downloads
    download_filename: str = Field(
        default="meme_image.png",
        description="Filename suggested for downloaded images",
        min_length=1,
    )
    downloads_dir: Path = Field(
        default=Path("downloads"),
        description="Directory that receives downloaded images",
    )

    # REST API server
    server_host: str = Field(default="0.0.0.0", description="API bind address")
    server_port: int = Field(default=8000, ge=1024, le=65535)

    # UI settings
    gradio_server_name: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    gradio_server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    gradio_share: bool = Field(
        default=False,
        description="Create public gradio.live link (keep False for local-only)",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level configured by the entry points",
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create the downloads directory.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)

        self.downloads_dir.mkdir(parents=True, exist_ok=True)


# Global configuration instance
# Loads values from environment variables (MEMEWORKS_* prefix) and .env file.
config = MemeworksConfig()
