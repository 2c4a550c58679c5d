"""
Configuration Models

Pydantic models for type-safe configuration management with validation,
defaults, and field documentation.
"""

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


SUPPORTED_FORMATS = ("xml", "markdown")
FORMAT_ALIASES = {"mal": "xml", "md": "markdown"}


class ExportConfig(BaseModel):
    """Configuration for export operations."""

    username: str = Field(
        default="",
        description="Account name written to the XML header"
    )
    tool_name: str = Field(
        default="animexport",
        min_length=1,
        description="Generator name recorded in the XML comment"
    )
    formats: List[str] = Field(
        default_factory=lambda: list(SUPPORTED_FORMATS),
        description="Formats written by 'export all' (xml, markdown)"
    )
    output_dir: Path = Field(
        default=Path("./exports"),
        description="Default directory for exports"
    )
    overwrite: bool = Field(
        default=True,
        description="Replace existing files instead of picking a numbered name"
    )
    prefer_english_titles: bool = Field(
        default=False,
        description="Use English titles in the Markdown summary when available"
    )

    @field_validator('formats')
    @classmethod
    def validate_formats(cls, v):
        """Normalize aliases and reject unknown formats."""
        normalized = []
        for name in v:
            name = FORMAT_ALIASES.get(name.lower(), name.lower())
            if name not in SUPPORTED_FORMATS:
                raise ValueError(
                    f"Unsupported export format: {name}. Supported: {', '.join(SUPPORTED_FORMATS)}"
                )
            if name not in normalized:
                normalized.append(name)
        return normalized


class LibraryConfig(BaseModel):
    """Where the library and pending queue are read from."""

    library_file: Optional[Path] = Field(
        default=None,
        description="JSON or YAML library file"
    )
    queue_file: Optional[Path] = Field(
        default=None,
        description="Optional JSON or YAML list of entry ids with pending changes"
    )


class AppConfig(BaseModel):
    """Top-level application configuration."""

    model_config = ConfigDict(validate_assignment=True)

    export: ExportConfig = Field(default_factory=ExportConfig)
    library: LibraryConfig = Field(default_factory=LibraryConfig)

    verbose: bool = Field(
        default=False,
        description="Enable verbose output"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug logging"
    )
