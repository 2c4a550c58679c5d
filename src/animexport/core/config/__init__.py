"""
Configuration Management Package

Provides Pydantic-based configuration models and management for animexport.
"""

from animexport.core.config.models import AppConfig, ExportConfig, LibraryConfig
from animexport.core.config.manager import ConfigManager

__all__ = [
    "AppConfig",
    "ExportConfig",
    "LibraryConfig",
    "ConfigManager",
]
