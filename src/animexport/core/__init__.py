"""
Core animexport Package

Contains core infrastructure components: configuration and error handling.
"""

from animexport.core.exceptions import (
    AnimExportError,
    ConfigurationError,
    LibraryError,
    ExportError,
    ErrorCode,
    ErrorContext,
    RecoverySuggestion
)

__all__ = [
    'AnimExportError',
    'ConfigurationError',
    'LibraryError',
    'ExportError',
    'ErrorCode',
    'ErrorContext',
    'RecoverySuggestion',
]
