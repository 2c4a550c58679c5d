"""
Core Exception Hierarchy for animexport

Provides error classification with error codes, recovery suggestions,
and context information for debugging and user-facing reports.
"""

import sys
import time
import traceback
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCode(Enum):
    """Standard error codes for different error categories."""

    # Configuration errors (3000-3999)
    CONFIG_INVALID_FORMAT = 3001
    CONFIG_MISSING_REQUIRED = 3002
    CONFIG_INVALID_VALUE = 3003
    CONFIG_FILE_NOT_FOUND = 3004

    # Library errors (4000-4999)
    LIBRARY_INVALID_FORMAT = 4001
    LIBRARY_INVALID_ENTRY = 4002

    # Export errors (5000-5999)
    EXPORT_UNKNOWN_FORMAT = 5001

    # File system errors (6000-6999)
    FS_FILE_NOT_FOUND = 6001

    # Generic/unknown errors (9000-9999)
    UNKNOWN_ERROR = 9000


@dataclass
class ErrorContext:
    """Contextual information about an error occurrence."""

    operation: str = ""
    file_path: Optional[str] = None
    export_format: Optional[str] = None
    correlation_id: Optional[str] = None
    timestamp: float = field(default_factory=time.time)
    system_info: Dict[str, Any] = field(default_factory=dict)
    user_context: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert context to dictionary for serialization."""
        return {
            'operation': self.operation,
            'file_path': self.file_path,
            'export_format': self.export_format,
            'correlation_id': self.correlation_id,
            'timestamp': self.timestamp,
            'system_info': self.system_info,
            'user_context': self.user_context
        }


@dataclass
class RecoverySuggestion:
    """Structured recovery suggestion for error resolution."""

    action: str
    description: str
    command: Optional[str] = None
    priority: int = 1  # 1=highest

    def to_dict(self) -> Dict[str, Any]:
        """Convert suggestion to dictionary."""
        return {
            'action': self.action,
            'description': self.description,
            'command': self.command,
            'priority': self.priority
        }


class AnimExportError(Exception):
    """
    Base exception for all animexport errors.

    Carries an error code, context and recovery suggestions so the CLI can
    render a useful report.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None,
        suggestions: Optional[List[RecoverySuggestion]] = None
    ):
        """
        Initialize an animexport error.

        Args:
            message: Human-readable error description
            error_code: Standardized error code
            context: Contextual information about the error
            cause: Original exception that caused this error
            suggestions: List of recovery suggestions
        """
        super().__init__(message)

        self.message = message
        self.error_code = error_code
        self.context = context or ErrorContext()
        self.cause = cause
        self.suggestions = suggestions or []
        self.stack_trace = traceback.format_exc()

        if not self.context.correlation_id:
            self.context.correlation_id = str(uuid.uuid4())[:8]

        if not self.context.system_info:
            self.context.system_info = {
                'platform': sys.platform,
                'python_version': sys.version,
            }

    def add_suggestion(self, suggestion: RecoverySuggestion) -> None:
        """Add a recovery suggestion to the error."""
        self.suggestions.append(suggestion)
        self.suggestions.sort(key=lambda s: s.priority)

    def get_debug_info(self) -> Dict[str, Any]:
        """Get debug information for logging."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'error_code': self.error_code.value,
            'context': self.context.to_dict(),
            'cause': {
                'type': type(self.cause).__name__ if self.cause else None,
                'message': str(self.cause) if self.cause else None
            },
            'suggestions': [s.to_dict() for s in self.suggestions],
            'stack_trace': self.stack_trace
        }


class ConfigurationError(AnimExportError):
    """Exception for configuration-related errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONFIG_INVALID_FORMAT,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        **kwargs
    ):
        context = kwargs.get('context') or ErrorContext()
        if config_key:
            context.user_context['config_key'] = config_key
            context.user_context['config_value'] = config_value

        kwargs['context'] = context
        kwargs['error_code'] = error_code

        super().__init__(message, **kwargs)

        if error_code == ErrorCode.CONFIG_FILE_NOT_FOUND:
            self.add_suggestion(RecoverySuggestion(
                action="Create configuration file",
                description="Create a configuration file using the default template.",
                command="animexport config init animexport.yaml",
                priority=1
            ))
        elif error_code == ErrorCode.CONFIG_INVALID_VALUE:
            self.add_suggestion(RecoverySuggestion(
                action="Check configuration values",
                description="Review the configuration file for invalid values and correct them.",
                command="animexport config show",
                priority=1
            ))


class LibraryError(AnimExportError):
    """Exception for library files that cannot be loaded."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.LIBRARY_INVALID_FORMAT,
        **kwargs
    ):
        kwargs['error_code'] = error_code
        super().__init__(message, **kwargs)

        if error_code == ErrorCode.FS_FILE_NOT_FOUND:
            self.add_suggestion(RecoverySuggestion(
                action="Check the library path",
                description="Make sure the library file exists and the path is spelled correctly.",
                priority=1
            ))
        else:
            self.add_suggestion(RecoverySuggestion(
                action="Validate the library file",
                description="The file must be JSON or YAML with an 'anime' list of entries "
                            "and an optional 'queue' list of entry ids.",
                priority=1
            ))


class ExportError(AnimExportError):
    """Exception for export requests that cannot be carried out."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.EXPORT_UNKNOWN_FORMAT,
        export_format: Optional[str] = None,
        **kwargs
    ):
        context = kwargs.get('context') or ErrorContext()
        if export_format:
            context.export_format = export_format

        kwargs['context'] = context
        kwargs['error_code'] = error_code

        super().__init__(message, **kwargs)

        if error_code == ErrorCode.EXPORT_UNKNOWN_FORMAT:
            self.add_suggestion(RecoverySuggestion(
                action="Choose a supported format",
                description="Supported formats are xml (alias mal) and markdown (alias md).",
                command="animexport export all LIBRARY_FILE --format xml",
                priority=1
            ))
