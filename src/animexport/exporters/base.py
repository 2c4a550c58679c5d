"""
Base Exporter Classes

Abstract base classes and utilities for the export system. Defines the
interface every exporter implements, the context object carrying its
collaborators, and registration and discovery of exporters.
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Type

from animexport import __version__
from animexport.exporters.sink import FileSink, Sink
from animexport.library import ChangeQueue, LibraryView, PendingQueue
from animexport.translate import EnumTranslator


@dataclass
class ExportResult:
    """Result of an export operation."""
    success: bool = True
    output_path: Optional[str] = None
    file_size: int = 0
    records_exported: int = 0
    format_name: str = ""
    execution_time: float = 0.0
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_error(self, error: str) -> None:
        """Add an error to the result."""
        self.errors.append(error)
        self.success = False

    def add_warning(self, warning: str) -> None:
        """Add a warning to the result."""
        self.warnings.append(warning)


@dataclass
class FormatInfo:
    """Information about an export format."""
    name: str
    extension: str
    description: str
    mime_type: str = ""


@dataclass
class RenderedDocument:
    """A fully assembled export held in memory."""
    data: bytes
    records: int = 0


@dataclass
class ExportContext:
    """
    Everything an exporter reads during one call.

    Attributes:
        library: Entries to export and per-status counts
        queue: Pending-change lookup for ``update_on_import``
        username: Current user, written to the XML header
        tool_name: Generator name for the XML comment
        tool_version: Generator version for the XML comment
        clock: Current date/time source
        translator: Code-to-label translation
        sink: Destination writer
        prefer_english_titles: Use English titles in Markdown when present
    """
    library: LibraryView
    queue: ChangeQueue = field(default_factory=PendingQueue)
    username: str = ""
    tool_name: str = "animexport"
    tool_version: str = __version__
    clock: Callable[[], datetime] = datetime.now
    translator: EnumTranslator = field(default_factory=EnumTranslator)
    sink: Sink = field(default_factory=FileSink)
    prefer_english_titles: bool = False


class BaseExporter(ABC):
    """
    Abstract base class for all exporters.

    Subclasses render the whole document into memory with ``render``; the
    base class prepares the destination, hands the buffer to the sink and
    reports the outcome. Exporters keep no state between calls.
    """

    def __init__(self):
        """Initialize the exporter."""
        self.logger = logging.getLogger(f"exporters.{self.__class__.__name__.lower()}")
        self._format_info = self._create_format_info()
        self._config_schema = self._create_config_schema()

    @abstractmethod
    def _create_format_info(self) -> FormatInfo:
        """Create the format info for this exporter."""
        pass

    @abstractmethod
    def render(self, context: ExportContext) -> RenderedDocument:
        """
        Render the complete export document.

        Args:
            context: Library and collaborators to export from

        Returns:
            RenderedDocument: Encoded bytes and the number of entries emitted
        """
        pass

    def _create_config_schema(self) -> Dict[str, Any]:
        """Create the configuration schema for this exporter."""
        return {
            'overwrite': {
                'type': 'boolean',
                'default': True,
                'description': 'Replace an existing file instead of picking a new name'
            },
            'add_extension': {
                'type': 'boolean',
                'default': True,
                'description': 'Append the format extension when the path has none'
            },
        }

    def get_format_info(self) -> FormatInfo:
        """Get information about this export format."""
        return self._format_info

    def validate_config(self, config: Dict[str, Any]) -> List[str]:
        """
        Validate export configuration.

        Args:
            config: Configuration to validate

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        for key, value in config.items():
            schema_def = self._config_schema.get(key)
            if schema_def is None:
                errors.append(f"Unknown option: {key}")
                continue

            expected_type = schema_def.get('type')
            if expected_type == 'boolean' and not isinstance(value, bool):
                errors.append(f"{key} must be a boolean")
            elif expected_type == 'string' and not isinstance(value, str):
                errors.append(f"{key} must be a string")

        return errors

    def prepare_output_path(self, output_path: str, config: Dict[str, Any]) -> Path:
        """
        Prepare the output path.

        Args:
            output_path: Requested output path
            config: Export configuration

        Returns:
            Path: Prepared output path

        Raises:
            OSError: If the parent directory cannot be created
        """
        path = Path(output_path)
        extension = self._format_info.extension

        if not path.suffix and config.get('add_extension', True):
            path = path.with_suffix(extension)

        path.parent.mkdir(parents=True, exist_ok=True)

        if path.exists() and not config.get('overwrite', True):
            counter = 1
            base_path = path.with_suffix('')
            suffix = path.suffix
            while path.exists():
                path = base_path.with_name(f"{base_path.name}_{counter}").with_suffix(suffix)
                counter += 1

        return path

    def export(self, context: ExportContext, output_path: str,
               config: Optional[Dict[str, Any]] = None) -> ExportResult:
        """
        Export the library to ``output_path``.

        Args:
            context: Library and collaborators to export from
            output_path: Path where the export file should be created
            config: Export configuration options

        Returns:
            ExportResult: Details about the export operation. ``success``
            reflects the outcome of the file write.
        """
        start_time = time.time()
        config = config or {}
        result = ExportResult(format_name=self._format_info.name)

        validation_errors = self.validate_config(config)
        if validation_errors:
            for error in validation_errors:
                result.add_error(error)
            return result

        try:
            output_file = self.prepare_output_path(output_path, config)
        except OSError as e:
            result.add_error(f"Cannot prepare {output_path}: {e}")
            self.logger.error(f"{self._format_info.name} export error: {e}")
            return result

        document = self.render(context)
        data, records = document.data, document.records
        if not records:
            result.add_warning("No entries in list")

        if not context.sink.write(output_file, data):
            error = getattr(context.sink, 'last_error', None) or f"Could not write {output_file}"
            result.add_error(error)
            self.logger.error(f"{self._format_info.name} export failed: {error}")
            return result

        result.output_path = str(output_file)
        result.records_exported = records
        result.file_size = len(data)
        result.execution_time = time.time() - start_time

        self.logger.info(
            f"{self._format_info.name} export completed: {records} entries to {output_file}"
        )
        return result


class ExporterRegistry:
    """
    Registry for managing available exporters.

    Maps format names and aliases to exporter classes and caches one
    instance per format.
    """

    def __init__(self):
        """Initialize the exporter registry."""
        self.logger = logging.getLogger("exporters.registry")
        self._exporters: Dict[str, Type[BaseExporter]] = {}
        self._instances: Dict[str, BaseExporter] = {}
        self._format_aliases: Dict[str, str] = {}

    def register_exporter(self, exporter_class: Type[BaseExporter],
                          format_name: Optional[str] = None,
                          aliases: Optional[List[str]] = None) -> None:
        """
        Register an exporter class.

        Args:
            exporter_class: Exporter class to register
            format_name: Optional custom format name (uses the class format info if not provided)
            aliases: Optional list of format name aliases
        """
        if format_name is None:
            format_name = exporter_class().get_format_info().name

        self._exporters[format_name] = exporter_class
        self.logger.debug(f"Registered exporter: {format_name} -> {exporter_class.__name__}")

        for alias in aliases or []:
            self._format_aliases[alias] = format_name
            self.logger.debug(f"Registered alias: {alias} -> {format_name}")

    def get_exporter(self, format_name: str) -> Optional[BaseExporter]:
        """
        Get an exporter instance for the specified format.

        Args:
            format_name: Name or alias of the export format

        Returns:
            Exporter instance or None if not found
        """
        actual_format = self._format_aliases.get(format_name, format_name)

        if actual_format in self._instances:
            return self._instances[actual_format]

        exporter_class = self._exporters.get(actual_format)
        if exporter_class is None:
            return None

        instance = exporter_class()
        self._instances[actual_format] = instance
        return instance

    def list_formats(self) -> List[str]:
        """Get list of available export formats."""
        return list(self._exporters.keys())

    def clear(self) -> None:
        """Clear all registered exporters."""
        self._exporters.clear()
        self._instances.clear()
        self._format_aliases.clear()
        self.logger.debug("Cleared exporter registry")


# Global registry instance
registry = ExporterRegistry()


def register_core_exporters() -> None:
    """Register all core exporters with the global registry."""
    from .xml import MalXmlExporter
    from .markdown import MarkdownExporter

    registry.register_exporter(MalXmlExporter, aliases=['mal'])
    registry.register_exporter(MarkdownExporter, aliases=['md'])


def get_exporter(format_name: str) -> Optional[BaseExporter]:
    """Get an exporter instance from the global registry."""
    if not registry.list_formats():
        register_core_exporters()
    return registry.get_exporter(format_name)


def list_exporters() -> List[str]:
    """List all available export formats."""
    if not registry.list_formats():
        register_core_exporters()
    return registry.list_formats()
