"""
Exporters Package

Export system for the anime library. Provides a common interface for
writing the library as MyAnimeList XML and as a Markdown summary.
"""

from animexport.exporters.base import (
    BaseExporter,
    ExportContext,
    ExporterRegistry,
    ExportResult,
    FormatInfo,
    RenderedDocument,
    get_exporter,
    list_exporters,
)
from animexport.exporters.sink import FileSink
from animexport.exporters.xml import MalXmlExporter, export_as_mal_xml
from animexport.exporters.markdown import MarkdownExporter, export_as_markdown

__all__ = [
    'BaseExporter',
    'ExportContext',
    'ExporterRegistry',
    'ExportResult',
    'FormatInfo',
    'RenderedDocument',
    'FileSink',
    'MalXmlExporter',
    'MarkdownExporter',
    'export_as_mal_xml',
    'export_as_markdown',
    'get_exporter',
    'list_exporters',
]
