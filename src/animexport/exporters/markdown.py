"""
Markdown Exporter

Human-readable summary of the library: one section per watch status, each
listing the entries in that status with their episode progress.
"""

import locale
from typing import Dict, List

from animexport.exporters.base import BaseExporter, ExportContext, FormatInfo, RenderedDocument
from animexport.library import LibraryEntry
from animexport.translate import translate_number


LINE_BREAK = "\r\n"
UNKNOWN_EPISODES = "?"


def sort_key(text: str) -> str:
    """
    Case-insensitive, locale-aware collation key.

    Collation follows the process LC_COLLATE setting. Python starts in the
    "C" locale, so callers outside the CLI must run
    ``locale.setlocale(locale.LC_COLLATE, "")`` to get the user's ordering.
    """
    return locale.strxfrm(text.casefold())


class MarkdownExporter(BaseExporter):
    """
    Markdown exporter grouping entries by watch status.

    Sections follow ascending status codes, not display order. Each section
    is a level-1 heading with the long status name followed by a list of
    ``<title> (<watched>/<episodes>)`` items sorted case-insensitively.
    Lines end with CRLF.
    """

    def _create_format_info(self) -> FormatInfo:
        """Create format information for Markdown export."""
        return FormatInfo(
            name="markdown",
            extension=".md",
            description="Markdown summary grouped by watch status",
            mime_type="text/markdown"
        )

    def format_entry(self, entry: LibraryEntry, context: ExportContext) -> str:
        """Render the list line for one entry."""
        title = entry.preferred_title(context.prefer_english_titles)
        episodes = translate_number(entry.episode_count, UNKNOWN_EPISODES)
        return f"{title} ({entry.my_last_watched_episode}/{episodes})"

    def group_by_status(self, context: ExportContext) -> Dict[int, List[str]]:
        """Bucket in-list entries by raw status, each bucket sorted."""
        buckets: Dict[int, List[str]] = {}

        for entry in context.library.entries():
            if entry.is_in_list():
                buckets.setdefault(entry.my_status, []).append(self.format_entry(entry, context))

        for lines in buckets.values():
            lines.sort(key=sort_key)

        return buckets

    def render_text(self, buckets: Dict[int, List[str]], context: ExportContext) -> str:
        """Render status buckets as Markdown text."""
        text = ""

        for status in sorted(buckets):
            if text:
                text += LINE_BREAK
            text += f"# {context.translator.status_name(status)}{LINE_BREAK}{LINE_BREAK}"
            for line in buckets[status]:
                text += f"- {line}{LINE_BREAK}"

        return text

    def render(self, context: ExportContext) -> RenderedDocument:
        """Render the complete Markdown document."""
        buckets = self.group_by_status(context)
        text = self.render_text(buckets, context)
        records = sum(len(lines) for lines in buckets.values())
        return RenderedDocument(data=text.encode("utf-8"), records=records)


def export_as_markdown(context: ExportContext, path: str) -> bool:
    """Export the library as a Markdown summary. Returns True if the file was written."""
    return MarkdownExporter().export(context, path, {'add_extension': False}).success
