"""
MyAnimeList XML Exporter

Builds a document in the MyAnimeList list import format: an XML declaration,
a generator comment, one ``myinfo`` header and one ``anime`` record per
in-list entry. The consuming service reads fields by position, so the
record layout is declared once in ``ANIME_FIELDS`` and written in that order.
"""

import re
import xml.etree.ElementTree as ET
from enum import Enum
from typing import Any, Callable, List, NamedTuple, Tuple
from xml.sax.saxutils import escape

from animexport.exporters.base import BaseExporter, ExportContext, FormatInfo, RenderedDocument
from animexport.library import LibraryEntry, MyStatus


EXPORT_TYPE_ANIME = 1


class FieldMode(Enum):
    """How a field value is written."""
    INT = "int"
    TEXT = "text"
    CDATA = "cdata"


class CData(str):
    """Text written as a CDATA section instead of escaped character data."""


class RecordField(NamedTuple):
    name: str
    value: Callable[[LibraryEntry, ExportContext], Any]
    mode: FieldMode


def _date(value) -> str:
    return value.isoformat() if value else ""


def _empty(entry: LibraryEntry, context: ExportContext) -> str:
    return ""


def _zero(entry: LibraryEntry, context: ExportContext) -> int:
    return 0


ANIME_FIELDS: Tuple[RecordField, ...] = (
    RecordField("series_animedb_id", lambda e, c: e.id, FieldMode.INT),
    RecordField("series_title", lambda e, c: e.title, FieldMode.CDATA),
    RecordField("series_type", lambda e, c: c.translator.series_type(e.series_type), FieldMode.TEXT),
    RecordField("series_episodes", lambda e, c: max(e.episode_count or 0, 0), FieldMode.INT),
    RecordField("my_id", _zero, FieldMode.INT),
    RecordField("my_watched_episodes", lambda e, c: e.my_last_watched_episode, FieldMode.INT),
    RecordField("my_start_date", lambda e, c: _date(e.my_date_start), FieldMode.TEXT),
    RecordField("my_finish_date", lambda e, c: _date(e.my_date_end), FieldMode.TEXT),
    RecordField("my_fansub_group", _empty, FieldMode.CDATA),
    RecordField("my_rated", _empty, FieldMode.TEXT),
    RecordField("my_score", lambda e, c: c.translator.my_score(e.my_score), FieldMode.INT),
    RecordField("my_dvd", _empty, FieldMode.TEXT),
    RecordField("my_storage", _empty, FieldMode.TEXT),
    RecordField("my_status", lambda e, c: c.translator.my_status(e.my_status), FieldMode.TEXT),
    RecordField("my_comments", lambda e, c: e.my_notes, FieldMode.CDATA),
    RecordField("my_times_watched", lambda e, c: e.my_rewatched_times, FieldMode.INT),
    RecordField("my_rewatch_value", _empty, FieldMode.TEXT),
    RecordField("my_downloaded_eps", _zero, FieldMode.INT),
    RecordField("my_tags", lambda e, c: e.my_tags, FieldMode.CDATA),
    RecordField("my_rewatching", lambda e, c: e.my_rewatching, FieldMode.INT),
    RecordField("my_rewatching_ep", lambda e, c: e.my_rewatching_ep, FieldMode.INT),
    RecordField("update_on_import", lambda e, c: c.queue.is_queued(e.id), FieldMode.INT),
)

STATUS_TOTAL_FIELDS: Tuple[Tuple[str, MyStatus], ...] = (
    ("user_total_watching", MyStatus.WATCHING),
    ("user_total_completed", MyStatus.COMPLETED),
    ("user_total_onhold", MyStatus.ON_HOLD),
    ("user_total_dropped", MyStatus.DROPPED),
    ("user_total_plantowatch", MyStatus.PLAN_TO_WATCH),
)


def write_field(parent: ET.Element, name: str, value: Any,
                mode: FieldMode = FieldMode.TEXT) -> ET.Element:
    """Append a leaf element holding ``value`` encoded according to ``mode``."""
    node = ET.SubElement(parent, name)
    if mode is FieldMode.INT:
        node.text = str(int(value))
    elif mode is FieldMode.CDATA:
        node.text = CData(value)
    else:
        node.text = str(value)
    return node


def _comment_text(comment: str) -> str:
    # "--" may not occur inside a comment, nor may it end with "-"
    text = re.sub(r"-(?=-)", "- ", comment)
    if text.endswith("-"):
        text += " "
    return text


def _cdata_section(text: str) -> str:
    # "]]>" cannot appear inside a section; split it across two
    return "<![CDATA[" + text.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def _serialize_element(element: ET.Element, lines: List[str], depth: int) -> None:
    indent = "\t" * depth
    children = list(element)

    if children:
        lines.append(f"{indent}<{element.tag}>")
        for child in children:
            _serialize_element(child, lines, depth + 1)
        lines.append(f"{indent}</{element.tag}>")
        return

    text = element.text or ""
    if isinstance(element.text, CData):
        body = _cdata_section(text)
    else:
        body = escape(text)
    lines.append(f"{indent}<{element.tag}>{body}</{element.tag}>")


def serialize_document(root: ET.Element, comment: str = "") -> bytes:
    """
    Serialize an export tree with declaration and optional leading comment.

    ElementTree cannot emit CDATA sections, so leaves whose text is a
    ``CData`` instance are written by hand; everything else is escaped.
    """
    lines = ['<?xml version="1.0" encoding="UTF-8"?>']
    if comment:
        lines.append(f"<!--{_comment_text(comment)}-->")
    _serialize_element(root, lines, 0)
    return ("\n".join(lines) + "\n").encode("utf-8")


class MalXmlExporter(BaseExporter):
    """
    Exporter for the MyAnimeList XML import format.

    Only entries in the user's list are written. Header totals come from the
    library's per-status counts, except ``user_total_anime`` which counts the
    in-list entries directly.
    """

    def _create_format_info(self) -> FormatInfo:
        """Create format information for MyAnimeList XML export."""
        return FormatInfo(
            name="xml",
            extension=".xml",
            description="MyAnimeList XML import format",
            mime_type="application/xml"
        )

    def generator_comment(self, context: ExportContext) -> str:
        now = context.clock()
        return (
            f" Generated by {context.tool_name} v{context.tool_version}"
            f" on {now.strftime('%Y-%m-%d')} {now.strftime('%H:%M')} "
        )

    def build_document(self, context: ExportContext) -> Tuple[ET.Element, int]:
        """
        Build the ``myanimelist`` tree.

        Returns:
            Tuple of (root element, number of anime records)
        """
        entries = [entry for entry in context.library.entries() if entry.is_in_list()]

        root = ET.Element("myanimelist")

        myinfo = ET.SubElement(root, "myinfo")
        write_field(myinfo, "user_id", 0, FieldMode.INT)
        write_field(myinfo, "user_name", context.username)
        write_field(myinfo, "user_export_type", EXPORT_TYPE_ANIME, FieldMode.INT)
        write_field(myinfo, "user_total_anime", len(entries), FieldMode.INT)
        for name, status in STATUS_TOTAL_FIELDS:
            write_field(myinfo, name, context.library.count_by_status(status), FieldMode.INT)

        for entry in entries:
            node = ET.SubElement(root, "anime")
            for record_field in ANIME_FIELDS:
                write_field(node, record_field.name,
                            record_field.value(entry, context), record_field.mode)

        return root, len(entries)

    def render(self, context: ExportContext) -> RenderedDocument:
        """Render the complete XML document."""
        root, records = self.build_document(context)
        data = serialize_document(root, self.generator_comment(context))
        return RenderedDocument(data=data, records=records)


def export_as_mal_xml(context: ExportContext, path: str) -> bool:
    """Export the library as MyAnimeList XML. Returns True if the file was written."""
    return MalXmlExporter().export(context, path, {'add_extension': False}).success
