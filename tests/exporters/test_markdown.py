"""
Tests for Markdown Exporter

Tests status grouping, section order, case-insensitive sorting, line
endings and the empty-library case.
"""

import locale

import pytest

from animexport.exporters import ExportContext, MarkdownExporter, export_as_markdown
from animexport.exporters.markdown import sort_key
from animexport.library import AnimeLibrary, LibraryEntry, MyStatus


UTF8_LOCALES = ["en_US.UTF-8", "en_US.utf8", "en_GB.UTF-8", "de_DE.UTF-8", "fr_FR.UTF-8"]


@pytest.fixture
def user_collation():
    """Switch LC_COLLATE to an installed UTF-8 locale for one test."""
    previous = locale.setlocale(locale.LC_COLLATE)
    for name in UTF8_LOCALES:
        try:
            locale.setlocale(locale.LC_COLLATE, name)
        except locale.Error:
            continue
        break
    else:
        pytest.skip("no UTF-8 locale with language collation installed")
    yield name
    locale.setlocale(locale.LC_COLLATE, previous)


EXPECTED_SAMPLE = (
    "# Currently Watching\r\n"
    "\r\n"
    "- beta (7/?)\r\n"
    "- zeta (3/12)\r\n"
    "\r\n"
    "# Completed\r\n"
    "\r\n"
    "- Alpha (1/1)\r\n"
    "\r\n"
    "# Plan to Watch\r\n"
    "\r\n"
    "- Gamma (0/6)\r\n"
)


def _context(entries, sink, **kwargs) -> ExportContext:
    return ExportContext(library=AnimeLibrary(entries), sink=sink, **kwargs)


class TestMarkdownExporter:
    """Test suite for MarkdownExporter."""

    def setup_method(self):
        self.exporter = MarkdownExporter()

    def test_format_info(self):
        info = self.exporter.get_format_info()
        assert info.name == "markdown"
        assert info.extension == ".md"

    def test_render_sample_library(self, export_context):
        document = self.exporter.render(export_context)

        assert document.data.decode("utf-8") == EXPECTED_SAMPLE
        assert document.records == 4

    def test_untracked_entries_are_skipped(self, export_context):
        text = self.exporter.render(export_context).data.decode("utf-8")
        assert "Untracked Show" not in text

    def test_sections_follow_status_code_order(self, recording_sink):
        entries = [
            LibraryEntry(id=1, title="p", episode_count=1, my_status=MyStatus.PLAN_TO_WATCH),
            LibraryEntry(id=2, title="d", episode_count=1, my_status=MyStatus.DROPPED),
            LibraryEntry(id=3, title="h", episode_count=1, my_status=MyStatus.ON_HOLD),
            LibraryEntry(id=4, title="c", episode_count=1, my_status=MyStatus.COMPLETED),
            LibraryEntry(id=5, title="w", episode_count=1, my_status=MyStatus.WATCHING),
        ]
        text = self.exporter.render(_context(entries, recording_sink)).data.decode("utf-8")

        headings = [line for line in text.split("\r\n") if line.startswith("# ")]
        assert headings == [
            "# Currently Watching",
            "# Completed",
            "# On Hold",
            "# Dropped",
            "# Plan to Watch",
        ]

    def test_lines_sorted_case_insensitively(self, recording_sink):
        entries = [
            LibraryEntry(id=i, title=title, episode_count=10, my_status=MyStatus.COMPLETED,
                         my_last_watched_episode=10)
            for i, title in enumerate(["zeta", "Alpha", "beta"], 1)
        ]
        buckets = self.exporter.group_by_status(_context(entries, recording_sink))

        assert buckets[MyStatus.COMPLETED] == [
            "Alpha (10/10)",
            "beta (10/10)",
            "zeta (10/10)",
        ]

    def test_accented_titles_sort_among_plain_ones(self, user_collation, recording_sink):
        entries = [
            LibraryEntry(id=i, title=title, episode_count=1, my_status=MyStatus.WATCHING)
            for i, title in enumerate(["Zeta", "\u00c9mile", "apple"], 1)
        ]
        buckets = self.exporter.group_by_status(_context(entries, recording_sink))

        assert buckets[MyStatus.WATCHING] == [
            "apple (0/1)",
            "\u00c9mile (0/1)",
            "Zeta (0/1)",
        ]

    @pytest.mark.parametrize("episode_count", [None, 0, -1])
    def test_unknown_episode_count(self, episode_count, recording_sink):
        entry = LibraryEntry(id=1, title="Ongoing", episode_count=episode_count,
                             my_status=MyStatus.WATCHING, my_last_watched_episode=5)

        line = self.exporter.format_entry(entry, _context([entry], recording_sink))

        assert line == "Ongoing (5/?)"

    def test_prefers_english_title_when_asked(self, recording_sink):
        entry = LibraryEntry(id=1, title="Shingeki no Kyojin", english_title="Attack on Titan",
                             episode_count=25, my_status=MyStatus.COMPLETED,
                             my_last_watched_episode=25)

        plain = self.exporter.format_entry(entry, _context([entry], recording_sink))
        english = self.exporter.format_entry(
            entry, _context([entry], recording_sink, prefer_english_titles=True)
        )

        assert plain == "Shingeki no Kyojin (25/25)"
        assert english == "Attack on Titan (25/25)"

    def test_unknown_status_gets_fallback_heading(self, recording_sink):
        entries = [LibraryEntry(id=1, title="x", episode_count=1, my_status=9)]
        text = self.exporter.render(_context(entries, recording_sink)).data.decode("utf-8")

        assert text.startswith("# Unknown\r\n\r\n- x (0/1)\r\n")

    def test_empty_library_renders_nothing(self, recording_sink):
        entries = [LibraryEntry(id=1, title="Not tracked")]

        document = self.exporter.render(_context(entries, recording_sink))

        assert document.data == b""
        assert document.records == 0

    def test_export_writes_once_without_append(self, export_context, recording_sink, tmp_path):
        output = tmp_path / "animelist.md"

        result = self.exporter.export(export_context, str(output))

        assert result.success is True
        assert recording_sink.writes[str(output)] == EXPECTED_SAMPLE.encode("utf-8")
        assert recording_sink.appends == []

    def test_export_empty_library_warns(self, recording_sink, tmp_path):
        context = _context([], recording_sink)

        result = self.exporter.export(context, str(tmp_path / "empty.md"))

        assert result.success is True
        assert result.records_exported == 0
        assert result.warnings == ["No entries in list"]

    def test_export_reports_write_failure(self, export_context, failing_sink, tmp_path):
        export_context.sink = failing_sink

        assert export_as_markdown(export_context, str(tmp_path / "animelist.md")) is False

    def test_export_is_repeatable(self, export_context):
        first = self.exporter.render(export_context).data
        second = self.exporter.render(export_context).data
        assert first == second


def test_sort_key_ignores_case():
    assert sorted(["b", "A", "c", "B"], key=sort_key) == ["A", "b", "B", "c"]
    assert sort_key("Alpha") == sort_key("ALPHA")
