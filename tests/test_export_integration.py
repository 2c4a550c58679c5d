"""
Integration tests: loading a library file and exporting both formats to disk.
"""

import xml.etree.ElementTree as ET
from datetime import datetime

import pytest

from animexport.exporters import ExportContext, FileSink, export_as_mal_xml, export_as_markdown
from animexport.library import load_library


@pytest.fixture
def disk_context(library_file) -> ExportContext:
    library, queue = load_library(library_file)
    return ExportContext(
        library=library,
        queue=queue,
        username="tester",
        clock=lambda: datetime(2024, 1, 1, 9, 30),
        sink=FileSink(),
    )


@pytest.mark.integration
class TestExportToDisk:

    def test_xml_round_trip_through_disk(self, disk_context, tmp_path):
        output = tmp_path / "animelist.xml"

        assert export_as_mal_xml(disk_context, str(output)) is True

        root = ET.parse(output).getroot()
        assert root.find("myinfo").findtext("user_total_anime") == "4"
        assert [n.findtext("series_animedb_id") for n in root.findall("anime")] == ["1", "2", "3", "5"]

    def test_repeated_xml_exports_differ_only_in_comment(self, disk_context, tmp_path):
        first, second = tmp_path / "a.xml", tmp_path / "b.xml"

        export_as_mal_xml(disk_context, str(first))
        disk_context.clock = lambda: datetime(2025, 5, 5, 5, 5)
        export_as_mal_xml(disk_context, str(second))

        first_lines = first.read_bytes().split(b"\n")
        second_lines = second.read_bytes().split(b"\n")
        assert [i for i, (a, b) in enumerate(zip(first_lines, second_lines)) if a != b] == [1]
        assert len(first_lines) == len(second_lines)

    def test_repeated_markdown_exports_are_identical(self, disk_context, tmp_path):
        first, second = tmp_path / "a.md", tmp_path / "b.md"

        export_as_markdown(disk_context, str(first))
        export_as_markdown(disk_context, str(second))

        assert first.read_bytes() == second.read_bytes()
        assert b"\r\n" in first.read_bytes()

    def test_markdown_overwrites_previous_export(self, disk_context, tmp_path):
        output = tmp_path / "animelist.md"
        output.write_bytes(b"stale content that is longer than nothing" * 100)

        export_as_markdown(disk_context, str(output))

        assert not output.read_bytes().endswith(b"nothing")
        assert output.read_bytes().startswith(b"# Currently Watching")

    def test_export_to_missing_directory_creates_it(self, disk_context, tmp_path):
        output = tmp_path / "nested" / "dir" / "animelist.md"

        assert export_as_markdown(disk_context, str(output)) is True
        assert output.is_file()
