"""
Tests for the exporter base classes, registry and file sink.
"""

from unittest.mock import patch

from animexport.exporters import ExporterRegistry, FileSink, MalXmlExporter, MarkdownExporter
from animexport.exporters.base import get_exporter, list_exporters


class TestPrepareOutputPath:
    """Output path handling shared by all exporters."""

    def setup_method(self):
        self.exporter = MarkdownExporter()

    def test_adds_extension(self, tmp_path):
        path = self.exporter.prepare_output_path(str(tmp_path / "report"), {})
        assert path == tmp_path / "report.md"

    def test_keeps_extension_when_disabled(self, tmp_path):
        path = self.exporter.prepare_output_path(str(tmp_path / "report"), {'add_extension': False})
        assert path == tmp_path / "report"

    def test_creates_parent_directories(self, tmp_path):
        path = self.exporter.prepare_output_path(str(tmp_path / "a" / "b" / "report.md"), {})
        assert path.parent.is_dir()

    def test_numbered_name_without_overwrite(self, tmp_path):
        (tmp_path / "report.md").write_text("old")

        path = self.exporter.prepare_output_path(str(tmp_path / "report.md"), {'overwrite': False})

        assert path == tmp_path / "report_1.md"

    def test_validate_config(self):
        assert self.exporter.validate_config({'overwrite': True}) == []
        assert self.exporter.validate_config({'overwrite': 'yes'}) == ["overwrite must be a boolean"]
        assert self.exporter.validate_config({'colour': 'red'}) == ["Unknown option: colour"]

    def test_invalid_config_fails_export(self, export_context, recording_sink, tmp_path):
        result = self.exporter.export(export_context, str(tmp_path / "x.md"), {'overwrite': 'no'})

        assert result.success is False
        assert recording_sink.writes == {}

    def test_unpreparable_path_fails_export(self, export_context, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("")

        result = self.exporter.export(export_context, str(blocker / "sub" / "x.md"))

        assert result.success is False
        assert result.errors


class TestExporterRegistry:
    """Test exporter registration and lookup."""

    def setup_method(self):
        self.registry = ExporterRegistry()
        self.registry.register_exporter(MalXmlExporter, aliases=['mal'])
        self.registry.register_exporter(MarkdownExporter, aliases=['md'])

    def test_list_formats(self):
        assert self.registry.list_formats() == ["xml", "markdown"]

    def test_aliases(self):
        assert isinstance(self.registry.get_exporter("mal"), MalXmlExporter)
        assert isinstance(self.registry.get_exporter("md"), MarkdownExporter)

    def test_instances_are_cached(self):
        assert self.registry.get_exporter("xml") is self.registry.get_exporter("mal")

    def test_unknown_format(self):
        assert self.registry.get_exporter("csv") is None

    def test_format_info(self):
        info = self.registry.get_exporter("md").get_format_info()
        assert info.mime_type == "text/markdown"

    def test_clear(self):
        self.registry.clear()
        assert self.registry.list_formats() == []

    def test_global_registry(self):
        assert set(list_exporters()) == {"xml", "markdown"}
        assert isinstance(get_exporter("md"), MarkdownExporter)


class TestFileSink:
    """Test the file system sink."""

    def setup_method(self):
        self.sink = FileSink()

    def test_write_creates_file(self, tmp_path):
        path = tmp_path / "out.txt"

        assert self.sink.write(path, b"hello") is True
        assert path.read_bytes() == b"hello"

    def test_write_replaces_content(self, tmp_path):
        path = tmp_path / "out.txt"
        path.write_bytes(b"a much longer previous content")

        assert self.sink.write(path, b"new") is True
        assert path.read_bytes() == b"new"

    def test_write_leaves_no_temporary_files(self, tmp_path):
        self.sink.write(tmp_path / "out.txt", b"data")
        assert [p.name for p in tmp_path.iterdir()] == ["out.txt"]

    def test_append(self, tmp_path):
        path = tmp_path / "out.txt"
        path.write_bytes(b"a")

        assert self.sink.write(path, b"b", append=True) is True
        assert path.read_bytes() == b"ab"

    def test_missing_directory_fails(self, tmp_path):
        path = tmp_path / "missing" / "out.txt"

        assert self.sink.write(path, b"data") is False
        assert "missing" in self.sink.last_error

    def test_os_error_is_reported(self, tmp_path):
        with patch("animexport.exporters.sink.os.replace", side_effect=PermissionError("denied")):
            assert self.sink.write(tmp_path / "out.txt", b"data") is False

        assert "denied" in self.sink.last_error
        assert list(tmp_path.iterdir()) == []

    def test_last_error_resets(self, tmp_path):
        self.sink.write(tmp_path / "missing" / "out.txt", b"")
        self.sink.write(tmp_path / "out.txt", b"")
        assert self.sink.last_error is None
