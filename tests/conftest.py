"""
Shared Test Configuration and Fixtures

Sample library entries, a fixed clock and in-memory sinks used across the
test suite.
"""

import json
from datetime import date, datetime
from pathlib import Path
from typing import Dict, List, Union

import pytest
import yaml

from animexport.exporters import ExportContext
from animexport.library import AnimeLibrary, LibraryEntry, MyStatus, PendingQueue, SeriesType


FIXED_NOW = datetime(2024, 3, 9, 14, 5, 0)


class RecordingSink:
    """Sink that keeps written buffers in memory."""

    def __init__(self):
        self.writes: Dict[str, bytes] = {}
        self.appends: List[str] = []
        self.last_error = None

    def write(self, path: Union[str, Path], data: bytes, append: bool = False) -> bool:
        if append:
            self.appends.append(str(path))
        self.writes[str(path)] = data
        return True


class FailingSink:
    """Sink that refuses every write."""

    def __init__(self):
        self.last_error = "disk full"
        self.calls = 0

    def write(self, path: Union[str, Path], data: bytes, append: bool = False) -> bool:
        self.calls += 1
        return False


@pytest.fixture
def sample_entries() -> List[LibraryEntry]:
    """A small library mixing statuses, unknown values and untracked entries."""
    return [
        LibraryEntry(
            id=1, title="zeta", series_type=SeriesType.TV, episode_count=12,
            my_status=MyStatus.WATCHING, my_last_watched_episode=3, my_score=80,
            my_notes="great <so far>", my_tags="action, drama",
            my_date_start=date(2024, 1, 5),
        ),
        LibraryEntry(
            id=2, title="Alpha", english_title="Alpha EN", series_type=SeriesType.MOVIE,
            episode_count=1, my_status=MyStatus.COMPLETED, my_last_watched_episode=1,
            my_score=95, my_rewatched_times=2,
            my_date_start=date(2023, 6, 1), my_date_end=date(2023, 6, 1),
        ),
        LibraryEntry(
            id=3, title="beta", series_type=SeriesType.ONA, episode_count=None,
            my_status=MyStatus.WATCHING, my_last_watched_episode=7,
            my_rewatching=True, my_rewatching_ep=4,
        ),
        LibraryEntry(
            id=4, title="Untracked Show", series_type=SeriesType.TV, episode_count=24,
            my_status=MyStatus.NOT_IN_LIST,
        ),
        LibraryEntry(
            id=5, title="Gamma", series_type=SeriesType.OVA, episode_count=6,
            my_status=MyStatus.PLAN_TO_WATCH,
        ),
    ]


@pytest.fixture
def sample_library(sample_entries) -> AnimeLibrary:
    return AnimeLibrary(sample_entries)


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def export_context(sample_library, recording_sink) -> ExportContext:
    """Context with a fixed clock, one queued entry and an in-memory sink."""
    return ExportContext(
        library=sample_library,
        queue=PendingQueue([3]),
        username="tester",
        tool_name="animexport",
        tool_version="1.2.3",
        clock=lambda: FIXED_NOW,
        sink=recording_sink,
    )


@pytest.fixture
def library_document(sample_entries) -> dict:
    """The sample library as it is stored on disk."""
    return {
        'anime': [entry.model_dump(mode='json') for entry in sample_entries],
        'queue': [3],
    }


@pytest.fixture
def library_file(tmp_path, library_document) -> Path:
    path = tmp_path / "library.yaml"
    path.write_text(yaml.safe_dump(library_document), encoding='utf-8')
    return path


@pytest.fixture
def library_json_file(tmp_path, library_document) -> Path:
    path = tmp_path / "library.json"
    path.write_text(json.dumps(library_document), encoding='utf-8')
    return path


@pytest.fixture
def failing_sink() -> FailingSink:
    return FailingSink()
