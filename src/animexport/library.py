"""
Anime Library

Read-only library view consumed by the exporters, the pending-change queue,
and loading of both from a JSON or YAML library file.
"""

import json
import logging
from datetime import date
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Protocol, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from animexport.core.exceptions import ErrorCode, ErrorContext, LibraryError


logger = logging.getLogger(__name__)


class SeriesType(IntEnum):
    """Media type codes as stored in the library."""
    UNKNOWN = 0
    TV = 1
    OVA = 2
    MOVIE = 3
    SPECIAL = 4
    ONA = 5
    MUSIC = 6


class MyStatus(IntEnum):
    """User watch status codes. NOT_IN_LIST marks untracked entries."""
    NOT_IN_LIST = 0
    WATCHING = 1
    COMPLETED = 2
    ON_HOLD = 3
    DROPPED = 4
    PLAN_TO_WATCH = 5


class LibraryEntry(BaseModel):
    """
    A single anime entry together with the user's list data.

    Codes are kept as plain integers so that values unknown to this version
    survive loading and reach the translators untouched.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    title: str = ""
    english_title: str = ""
    series_type: int = SeriesType.UNKNOWN
    episode_count: Optional[int] = None

    my_status: int = MyStatus.NOT_IN_LIST
    my_last_watched_episode: int = 0
    my_score: int = 0
    my_rewatched_times: int = 0
    my_rewatching: bool = False
    my_rewatching_ep: int = 0
    my_notes: str = ""
    my_tags: str = ""
    my_date_start: Optional[date] = None
    my_date_end: Optional[date] = None

    @field_validator('my_date_start', 'my_date_end', mode='before')
    @classmethod
    def empty_date_is_unset(cls, v):
        """Treat empty strings and all-zero dates as unset."""
        if v in ("", "0000-00-00"):
            return None
        return v

    def is_in_list(self) -> bool:
        """Whether the user tracks this entry."""
        return self.my_status != MyStatus.NOT_IN_LIST

    def preferred_title(self, prefer_english: bool = False) -> str:
        """Title shown to the user, optionally favouring the English title."""
        if prefer_english and self.english_title:
            return self.english_title
        return self.title


class LibraryView(Protocol):
    """Read-only access to library entries."""

    def entries(self) -> Iterable[LibraryEntry]:
        ...

    def count_by_status(self, status: int) -> int:
        ...


class ChangeQueue(Protocol):
    """Pending, not yet synchronized list updates."""

    def is_queued(self, entry_id: int) -> bool:
        ...


class AnimeLibrary:
    """
    In-memory library keyed by entry id.

    Iteration follows insertion order. Adding an entry whose id already
    exists replaces it in place.
    """

    def __init__(self, entries: Optional[Iterable[LibraryEntry]] = None):
        self._items: Dict[int, LibraryEntry] = {}
        for entry in entries or ():
            self.add(entry)

    def add(self, entry: LibraryEntry) -> None:
        self._items[entry.id] = entry

    def get(self, entry_id: int) -> Optional[LibraryEntry]:
        return self._items.get(entry_id)

    def entries(self) -> Iterator[LibraryEntry]:
        return iter(list(self._items.values()))

    def count_by_status(self, status: int) -> int:
        """Number of in-list entries with the given status."""
        return sum(
            1 for entry in self._items.values()
            if entry.is_in_list() and entry.my_status == status
        )

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[LibraryEntry]:
        return self.entries()


class PendingQueue:
    """Set of entry ids with queued updates."""

    def __init__(self, entry_ids: Optional[Iterable[int]] = None):
        self._ids = set(entry_ids or ())

    def add(self, entry_id: int) -> None:
        self._ids.add(entry_id)

    def is_queued(self, entry_id: int) -> bool:
        return entry_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)


class LibraryDocument(BaseModel):
    """On-disk layout of a library file."""

    anime: List[LibraryEntry] = Field(default_factory=list)
    queue: List[int] = Field(default_factory=list)


def _read_document(path: Path) -> Any:
    with open(path, 'r', encoding='utf-8') as f:
        if path.suffix.lower() == '.json':
            return json.load(f)
        return yaml.safe_load(f)


def load_library(path: Union[str, Path]) -> Tuple[AnimeLibrary, PendingQueue]:
    """
    Load a library and its pending queue from a JSON or YAML file.

    Args:
        path: Library file path

    Returns:
        Tuple of (library, pending queue)

    Raises:
        LibraryError: If the file is missing, unreadable or malformed
    """
    path = Path(path)
    context = ErrorContext(operation="load_library", file_path=str(path))

    if not path.is_file():
        raise LibraryError(
            f"Library file not found: {path}",
            error_code=ErrorCode.FS_FILE_NOT_FOUND,
            context=context
        )

    try:
        raw = _read_document(path)
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise LibraryError(
            f"Failed to read library file {path}: {e}",
            error_code=ErrorCode.LIBRARY_INVALID_FORMAT,
            context=context,
            cause=e
        )

    try:
        document = LibraryDocument.model_validate(raw or {})
    except ValidationError as e:
        raise LibraryError(
            f"Invalid library file {path}: {e}",
            error_code=ErrorCode.LIBRARY_INVALID_ENTRY,
            context=context,
            cause=e
        )

    library = AnimeLibrary(document.anime)
    queue = PendingQueue(document.queue)
    logger.info(f"Loaded {len(library)} entries ({len(queue)} queued) from {path}")
    return library, queue


def load_queue(path: Union[str, Path]) -> PendingQueue:
    """
    Load pending entry ids from a JSON or YAML file.

    The file holds either a list of ids or a mapping with a ``queue`` list.

    Raises:
        LibraryError: If the file is missing or does not hold a list of ids
    """
    path = Path(path)
    context = ErrorContext(operation="load_queue", file_path=str(path))

    if not path.is_file():
        raise LibraryError(
            f"Queue file not found: {path}",
            error_code=ErrorCode.FS_FILE_NOT_FOUND,
            context=context
        )

    try:
        raw = _read_document(path)
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise LibraryError(f"Failed to read queue file {path}: {e}", context=context, cause=e)

    if isinstance(raw, dict):
        raw = raw.get('queue', [])

    try:
        ids = [int(entry_id) for entry_id in raw or []]
    except (TypeError, ValueError) as e:
        raise LibraryError(
            f"Queue file {path} must contain a list of entry ids",
            error_code=ErrorCode.LIBRARY_INVALID_ENTRY,
            context=context,
            cause=e
        )

    return PendingQueue(ids)
