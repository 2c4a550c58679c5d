"""
Enum Translation

Maps internal library codes to the vocabulary of each export target.
Every table has an explicit fallback so that codes added later never make
an export fail.
"""

from typing import Dict, Optional, Protocol

from animexport.library import MyStatus, SeriesType


MAL_SERIES_TYPES: Dict[int, str] = {
    SeriesType.UNKNOWN: "Unknown",
    SeriesType.TV: "TV",
    SeriesType.OVA: "OVA",
    SeriesType.MOVIE: "Movie",
    SeriesType.SPECIAL: "Special",
    SeriesType.ONA: "ONA",
    SeriesType.MUSIC: "Music",
}
MAL_SERIES_TYPE_FALLBACK = MAL_SERIES_TYPES[SeriesType.UNKNOWN]

MAL_STATUSES: Dict[int, str] = {
    MyStatus.WATCHING: "Watching",
    MyStatus.COMPLETED: "Completed",
    MyStatus.ON_HOLD: "On-Hold",
    MyStatus.DROPPED: "Dropped",
    MyStatus.PLAN_TO_WATCH: "Plan to Watch",
}
MAL_STATUS_FALLBACK = MAL_STATUSES[MyStatus.WATCHING]

STATUS_NAMES: Dict[int, str] = {
    MyStatus.NOT_IN_LIST: "Not in List",
    MyStatus.WATCHING: "Currently Watching",
    MyStatus.COMPLETED: "Completed",
    MyStatus.ON_HOLD: "On Hold",
    MyStatus.DROPPED: "Dropped",
    MyStatus.PLAN_TO_WATCH: "Plan to Watch",
}
STATUS_NAME_FALLBACK = "Unknown"


class ScoreTranslator(Protocol):
    """Rescales an internal score to the target's scale."""

    def __call__(self, score: int) -> int:
        ...


def ten_point_score(score: int) -> int:
    """Rescale an internal 0-100 score to MyAnimeList's 0-10 scale."""
    return min(max(score // 10, 0), 10)


def translate_number(value: Optional[int], default: str = "") -> str:
    """Render a positive count, or ``default`` when it is unknown."""
    if value is None or value <= 0:
        return default
    return str(value)


class EnumTranslator:
    """
    Translates library codes for the exporters.

    Args:
        score_translator: Callable rescaling internal scores (defaults to
            the 0-10 MyAnimeList scale)
    """

    def __init__(self, score_translator: Optional[ScoreTranslator] = None):
        self.score_translator = score_translator or ten_point_score

    def series_type(self, code: int) -> str:
        return MAL_SERIES_TYPES.get(code, MAL_SERIES_TYPE_FALLBACK)

    def my_status(self, code: int) -> str:
        return MAL_STATUSES.get(code, MAL_STATUS_FALLBACK)

    def my_score(self, score: int) -> int:
        return int(self.score_translator(score))

    def status_name(self, code: int) -> str:
        """Display name of a status, as shown in reports."""
        return STATUS_NAMES.get(code, STATUS_NAME_FALLBACK)
