"""
animexport

Export a tracked anime library to the MyAnimeList XML import format and to
a Markdown summary grouped by watch status.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
