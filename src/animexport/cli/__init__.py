"""
animexport Command Line Interface

Typer-based CLI with rich formatting for exporting the anime library.
"""

from animexport import __version__

__all__ = ["__version__"]
