"""
File Sink

Writes a finished export buffer to disk and reports success as a boolean.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol, Union


class Sink(Protocol):
    """Destination for a fully assembled export buffer."""

    def write(self, path: Union[str, Path], data: bytes, append: bool = False) -> bool:
        ...


class FileSink:
    """
    Writes buffers to the local file system.

    Overwrites go through a temporary file in the destination directory that
    is then renamed over the target, so readers never observe a half-written
    export. Failures are logged and reported as ``False``.
    """

    def __init__(self):
        self.logger = logging.getLogger("exporters.sink")
        self.last_error: Optional[str] = None

    def write(self, path: Union[str, Path], data: bytes, append: bool = False) -> bool:
        path = Path(path)
        self.last_error = None

        try:
            if append:
                with open(path, 'ab') as f:
                    f.write(data)
            else:
                self._replace(path, data)
        except OSError as e:
            self.last_error = f"Could not write {path}: {e}"
            self.logger.error(self.last_error)
            return False

        self.logger.debug(f"Wrote {len(data)} bytes to {path}")
        return True

    @staticmethod
    def _replace(path: Path, data: bytes) -> None:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(data)
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
