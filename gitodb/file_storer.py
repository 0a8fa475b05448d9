"""An object store backed by a loose-object directory on disk."""

from __future__ import annotations

import os
import tempfile
from typing import BinaryIO, ClassVar, Optional

from .errors import NoSuchObject

_CHUNK = 64 * 1024


class FileStorer:
    """Reads and writes loose objects under an ``objects`` directory.

    Objects live at ``<root>/<first two hex digits>/<remaining hex digits>``.
    New objects are first written to a temporary file in ``tmp`` (the system
    temporary directory when empty) and then moved into place.
    """

    compressed: ClassVar[bool] = True

    def __init__(self, root: str, tmp: Optional[str] = "") -> None:
        self.root = root
        self.tmp = tmp
        self._closed = False

    @property
    def closed(self) -> bool:
        """Whether close() has been called."""
        return self._closed

    def path(self, sha: bytes) -> str:
        """Return the on-disk path of the object named ``sha``."""
        encoded = bytes(sha).hex()
        return os.path.join(self.root, encoded[:2], encoded[2:])

    def open(self, sha: bytes) -> BinaryIO:
        """Open the object named ``sha``; the caller must close it.

        Raises NoSuchObject if the object file does not exist.
        """
        try:
            return open(self.path(sha), "rb")
        except FileNotFoundError:
            raise NoSuchObject(sha) from None

    def store(self, sha: bytes, source: BinaryIO) -> int:
        """Write ``source`` as the object named ``sha``; return bytes written.

        If the object already exists, ``source`` is drained and 0 is returned.
        """
        path = self.path(sha)
        if os.path.lexists(path):
            while source.read(_CHUNK):
                pass
            return 0

        fd, tmp_path = tempfile.mkstemp(dir=self.tmp or None)
        try:
            written = 0
            with os.fdopen(fd, "wb") as handle:
                while True:
                    chunk = source.read(_CHUNK)
                    if not chunk:
                        break
                    handle.write(chunk)
                    written += len(chunk)
            os.makedirs(os.path.dirname(path), mode=0o755, exist_ok=True)
            os.replace(tmp_path, path)
        except BaseException:
            try:
                os.remove(tmp_path)
            except OSError:
                pass
            raise
        return written

    def close(self) -> None:
        """Mark the storer closed; files already opened stay with their callers."""
        self._closed = True