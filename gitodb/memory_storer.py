"""An object store that keeps compressed objects in memory."""

from __future__ import annotations

import io
import threading
from typing import BinaryIO, ClassVar, Mapping, Optional, Union

from .errors import NoSuchObject

_CHUNK = 64 * 1024

EntrySource = Union[bytes, bytearray, BinaryIO]


class _Entry:
    """A reader over a stored object's data.

    Closing it ends this reader only; the stored data stays available, so the
    object can be opened again.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self.closed = False

    def read(self, size: int = -1) -> bytes:
        if self.closed:
            raise ValueError("read from a closed object reader")
        return self._stream.read(size)

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> _Entry:
        return self

    def __exit__(self, *args) -> None:
        self.close()


def _as_stream(value: EntrySource) -> BinaryIO:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(value))
    return value


def _key(sha: Union[bytes, str]) -> str:
    return sha if isinstance(sha, str) else bytes(sha).hex()


class MemoryStorer:
    """Holds object data in memory, keyed by hex-encoded object ID.

    ``entries`` optionally maps hex object IDs to their (compressed) data,
    given either as bytes or as a readable binary stream.
    """

    compressed: ClassVar[bool] = True

    def __init__(self, entries: Optional[Mapping[str, EntrySource]] = None) -> None:
        self._lock = threading.Lock()
        self._closed = False
        self._entries: dict[str, BinaryIO] = {
            name: _as_stream(value) for name, value in (entries or {}).items()
        }

    @property
    def closed(self) -> bool:
        """Whether close() has been called."""
        return self._closed

    def store(self, sha: bytes, source: BinaryIO) -> int:
        """Copy ``source`` into the entry for ``sha``, replacing any existing one.

        Returns the number of bytes copied.
        """
        buffer = io.BytesIO()
        copied = 0
        while True:
            chunk = source.read(_CHUNK)
            if not chunk:
                break
            buffer.write(chunk)
            copied += len(chunk)
        buffer.seek(0)
        with self._lock:
            self._entries[_key(sha)] = buffer
        return copied

    def open(self, sha: bytes) -> _Entry:
        """Return a reader over the data stored for ``sha``.

        Raises NoSuchObject if there is none.
        """
        with self._lock:
            try:
                return _Entry(self._entries[_key(sha)])
            except KeyError:
                raise NoSuchObject(sha) from None

    def close(self) -> None:
        """Mark the storer closed; the stored data is kept."""
        with self._lock:
            self._closed = True

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, sha: object) -> bool:
        if not isinstance(sha, (bytes, bytearray, str)):
            return False
        with self._lock:
            return _key(sha) in self._entries