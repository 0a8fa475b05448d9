"""Git blob objects."""

from __future__ import annotations

import io
import os
from typing import BinaryIO, Callable, ClassVar, Optional

from .errors import GitObjectError
from .object_type import GitObject, ObjectType

_CHUNK = 64 * 1024


class _LimitedReader:
    """Reads at most ``limit`` bytes from an underlying binary stream."""

    def __init__(self, source: BinaryIO, limit: int) -> None:
        self._source = source
        self._remaining = max(int(limit), 0)

    def read(self, size: int = -1) -> bytes:
        if self._remaining <= 0:
            return b""
        if size is None or size < 0 or size > self._remaining:
            size = self._remaining
        data = self._source.read(size)
        self._remaining -= len(data)
        return data


class Blob(GitObject):
    """A Git object of type "blob".

    ``contents`` is a binary reader yielding the uncompressed contents; it can
    be read only once.
    """

    object_type: ClassVar[ObjectType] = ObjectType.BLOB

    def __init__(
        self,
        contents: Optional[BinaryIO] = None,
        size: int = 0,
        on_close: Optional[Callable[[], None]] = None,
    ) -> None:
        self.contents = contents
        self.size = size
        self._on_close = on_close

    @classmethod
    def from_bytes(cls, contents: bytes) -> Blob:
        """Make a blob that yields the given bytes."""
        data = bytes(contents)
        return cls(contents=io.BytesIO(data), size=len(data))

    @classmethod
    def from_file(cls, path: str | os.PathLike) -> Blob:
        """Make a blob backed by the file at ``path``; it is read lazily.

        Closing the blob closes the file.
        """
        try:
            handle = open(path, "rb")
        except OSError as err:
            raise GitObjectError(f"gitodb: could not open: {path}: {err}") from err
        try:
            size = os.fstat(handle.fileno()).st_size
        except OSError as err:
            handle.close()
            raise GitObjectError(f"gitodb: could not stat {path}: {err}") from err

        def close_file() -> None:
            try:
                handle.close()
            except OSError as err:
                raise GitObjectError(f"gitodb: could not close {path}: {err}") from err

        return cls(contents=handle, size=size, on_close=close_file)

    def decode(self, hasher, source: BinaryIO, size: int) -> int:
        """Take ``size`` bytes of ``source`` as the contents; consumes nothing now."""
        self.size = size
        self.contents = _LimitedReader(source, size)

        def close_source() -> None:
            close = getattr(source, "close", None)
            if close is not None:
                close()

        self._on_close = close_source
        return 0

    def encode(self, sink: BinaryIO) -> int:
        """Copy the contents into ``sink`` and return the number of bytes copied."""
        if self.contents is None:
            return 0
        written = 0
        while True:
            chunk = self.contents.read(_CHUNK)
            if not chunk:
                return written
            sink.write(chunk)
            written += len(chunk)

    def close(self) -> None:
        """Free any resources held by the blob, such as an open file."""
        if self._on_close is not None:
            self._on_close()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Blob):
            return NotImplemented
        return self.contents is other.contents and self.size == other.size

    __hash__ = None  # type: ignore[assignment]

    def __enter__(self) -> Blob:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Blob(size={self.size!r})"