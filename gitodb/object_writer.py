"""Writing zlib-compressed Git objects while hashing their contents."""

from __future__ import annotations

import hashlib
import zlib
from typing import BinaryIO

from .object_type import ObjectType


class ObjectWriter:
    """Compresses object data into a sink and tracks the object's hash.

    The hash covers the uncompressed header and body, as Git object IDs do.
    """

    def __init__(self, sink: BinaryIO, hasher, close_sink: bool = False) -> None:
        name = hasher if isinstance(hasher, str) else hasher.name
        self._sink = sink
        self._close_sink = close_sink
        self._hash = hashlib.new(name)
        self._compressor = zlib.compressobj()
        self._wrote_header = False
        self._closed = False

    def write_header(self, object_type: ObjectType, size: int) -> int:
        """Write the ``"<type> <size>\\0"`` header; may be called only once."""
        if self._wrote_header:
            raise RuntimeError("gitodb: cannot write headers more than once")
        self._wrote_header = True
        return self._write(f"{object_type!s} {int(size)}\x00".encode())

    def write(self, data: bytes) -> int:
        """Write uncompressed ``data``; the header must have been written first."""
        if not self._wrote_header:
            raise RuntimeError("gitodb: cannot write data without header")
        return self._write(data)

    def _write(self, data: bytes) -> int:
        if self._closed:
            raise ValueError("I/O operation on closed object writer")
        data = bytes(data)
        compressed = self._compressor.compress(data)
        if compressed:
            self._sink.write(compressed)
        self._hash.update(data)
        return len(data)

    def sha(self) -> bytes:
        """Return the digest of everything written so far."""
        return self._hash.copy().digest()

    def close(self) -> None:
        """Flush the compressed stream, and close the sink if asked to."""
        if self._closed:
            return
        self._closed = True
        self._sink.write(self._compressor.flush())
        if self._close_sink:
            self._sink.close()

    def __enter__(self) -> ObjectWriter:
        return self

    def __exit__(self, *args) -> None:
        self.close()