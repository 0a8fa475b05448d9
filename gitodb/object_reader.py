"""Reading Git object headers and contents from a stream."""

from __future__ import annotations

import re
import zlib
from typing import BinaryIO

from .errors import GitObjectError
from .object_type import ObjectType

_CHUNK = 64 * 1024
_SIZE = re.compile(rb"[+-]?[0-9]+")


class ObjectReader:
    """Reads an object's ``"<type> <size>\\0"`` header and then its body.

    ``source`` yields zlib-compressed data unless ``compressed`` is false.
    """

    def __init__(self, source: BinaryIO, compressed: bool = True) -> None:
        self._source = source
        self._decompressor = zlib.decompressobj() if compressed else None
        self._buffer = bytearray()
        self._exhausted = False
        self._header: tuple[ObjectType, int] | None = None

    def _fill(self) -> bool:
        """Add more uncompressed data to the buffer; False at end of stream."""
        if self._exhausted:
            return False
        decompressor = self._decompressor
        if decompressor is None:
            chunk = self._source.read(_CHUNK)
            if not chunk:
                self._exhausted = True
                return False
            self._buffer += chunk
            return True

        data = decompressor.unconsumed_tail
        if not data:
            data = self._source.read(_CHUNK)
            if not data:
                self._exhausted = True
                if not decompressor.eof:
                    raise GitObjectError("gitodb: unexpected end of compressed object data")
                return False
        try:
            self._buffer += decompressor.decompress(data, _CHUNK)
        except zlib.error as err:
            raise GitObjectError(f"gitodb: corrupt object data: {err}") from err
        if decompressor.eof and not decompressor.unconsumed_tail:
            self._exhausted = True
        return True

    def _read_until(self, delimiter: bytes) -> bytes:
        start = 0
        while True:
            index = self._buffer.find(delimiter, start)
            if index >= 0:
                found = bytes(self._buffer[:index])
                del self._buffer[: index + 1]
                return found
            start = len(self._buffer)
            if not self._fill():
                raise GitObjectError("gitodb: unexpected end of object header")

    def header(self) -> tuple[ObjectType, int]:
        """Return ``(object_type, size)``, reading the header on first use."""
        if self._header is None:
            type_name = self._read_until(b" ")
            size_text = self._read_until(b"\x00")
            if not _SIZE.fullmatch(size_text):
                raise GitObjectError(f"gitodb: invalid object size: {size_text!r}")
            self._header = (
                ObjectType.from_string(type_name.decode("utf-8", "replace")),
                int(size_text),
            )
        return self._header

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` body bytes (all remaining when negative)."""
        self.header()
        if size is None or size < 0:
            while self._fill():
                pass
            data = bytes(self._buffer)
            self._buffer.clear()
            return data
        while len(self._buffer) < size and self._fill():
            pass
        data = bytes(self._buffer[:size])
        del self._buffer[:size]
        return data

    def close(self) -> None:
        """Close the underlying source, if it can be closed."""
        close = getattr(self._source, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> ObjectReader:
        return self

    def __exit__(self, *args) -> None:
        self.close()