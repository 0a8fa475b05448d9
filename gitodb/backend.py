"""Storage backends: where an object database reads and writes objects."""

from __future__ import annotations

import os
import re
from typing import Iterable, List, Mapping, Optional, Tuple

from .errors import NoSuchObject
from .file_storer import FileStorer
from .memory_storer import EntrySource, MemoryStorer

ALTERNATES_SEPARATOR = os.pathsep

_OCTAL_ESCAPE = re.compile(rb"\\[0-7]{1,3}")
_HEX_ESCAPE = re.compile(rb"\\x[0-9a-fA-F]{2}")
_REPLACEMENTS = (
    (b"\\a", b"\a"),
    (b"\\b", b"\b"),
    (b"\\t", b"\t"),
    (b"\\n", b"\n"),
    (b"\\v", b"\v"),
    (b"\\f", b"\f"),
    (b"\\r", b"\r"),
    (b"\\\\", b"\\"),
    (b'\\"', b'"'),
    (b"\\'", b"'"),
)


def _unquote(entry: str) -> str:
    raw = entry[1:-1].encode("utf-8", "surrogateescape")
    for old, new in _REPLACEMENTS:
        raw = raw.replace(old, new)
    raw = _OCTAL_ESCAPE.sub(lambda m: bytes([int(m.group()[1:], 8) & 0xFF]), raw)
    raw = _HEX_ESCAPE.sub(lambda m: bytes([int(m.group()[2:], 16)]), raw)
    return raw.decode("utf-8", "surrogateescape")


def split_alternate_string(env: str, separator: str = ALTERNATES_SEPARATOR) -> List[str]:
    """Split an alternates list, unquoting C-style quoted entries."""
    return [
        _unquote(entry) if entry.startswith('"') and entry.endswith('"') else entry
        for entry in env.split(separator)
    ]


class ChainedStorage:
    """Reads objects from the first of several storages that holds them."""

    def __init__(self, storages: Iterable) -> None:
        self.storages = list(storages)

    @property
    def compressed(self) -> bool:
        return all(storage.compressed for storage in self.storages)

    def open(self, sha: bytes):
        """Open ``sha`` from the first storage that has it."""
        for storage in self.storages:
            try:
                return storage.open(sha)
            except NoSuchObject:
                continue
        raise NoSuchObject(sha)

    def close(self) -> None:
        """Close every storage, raising the first error after trying all."""
        first_error: Optional[BaseException] = None
        for storage in self.storages:
            try:
                storage.close()
            except Exception as err:  # noqa: BLE001
                if first_error is None:
                    first_error = err
        if first_error is not None:
            raise first_error


def _read_alternates_file(root: str) -> List[str]:
    try:
        with open(os.path.join(root, "info", "alternates"), "rb") as handle:
            data = handle.read()
    except OSError:
        return []
    lines = data.split(b"\n")
    if lines and lines[-1] == b"":
        lines.pop()
    return [os.fsdecode(line[:-1] if line.endswith(b"\r") else line) for line in lines]


class FilesystemBackend:
    """Loose objects in ``root``, plus any alternate object directories.

    Alternates come from ``<root>/info/alternates`` and from ``alternates``,
    which uses the syntax of GIT_ALTERNATE_OBJECT_DIRECTORIES.
    """

    def __init__(self, root: str, tmp: Optional[str] = "", alternates: str = "") -> None:
        self.fs = FileStorer(root, tmp)
        directories = _read_alternates_file(root)
        if alternates:
            directories.extend(split_alternate_string(alternates, ALTERNATES_SEPARATOR))
        self.backends: list = [self.fs]
        self.backends.extend(FileStorer(directory, "") for directory in directories)

    def storage(self) -> Tuple[ChainedStorage, FileStorer]:
        """Return the ``(readable, writable)`` storages."""
        return ChainedStorage(self.backends), self.fs


class MemoryBackend:
    """A backend whose objects live in memory."""

    def __init__(self, entries: Optional[Mapping[str, EntrySource]] = None) -> None:
        self.ms = MemoryStorer(entries)

    def storage(self) -> Tuple[MemoryStorer, MemoryStorer]:
        """Return the ``(readable, writable)`` storages, which are the same."""
        return self.ms, self.ms