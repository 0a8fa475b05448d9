"""Reading and writing Git objects against a storage backend."""

from __future__ import annotations

import enum
import hashlib
import io
import tempfile
import threading
from typing import BinaryIO, Optional, Union

from .backend import FilesystemBackend, MemoryBackend
from .blob import Blob
from .commit import Commit
from .errors import GitObjectError, UnexpectedObjectType
from .object_reader import ObjectReader
from .object_type import GitObject, ObjectType
from .object_writer import ObjectWriter

_CHUNK = 64 * 1024

Backend = Union[FilesystemBackend, MemoryBackend]


class ObjectFormat(str, enum.Enum):
    """The hash algorithm a repository uses to name its objects."""

    SHA1 = "sha1"
    SHA256 = "sha256"


def hasher_for(object_format: Union[ObjectFormat, str]):
    """Return a new hash object for ``object_format``.

    Raises ValueError for an unknown format.
    """
    return hashlib.new(ObjectFormat(object_format).value)


class ObjectDatabase:
    """Reads and writes Git objects through a backend's storages."""

    def __init__(
        self,
        backend: Backend,
        object_format: Union[ObjectFormat, str] = ObjectFormat.SHA1,
        tmp: Optional[str] = "",
    ) -> None:
        self._ro, self._rw = backend.storage()
        self.object_format = ObjectFormat(object_format)
        self.tmp = tmp
        self._closed = False
        self._lock = threading.Lock()

    @classmethod
    def from_filesystem(
        cls,
        root: str,
        tmp: Optional[str] = "",
        alternates: str = "",
        object_format: Union[ObjectFormat, str] = ObjectFormat.SHA1,
    ) -> ObjectDatabase:
        """Open the loose-object directory ``root`` (such as ``.git/objects``)."""
        return cls(FilesystemBackend(root, tmp, alternates), object_format, tmp)

    @classmethod
    def from_backend(
        cls,
        backend: Backend,
        object_format: Union[ObjectFormat, str] = ObjectFormat.SHA1,
    ) -> ObjectDatabase:
        """Use an existing backend."""
        return cls(backend, object_format)

    def close(self) -> None:
        """Close the storages; closing twice raises GitObjectError."""
        with self._lock:
            if self._closed:
                raise GitObjectError("gitodb: object database already closed")
            self._closed = True
        self._ro.close()
        self._rw.close()

    def object(self, sha: bytes) -> GitObject:
        """Read the object named ``sha``, whatever its type."""
        reader = self._open(sha)
        try:
            object_type, _ = reader.header()
        except BaseException:
            reader.close()
            raise
        if object_type is ObjectType.BLOB:
            into: GitObject = Blob()
        elif object_type is ObjectType.COMMIT:
            into = Commit()
        else:
            reader.close()
            if object_type in (ObjectType.TREE, ObjectType.TAG):
                raise GitObjectError(f"gitodb: unsupported object type: {object_type}")
            raise GitObjectError(f"gitodb: unknown object type: {object_type}")
        self._decode(reader, into)
        return into

    def blob(self, sha: bytes) -> Blob:
        """Read the blob named ``sha``; the caller should close it."""
        blob = Blob()
        self._decode(self._open(sha), blob)
        return blob

    def commit(self, sha: bytes) -> Commit:
        """Read the commit named ``sha``."""
        commit = Commit()
        self._decode(self._open(sha), commit)
        return commit

    def write_blob(self, blob: Blob) -> bytes:
        """Store ``blob``, close it, and return its object ID."""
        with tempfile.TemporaryFile(dir=self.tmp or None) as buffer:
            sha = self._encode(blob, buffer)
        blob.close()
        return sha

    def write_commit(self, commit: Commit) -> bytes:
        """Store ``commit`` and return its object ID."""
        return self._encode(commit, io.BytesIO())

    def root(self) -> Optional[str]:
        """Return the directory written to, or None when not on disk."""
        return getattr(self._rw, "root", None)

    def hasher(self):
        """Return a new hash object for this database's object format."""
        return hasher_for(self.object_format)

    def _encode(self, obj: GitObject, buffer: BinaryIO) -> bytes:
        length = obj.encode(buffer)
        buffer.seek(0)
        with tempfile.TemporaryFile(dir=self.tmp or None) as compressed:
            writer = ObjectWriter(compressed, self.hasher())
            writer.write_header(obj.object_type, length)
            while chunk := buffer.read(_CHUNK):
                writer.write(chunk)
            writer.close()
            sha = writer.sha()
            compressed.seek(0)
            self._rw.store(sha, compressed)
        return sha

    def _open(self, sha: bytes) -> ObjectReader:
        if self._closed:
            raise GitObjectError("gitodb: cannot use closed object database")
        source = self._ro.open(sha)
        return ObjectReader(source, compressed=self._ro.compressed)

    def _decode(self, reader: ObjectReader, into: GitObject) -> None:
        # Blobs keep reading from the reader lazily, so they own closing it.
        try:
            object_type, size = reader.header()
            if object_type is not into.object_type:
                raise UnexpectedObjectType(object_type, into.object_type)
            into.decode(self.hasher(), reader, size)
        except BaseException:
            reader.close()
            raise
        if into.object_type is not ObjectType.BLOB:
            reader.close()

    def __enter__(self) -> ObjectDatabase:
        return self

    def __exit__(self, *args) -> None:
        if not self._closed:
            self.close()