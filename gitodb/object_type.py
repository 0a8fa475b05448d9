"""Object kinds and the interface every Git object implements."""

from __future__ import annotations

import abc
import enum
from typing import BinaryIO, ClassVar


class ObjectType(enum.IntEnum):
    """The kind of a Git object."""

    UNKNOWN = 0
    BLOB = 1
    TREE = 2
    COMMIT = 3
    TAG = 4

    @classmethod
    def from_string(cls, name: str) -> ObjectType:
        """Map a type name, in any case, to its ObjectType; UNKNOWN if unrecognised."""
        try:
            return cls[name.lower().upper()] if name.lower() in _NAMES else cls.UNKNOWN
        except KeyError:
            return cls.UNKNOWN

    def __str__(self) -> str:
        return self.name.lower()


_NAMES = frozenset({"blob", "tree", "commit", "tag"})


class GitObject(abc.ABC):
    """A loose Git object that can be encoded to and decoded from a stream."""

    object_type: ClassVar[ObjectType] = ObjectType.UNKNOWN

    @abc.abstractmethod
    def encode(self, sink: BinaryIO) -> int:
        """Write the uncompressed representation to ``sink``; return bytes written."""

    @abc.abstractmethod
    def decode(self, hasher, source: BinaryIO, size: int) -> int:
        """Read ``size`` uncompressed bytes from ``source`` into this object.

        Returns the number of bytes consumed from ``source``.
        """