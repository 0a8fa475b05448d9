"""Exception types raised by the object database."""

from __future__ import annotations


class GitObjectError(Exception):
    """Base class for every error raised by this package."""


class UnexpectedObjectType(GitObjectError):
    """An object was read as one type but was stored as another."""

    def __init__(self, got: object, wanted: object) -> None:
        self.got = got
        self.wanted = wanted
        super().__init__(
            f'gitodb: unexpected object type, got: "{got!s}", wanted: "{wanted!s}"'
        )


class NoSuchObject(GitObjectError, LookupError):
    """No object with the given object ID is available."""

    def __init__(self, oid: bytes) -> None:
        self.oid = bytes(oid)
        super().__init__(f"gitodb: no such object: {self.oid.hex()}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NoSuchObject):
            return NotImplemented
        return self.oid == other.oid

    def __hash__(self) -> int:
        return hash((NoSuchObject, self.oid))


def is_no_such_object(error: BaseException | None) -> bool:
    """Tell whether ``error`` reports a missing object."""
    return isinstance(error, NoSuchObject)