"""Git commit objects and signatures."""

from __future__ import annotations

import binascii
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import BinaryIO, ClassVar

from .errors import GitObjectError
from .object_type import GitObject, ObjectType

_MAX_LINE = 10 * 1024 * 1024


@dataclass
class Signature:
    """A name, e-mail address and instant, as used for authorship."""

    name: str
    email: str
    when: datetime

    def __str__(self) -> str:
        when = self.when if self.when.tzinfo is not None else self.when.astimezone()
        offset = when.utcoffset()
        minutes = int(offset.total_seconds()) // 60 if offset is not None else 0
        sign = "-" if minutes < 0 else "+"
        hours, mins = divmod(abs(minutes), 60)
        seconds = math.floor(when.timestamp())
        return f"{self.name} <{self.email}> {seconds} {sign}{hours:02d}{mins:02d}"


@dataclass
class ExtraHeader:
    """A commit header other than tree, parent, author and committer."""

    key: str
    value: str


def _parse_id(fields: list[str], what: str) -> bytes:
    if len(fields) < 2:
        raise GitObjectError(f"error parsing {what}: missing object id")
    try:
        return binascii.unhexlify(fields[1])
    except (binascii.Error, ValueError) as err:
        raise GitObjectError(f"error parsing {what}: {err}") from err


@dataclass
class Commit(GitObject):
    """A Git commit.

    Author and committer are kept as raw strings so that any unusual bytes
    survive a decode/encode round trip.
    """

    author: str = ""
    committer: str = ""
    parent_ids: list[bytes] = field(default_factory=list)
    tree_id: bytes = b""
    extra_headers: list[ExtraHeader] = field(default_factory=list)
    message: str = ""

    object_type: ClassVar[ObjectType] = ObjectType.COMMIT

    def decode(self, hasher, source: BinaryIO, size: int) -> int:
        """Parse a commit from ``source``; return the number of bytes consumed."""
        lines = source.read().split(b"\n")
        if lines[-1] == b"":
            lines.pop()

        consumed = 0
        finished_headers = False
        message_parts: list[str] = []
        for raw in lines:
            if raw.endswith(b"\r"):
                raw = raw[:-1]
            if len(raw) >= _MAX_LINE:
                raise GitObjectError("failed to parse commit buffer: token too long")
            consumed += len(raw) + 1
            text = raw.decode("utf-8", "surrogateescape")

            if finished_headers:
                message_parts.append(text)
            elif not text:
                finished_headers = True
            else:
                self._decode_header(text)

        self.message = "\n".join(message_parts)
        return consumed

    def _decode_header(self, text: str) -> None:
        fields = text.split(" ")
        key = fields[0]
        if key == "tree":
            self.tree_id = _parse_id(fields, "tree")
        elif key == "parent":
            self.parent_ids.append(_parse_id(fields, "parent"))
        elif key == "author":
            self.author = text[7:]
        elif key == "committer":
            self.committer = text[10:]
        elif text.startswith(" ") and self.extra_headers:
            last = self.extra_headers[-1]
            last.value = f"{last.value}\n{text[1:]}"
        else:
            self.extra_headers.append(ExtraHeader(key, " ".join(fields[1:])))

    def encode(self, sink: BinaryIO) -> int:
        """Write the commit in Git's format; return the number of bytes written."""
        parts = [f"tree {self.tree_id.hex()}\n"]
        parts.extend(f"parent {pid.hex()}\n" for pid in self.parent_ids)
        parts.append(f"author {self.author}\ncommitter {self.committer}\n")
        parts.extend(
            f"{hdr.key} {hdr.value.replace(chr(10), chr(10) + ' ')}\n"
            for hdr in self.extra_headers
        )
        parts.append(f"\n{self.message}\n")
        data = "".join(parts).encode("utf-8", "surrogateescape")
        sink.write(data)
        return len(data)