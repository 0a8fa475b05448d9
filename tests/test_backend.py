import io
import os

import pytest

from gitodb.backend import (
    ChainedStorage,
    FilesystemBackend,
    MemoryBackend,
    split_alternate_string,
)
from gitodb.errors import NoSuchObject
from gitodb.file_storer import FileStorer
from gitodb.memory_storer import MemoryStorer

SHA_HEX = "aaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa"
SHA = bytes.fromhex(SHA_HEX)


def test_new_memory_backend():
    ro, rw = MemoryBackend(None).storage()
    assert ro is rw
    assert isinstance(ro, MemoryStorer)


def test_new_memory_backend_with_read_only_data():
    ro, _ = MemoryBackend({SHA_HEX: io.BytesIO(b"\x01")}).storage()
    assert ro.open(SHA).read() == b"\x01"


def test_new_memory_backend_with_writable_data():
    ro, rw = MemoryBackend({}).storage()
    rw.store(SHA, io.BytesIO(b"\x01"))
    assert ro.open(SHA).read() == b"\x01"


@pytest.mark.parametrize(
    "given, expected",
    [
        ("abc", ["abc"]),
        ("abc:def", ["abc", "def"]),
        ('"abc":def', ["abc", "def"]),
        (r'"i\alike\bcomplicated\tstrings":def', ["i\alike\bcomplicated\tstrings", "def"]),
        (
            r'abc:"i\nlike\vcomplicated\fstrings\r":def',
            ["abc", "i\nlike\vcomplicated\fstrings\r", "def"],
        ),
        (r'abc:"uni\xc2\xa9ode":def', ["abc", "uni©ode", "def"]),
        (r'abc:"uni\302\251ode\10\0":def', ["abc", "uni©ode\x08\x00", "def"]),
        (r'abc:"cookie\\monster\"":def', ["abc", 'cookie\\monster"', "def"]),
    ],
)
def test_split_alternates_string(given, expected):
    assert split_alternate_string(given, ":") == expected


def _put(root, sha, data):
    FileStorer(str(root), "").store(sha, io.BytesIO(data))


def test_filesystem_backend_writes_to_root(tmp_path):
    root = tmp_path / "objects"
    backend = FilesystemBackend(str(root), "", "")
    ro, rw = backend.storage()
    assert rw.root == str(root)
    rw.store(SHA, io.BytesIO(b"payload"))
    with ro.open(SHA) as handle:
        assert handle.read() == b"payload"


def test_filesystem_backend_missing_object(tmp_path):
    ro, _ = FilesystemBackend(str(tmp_path / "objects"), "", "").storage()
    with pytest.raises(NoSuchObject):
        ro.open(SHA)


def test_filesystem_backend_reads_alternates_file(tmp_path):
    root = tmp_path / "objects"
    other = tmp_path / "other"
    (root / "info").mkdir(parents=True)
    (root / "info" / "alternates").write_text(str(other) + "\n")
    _put(other, SHA, b"from alternate")

    ro, _ = FilesystemBackend(str(root), "", "").storage()
    with ro.open(SHA) as handle:
        assert handle.read() == b"from alternate"


def test_filesystem_backend_reads_alternates_from_environment(tmp_path):
    root = tmp_path / "objects"
    first = tmp_path / "first"
    second = tmp_path / "second"
    _put(second, SHA, b"second")

    env = os.pathsep.join([str(first), str(second)])
    backend = FilesystemBackend(str(root), "", env)
    assert len(backend.backends) == 3
    ro, _ = backend.storage()
    with ro.open(SHA) as handle:
        assert handle.read() == b"second"


def test_filesystem_backend_prefers_root(tmp_path):
    root = tmp_path / "objects"
    other = tmp_path / "other"
    _put(root, SHA, b"main")
    _put(other, SHA, b"alternate")

    ro, _ = FilesystemBackend(str(root), "", str(other)).storage()
    with ro.open(SHA) as handle:
        assert handle.read() == b"main"


def test_chained_storage_falls_through_in_order():
    first = MemoryStorer(None)
    second = MemoryStorer({SHA_HEX: b"found"})
    chain = ChainedStorage([first, second])
    assert chain.open(SHA).read() == b"found"
    assert chain.compressed is True


def test_chained_storage_raises_when_absent_everywhere():
    chain = ChainedStorage([MemoryStorer(None), MemoryStorer(None)])
    with pytest.raises(NoSuchObject) as info:
        chain.open(SHA)
    assert info.value.oid == SHA