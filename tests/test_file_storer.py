import io
import os

import pytest

from gitodb.errors import NoSuchObject
from gitodb.file_storer import FileStorer

SHA_HEX = "af5626b4a114abcb82d63db7c8082c3c4756e51b"
SHA = bytes.fromhex(SHA_HEX)


@pytest.fixture
def dirs(tmp_path):
    root = tmp_path / "objects"
    tmp = tmp_path / "tmp"
    root.mkdir()
    tmp.mkdir()
    return str(root), str(tmp)


def test_path_splits_first_two_hex_digits(dirs):
    root, tmp = dirs
    fs = FileStorer(root, tmp)
    assert fs.path(SHA) == os.path.join(root, SHA_HEX[:2], SHA_HEX[2:])


def test_root_is_kept(dirs):
    root, tmp = dirs
    assert FileStorer(root, tmp).root == root


def test_is_compressed():
    assert FileStorer("/nowhere", "").compressed is True


def test_store_then_open_round_trip(dirs):
    root, tmp = dirs
    fs = FileStorer(root, tmp)
    n = fs.store(SHA, io.BytesIO(b"compressed bytes"))
    assert n == len(b"compressed bytes")
    with fs.open(SHA) as handle:
        assert handle.read() == b"compressed bytes"
    assert os.path.isfile(fs.path(SHA))


def test_store_leaves_no_temporary_files(dirs):
    root, tmp = dirs
    fs = FileStorer(root, tmp)
    fs.store(SHA, io.BytesIO(b"data"))
    assert os.listdir(tmp) == []


def test_store_existing_object_drains_and_returns_zero(dirs):
    root, tmp = dirs
    fs = FileStorer(root, tmp)
    fs.store(SHA, io.BytesIO(b"first"))

    source = io.BytesIO(b"second")
    assert fs.store(SHA, source) == 0
    assert source.read() == b""
    with fs.open(SHA) as handle:
        assert handle.read() == b"first"


def test_open_missing_raises_no_such_object(dirs):
    root, tmp = dirs
    fs = FileStorer(root, tmp)
    with pytest.raises(NoSuchObject) as info:
        fs.open(SHA)
    assert info.value.oid == SHA


def test_store_uses_system_temp_when_tmp_empty(tmp_path):
    root = tmp_path / "objects"
    fs = FileStorer(str(root), "")
    assert fs.store(SHA, io.BytesIO(b"xyz")) == 3
    with fs.open(SHA) as handle:
        assert handle.read() == b"xyz"