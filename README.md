# gitodb

A small library for reading and writing Git blob and commit objects. It
understands the loose-object format Git keeps under `.git/objects`
(zlib-compressed `"<type> <size>\0<body>"` records), supports SHA-1 and
SHA-256 object formats, and can work against the filesystem or an in-memory
store.

## Installation

```
pip install gitodb
```

## Usage

Open the object directory of a repository and read objects by their binary ID:

```python
from gitodb.object_db import ObjectDatabase

with ObjectDatabase.from_filesystem(".git/objects", "") as odb:
    commit = odb.commit(bytes.fromhex("561ed224a6bd39232d902ad8023c0ebe44fbf6c5"))
    print(commit.author)
    print(commit.message)
```

Write objects and get back their IDs:

```python
from gitodb.backend import MemoryBackend
from gitodb.blob import Blob
from gitodb.object_db import ObjectDatabase, ObjectFormat

odb = ObjectDatabase.from_backend(MemoryBackend(None), ObjectFormat.SHA1)
sha = odb.write_blob(Blob.from_bytes(b"Hello, world!\n"))
print(sha.hex())  # af5626b4a114abcb82d63db7c8082c3c4756e51b
```

`ObjectDatabase.blob()` and `ObjectDatabase.commit()` raise
`UnexpectedObjectType` when the stored type differs, and a missing object
raises `NoSuchObject` (see `gitodb.errors`). `ObjectDatabase.object()` returns
a `Blob` or a `Commit`, depending on what is stored. A blob read from the
database streams its contents lazily; close it (or use it as a context
manager) when done. `ObjectDatabase.root()` gives the object directory being
written to, or `None` for an in-memory backend.

A `Commit` keeps its author and committer as raw strings; `Signature` formats
a name, e-mail address and time in Git's `Name <email> seconds +hhmm` form.

### Alternates

`from_filesystem` honours `info/alternates` inside the object directory and
accepts an `alternates` string in the syntax of
`GIT_ALTERNATE_OBJECT_DIRECTORIES` (entries separated by `os.pathsep`: `:`, or
`;` on Windows; quoted entries in that string may use C-style escapes). Use
`gitodb.backend.split_alternate_string` to parse such a string yourself.

### Lower-level pieces

- `gitodb.object_writer.ObjectWriter` compresses an object while hashing it.
- `gitodb.object_reader.ObjectReader` parses an object header and streams its body.
- `gitodb.memory_storer.MemoryStorer` and `gitodb.file_storer.FileStorer` are
  the raw stores behind the backends; `gitodb.backend.ChainedStorage` reads
  from the first of several stores that holds an object.

## What it does not do

- Only loose objects are read: objects kept in pack files are not found.
- Tree and tag objects cannot be read or written; `object()` raises
  `GitObjectError` for them.

## Running the tests

```
pip install -e .[test]
pytest
```