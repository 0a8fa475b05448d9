"""Read and write Git blob and commit objects in loose-object and in-memory stores."""

__version__ = "2.0.0"
__all__ = [
    "backend",
    "blob",
    "commit",
    "errors",
    "file_storer",
    "memory_storer",
    "object_db",
    "object_reader",
    "object_type",
    "object_writer",
]