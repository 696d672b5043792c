"""Snapshot filesystems and the snapshot reader.

Classes:
    SnapshotFilesystem: Protocol for stat/list/open over a snapshot.
    TreeFilesystem: Read-only filesystem over a git tree.
    RepositorySnapshot: A fetched repository owned by one read request.
    ReadResult: Bytes plus an optional media type.

Functions:
    read_snapshot: Read a file or directory listing from a snapshot.
"""

from gitsource.snapshot._filesystem import (
    SnapshotEntry,
    SnapshotFilesystem,
    TreeFilesystem,
)
from gitsource.snapshot._models import (
    JSON_ARRAY_MEDIA_TYPE,
    ReadResult,
    RepositorySnapshot,
)
from gitsource.snapshot._reader import read_directory, read_snapshot

__all__ = [
    "JSON_ARRAY_MEDIA_TYPE",
    "ReadResult",
    "RepositorySnapshot",
    "SnapshotEntry",
    "SnapshotFilesystem",
    "TreeFilesystem",
    "read_directory",
    "read_snapshot",
]
