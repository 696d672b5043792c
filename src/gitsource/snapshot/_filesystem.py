"""Read-only filesystem views over fetched repository content.

This module defines the minimal filesystem protocol the snapshot reader
consumes, and ``TreeFilesystem``, which serves it straight from a git
tree in an object store without writing a working copy anywhere.
"""

import io
import stat
from dataclasses import dataclass
from typing import BinaryIO, Final, Protocol, runtime_checkable

from dulwich.errors import NotTreeError
from dulwich.object_store import BaseObjectStore, tree_lookup_path
from dulwich.objects import S_ISGITLINK, Blob, Tree

# Git tree mode for directories
_GIT_TREE_MODE: Final = 0o040000


@dataclass(frozen=True, slots=True)
class SnapshotEntry:
    """Stat result for a single snapshot path.

    Attributes:
        name: Base name of the entry (empty for the root).
        mode: Git file mode.
        size: Content size in bytes (0 for directories and submodules).
    """

    name: str
    mode: int
    size: int = 0

    @property
    def is_dir(self) -> bool:
        """Whether the entry is a directory."""
        return stat.S_ISDIR(self.mode)

    @property
    def is_submodule(self) -> bool:
        """Whether the entry is a submodule link."""
        return S_ISGITLINK(self.mode)


@runtime_checkable
class SnapshotFilesystem(Protocol):
    """Filesystem operations needed to read a snapshot.

    Implementations raise ``FileNotFoundError`` for absent paths and other
    ``OSError`` subclasses for paths of the wrong kind.
    """

    def stat(self, path: str) -> SnapshotEntry:
        """Describe the entry at ``path``."""
        ...

    def listdir(self, path: str) -> list[SnapshotEntry]:
        """List the immediate children of the directory at ``path``."""
        ...

    def open(self, path: str) -> BinaryIO:
        """Open the file at ``path`` for binary reading."""
        ...


def _components(path: str) -> list[str]:
    return [part for part in path.split("/") if part and part != "."]


class TreeFilesystem:
    """A read-only filesystem backed by a git tree.

    Paths are absolute and ``/``-separated; ``/`` is the tree itself.
    Directory listings come back in git tree order.
    """

    __slots__ = ("_store", "_tree_id")
    _store: BaseObjectStore
    _tree_id: bytes

    def __init__(self, object_store: BaseObjectStore, tree_id: bytes) -> None:
        """Initialize the filesystem.

        Args:
            object_store: The store holding the tree and its objects.
            tree_id: Hex SHA of the root tree.
        """
        self._store = object_store
        self._tree_id = tree_id

    @property
    def tree_id(self) -> bytes:
        """Hex SHA of the root tree."""
        return self._tree_id

    def _lookup(self, path: str) -> tuple[int, bytes]:
        if not path:
            msg = "empty path"
            raise FileNotFoundError(msg)
        parts = _components(path)
        if not parts:
            return _GIT_TREE_MODE, self._tree_id
        try:
            return tree_lookup_path(
                self._store.__getitem__, self._tree_id, "/".join(parts).encode()
            )
        except KeyError as e:
            msg = f"no such file or directory: {path}"
            raise FileNotFoundError(msg) from e
        except NotTreeError as e:
            msg = f"not a directory: {path}"
            raise NotADirectoryError(msg) from e

    def stat(self, path: str) -> SnapshotEntry:
        mode, sha = self._lookup(path)
        parts = _components(path)
        name = parts[-1] if parts else ""
        size = 0
        if not stat.S_ISDIR(mode) and not S_ISGITLINK(mode):
            size = self._store[sha].raw_length()
        return SnapshotEntry(name=name, mode=mode, size=size)

    def listdir(self, path: str) -> list[SnapshotEntry]:
        mode, sha = self._lookup(path)
        if not stat.S_ISDIR(mode):
            msg = f"not a directory: {path}"
            raise NotADirectoryError(msg)

        tree = self._store[sha]
        if not isinstance(tree, Tree):
            msg = f"not a directory: {path}"
            raise NotADirectoryError(msg)

        entries: list[SnapshotEntry] = []
        for item in tree.iteritems():
            size = 0
            if not stat.S_ISDIR(item.mode) and not S_ISGITLINK(item.mode):
                size = self._store[item.sha].raw_length()
            entries.append(
                SnapshotEntry(
                    name=item.path.decode("utf-8", "surrogateescape"),
                    mode=item.mode,
                    size=size,
                )
            )
        return entries

    def open(self, path: str) -> BinaryIO:
        mode, sha = self._lookup(path)
        if stat.S_ISDIR(mode):
            msg = f"is a directory: {path}"
            raise IsADirectoryError(msg)
        if S_ISGITLINK(mode):
            msg = f"submodule content is not part of this snapshot: {path}"
            raise OSError(msg)

        blob = self._store[sha]
        if not isinstance(blob, Blob):
            msg = f"not a file: {path}"
            raise OSError(msg)
        return io.BytesIO(blob.as_raw_string())
