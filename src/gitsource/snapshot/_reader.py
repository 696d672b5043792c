"""Reading files and directory listings out of a snapshot."""

import orjson
from structlog.typing import FilteringBoundLogger

from gitsource.exceptions import (
    SnapshotEncodeError,
    SnapshotOpenError,
    SnapshotReadError,
    SnapshotStatError,
)
from gitsource.snapshot._filesystem import SnapshotFilesystem
from gitsource.snapshot._models import JSON_ARRAY_MEDIA_TYPE, ReadResult
from gitsource.utils import get_library_logger


def read_directory(filesystem: SnapshotFilesystem, path: str) -> bytes:
    """List a directory as a compact JSON array of entry names.

    Args:
        filesystem: The snapshot filesystem.
        path: Directory path inside the snapshot.

    Returns:
        The encoded names, in the order the filesystem reports them, with
        no whitespace and no trailing newline.

    Raises:
        SnapshotReadError: If the directory cannot be listed.
        SnapshotEncodeError: If the names cannot be encoded as JSON.
    """
    try:
        entries = filesystem.listdir(path)
    except OSError as e:
        msg = f"couldn't read dir {path}: {e}"
        raise SnapshotReadError(msg, path=path) from e

    names = [entry.name for entry in entries]
    try:
        return orjson.dumps(names)
    except orjson.JSONEncodeError as e:
        msg = f"can't encode listing of {path}: {e}"
        raise SnapshotEncodeError(msg, path=path) from e


def read_snapshot(
    filesystem: SnapshotFilesystem,
    path: str,
    *,
    logger: FilteringBoundLogger | None = None,
) -> ReadResult:
    """Read a file or directory listing out of a snapshot.

    Directories (or any path ending in ``/``) are listed one level deep and
    tagged with the JSON array media type. Files are returned unmodified
    with no media type.

    Args:
        filesystem: The snapshot filesystem.
        path: Absolute path inside the snapshot.
        logger: Optional structured logger.

    Returns:
        The complete read result.

    Raises:
        SnapshotStatError: If the path does not exist.
        SnapshotOpenError: If the file cannot be opened.
        SnapshotReadError: If the file or directory cannot be read.
        SnapshotEncodeError: If a listing cannot be encoded.
    """
    log = logger if logger is not None else get_library_logger()

    try:
        entry = filesystem.stat(path)
    except OSError as e:
        msg = f"can't stat {path}: {e}"
        raise SnapshotStatError(msg, path=path) from e

    if entry.is_dir or path.endswith("/"):
        data = read_directory(filesystem, path)
        log.debug("snapshot_read", path=path, kind="directory", size=len(data))
        return ReadResult(media_type=JSON_ARRAY_MEDIA_TYPE, data=data)

    try:
        f = filesystem.open(path)
    except OSError as e:
        msg = f"can't open {path}: {e}"
        raise SnapshotOpenError(msg, path=path) from e

    with f:
        try:
            data = f.read()
        except OSError as e:
            msg = f"can't read {path}: {e}"
            raise SnapshotReadError(msg, path=path) from e

    log.debug("snapshot_read", path=path, kind="file", size=len(data))
    return ReadResult(media_type=None, data=data)
