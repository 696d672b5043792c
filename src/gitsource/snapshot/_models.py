"""Snapshot models."""

from dataclasses import dataclass, field
from types import TracebackType
from typing import Final, Self

from dulwich.repo import BaseRepo

from gitsource.snapshot._filesystem import SnapshotFilesystem

JSON_ARRAY_MEDIA_TYPE: Final = "application/array+json"


@dataclass(frozen=True, slots=True)
class ReadResult:
    """Result of reading a path out of a snapshot.

    Attributes:
        media_type: Media type override, set only for directory listings.
            For files the caller infers the type from the path extension.
        data: The payload: raw file bytes or a compact JSON array of names.
    """

    media_type: str | None
    data: bytes


@dataclass(frozen=True, slots=True)
class RepositorySnapshot:
    """A fetched, read-only repository owned by a single read request.

    Supports the context manager protocol; leaving the context releases
    the repository.

    Attributes:
        filesystem: Read-only view of the fetched tree.
        repository: The repository the content was fetched into.
        reference: The fully-qualified reference that was fetched.
    """

    filesystem: SnapshotFilesystem
    repository: BaseRepo = field(repr=False)
    reference: str

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying repository."""
        self.repository.close()
