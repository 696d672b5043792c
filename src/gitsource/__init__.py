"""Read files and directory listings out of git repositories.

A composite locator names a repository, an optional revision, and a path
inside it::

    git+https://github.com/org/repo//docs/index.md#main
    git+ssh://git@example.com/org/repo.git//config#refs/tags/v1
    git+file:///srv/repos/project//

Everything before the first ``//`` in the path is the repository, the
rest is the in-repository path, and the fragment picks the revision.

Example:
    >>> from gitsource import read_source
    >>> result = read_source("git+file:///srv/repos/project//docs")
    >>> result.media_type, result.data
    ('application/array+json', b'["index.md"]')
"""

from gitsource._source import read_source, read_source_async
from gitsource.auth import GitSecrets
from gitsource.exceptions import (
    AuthResolutionError,
    ConfigError,
    FetchCancelledError,
    FetchError,
    GitSourceError,
    LocatorMalformedError,
    RepositoryNotFoundError,
    RetryExhaustedError,
    SnapshotError,
    TransportUnsupportedError,
)
from gitsource.locator import CompositeLocator, TransportKind, parse_locator, split_locator
from gitsource.snapshot import JSON_ARRAY_MEDIA_TYPE, ReadResult
from gitsource.transport import Dispatcher, DulwichFetcher, Fetcher

__all__ = [
    "JSON_ARRAY_MEDIA_TYPE",
    "AuthResolutionError",
    "CompositeLocator",
    "ConfigError",
    "Dispatcher",
    "DulwichFetcher",
    "FetchCancelledError",
    "FetchError",
    "Fetcher",
    "GitSecrets",
    "GitSourceError",
    "LocatorMalformedError",
    "ReadResult",
    "RepositoryNotFoundError",
    "RetryExhaustedError",
    "SnapshotError",
    "TransportKind",
    "TransportUnsupportedError",
    "parse_locator",
    "read_source",
    "read_source_async",
    "split_locator",
]
