"""Transport dispatch and the fetch capability.

Classes:
    Dispatcher: Resolves a repository-base locator and fetches it.
    BareRepositoryFallback: The single ``.git`` retry for local fetches.
    Fetcher: Protocol for the fetch capability.
    DulwichFetcher: Fetcher backed by dulwich, storing objects in memory.
    FetchRequest: A resolved request for a fetcher.

Example:
    >>> from gitsource.locator import parse_locator
    >>> from gitsource.transport import Dispatcher
    >>> dispatcher = Dispatcher(root="/srv/repos")
    >>> with dispatcher.dispatch(parse_locator("git+file:///project")) as snapshot:
    ...     snapshot.filesystem.stat("/README.md")
"""

from gitsource.transport._dispatcher import (
    REPOSITORY_DIR_SUFFIX,
    BareRepositoryFallback,
    Dispatcher,
)
from gitsource.transport._fetcher import (
    DulwichFetcher,
    Fetcher,
    check_cancelled,
    client_kwargs,
)
from gitsource.transport._models import (
    FULL_DEPTH,
    SHALLOW_DEPTH,
    FetchRequest,
    depth_for,
)
from gitsource.transport._refs import (
    BRANCH_PREFIX,
    DEFAULT_BRANCH,
    REFS_PREFIX,
    branch_reference,
    resolve_reference,
)

__all__ = [
    "BRANCH_PREFIX",
    "DEFAULT_BRANCH",
    "FULL_DEPTH",
    "REFS_PREFIX",
    "REPOSITORY_DIR_SUFFIX",
    "SHALLOW_DEPTH",
    "BareRepositoryFallback",
    "Dispatcher",
    "DulwichFetcher",
    "FetchRequest",
    "Fetcher",
    "branch_reference",
    "check_cancelled",
    "client_kwargs",
    "depth_for",
    "resolve_reference",
]
