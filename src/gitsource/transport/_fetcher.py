"""The fetch capability.

``DulwichFetcher`` fetches a single reference into an in-memory
repository and exposes the commit tree as a ``TreeFilesystem``. Nothing
is written to disk, and nothing outlives the returned snapshot.
"""

import threading
from typing import Any, Protocol, runtime_checkable

import paramiko
import urllib3.exceptions
from dulwich.client import (
    HTTPProxyUnauthorized,
    HTTPUnauthorized,
    default_urllib3_manager,
    get_transport_and_path,
)
from dulwich.contrib.paramiko_vendor import ParamikoSSHVendor
from dulwich.errors import GitProtocolError, NotGitRepository
from dulwich.objects import Commit, Tag
from dulwich.repo import MemoryRepo
from structlog.typing import FilteringBoundLogger

from gitsource.auth import BasicAuth, PublicKeysAuth, SSHAgentAuth, TokenAuth
from gitsource.exceptions import (
    FetchCancelledError,
    FetchError,
    RepositoryNotFoundError,
)
from gitsource.snapshot import RepositorySnapshot, TreeFilesystem
from gitsource.transport._models import FULL_DEPTH, FetchRequest
from gitsource.utils import get_library_logger

_HEAD = b"HEAD"


@runtime_checkable
class Fetcher(Protocol):
    """Fetches one reference of a repository into a fresh snapshot.

    Implementations raise ``RepositoryNotFoundError`` when the target holds
    no repository, ``FetchCancelledError`` when ``cancel`` is set, and
    ``FetchError`` for every other failure.
    """

    def fetch(
        self,
        request: FetchRequest,
        cancel: threading.Event | None = None,
    ) -> RepositorySnapshot:
        """Fetch ``request.reference`` from ``request.url``."""
        ...


def check_cancelled(cancel: threading.Event | None, request: FetchRequest) -> None:
    """Raise ``FetchCancelledError`` if the cancellation signal is set."""
    if cancel is not None and cancel.is_set():
        msg = f"git fetch for {request.display} cancelled"
        raise FetchCancelledError(msg, locator=request.display)


def client_kwargs(request: FetchRequest) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Translate the request credential into git client arguments.

    Args:
        request: The fetch request.

    Returns:
        Keyword arguments for ``get_transport_and_path``.
    """
    auth = request.auth
    match auth:
        case BasicAuth(username=username, password=password):
            return {"username": username, "password": password}
        case TokenAuth(token=token):
            pool_manager = default_urllib3_manager(None)
            pool_manager.headers["Authorization"] = f"Bearer {token}"
            return {"pool_manager": pool_manager}
        case PublicKeysAuth(key=key):
            vendor = ParamikoSSHVendor(pkey=key, allow_agent=False, look_for_keys=False)
            return {"vendor": vendor}
        case SSHAgentAuth():
            vendor = ParamikoSSHVendor(allow_agent=True, look_for_keys=False)
            return {"vendor": vendor}
        case _:
            return {}


def _peel_to_commit(repo: MemoryRepo, sha: bytes) -> Commit | None:
    obj = repo[sha]
    while isinstance(obj, Tag):
        _, target_sha = obj.object
        obj = repo[target_sha]
    if isinstance(obj, Commit):
        return obj
    return None


class DulwichFetcher:
    """Fetch capability backed by dulwich's git clients.

    Only the requested reference is transferred, with no tags, into a
    ``MemoryRepo``.
    """

    __slots__ = ("_logger",)

    def __init__(self, *, logger: FilteringBoundLogger | None = None) -> None:
        self._logger: FilteringBoundLogger = (
            logger if logger is not None else get_library_logger()
        )

    def fetch(
        self,
        request: FetchRequest,
        cancel: threading.Event | None = None,
    ) -> RepositorySnapshot:
        """Fetch a single reference into a new in-memory snapshot.

        Args:
            request: The resolved fetch request.
            cancel: Optional signal; when set the fetch is abandoned.

        Returns:
            The snapshot of the fetched commit.

        Raises:
            RepositoryNotFoundError: If the target holds no repository.
            FetchCancelledError: If ``cancel`` was set.
            FetchError: For any other failure.
        """
        check_cancelled(cancel, request)
        log = self._logger.bind(url=request.display, reference=request.reference)
        log.info("fetch_started", depth=request.depth)

        reference = request.reference.encode()

        def determine_wants(
            refs: dict[bytes, bytes],
            depth: int | None = None,  # noqa: ARG001
        ) -> list[bytes]:
            check_cancelled(cancel, request)
            sha = refs.get(reference)
            if sha is None:
                msg = (
                    f"git fetch for {request.display} failed: "
                    f"reference {request.reference} not found"
                )
                raise FetchError(msg, locator=request.display)
            return [sha]

        def progress(_message: bytes) -> None:
            check_cancelled(cancel, request)

        target = MemoryRepo()
        try:
            client, path = get_transport_and_path(request.url, **client_kwargs(request))
            result = client.fetch(
                path,
                target,
                determine_wants=determine_wants,
                progress=progress,
                depth=request.depth if request.depth != FULL_DEPTH else None,
            )
        except FetchError:
            target.close()
            raise
        except NotGitRepository as e:
            target.close()
            msg = f"git fetch for {request.display} failed: repository not found"
            raise RepositoryNotFoundError(msg, locator=request.display, cause=e) from e
        except (
            GitProtocolError,
            HTTPUnauthorized,
            HTTPProxyUnauthorized,
            paramiko.SSHException,
            urllib3.exceptions.HTTPError,
            OSError,
            ValueError,
        ) as e:
            target.close()
            msg = f"git fetch for {request.display} failed: {e}"
            raise FetchError(msg, locator=request.display, cause=e) from e

        # a cancellation that lands during the transfer still discards it
        try:
            check_cancelled(cancel, request)
        except FetchCancelledError:
            target.close()
            raise

        sha = result.refs.get(reference)
        commit = _peel_to_commit(target, sha) if sha is not None else None
        if sha is None or commit is None:
            target.close()
            msg = (
                f"git fetch for {request.display} failed: "
                f"reference {request.reference} does not name a commit"
            )
            raise FetchError(msg, locator=request.display)

        target.refs[reference] = sha
        target.refs.set_symbolic_ref(_HEAD, reference)

        log.info("fetch_completed", commit=commit.id.decode())
        return RepositorySnapshot(
            filesystem=TreeFilesystem(target.object_store, commit.tree),
            repository=target,
            reference=request.reference,
        )
