"""Transport dispatch: locator in, fetched snapshot out.

The dispatcher turns a repository-base locator into a ``FetchRequest``
(transport scheme, reference, depth, credential) and hands it to a
``Fetcher``. Local repositories get one extra attempt when the first
finds nothing: a bare repository keeps its database at the given path,
while a working copy keeps it in a ``.git`` subdirectory, and the
locator alone cannot tell the two apart.
"""

import posixpath
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from structlog.typing import FilteringBoundLogger

from gitsource.auth import GitSecrets, select_auth
from gitsource.exceptions import FetchError, RepositoryNotFoundError, RetryExhaustedError
from gitsource.locator import CompositeLocator
from gitsource.snapshot import RepositorySnapshot
from gitsource.transport._fetcher import DulwichFetcher, Fetcher
from gitsource.transport._models import FetchRequest, depth_for
from gitsource.transport._refs import DEFAULT_BRANCH, resolve_reference
from gitsource.utils import get_library_logger

REPOSITORY_DIR_SUFFIX: Final = ".git"


@dataclass(frozen=True, slots=True)
class BareRepositoryFallback:
    """Decides whether a failed local fetch is retried under ``.git``.

    The policy yields at most one alternate request, and never one for a
    request that already targets a ``.git`` path, so a caller following
    it performs no more than two attempts.

    Attributes:
        suffix: The repository directory name appended on retry.
    """

    suffix: str = REPOSITORY_DIR_SUFFIX

    def alternate(self, request: FetchRequest, error: FetchError) -> FetchRequest | None:
        """Return the retry request for ``error``, or None if none applies.

        Args:
            request: The request that failed.
            error: The failure it raised.

        Returns:
            The request with the suffix appended to its path, or None.
        """
        if not request.transport.is_local:
            return None
        if not isinstance(error, RepositoryNotFoundError):
            return None
        if request.target.path.rstrip("/").endswith(self.suffix):
            return None
        return request.with_path(posixpath.join(request.target.path, self.suffix))


class Dispatcher:
    """Resolves repository-base locators and fetches them.

    Attributes:
        root: Directory that local (``git+file``) repository paths are
            resolved beneath. ``/`` uses paths as given; tests point it at
            a temporary directory holding fixture repositories.
        default_branch: Branch fetched when a locator names no revision.
    """

    __slots__ = ("_fallback", "_fetcher", "_logger", "_secrets", "default_branch", "root")

    def __init__(
        self,
        fetcher: Fetcher | None = None,
        *,
        secrets: GitSecrets | None = None,
        root: Path | str = "/",
        default_branch: str = DEFAULT_BRANCH,
        fallback: BareRepositoryFallback | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            fetcher: The fetch capability. Defaults to ``DulwichFetcher``.
            secrets: Credential secrets. Defaults to the process environment.
            root: Root directory for local repository paths.
            default_branch: Branch fetched when a locator names no revision.
            fallback: Retry policy for local fetches.
            logger: Optional structured logger.
        """
        self._logger: FilteringBoundLogger = (
            logger if logger is not None else get_library_logger()
        )
        self._fetcher: Fetcher = (
            fetcher if fetcher is not None else DulwichFetcher(logger=self._logger)
        )
        self._secrets: GitSecrets | None = secrets
        self._fallback: BareRepositoryFallback = (
            fallback if fallback is not None else BareRepositoryFallback()
        )
        self.root: Path = Path(root)
        self.default_branch: str = default_branch

    def _local_path(self, path: str) -> str:
        return (self.root / path.lstrip("/")).as_posix()

    def build_request(self, locator: CompositeLocator) -> FetchRequest:
        """Resolve a repository-base locator into a fetch request.

        Args:
            locator: The repository-base locator (in-repo path removed).

        Returns:
            The fetch request.

        Raises:
            TransportUnsupportedError: If the locator scheme is unknown.
            AuthResolutionError: If configured credential material is unusable.
        """
        transport = locator.transport
        secrets = self._secrets if self._secrets is not None else GitSecrets.from_env()
        auth = select_auth(locator, secrets)
        reference = resolve_reference(locator.fragment, self.default_branch)

        # only the user name is taken from the locator; secrets come from GitSecrets
        target = locator.with_scheme(transport.scheme).with_fragment("").without_password()
        if transport.is_local:
            target = target.with_path(self._local_path(target.path))

        return FetchRequest(
            target=target,
            reference=reference,
            depth=depth_for(transport),
            transport=transport,
            auth=auth,
        )

    def dispatch(
        self,
        locator: CompositeLocator,
        cancel: threading.Event | None = None,
    ) -> RepositorySnapshot:
        """Fetch the repository a locator names.

        Args:
            locator: The repository-base locator.
            cancel: Optional signal; when set the fetch is abandoned.

        Returns:
            A fresh snapshot owned by the caller.

        Raises:
            TransportUnsupportedError: If the locator scheme is unknown.
            AuthResolutionError: If configured credential material is unusable.
            RetryExhaustedError: If neither the path nor its ``.git``
                subdirectory holds a repository.
            FetchError: For every other fetch failure.
        """
        request = self.build_request(locator)
        log = self._logger.bind(url=request.display, reference=request.reference)

        try:
            return self._fetcher.fetch(request, cancel)
        except FetchError as e:
            retry = self._fallback.alternate(request, e)
            if retry is None:
                log.warning("fetch_failed", error=str(e))
                raise

        log.info("fetch_retry_bare", retry_url=retry.display)
        try:
            return self._fetcher.fetch(retry, cancel)
        except RepositoryNotFoundError as e:
            log.warning("fetch_failed", error=str(e), retry_url=retry.display)
            msg = (
                f"git fetch for {request.display} failed: no repository at "
                f"{request.target.path} or {retry.target.path}"
            )
            raise RetryExhaustedError(
                msg,
                locator=request.display,
                cause=e,
                attempts=(request.display, retry.display),
            ) from e
        except FetchError as e:
            log.warning("fetch_failed", error=str(e), retry_url=retry.display)
            raise
