"""Reading a composite locator end to end.

locator -> split -> dispatch (fetch) -> read snapshot -> bytes
"""

import threading
from functools import partial

import anyio
import anyio.to_thread
from structlog.typing import FilteringBoundLogger

from gitsource.exceptions import FetchCancelledError
from gitsource.locator import CompositeLocator, parse_locator, split_locator
from gitsource.snapshot import ReadResult, read_snapshot
from gitsource.transport import Dispatcher
from gitsource.utils import get_library_logger


def read_source(
    locator: CompositeLocator | str | None,
    *,
    dispatcher: Dispatcher | None = None,
    cancel: threading.Event | None = None,
    logger: FilteringBoundLogger | None = None,
) -> ReadResult:
    """Fetch the repository a locator names and read the path it names.

    Every call fetches a fresh snapshot and discards it before returning.

    Args:
        locator: The composite locator, parsed or as text.
        dispatcher: Dispatcher to fetch with. Defaults to one reading
            secrets from the environment and local paths from ``/``.
        cancel: Optional signal; when set the fetch is abandoned.
        logger: Optional structured logger.

    Returns:
        The file bytes, or the directory listing with its media type.

    Raises:
        LocatorMalformedError: If the locator is absent or unparseable.
        TransportUnsupportedError: If the locator scheme is unknown.
        AuthResolutionError: If configured credential material is unusable.
        FetchError: If the repository cannot be fetched.
        SnapshotError: If the path cannot be read from the snapshot.

    Example:
        >>> result = read_source("git+https://github.com/org/repo//docs/index.md#main")
        >>> result.data[:10]
    """
    log = logger if logger is not None else get_library_logger()

    if not isinstance(locator, CompositeLocator):
        locator = parse_locator(locator)

    repo_locator, path = split_locator(locator)
    # fail on unknown schemes before anything touches the network
    _ = repo_locator.transport
    log.debug("locator_split", repository=repo_locator.redacted(), path=path)

    if dispatcher is None:
        dispatcher = Dispatcher(logger=log)

    with dispatcher.dispatch(repo_locator, cancel) as snapshot:
        return read_snapshot(snapshot.filesystem, path, logger=log)


async def read_source_async(
    locator: CompositeLocator | str | None,
    *,
    dispatcher: Dispatcher | None = None,
    timeout: float | None = None,
    logger: FilteringBoundLogger | None = None,
) -> ReadResult:
    """Run ``read_source`` in a worker thread with an optional timeout.

    When the timeout expires, or the calling task is cancelled, the fetch's
    cancellation signal is set so the worker abandons the transfer.

    Args:
        locator: The composite locator, parsed or as text.
        dispatcher: Dispatcher to fetch with.
        timeout: Seconds to allow for the whole read, or None for no limit.
        logger: Optional structured logger.

    Returns:
        The read result.

    Raises:
        LocatorMalformedError: If the locator is absent or unparseable.
        FetchCancelledError: If the timeout expired.
    """
    if not isinstance(locator, CompositeLocator):
        locator = parse_locator(locator)

    cancel = threading.Event()
    func = partial(
        read_source,
        locator,
        dispatcher=dispatcher,
        cancel=cancel,
        logger=logger,
    )
    try:
        with anyio.fail_after(timeout):
            return await anyio.to_thread.run_sync(func, abandon_on_cancel=True)
    except TimeoutError as e:
        msg = f"read of {locator.redacted()} cancelled after {timeout}s"
        raise FetchCancelledError(msg, locator=locator.redacted(), cause=e) from e
    finally:
        cancel.set()
