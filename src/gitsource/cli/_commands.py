# pyright: reportUnusedCallResult=false
"""gitsource commands."""

import sys
from functools import partial
from pathlib import Path
from typing import Annotated

import anyio
from cyclopts import App, Parameter
from rich.markup import escape

from gitsource._source import read_source_async
from gitsource.exceptions import (
    GitSourceError,
    LocatorMalformedError,
    TransportUnsupportedError,
)
from gitsource.locator import parse_locator, split_locator
from gitsource.transport import Dispatcher

from ._context import CLIContext
from ._shared import ExitCode, exit_with_error

__all__ = ["register_commands"]


def _dispatcher(ctx: CLIContext, root: Path | None, default_branch: str | None) -> Dispatcher:
    fetch = ctx.config.fetch
    return Dispatcher(
        root=root if root is not None else fetch.root,
        default_branch=default_branch or fetch.default_branch,
        logger=ctx.logger,
    )


def _read(
    locator: Annotated[str, Parameter(help="Composite locator to read")],
    *,
    output: Annotated[
        Path | None,
        Parameter(name=["--output", "-o"], help="Write the content to this file"),
    ] = None,
    timeout: Annotated[
        float | None,
        Parameter(name="--timeout", help="Seconds allowed for the whole read"),
    ] = None,
    root: Annotated[
        Path | None,
        Parameter(name="--root", help="Directory git+file paths are resolved beneath"),
    ] = None,
    default_branch: Annotated[
        str | None,
        Parameter(name="--default-branch", help="Branch read when no revision is given"),
    ] = None,
) -> None:
    """Read a file, or list a directory, from a git repository.

    The content is written to standard output unless --output is given.
    Directory listings are JSON arrays of entry names.
    """
    ctx = CLIContext.get_current()
    dispatcher = _dispatcher(ctx, root, default_branch)
    effective_timeout = timeout if timeout is not None else ctx.config.fetch.timeout

    try:
        result = anyio.run(
            partial(
                read_source_async,
                locator,
                dispatcher=dispatcher,
                timeout=effective_timeout,
                logger=ctx.logger,
            )
        )
    except (LocatorMalformedError, TransportUnsupportedError) as e:
        exit_with_error(str(e), ExitCode.LOCATOR_ERROR, console=ctx.error_console)
    except GitSourceError as e:
        exit_with_error(str(e), ExitCode.READ_ERROR, console=ctx.error_console)

    if ctx.verbose and result.media_type is not None:
        ctx.error_console.print(
            f"media type: {escape(result.media_type)}", soft_wrap=True, highlight=False
        )

    if output is not None:
        try:
            output.write_bytes(result.data)
        except OSError as e:
            msg = f"can't write {output}: {e}"
            exit_with_error(msg, ExitCode.READ_ERROR, console=ctx.error_console)
        return

    sys.stdout.flush()
    sys.stdout.buffer.write(result.data)
    sys.stdout.buffer.flush()


def _split(
    locator: Annotated[str, Parameter(help="Composite locator to split")],
    *,
    root: Annotated[
        Path | None,
        Parameter(name="--root", help="Directory git+file paths are resolved beneath"),
    ] = None,
    default_branch: Annotated[
        str | None,
        Parameter(name="--default-branch", help="Branch read when no revision is given"),
    ] = None,
) -> None:
    """Show how a locator resolves, without fetching anything."""
    ctx = CLIContext.get_current()
    dispatcher = _dispatcher(ctx, root, default_branch)

    try:
        repo_locator, path = split_locator(parse_locator(locator))
        request = dispatcher.build_request(repo_locator)
    except (LocatorMalformedError, TransportUnsupportedError) as e:
        exit_with_error(str(e), ExitCode.LOCATOR_ERROR, console=ctx.error_console)
    except GitSourceError as e:
        exit_with_error(str(e), ExitCode.READ_ERROR, console=ctx.error_console)

    rows = (
        ("repository", repo_locator.redacted()),
        ("path", path),
        ("url", request.display),
        ("reference", request.reference),
        ("depth", str(request.depth)),
    )
    for label, value in rows:
        ctx.console.print(
            f"[bold]{label}:[/bold] {escape(value)}", soft_wrap=True, highlight=False
        )


def register_commands(app: App) -> None:
    """Register the gitsource commands on ``app``."""
    app.command(_read, name="read")
    app.command(_split, name="split")
