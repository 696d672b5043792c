from collections.abc import Callable

import pytest
from rich.console import Console

from gitsource.cli import create_app


@pytest.fixture
def gitsource_cli(console: Console) -> Callable[..., int]:
    """Create the CLI app for testing and return a runner giving the exit code.

    The runner goes through the meta app so global options and
    configuration loading are exercised.
    """

    app = create_app(console=console, error_console=console)

    def _run(*args: str) -> int:
        """Run the CLI and return the exit code (0 if no SystemExit)."""

        try:
            app.meta(list(args))
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else 1
        else:
            return 0

    return _run
