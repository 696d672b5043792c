"""CLI context for global state management.

The CLIContext is set once per invocation by the global option handler
and read by the commands through a context variable.
"""

import contextvars
from dataclasses import dataclass, field
from typing import Self

from rich.console import Console
from structlog.typing import FilteringBoundLogger

from gitsource.config import Config
from gitsource.utils import get_library_logger


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global CLI context with configuration and options.

    Attributes:
        config: Loaded configuration object.
        verbose: Print details such as the media type of a read.
        console: Console for regular output.
        error_console: Console for errors and diagnostics.
        logger: Structured logger for the invocation.
    """

    config: Config = field(repr=False)
    verbose: bool = False
    console: Console = field(default_factory=Console, repr=False)
    error_console: Console = field(
        default_factory=lambda: Console(stderr=True), repr=False
    )
    logger: FilteringBoundLogger = field(default_factory=get_library_logger, repr=False)

    @classmethod
    def get_current(cls) -> Self:
        """Get the active CLIContext, or a default one if none is set."""
        ctx = _current_cli_context.get()
        if ctx is not None:
            return ctx
        return cls(config=Config.from_dict({}))

    @classmethod
    def set_current(cls, ctx: Self) -> None:
        """Set the active CLIContext."""
        _current_cli_context.set(ctx)

    @classmethod
    def reset(cls) -> None:
        """Clear the active CLIContext."""
        _current_cli_context.set(None)


_current_cli_context: contextvars.ContextVar[CLIContext | None] = (
    contextvars.ContextVar("cli_context", default=None)
)
