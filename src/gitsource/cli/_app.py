"""The command-line interface for gitsource."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from gitsource.config import Config, LogLevel
from gitsource.exceptions import ConfigError
from gitsource.utils import create_logger

from ._commands import register_commands
from ._context import CLIContext
from ._shared import ExitCode, exit_with_error

_HELP = "Read files and directory listings out of git repositories."


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Build the gitsource application.

    Global options are handled by the meta app, so run it with
    ``app.meta(tokens)``; ``app(tokens)`` skips configuration loading and
    runs commands against a default context.

    Args:
        console: Console for regular output.
        error_console: Console for errors.
        exit_on_error: Let cyclopts exit on argument errors.

    Returns:
        The configured application.
    """
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="gitsource",
        help=_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[bool, Parameter(help="Enable verbose output")] = False,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
        log_level: Annotated[
            LogLevel | None, Parameter(name="--log-level", help="Log level threshold")
        ] = None,
    ) -> None:
        """Run gitsource with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            verbose: Enable verbose output with additional details.
            config: Explicit path to a TOML config file.
            log_level: Override the configured log level.
        """
        cli_overrides: dict[str, object] | None = None
        if log_level is not None:
            cli_overrides = {"logging": {"level": log_level.value}}

        try:
            loaded_config = Config.load(config_path=config, cli_overrides=cli_overrides)
        except FileNotFoundError:
            msg = f"config file not found: {config}"
            exit_with_error(msg, ExitCode.CONFIG_ERROR, console=error_console)
        except ConfigError as e:
            exit_with_error(str(e), ExitCode.CONFIG_ERROR, console=error_console)

        logging_config = loaded_config.logging
        # unset in the file and on the command line: GITSOURCE_LOG_LEVEL decides
        level = logging_config.level.value if logging_config.level is not None else None
        logger = create_logger(
            level=level,
            log_format=logging_config.format.value,  # type: ignore[arg-type]
            log_file=logging_config.file,
            max_bytes=logging_config.max_bytes,
            backup_count=logging_config.backup_count,
            command=tokens[0] if tokens else "",
            default_level=LogLevel.WARNING.value,
        )

        ctx = CLIContext(
            config=loaded_config,
            verbose=verbose,
            console=console,
            error_console=error_console,
            logger=logger,
        )
        CLIContext.set_current(ctx)

        try:
            app(tokens)
        finally:
            CLIContext.reset()

    register_commands(app)
    return app


def main() -> None:
    """Default entrypoint for the `gitsource` CLI."""
    app = create_app()
    app.meta()
