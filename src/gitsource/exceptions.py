"""gitsource exceptions."""

from pathlib import Path


class GitSourceError(Exception):
    """Base exception for gitsource errors."""


class LocatorMalformedError(GitSourceError, ValueError):
    """Raised when a locator is absent or cannot be parsed.

    Attributes:
        locator: The raw locator text, if any was provided.
    """

    def __init__(self, message: str, *, locator: str | None = None) -> None:
        """Initialize with error message and locator context."""
        super().__init__(message)
        self.locator: str | None = locator


class TransportUnsupportedError(GitSourceError, ValueError):
    """Raised when a locator names a transport that cannot be handled.

    Attributes:
        scheme: The unrecognized locator scheme.
    """

    def __init__(self, message: str, *, scheme: str) -> None:
        """Initialize with error message and scheme context."""
        super().__init__(message)
        self.scheme: str = scheme


class AuthResolutionError(GitSourceError):
    """Raised when credential material is present but unusable.

    Attributes:
        locator: The locator the credential was being resolved for.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        locator: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and credential context."""
        super().__init__(message)
        self.locator: str | None = locator
        self.cause: Exception | None = cause


# =============================================================================
# Fetch Exceptions
# =============================================================================


class FetchError(GitSourceError):
    """Raised when a repository cannot be fetched.

    Attributes:
        locator: The transport URL or locator the fetch targeted.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        locator: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and fetch context.

        Args:
            message: Human-readable error message.
            locator: The transport URL or locator the fetch targeted.
            cause: The underlying exception, if any.
        """
        super().__init__(message)
        self.locator: str | None = locator
        self.cause: Exception | None = cause


class RepositoryNotFoundError(FetchError):
    """Raised when the fetch target holds no repository."""


class RetryExhaustedError(FetchError):
    """Raised when the bare-repository probe also finds no repository.

    Attributes:
        attempts: Transport URLs tried, in order.
    """

    def __init__(
        self,
        message: str,
        *,
        locator: str | None = None,
        cause: Exception | None = None,
        attempts: tuple[str, ...] = (),
    ) -> None:
        """Initialize with error message and retry context."""
        super().__init__(message, locator=locator, cause=cause)
        self.attempts: tuple[str, ...] = attempts


class FetchCancelledError(FetchError):
    """Raised when a fetch is aborted by its cancellation signal."""


# =============================================================================
# Snapshot Exceptions
# =============================================================================


class SnapshotError(GitSourceError):
    """Base exception for snapshot read errors.

    Attributes:
        path: The in-repository path being read.
    """

    def __init__(self, message: str, *, path: str) -> None:
        """Initialize with error message and path context.

        Args:
            message: Human-readable error message.
            path: The in-repository path being read.
        """
        super().__init__(message)
        self.path: str = path


class SnapshotStatError(SnapshotError):
    """Raised when a path cannot be found in the snapshot."""


class SnapshotOpenError(SnapshotError):
    """Raised when a file in the snapshot cannot be opened."""


class SnapshotReadError(SnapshotError):
    """Raised when a file or directory in the snapshot cannot be read."""


class SnapshotEncodeError(SnapshotError):
    """Raised when a directory listing cannot be encoded."""


# =============================================================================
# Config Exceptions
# =============================================================================


class ConfigError(GitSourceError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.source: str | None = source
