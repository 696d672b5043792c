"""Unit tests for gitsource exceptions.

These tests verify that exception constructors store their context
attributes and that each error sits where callers catch it.
"""

from pathlib import Path

import pytest

from gitsource.exceptions import (
    AuthResolutionError,
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
    FetchCancelledError,
    FetchError,
    GitSourceError,
    LocatorMalformedError,
    RepositoryNotFoundError,
    RetryExhaustedError,
    SnapshotEncodeError,
    SnapshotError,
    SnapshotOpenError,
    SnapshotReadError,
    SnapshotStatError,
    TransportUnsupportedError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        ("error_type", "parent"),
        [
            (LocatorMalformedError, GitSourceError),
            (TransportUnsupportedError, GitSourceError),
            (AuthResolutionError, GitSourceError),
            (RepositoryNotFoundError, FetchError),
            (RetryExhaustedError, FetchError),
            (FetchCancelledError, FetchError),
            (SnapshotStatError, SnapshotError),
            (SnapshotOpenError, SnapshotError),
            (SnapshotReadError, SnapshotError),
            (SnapshotEncodeError, SnapshotError),
            (ConfigLoadError, ConfigError),
            (ConfigValidationError, ConfigError),
            (FetchError, GitSourceError),
            (SnapshotError, GitSourceError),
            (ConfigError, GitSourceError),
        ],
    )
    def test_parent(self, error_type: type[Exception], parent: type[Exception]) -> None:
        assert issubclass(error_type, parent)

    def test_locator_errors_are_value_errors(self) -> None:
        assert issubclass(LocatorMalformedError, ValueError)
        assert issubclass(TransportUnsupportedError, ValueError)


class TestFetchError:
    def test_stores_context(self) -> None:
        cause = OSError("refused")

        error = FetchError("failed", locator="https://h/r", cause=cause)

        assert error.locator == "https://h/r"
        assert error.cause is cause

    def test_context_defaults_to_none(self) -> None:
        error = FetchError("failed")

        assert error.locator is None
        assert error.cause is None

    def test_retry_exhausted_stores_attempts(self) -> None:
        error = RetryExhaustedError("failed", attempts=("file:///a", "file:///a/.git"))

        assert error.attempts == ("file:///a", "file:///a/.git")


class TestSnapshotError:
    def test_stores_path(self) -> None:
        assert SnapshotStatError("can't stat /x", path="/x").path == "/x"


class TestConfigLoadError:
    def test_stores_location(self) -> None:
        error = ConfigLoadError("bad", path=Path("/etc/g.toml"), line=3, column=7)

        assert error.path == Path("/etc/g.toml")
        assert error.line == 3
        assert error.column == 7

    def test_location_defaults_to_none(self) -> None:
        error = ConfigLoadError("bad")

        assert error.path is None
        assert error.line is None
        assert error.column is None


class TestConfigValidationError:
    def test_stores_context(self) -> None:
        error = ConfigValidationError("bad", key="fetch.timeout", source="env")

        assert error.key == "fetch.timeout"
        assert error.source == "env"


class TestOtherErrors:
    def test_transport_unsupported_stores_scheme(self) -> None:
        assert TransportUnsupportedError("no", scheme="svn").scheme == "svn"

    def test_auth_resolution_stores_context(self) -> None:
        cause = ValueError("bad key")

        error = AuthResolutionError("no", locator="git+ssh://h/r", cause=cause)

        assert error.locator == "git+ssh://h/r"
        assert error.cause is cause
