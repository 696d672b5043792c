"""Shared fixtures for unit tests."""

import threading
from collections.abc import Callable
from pathlib import Path

import pytest
from dulwich.repo import MemoryRepo

from gitsource.exceptions import FetchError, RepositoryNotFoundError
from gitsource.snapshot import RepositorySnapshot, TreeFilesystem
from gitsource.transport import FetchRequest


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.unit)


class RecordingFetcher:
    """Fetcher double that records requests and fails for chosen paths."""

    def __init__(
        self,
        tree_fs: TreeFilesystem,
        *,
        missing: set[str] | None = None,
        broken: set[str] | None = None,
    ) -> None:
        self.tree_fs = tree_fs
        self.missing = missing or set()
        self.broken = broken or set()
        self.requests: list[FetchRequest] = []

    def fetch(
        self,
        request: FetchRequest,
        cancel: threading.Event | None = None,
    ) -> RepositorySnapshot:
        self.requests.append(request)
        path = request.target.path
        if path in self.missing:
            msg = f"git fetch for {request.display} failed: repository not found"
            raise RepositoryNotFoundError(msg, locator=request.display)
        if path in self.broken:
            msg = f"git fetch for {request.display} failed: connection reset"
            raise FetchError(msg, locator=request.display)
        return RepositorySnapshot(
            filesystem=self.tree_fs,
            repository=MemoryRepo(),
            reference=request.reference,
        )


@pytest.fixture
def make_fetcher(tree_fs: TreeFilesystem) -> Callable[..., RecordingFetcher]:
    def _make(
        *, missing: set[str] | None = None, broken: set[str] | None = None
    ) -> RecordingFetcher:
        return RecordingFetcher(tree_fs, missing=missing, broken=broken)

    return _make


@pytest.fixture
def fetcher(make_fetcher: Callable[..., RecordingFetcher]) -> RecordingFetcher:
    return make_fetcher()
