"""Shared fixtures for integration tests.

Integration tests fetch from real repositories built on disk by the
``git_root`` fixture, using dulwich's local transport.
"""

from pathlib import Path
from typing import Any

import pytest

from gitsource.auth import GitSecrets
from gitsource.transport import Dispatcher, DulwichFetcher


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def dispatcher(git_root: Any) -> Dispatcher:
    """Dispatcher resolving ``git+file`` paths beneath the fixture root."""
    return Dispatcher(DulwichFetcher(), secrets=GitSecrets(), root=git_root.root)
