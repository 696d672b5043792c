"""Composite locator parsing.

Example:
    >>> from gitsource.locator import parse_locator, split_locator
    >>> base, path = split_locator(parse_locator("git+file:///repo//a/b.txt"))
    >>> str(base), path
    ('git+file:///repo', '/a/b.txt')
"""

from gitsource.locator._models import TRANSPORT_PREFIX, CompositeLocator, TransportKind
from gitsource.locator._split import (
    PATH_DELIMITER,
    ROOT_PATH,
    parse_locator,
    split_locator,
)

__all__ = [
    "PATH_DELIMITER",
    "ROOT_PATH",
    "TRANSPORT_PREFIX",
    "CompositeLocator",
    "TransportKind",
    "parse_locator",
    "split_locator",
]
