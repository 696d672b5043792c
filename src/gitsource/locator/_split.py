"""Locator parsing and splitting.

A composite locator carries three things in one URL:

    git+https://host/org/repo//docs/readme.md#v1.2.3
    \\_____ repository base _/\\ in-repo path /\\ rev /

The first ``//`` inside the path component separates the repository
from the in-repo path. The fragment stays with the repository base.
"""

from typing import Final
from urllib.parse import urlsplit

from gitsource.exceptions import LocatorMalformedError
from gitsource.locator._models import CompositeLocator

PATH_DELIMITER: Final = "//"
ROOT_PATH: Final = "/"


def parse_locator(text: str | None) -> CompositeLocator:
    """Parse locator text into a ``CompositeLocator``.

    Args:
        text: The raw locator, e.g. ``git+ssh://git@host/repo.git//a.txt#main``.

    Returns:
        The parsed locator. The path still contains any ``//`` delimiter.

    Raises:
        LocatorMalformedError: If no locator is given or it has no
            ``scheme://`` prefix.
    """
    if text is None or not text.strip():
        msg = "no locator provided"
        raise LocatorMalformedError(msg, locator=text)

    if "://" not in text:
        msg = f"locator {text} has no scheme"
        raise LocatorMalformedError(msg, locator=text)

    try:
        parts = urlsplit(text)
    except ValueError as e:
        msg = f"can't parse locator {text}: {e}"
        raise LocatorMalformedError(msg, locator=text) from e

    if not parts.scheme:
        msg = f"locator {text} has no scheme"
        raise LocatorMalformedError(msg, locator=text)

    return CompositeLocator(
        scheme=parts.scheme,
        authority=parts.netloc,
        path=parts.path,
        query=parts.query,
        fragment=parts.fragment,
    )


def split_locator(
    locator: CompositeLocator | None,
) -> tuple[CompositeLocator, str]:
    """Split a locator into its repository base and in-repo path.

    Args:
        locator: The parsed locator.

    Returns:
        A ``(repository_base, in_repo_path)`` tuple. Without a delimiter the
        locator is returned unchanged with the path ``/``. The in-repo path
        always begins with ``/``.

    Raises:
        LocatorMalformedError: If no locator is provided.

    Examples:
        >>> base, path = split_locator(parse_locator("git://h/foo//file.txt#ref"))
        >>> str(base), path
        ('git://h/foo#ref', '/file.txt')
    """
    if locator is None:
        msg = "no locator provided"
        raise LocatorMalformedError(msg)

    repo_path, delimiter, rest = locator.path.partition(PATH_DELIMITER)
    if not delimiter:
        return locator, ROOT_PATH

    return locator.with_path(repo_path), ROOT_PATH + rest
