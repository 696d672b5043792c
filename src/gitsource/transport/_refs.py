"""Revision to reference name resolution."""

from typing import Final

REFS_PREFIX: Final = "refs/"
BRANCH_PREFIX: Final = "refs/heads/"
DEFAULT_BRANCH: Final = "master"


def branch_reference(name: str) -> str:
    """Qualify a short branch name, e.g. ``main`` -> ``refs/heads/main``."""
    return BRANCH_PREFIX + name


def resolve_reference(fragment: str, default_branch: str = DEFAULT_BRANCH) -> str:
    """Resolve a locator fragment to a fully-qualified reference name.

    Args:
        fragment: The locator fragment, without the ``#``.
        default_branch: Branch used when the fragment is empty.

    Returns:
        The reference name; never empty.

    Examples:
        >>> resolve_reference("refs/tags/v1.0")
        'refs/tags/v1.0'
        >>> resolve_reference("someref")
        'refs/heads/someref'
        >>> resolve_reference("")
        'refs/heads/master'
    """
    if fragment.startswith(REFS_PREFIX):
        return fragment
    if fragment:
        return branch_reference(fragment)
    return branch_reference(default_branch)
