"""Fetch request model and depth policy."""

from dataclasses import dataclass, field, replace
from typing import Final, Self

from gitsource.auth import Credential
from gitsource.locator import CompositeLocator, TransportKind

FULL_DEPTH: Final = 0
SHALLOW_DEPTH: Final = 1


def depth_for(transport: TransportKind) -> int:
    """Return the fetch depth for a transport.

    Local fetches cannot assume shallow support, so they take the full
    history. Every remote transport fetches shallow.
    """
    if transport.is_local:
        return FULL_DEPTH
    return SHALLOW_DEPTH


@dataclass(frozen=True, slots=True)
class FetchRequest:
    """A fully resolved request for the fetch capability.

    Attributes:
        target: Transport locator: marker stripped, fragment cleared.
        reference: Fully-qualified reference name to fetch.
        depth: History depth; 0 means full history.
        transport: The transport kind the locator named.
        auth: Credential for the transport, or None for anonymous access.
    """

    target: CompositeLocator
    reference: str
    depth: int
    transport: TransportKind
    auth: Credential | None = field(default=None, repr=False)

    @property
    def url(self) -> str:
        """The transport URL handed to the git client."""
        return str(self.target)

    @property
    def display(self) -> str:
        """The transport URL with any user-info secret masked."""
        return self.target.redacted()

    def with_path(self, path: str) -> Self:
        """Return a copy targeting a different repository path."""
        return replace(self, target=self.target.with_path(path))
