"""Composite locator models.

This module defines the transport kinds accepted in a locator and the
immutable ``CompositeLocator`` value that the rest of the package passes
around.
"""

from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Final, Self
from urllib.parse import SplitResult, urlsplit

from gitsource.exceptions import LocatorMalformedError, TransportUnsupportedError

# Marker prefix identifying the git source on non-native schemes.
TRANSPORT_PREFIX: Final = "git+"

_REDACTED: Final = "xxxxx"


class TransportKind(StrEnum):
    """Locator schemes understood by the dispatcher."""

    FILE = "git+file"
    HTTP = "git+http"
    HTTPS = "git+https"
    SSH = "git+ssh"
    NATIVE = "git"

    @property
    def scheme(self) -> str:
        """The literal transport scheme with the marker prefix removed."""
        return self.value.removeprefix(TRANSPORT_PREFIX)

    @property
    def is_local(self) -> bool:
        """Whether the transport reads from the local filesystem."""
        return self is TransportKind.FILE

    @property
    def is_http(self) -> bool:
        """Whether the transport is HTTP or HTTPS."""
        return self in {TransportKind.HTTP, TransportKind.HTTPS}


@dataclass(frozen=True, slots=True)
class CompositeLocator:
    """A parsed locator for a repository, an in-repo path and a revision.

    Attributes:
        scheme: The locator scheme, including any ``git+`` marker.
        authority: The raw authority, including user-info and port.
        path: The path component. Before splitting this may still contain
            the ``//`` delimiter and the in-repo path.
        query: The raw query string, without the ``?``.
        fragment: The revision, without the ``#``.
    """

    scheme: str
    authority: str = ""
    path: str = ""
    query: str = ""
    fragment: str = ""

    def __str__(self) -> str:
        text = f"{self.scheme}://{self.authority}{self.path}"
        if self.query:
            text += f"?{self.query}"
        if self.fragment:
            text += f"#{self.fragment}"
        return text

    @property
    def _authority_parts(self) -> SplitResult:
        return urlsplit(f"//{self.authority}")

    @property
    def username(self) -> str | None:
        """The user-info username, if present."""
        return self._authority_parts.username

    @property
    def password(self) -> str | None:
        """The user-info secret, if present."""
        return self._authority_parts.password

    @property
    def hostname(self) -> str | None:
        """The host name, lowercased, if present."""
        return self._authority_parts.hostname

    @property
    def port(self) -> int | None:
        """The explicit port, if present.

        Raises:
            LocatorMalformedError: If the port is not a valid number.
        """
        try:
            return self._authority_parts.port
        except ValueError as e:
            msg = f"invalid port in locator {self}: {e}"
            raise LocatorMalformedError(msg, locator=str(self)) from e

    @property
    def transport(self) -> TransportKind:
        """The transport kind named by the scheme.

        Raises:
            TransportUnsupportedError: If the scheme is not recognized.
        """
        try:
            return TransportKind(self.scheme)
        except ValueError as e:
            msg = f"scheme {self.scheme} cannot be handled by git source support"
            raise TransportUnsupportedError(msg, scheme=self.scheme) from e

    def redacted(self) -> str:
        """Render the locator with any user-info secret masked."""
        if self.password is None:
            return str(self)
        userinfo, _, hostport = self.authority.rpartition("@")
        user = userinfo.partition(":")[0]
        return str(replace(self, authority=f"{user}:{_REDACTED}@{hostport}"))

    def without_password(self) -> Self:
        """Return a copy with the user-info secret removed, keeping the user."""
        userinfo, at, hostport = self.authority.rpartition("@")
        if not at or ":" not in userinfo:
            return self
        user = userinfo.partition(":")[0]
        authority = f"{user}@{hostport}" if user else hostport
        return replace(self, authority=authority)

    def with_path(self, path: str) -> Self:
        """Return a copy with a different path component."""
        return replace(self, path=path)

    def with_fragment(self, fragment: str) -> Self:
        """Return a copy with a different fragment."""
        return replace(self, fragment=fragment)

    def with_scheme(self, scheme: str) -> Self:
        """Return a copy with a different scheme."""
        return replace(self, scheme=scheme)
