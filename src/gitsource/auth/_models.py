"""Transport credential models.

Each credential type maps onto one way of authenticating a git transport.
Anonymous access is represented by ``None`` rather than a credential.
"""

from dataclasses import dataclass, field

import paramiko


@dataclass(frozen=True, slots=True)
class BasicAuth:
    """HTTP basic authentication.

    Attributes:
        username: User name from the locator user-info (may be empty).
        password: Password or personal access token.
    """

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class TokenAuth:
    """HTTP bearer token authentication.

    Attributes:
        token: The bearer token sent in the ``Authorization`` header.
    """

    token: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class PublicKeysAuth:
    """SSH public key authentication with an in-memory private key.

    Attributes:
        username: SSH user name, or None to let the client decide.
        key: The parsed private key.
    """

    username: str | None
    key: paramiko.PKey = field(repr=False)


@dataclass(frozen=True, slots=True)
class SSHAgentAuth:
    """SSH authentication through a running ssh-agent.

    Attributes:
        username: SSH user name, or None to let the client decide.
    """

    username: str | None


type Credential = BasicAuth | TokenAuth | PublicKeysAuth | SSHAgentAuth
