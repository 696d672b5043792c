"""Secret loading from the process environment.

Secrets are never taken from the locator itself (apart from the user
name). Each secret may be given directly, or through a ``<NAME>_FILE``
variable naming a file that holds it.
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import ClassVar, Final, Self

from pydantic import BaseModel, ConfigDict, SecretStr

from gitsource.exceptions import AuthResolutionError

HTTP_PASSWORD_VAR: Final = "GIT_HTTP_PASSWORD"
HTTP_TOKEN_VAR: Final = "GIT_HTTP_TOKEN"
SSH_KEY_VAR: Final = "GIT_SSH_KEY"

_FILE_SUFFIX: Final = "_FILE"


def read_secret(environ: Mapping[str, str], name: str) -> str | None:
    """Read a secret from ``name`` or, failing that, ``name_FILE``.

    Args:
        environ: The environment mapping to read from.
        name: The variable name.

    Returns:
        The secret, or None if neither variable is set to a non-empty value.

    Raises:
        AuthResolutionError: If ``name_FILE`` is set but cannot be read.
    """
    value = environ.get(name, "")
    if value:
        return value

    file_name = environ.get(name + _FILE_SUFFIX, "")
    if not file_name:
        return None

    try:
        contents = Path(file_name).read_text()
    except OSError as e:
        msg = f"can't read {name}{_FILE_SUFFIX} {file_name}: {e}"
        raise AuthResolutionError(msg, cause=e) from e

    # Files written by editors and secret mounts usually end in a newline
    contents = contents.rstrip("\r\n")
    return contents or None


class GitSecrets(BaseModel):
    """Credential secrets available to the auth selector.

    Attributes:
        http_password: Password for HTTP(S) basic auth.
        http_token: Bearer token for HTTP(S) token auth.
        ssh_key: Private key for SSH, raw or base64-encoded.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    http_password: SecretStr | None = None
    http_token: SecretStr | None = None
    ssh_key: SecretStr | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Self:
        """Load secrets from an environment mapping.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            The loaded secrets.
        """
        if environ is None:
            environ = os.environ

        def _secret(name: str) -> SecretStr | None:
            value = read_secret(environ, name)
            return SecretStr(value) if value is not None else None

        return cls(
            http_password=_secret(HTTP_PASSWORD_VAR),
            http_token=_secret(HTTP_TOKEN_VAR),
            ssh_key=_secret(SSH_KEY_VAR),
        )
