"""Transport credential resolution.

Classes:
    BasicAuth, TokenAuth: HTTP(S) credentials.
    PublicKeysAuth, SSHAgentAuth: SSH credentials.
    GitSecrets: Secrets loaded from the environment.

Functions:
    select_auth: Pick the credential for a locator's transport.
"""

from gitsource.auth._models import (
    BasicAuth,
    Credential,
    PublicKeysAuth,
    SSHAgentAuth,
    TokenAuth,
)
from gitsource.auth._secrets import (
    HTTP_PASSWORD_VAR,
    HTTP_TOKEN_VAR,
    SSH_KEY_VAR,
    GitSecrets,
    read_secret,
)
from gitsource.auth._selector import decode_key_material, load_private_key, select_auth

__all__ = [
    "HTTP_PASSWORD_VAR",
    "HTTP_TOKEN_VAR",
    "SSH_KEY_VAR",
    "BasicAuth",
    "Credential",
    "GitSecrets",
    "PublicKeysAuth",
    "SSHAgentAuth",
    "TokenAuth",
    "decode_key_material",
    "load_private_key",
    "read_secret",
    "select_auth",
]
