"""Credential selection per transport.

Auth methods:
- ssh private key from GIT_SSH_KEY (base64-encoded or raw, no passphrase)
- ssh agent auth when no key is configured
- http basic auth (GitHub, GitLab and Bitbucket tokens go here too)
- http bearer token auth (rarely needed)
"""

import base64
import binascii
import io
from typing import Final

import paramiko

from gitsource.auth._models import (
    BasicAuth,
    Credential,
    PublicKeysAuth,
    SSHAgentAuth,
    TokenAuth,
)
from gitsource.auth._secrets import GitSecrets
from gitsource.exceptions import AuthResolutionError
from gitsource.locator import CompositeLocator, TransportKind

# Tried in order; each raises SSHException when the text is another type.
_KEY_TYPES: Final[tuple[type[paramiko.PKey], ...]] = (
    paramiko.Ed25519Key,
    paramiko.ECDSAKey,
    paramiko.RSAKey,
)


def decode_key_material(value: str) -> bytes:
    """Decode key material that may or may not be base64-encoded.

    Line breaks and other whitespace are ignored when decoding, so output
    wrapped by ``base64`` or ``openssl base64`` is accepted.

    Args:
        value: The secret as configured.

    Returns:
        The decoded bytes, or the raw text encoded as UTF-8 when the value
        is not valid base64.
    """
    try:
        return base64.b64decode("".join(value.split()), validate=True)
    except (binascii.Error, ValueError):
        return value.encode()


def load_private_key(material: bytes) -> paramiko.PKey:
    """Parse an unencrypted private key in PEM or OpenSSH format.

    Args:
        material: The key file contents.

    Returns:
        The parsed key.

    Raises:
        AuthResolutionError: If the material is not a supported private key.
    """
    try:
        text = material.decode()
    except UnicodeDecodeError as e:
        msg = f"ssh key is not valid text: {e}"
        raise AuthResolutionError(msg, cause=e) from e

    last_error: Exception | None = None
    for key_type in _KEY_TYPES:
        try:
            return key_type.from_private_key(io.StringIO(text))
        except (paramiko.SSHException, ValueError) as e:
            last_error = e

    msg = f"ssh key could not be parsed: {last_error}"
    raise AuthResolutionError(msg, cause=last_error)


def select_auth(locator: CompositeLocator, secrets: GitSecrets) -> Credential | None:
    """Choose the credential for a repository locator.

    Args:
        locator: The repository-base locator. Only its transport and
            user-info username are consulted.
        secrets: Secrets loaded from the environment.

    Returns:
        A transport-specific credential, or None for anonymous access.

    Raises:
        AuthResolutionError: If an SSH key is configured but malformed.
        TransportUnsupportedError: If the locator transport is unknown.
    """
    transport = locator.transport
    username = locator.username

    if transport.is_http:
        if secrets.http_password is not None:
            return BasicAuth(
                username=username or "",
                password=secrets.http_password.get_secret_value(),
            )
        if secrets.http_token is not None:
            return TokenAuth(token=secrets.http_token.get_secret_value())
        return None

    if transport is TransportKind.SSH:
        if secrets.ssh_key is None:
            return SSHAgentAuth(username=username)
        material = decode_key_material(secrets.ssh_key.get_secret_value())
        try:
            key = load_private_key(material)
        except AuthResolutionError as e:
            msg = f"auth for {locator.redacted()} failed: {e}"
            raise AuthResolutionError(msg, locator=locator.redacted(), cause=e.cause) from e
        return PublicKeysAuth(username=username, key=key)

    # file and native git transports take no credentials
    return None
