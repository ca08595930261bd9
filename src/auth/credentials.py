"""
Credential Codec

One token format is shared by the ``Authorization: Basic`` header and the
session cookie.

Token Format: base64(username:password)
"""

import base64
import binascii
from dataclasses import dataclass


class MalformedEncodingError(ValueError):
    """Raised when a credential token is not valid base64 text."""


@dataclass(frozen=True)
class Credential:
    """Username/password pair decoded from a request; never stored."""

    username: str
    password: str


def encode_credential(username: str, password: str) -> str:
    """
    Encode a username/password pair into a session token.

    Args:
        username: Account name (must not contain ':' to round-trip)
        password: Plaintext password

    Returns:
        Base64-encoded token string
    """
    token_data = f"{username}:{password}"
    return base64.b64encode(token_data.encode("utf-8")).decode("ascii")


def decode_credential(token: str) -> Credential:
    """
    Decode a session token back into a credential.

    A payload without ':' is treated as a username with an empty password.

    Args:
        token: Base64-encoded token

    Returns:
        The decoded credential

    Raises:
        MalformedEncodingError: If the token is not base64 of UTF-8 text
    """
    try:
        token_data = base64.b64decode(token.encode("ascii"), validate=True).decode("utf-8")
    except (ValueError, binascii.Error) as e:
        raise MalformedEncodingError(f"Invalid credential encoding: {e!s}") from e

    username, _, password = token_data.partition(":")
    return Credential(username, password)
