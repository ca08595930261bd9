"""
Password Hashing

Stored secrets are either plaintext or PBKDF2-SHA256 hashes.

Hash Format: pbkdf2_sha256$<iterations>$<salt-b64>$<hash-b64>
"""

import base64
import binascii
import hashlib
import hmac
import secrets

HASH_PREFIX = "pbkdf2_sha256"
DEFAULT_ITERATIONS = 4096
SALT_BYTES = 16


def _pbkdf2(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)


def hash_password(password: str, iterations: int = DEFAULT_ITERATIONS, salt: bytes | None = None) -> str:
    """
    Hash a password for storage in a users file.

    Args:
        password: Plaintext password
        iterations: PBKDF2 iteration count
        salt: Salt bytes (random when omitted)

    Returns:
        Encoded hash string
    """
    if iterations < 1:
        raise ValueError("iterations must be positive")
    if salt is None:
        salt = secrets.token_bytes(SALT_BYTES)
    digest = _pbkdf2(password, salt, iterations)
    return "$".join(
        [
            HASH_PREFIX,
            str(iterations),
            base64.b64encode(salt).decode("ascii"),
            base64.b64encode(digest).decode("ascii"),
        ]
    )


def is_hashed(stored: str) -> bool:
    return stored.startswith(HASH_PREFIX + "$")


def check_password(password: str, stored: str) -> bool:
    """
    Compare a submitted password with a stored secret in constant time.

    A stored value that looks hashed but is not well formed never matches.

    Args:
        password: Submitted plaintext password
        stored: Plaintext secret or encoded hash from the credential store

    Returns:
        True if the password matches
    """
    if not is_hashed(stored):
        return hmac.compare_digest(password.encode("utf-8"), stored.encode("utf-8"))

    try:
        _, iterations_str, salt_b64, digest_b64 = stored.split("$")
        iterations = int(iterations_str)
        salt = base64.b64decode(salt_b64, validate=True)
        expected = base64.b64decode(digest_b64, validate=True)
    except (ValueError, binascii.Error):
        return False
    if iterations < 1:
        return False

    return hmac.compare_digest(_pbkdf2(password, salt, iterations), expected)
