"""
Authentication Module

Gate in front of the application:
1. Login Form - HTML sign-in page and form submission
2. Credential Codec - One base64 token for the Basic header and the session cookie
3. Verification - Against a live, read-only credential store
4. Forwarding - Authenticated username attached to the request
"""

from .credentials import Credential, MalformedEncodingError, decode_credential, encode_credential
from .dependencies import build_credential_store, get_credential_store, get_current_username
from .middleware import AuthGateMiddleware, GateOutcome
from .store import CredentialStore, FileCredentialStore, StaticCredentialStore, parse_users
from .verifier import CredentialVerifier, VerifyResult

__all__ = [
    "AuthGateMiddleware",
    "Credential",
    "CredentialStore",
    "CredentialVerifier",
    "FileCredentialStore",
    "GateOutcome",
    "MalformedEncodingError",
    "StaticCredentialStore",
    "VerifyResult",
    "build_credential_store",
    "decode_credential",
    "encode_credential",
    "get_credential_store",
    "get_current_username",
    "parse_users",
]
