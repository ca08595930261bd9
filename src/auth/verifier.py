"""
Credential Verifier

Checks a username/password pair against the latest credential store
snapshot. Unknown users and wrong passwords give the same result.
"""

import enum

from core.logger import get_logger

from .passwords import check_password
from .store import CredentialStore

logger = get_logger(__name__)


class VerifyResult(enum.Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class CredentialVerifier:
    def __init__(self, store: CredentialStore):
        """
        Initialize Credential Verifier

        Args:
            store: Credential store handle, read on every call
        """
        self.store = store

    def verify(self, username: str, password: str) -> VerifyResult:
        """
        Verify credentials against the current store snapshot.

        Failures raised by the store are logged and reported as a rejection.

        Args:
            username: Submitted username
            password: Submitted password

        Returns:
            VerifyResult.ACCEPTED or VerifyResult.REJECTED
        """
        try:
            users = self.store.snapshot()
        except Exception:
            logger.exception("Credential store lookup failed; rejecting credentials")
            return VerifyResult.REJECTED

        stored = users.get(username)
        if stored is not None and check_password(password, stored):
            return VerifyResult.ACCEPTED
        return VerifyResult.REJECTED
