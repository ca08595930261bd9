from functools import lru_cache

from fastapi import HTTPException, Request

from core.logger import get_logger
from core.settings import Settings, get_settings

from .store import CredentialStore, FileCredentialStore, StaticCredentialStore, parse_users

logger = get_logger(__name__)


def build_credential_store(settings: Settings) -> CredentialStore:
    """
    Create the credential store described by the settings.

    A configured users file takes precedence over inline AUTH_USERS.
    """
    users_file = settings.resolved_users_file
    if users_file is not None:
        logger.info(f"Using users file: {users_file}")
        return FileCredentialStore(users_file)

    users = parse_users(settings.auth_users)
    if users.get("admin") == "":
        logger.warning("User 'admin' has an empty password (not suitable for production)")
        logger.warning("Set AUTH_USERS=admin:<password> or AUTH_USERS_FILE in your .env file")
    return StaticCredentialStore(users)


@lru_cache
def get_credential_store() -> CredentialStore:
    """
    Get or create the global credential store.
    """
    return build_credential_store(get_settings())


def get_current_username(request: Request) -> str:
    """Username attached by the authentication gate."""
    if "user" not in request.scope or not request.user.is_authenticated:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return request.user.username
