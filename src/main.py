"""
AuthGate — Authentication Gateway

FastAPI application whose every route sits behind the authentication gate.
Browsers sign in through /login and carry a session cookie; API clients
send an ``Authorization: Basic`` header.

Usage:
    uvicorn main:app --host 0.0.0.0 --port 8080 --reload

Or run directly:
    python main.py
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from auth import AuthGateMiddleware, CredentialVerifier, build_credential_store, get_credential_store
from core.logger import get_logger, setup_logging
from core.settings import Settings, get_settings
from routers import app_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Configures logging and reports the configuration the app was built with.
    """
    settings: Settings = app.state.settings

    setup_logging(settings.debug)

    logger.info("=" * 60)
    logger.info("AuthGate Starting")
    logger.info("=" * 60)
    logger.info(f"Listening on: http://{settings.server_host}:{settings.server_port}")
    logger.info(f"Debug: {settings.debug}")
    logger.info(f"Auth: {'Enabled' if settings.auth_enabled else 'Disabled'}")
    if settings.auth_enabled:
        logger.info(f"Login path: {settings.auth_login_path}")
        logger.info(f"Session cookie: {settings.auth_cookie_name}")
        logger.info(f"Users: {settings.auth_users_file or 'AUTH_USERS'}")
    logger.info("=" * 60)

    yield

    logger.info("Shutting down...")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application, wrapped by the authentication gate when enabled.

    Args:
        settings: Settings to use (defaults to the cached environment settings
            and the global credential store)

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()
        store = get_credential_store() if settings.auth_enabled else None
    else:
        store = build_credential_store(settings) if settings.auth_enabled else None

    app = FastAPI(
        title="AuthGate",
        description="""
    Authentication gateway in front of the application.

    ## Sign in

    - `GET /login` - Sign-in form (`?error=1` shows the error banner)
    - `POST /login` - Form submission; sets the session cookie and redirects to `/`

    ## Credentials

    - `Authorization: Basic <base64(username:password)>` - API clients
    - Session cookie carrying the same token - browsers

    Requests without credentials are redirected to `/login`;
    invalid credentials redirect to `/login?error=1`.
    """,
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.include_router(app_router)

    if store is not None:
        app.add_middleware(
            AuthGateMiddleware,
            verifier=CredentialVerifier(store),
            login_path=settings.auth_login_path,
            cookie_name=settings.auth_cookie_name,
        )
    else:
        logger.warning("Authentication disabled: all routes are public")

    return app


app = create_app()


if __name__ == "__main__":
    settings = app.state.settings

    # Configure logging BEFORE uvicorn starts
    # This ensures we control the handlers, not uvicorn
    setup_logging(settings.debug)

    uvicorn.run(
        app,
        host=settings.server_host,
        port=settings.server_port,
        reload=False,  # Reload doesn't work with app object, use uvicorn CLI for dev
        log_level="debug" if settings.debug else "info",
        log_config=None,  # Prevent uvicorn from overwriting our logging config
    )
