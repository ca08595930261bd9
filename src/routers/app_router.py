from fastapi import APIRouter, Depends, Request

from auth import get_current_username


app_router = APIRouter(tags=["app"])


@app_router.get("/")
async def root(request: Request, username: str = Depends(get_current_username)):
    """Root endpoint with server information."""
    return {
        "name": "AuthGate",
        "version": request.app.version,
        "user": username,
    }


@app_router.get("/inf")
async def info(request: Request, username: str = Depends(get_current_username)):
    """Server information; debug mode adds the gate configuration."""
    settings = request.app.state.settings
    response = {
        "name": "AuthGate",
        "version": request.app.version,
        "status": "running",
    }

    if settings.debug:
        response["user"] = username
        response["login_path"] = settings.auth_login_path
        response["cookie_name"] = settings.auth_cookie_name
        response["users_source"] = settings.auth_users_file or "AUTH_USERS"

    return response


@app_router.get("/api/whoami")
async def whoami(username: str = Depends(get_current_username)):
    return {"username": username}


@app_router.get("/health")
async def health_check():
    return {"status": "healthy"}
