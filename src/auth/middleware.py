"""
Authentication Gate Middleware

Pure ASGI middleware that lets a request reach the wrapped application only
after its credentials have been verified.

Request handling:
1. Login endpoint - GET renders the sign-in form, POST checks the submitted
   form and sets the session cookie
2. Credential extraction - ``Authorization: Basic`` header first, then the
   session cookie; both carry the same token format
3. Verification - against the current credential store snapshot
4. Forwarding - the username is attached to the scope as ``scope["user"]``

Nothing is stored between requests: every request is verified again.
"""

import enum

from starlette.authentication import AuthCredentials, SimpleUser
from starlette.requests import HTTPConnection, Request
from starlette.responses import HTMLResponse, RedirectResponse
from starlette.types import ASGIApp, Receive, Scope, Send
from starlette.websockets import WebSocketClose

from core.logger import get_logger

from .cookies import get_cookie
from .credentials import Credential, MalformedEncodingError, decode_credential, encode_credential
from .form import parse_form
from .login_page import render_login_page
from .verifier import CredentialVerifier, VerifyResult

logger = get_logger(__name__)

BASIC_PREFIX = "Basic "
DEFAULT_COOKIE_NAME = "authgate_session"


class GateOutcome(enum.Enum):
    MISSING_CREDENTIALS = "missing_credentials"
    INVALID_CREDENTIALS = "invalid_credentials"
    FORWARDED = "forwarded"


class AuthGateMiddleware:
    def __init__(
        self,
        app: ASGIApp,
        verifier: CredentialVerifier,
        login_path: str = "/login",
        cookie_name: str = DEFAULT_COOKIE_NAME,
    ):
        """
        Initialize Authentication Gate

        Args:
            app: Downstream ASGI application, only reached by authenticated requests
            verifier: Credential verifier backed by the user store
            login_path: Path of the login endpoint (without trailing slash)
            cookie_name: Name of the session cookie
        """
        self.app = app
        self.verifier = verifier
        self.login_path = login_path
        self.cookie_name = cookie_name
        self.login_paths = {login_path, login_path + "/"}
        self.error_location = f"{login_path}?error=1"

        logger.info(f"AuthGateMiddleware initialized (login path {login_path}, cookie {cookie_name})")

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        if scope["type"] == "http" and scope["path"] in self.login_paths:
            if scope["method"] == "GET":
                await self.login_page(scope, receive, send)
                return
            if scope["method"] == "POST":
                await self.login_submit(scope, receive, send)
                return
            # Other methods fall through and are answered downstream

        outcome, username = self.authenticate(HTTPConnection(scope))

        if outcome is GateOutcome.FORWARDED:
            logger.debug(f"Forwarding {scope['path']} for user {username}")
            scope = dict(scope)
            scope["user"] = SimpleUser(username)
            scope["auth"] = AuthCredentials(["authenticated"])
            await self.app(scope, receive, send)
            return

        if scope["type"] == "websocket":
            reason = "Missing credentials" if outcome is GateOutcome.MISSING_CREDENTIALS else "Invalid credentials"
            await WebSocketClose(code=1008, reason=reason)(scope, receive, send)
            return

        location = self.login_path if outcome is GateOutcome.MISSING_CREDENTIALS else self.error_location
        response = RedirectResponse(location, status_code=303)
        await response(scope, receive, send)

    async def login_page(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        show_error = "error" in request.query_params
        response = HTMLResponse(render_login_page(show_error, self.login_path))
        await response(scope, receive, send)

    async def login_submit(self, scope: Scope, receive: Receive, send: Send) -> None:
        """
        Handle a submitted login form.

        Valid credentials redirect to '/' with the session cookie set;
        anything else redirects back to the login page with the error flag.
        """
        request = Request(scope, receive)
        fields = parse_form(await request.body())
        username = fields.get("username", "")
        password = fields.get("password", "")

        if self.verifier.verify(username, password) is VerifyResult.ACCEPTED:
            logger.info(f"Login succeeded for user {username}")
            token = encode_credential(username, password)
            response = RedirectResponse(
                "/",
                status_code=303,
                headers={"set-cookie": f"{self.cookie_name}={token}; HttpOnly; Path=/"},
            )
        else:
            logger.warning(f"Login failed for user {username}")
            response = RedirectResponse(self.error_location, status_code=303)

        await response(scope, receive, send)

    def extract_tokens(self, connection: HTTPConnection) -> list[str]:
        """
        Collect credential tokens in lookup order: Authorization header, then cookie.

        Args:
            connection: Incoming HTTP or WebSocket connection

        Returns:
            Tokens found (empty when the request carries no credentials)
        """
        tokens = []

        auth_header = connection.headers.get("authorization")
        if auth_header and auth_header.startswith(BASIC_PREFIX) and len(auth_header) > len(BASIC_PREFIX):
            tokens.append(auth_header[len(BASIC_PREFIX):])

        cookie = get_cookie(connection.headers.get("cookie"), self.cookie_name)
        if cookie is not None:
            tokens.append(cookie)

        return tokens

    def decode_first(self, tokens: list[str]) -> Credential | None:
        for token in tokens:
            try:
                return decode_credential(token)
            except MalformedEncodingError:
                continue
        return None

    def authenticate(self, connection: HTTPConnection) -> tuple[GateOutcome, str | None]:
        """
        Authenticate a request for a protected resource.

        Undecodable tokens and rejected credentials give the same outcome so
        the client cannot tell them apart.

        Args:
            connection: Incoming HTTP or WebSocket connection

        Returns:
            Tuple of (outcome, username)
        """
        tokens = self.extract_tokens(connection)
        if not tokens:
            return GateOutcome.MISSING_CREDENTIALS, None

        credential = self.decode_first(tokens)
        if credential is None:
            logger.warning(f"Malformed credentials for {connection.url.path}")
            return GateOutcome.INVALID_CREDENTIALS, None

        if self.verifier.verify(credential.username, credential.password) is not VerifyResult.ACCEPTED:
            logger.warning(f"Rejected credentials for user {credential.username} on {connection.url.path}")
            return GateOutcome.INVALID_CREDENTIALS, credential.username

        return GateOutcome.FORWARDED, credential.username
