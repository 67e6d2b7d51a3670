"""Session cookies and role-based route guarding."""
import json
import time
from dataclasses import dataclass
from typing import Mapping, Optional
from urllib.parse import quote, unquote

from jose import JWTError, jwt
from pydantic import ValidationError

from app.models.user_model import SessionUser

TOKEN_COOKIE = "token"
ROLE_COOKIE = "role"
USER_COOKIE = "user"
SESSION_COOKIES = (TOKEN_COOKIE, ROLE_COOKIE, USER_COOKIE)

ADMIN_HOME = "/admin/dashboard"
USER_HOME = "/user/library"
LOGIN_PATH = "/login"
PUBLIC_ROUTES = ("/login", "/register")


def is_token_expired(token: str, now: Optional[float] = None) -> bool:
    """True when ``token`` is a JWT whose ``exp`` has passed.

    Tokens are signed by the backend, so only the claims are read here. Opaque
    tokens are treated as valid and left for the backend to reject.
    """
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        return False
    exp = claims.get("exp")
    if exp is None:
        return False
    try:
        return float(exp) <= (now if now is not None else time.time())
    except (TypeError, ValueError):
        return False


def encode_user_cookie(user: Mapping) -> str:
    return quote(json.dumps(dict(user)), safe="")


def parse_user_cookie(value: Optional[str]) -> Optional[SessionUser]:
    if not value:
        return None
    try:
        return SessionUser.model_validate(json.loads(unquote(value)))
    except (ValueError, ValidationError):
        return None


@dataclass
class Session:
    token: Optional[str] = None
    role: Optional[str] = None
    user: Optional[SessionUser] = None

    @property
    def is_authenticated(self) -> bool:
        # A token without a readable user cookie is a broken session.
        return bool(self.token) and bool(self.user_id)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def user_id(self) -> Optional[str]:
        return self.user.id if self.user else None


def read_session(cookies: Mapping[str, str]) -> Session:
    token = cookies.get(TOKEN_COOKIE) or None
    if token and is_token_expired(token):
        token = None
    return Session(
        token=token,
        role=cookies.get(ROLE_COOKIE) or None,
        user=parse_user_cookie(cookies.get(USER_COOKIE)),
    )


def home_for(role: Optional[str]) -> str:
    return ADMIN_HOME if role == "admin" else USER_HOME


def is_guarded(path: str) -> bool:
    if path == "/" or path in PUBLIC_ROUTES:
        return True
    return any(path == prefix or path.startswith(prefix + "/") for prefix in ("/admin", "/user"))


def guard_redirect(path: str, session: Session) -> Optional[str]:
    """Where a request for ``path`` must be redirected, or None to let it through."""
    if not is_guarded(path):
        return None

    if path in PUBLIC_ROUTES:
        return home_for(session.role) if session.is_authenticated else None

    if not session.is_authenticated:
        return LOGIN_PATH

    if path == "/":
        return home_for(session.role)

    if path.startswith("/admin") and not session.is_admin:
        return USER_HOME
    if path.startswith("/user") and session.is_admin:
        return ADMIN_HOME
    return None
