"""Login and registration against the backend user endpoints."""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from app.backend.client import BackendClient, BackendError
from app.models.user_model import LoginForm, RegisterForm
from app.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class LoginResult:
    token: str
    user: Dict[str, Any]
    message: Optional[str] = None

    @property
    def role(self) -> str:
        return self.user.get("role") or "user"


async def login(api: BackendClient, form: LoginForm) -> LoginResult:
    """Authenticate; the backend returns ``token`` and ``user`` beside the envelope."""
    response = await api.post(
        "/api/v1/user/login",
        "Login failed",
        json={"email": form.email, "password": form.password},
    )
    token = response.raw.get("token")
    user = response.raw.get("user")
    if not token or not isinstance(user, dict):
        raise BackendError(response.message or "Login failed")
    logger.info("User %s signed in", form.email)
    return LoginResult(token=token, user=user, message=response.message)


async def register(api: BackendClient, form: RegisterForm) -> Optional[str]:
    payload: Dict[str, Any] = {"name": form.name, "email": form.email, "password": form.password}
    if form.photo:
        payload["photo"] = form.photo
    response = await api.post("/api/v1/user/register", "Registration failed", json=payload)
    logger.info("Registered %s", form.email)
    return response.message
