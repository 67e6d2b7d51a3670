"""FastAPI dependencies for the backend client and the cookie session."""
import httpx
from fastapi import Depends, Request

from app.backend.client import BackendClient, get_client
from app.models.user_model import SessionUser
from app.utils.security import Session
from app.utils.templating import request_session


class NotAuthenticated(Exception):
    """The page needs a signed-in user and the session carries none."""


def get_http_client() -> httpx.AsyncClient:
    return get_client()


def get_session(request: Request) -> Session:
    return request_session(request)


def get_backend(
    session: Session = Depends(get_session),
    http: httpx.AsyncClient = Depends(get_http_client),
) -> BackendClient:
    """Backend client carrying the session token."""
    return BackendClient(http, session.token)


def get_current_user(session: Session = Depends(get_session)) -> SessionUser:
    if not session.is_authenticated:
        raise NotAuthenticated()
    return session.user
