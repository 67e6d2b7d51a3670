import asyncio
import time

import pytest
from jose import jwt

from app.main import not_authenticated_handler
from app.models.user_model import SessionUser
from app.utils.dependencies import NotAuthenticated
from app.utils.security import (
    Session,
    encode_user_cookie,
    guard_redirect,
    is_token_expired,
    parse_user_cookie,
    read_session,
)


def _token(exp_offset: int) -> str:
    return jwt.encode({"sub": "u1", "exp": int(time.time()) + exp_offset}, "secret", algorithm="HS256")


def _signed_in(role: str) -> Session:
    return Session(token="t", role=role, user=SessionUser(id="u1", role=role))


@pytest.mark.parametrize(
    "path, session, expected",
    [
        ("/", Session(), "/login"),
        ("/", _signed_in("admin"), "/admin/dashboard"),
        ("/", _signed_in("user"), "/user/library"),
        ("/login", Session(), None),
        ("/login", _signed_in("admin"), "/admin/dashboard"),
        ("/register", _signed_in("user"), "/user/library"),
        ("/admin/books", Session(), "/login"),
        ("/admin/books", _signed_in("user"), "/user/library"),
        ("/admin/books", _signed_in("admin"), None),
        ("/user/home", _signed_in("admin"), "/admin/dashboard"),
        ("/user/home", _signed_in("user"), None),
        ("/health", Session(), None),
        ("/static/css/app.css", Session(), None),
        ("/users", Session(), None),
    ],
)
def test_guard_redirect(path, session, expected):
    assert guard_redirect(path, session) == expected


def test_is_token_expired():
    assert is_token_expired(_token(-60))
    assert not is_token_expired(_token(3600))
    assert not is_token_expired("opaque-session-token")


def test_expired_token_counts_as_absent():
    session = read_session({"token": _token(-60), "role": "admin"})
    assert session.token is None
    assert guard_redirect("/admin/books", session) == "/login"


def test_user_cookie_accepts_either_id_key():
    assert parse_user_cookie(encode_user_cookie({"_id": "a1", "name": "Ann"})).id == "a1"
    assert parse_user_cookie(encode_user_cookie({"id": "b2", "name": "Bob"})).id == "b2"
    assert parse_user_cookie("not-json") is None


def test_root_without_token_redirects_to_login(client):
    response = client.get("/", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/login"


def test_admin_is_kept_out_of_user_pages(admin_client):
    response = admin_client.get("/user/home", follow_redirects=False)
    assert response.headers["location"] == "/admin/dashboard"


def test_reader_is_kept_out_of_admin_pages(user_client):
    response = user_client.get("/admin/books", follow_redirects=False)
    assert response.headers["location"] == "/user/library"


def test_logged_in_user_skips_login_page(user_client):
    response = user_client.get("/login", follow_redirects=False)
    assert response.headers["location"] == "/user/library"


def test_health_is_not_guarded(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_token_without_user_is_not_signed_in():
    session = read_session({"token": "opaque-token", "role": "user", "user": "not-json"})
    assert not session.is_authenticated
    assert guard_redirect("/user/library", session) == "/login"
    assert guard_redirect("/login", session) is None


def test_broken_user_cookie_lands_on_login_page(client):
    client.cookies.set("token", "opaque-token")
    client.cookies.set("role", "user")
    client.cookies.set("user", "not-json")
    response = client.get("/user/library")

    assert response.status_code == 200
    assert str(response.url).endswith("/login")
    assert len(response.history) == 1


def test_not_authenticated_handler_clears_session_cookies():
    response = asyncio.run(not_authenticated_handler(None, NotAuthenticated()))

    assert response.headers["location"] == "/login"
    cleared = [h for h in response.headers.getlist("set-cookie") if "Max-Age=0" in h]
    assert {h.split("=", 1)[0] for h in cleared} == {"token", "role", "user"}
