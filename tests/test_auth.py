from app.utils.security import parse_user_cookie
from tests.conftest import envelope

READER = {"_id": "u9", "name": "Reader", "email": "reader@bookworm.io", "role": "user"}


def _login_response(user):
    return envelope(None, message="Login successful", token="jwt-token", user=user)


def test_login_sets_session_cookies(client, backend):
    backend.add("POST", "/api/v1/user/login", _login_response(READER))
    response = client.post(
        "/login", data={"email": "reader@bookworm.io", "password": "secret"}, follow_redirects=False
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/user/library"
    assert response.cookies["token"] == "jwt-token"
    assert response.cookies["role"] == "user"
    assert parse_user_cookie(response.cookies["user"]).id == "u9"
    assert backend.last_json("POST", "/api/v1/user/login") == {"email": "reader@bookworm.io", "password": "secret"}


def test_admin_login_goes_to_dashboard(client, backend):
    backend.add("POST", "/api/v1/user/login", _login_response(dict(READER, role="admin")))
    response = client.post(
        "/login", data={"email": "reader@bookworm.io", "password": "secret"}, follow_redirects=False
    )

    assert response.headers["location"] == "/admin/dashboard"


def test_login_failure_shows_backend_message(client, backend):
    backend.add("POST", "/api/v1/user/login", {"success": False, "message": "Invalid credentials"}, status_code=401)
    response = client.post("/login", data={"email": "reader@bookworm.io", "password": "wrong"})

    assert response.status_code == 400
    assert "Invalid credentials" in response.text
    assert "token" not in response.cookies


def test_login_requires_password(client, backend):
    response = client.post("/login", data={"email": "reader@bookworm.io", "password": ""})

    assert response.status_code == 422
    assert "Password is required" in response.text
    assert backend.calls("POST", "/api/v1/user/login") == []


def test_register_validation(client, backend):
    response = client.post("/register", data={"name": " ", "email": "reader@bookworm.io", "password": "secret"})

    assert response.status_code == 422
    assert "Name is required" in response.text
    assert backend.calls("POST", "/api/v1/user/register") == []


def test_register_success_returns_to_login(client, backend):
    backend.add("POST", "/api/v1/user/register", envelope(None, message="Registered"))
    response = client.post(
        "/register",
        data={"name": "Reader", "email": "reader@bookworm.io", "password": "secret"},
        follow_redirects=False,
    )

    assert response.headers["location"] == "/login"
    assert backend.last_json("POST", "/api/v1/user/register") == {
        "name": "Reader",
        "email": "reader@bookworm.io",
        "password": "secret",
    }


def test_logout_clears_session(user_client):
    response = user_client.post("/logout", follow_redirects=False)

    assert response.headers["location"] == "/login"
    cleared = [h for h in response.headers.get_list("set-cookie") if "Max-Age=0" in h]
    assert {h.split("=", 1)[0] for h in cleared} == {"token", "role", "user"}
