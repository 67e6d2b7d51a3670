import json
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import httpx
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.utils.dependencies import get_http_client
from app.utils.security import encode_user_cookie

Handler = Callable[[httpx.Request], httpx.Response]


class FakeBackend:
    """Routes backend calls to canned JSON and records every request."""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Union[Tuple[int, Any], Handler]] = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, path: str, body: Any = None, status_code: int = 200) -> None:
        if body is None:
            body = {"success": True, "message": "ok", "data": None}
        self.routes[(method.upper(), path)] = (status_code, body)

    def add_handler(self, method: str, path: str, handler: Handler) -> None:
        self.routes[(method.upper(), path)] = handler

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"success": False, "message": "Not found"})
        if callable(route):
            return route(request)
        status_code, body = route
        return httpx.Response(status_code, json=body)

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method.upper() and r.url.path == path]

    def last_json(self, method: str, path: str) -> Optional[dict]:
        calls = self.calls(method, path)
        if not calls:
            return None
        return json.loads(calls[-1].content)


def envelope(data: Any, pagination: Optional[dict] = None, message: str = "ok", **extra) -> dict:
    body = {"success": True, "message": message, "data": data}
    if pagination is not None:
        body["pagination"] = pagination
    body.update(extra)
    return body


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def client(backend):
    http = httpx.AsyncClient(transport=httpx.MockTransport(backend.handler), base_url="http://backend.test")
    app.dependency_overrides[get_http_client] = lambda: http
    yield TestClient(app)
    app.dependency_overrides.clear()


def login_as(client: TestClient, role: str, user_id: str = "u1", name: str = "Reader", token: str = "test-token"):
    client.cookies.set("token", token)
    client.cookies.set("role", role)
    client.cookies.set("user", encode_user_cookie({"_id": user_id, "name": name, "role": role}))
    return client


@pytest.fixture
def admin_client(client):
    return login_as(client, "admin", user_id="admin1", name="Admin")


@pytest.fixture
def user_client(client):
    return login_as(client, "user")
