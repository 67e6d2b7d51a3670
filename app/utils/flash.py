"""One-shot notifications carried across a redirect in a short-lived cookie."""
import json
from typing import Optional, TypedDict
from urllib.parse import quote, unquote

from starlette.requests import Request
from starlette.responses import Response

from app.config import settings

FLASH_COOKIE = "flash"


class Flash(TypedDict):
    message: str
    level: str


def flash(response: Response, message: str, level: str = "success") -> Response:
    response.set_cookie(
        FLASH_COOKIE,
        quote(json.dumps({"message": message, "level": level}), safe=""),
        max_age=settings.flash_max_age,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )
    return response


def read_flash(request: Request) -> Optional[Flash]:
    raw = request.cookies.get(FLASH_COOKIE)
    if not raw:
        return None
    try:
        data = json.loads(unquote(raw))
    except ValueError:
        return None
    if not isinstance(data, dict) or not data.get("message"):
        return None
    return Flash(message=str(data["message"]), level=str(data.get("level") or "success"))


def clear_flash(response: Response) -> None:
    response.delete_cookie(FLASH_COOKIE, path="/")
