"""Jinja2 environment and response helpers shared by the page routers."""
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings
from app.utils.flash import Flash, clear_flash, flash, read_flash
from app.utils.formatting import absolute_date, long_date, relative_date, short_date
from app.utils.list_controller import ListPage
from app.utils.security import Session, read_session

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["relative_date"] = relative_date
templates.env.filters["absolute_date"] = absolute_date
templates.env.filters["long_date"] = long_date
templates.env.filters["short_date"] = short_date
templates.env.globals["settings"] = settings


def request_session(request: Request) -> Session:
    session = getattr(request.state, "session", None)
    if session is None:
        session = read_session(request.cookies)
        request.state.session = session
    return session


def render(
    request: Request,
    name: str,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
    message: Optional[Flash] = None,
) -> Response:
    """Render ``name``; a pending flash cookie is shown once, beside ``message``, and then cleared."""
    pending = read_flash(request)
    ctx: Dict[str, Any] = dict(context or {})
    ctx.setdefault("session", request_session(request))
    ctx["flashes"] = [f for f in (pending, message) if f]
    response = templates.TemplateResponse(request, name, ctx, status_code=status_code)
    if pending:
        clear_flash(response)
    return response


def redirect(url: str, message: Optional[str] = None, level: str = "success") -> RedirectResponse:
    response = RedirectResponse(url=url, status_code=303)
    if message:
        flash(response, message, level)
    return response


def error_flash(message: str) -> Flash:
    return Flash(message=message, level="error")


def render_list(request: Request, name: str, page: ListPage, context: Optional[Dict[str, Any]] = None) -> Response:
    """Render a list page; a failed fetch is reported through the flash slot."""
    ctx = {"page": page, "next_url": page.url_for_page(page.page)}
    ctx.update(context or {})
    return render(request, name, ctx, message=error_flash(page.error) if page.error else None)
