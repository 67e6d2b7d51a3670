"""FastAPI entrypoint for the Bookworm web app."""
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.backend.client import close_client, init_client
from app.config import settings
from app.routers import (
    admin_books,
    admin_dashboard,
    admin_genres,
    admin_reviews,
    admin_tutorials,
    admin_users,
    auth,
    user_books,
    user_home,
    user_library,
    user_tutorials,
)
from app.utils.dependencies import NotAuthenticated
from app.utils.logger import get_logger
from app.utils.security import LOGIN_PATH, SESSION_COOKIES, guard_redirect, read_session
from app.utils.templating import redirect, render

logger = get_logger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_client()
    yield
    await close_client()


app = FastAPI(
    title="Bookworm",
    version="0.1.0",
    description="Book catalog admin panel and reader library over the Bookworm REST API.",
    lifespan=lifespan,
)

app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


@app.middleware("http")
async def route_guard(request: Request, call_next):
    """Role-based redirects for /, /login, /register, /user/* and /admin/*."""
    session = read_session(request.cookies)
    request.state.session = session
    target = guard_redirect(request.url.path, session)
    if target:
        logger.debug("Guard: %s -> %s", request.url.path, target)
        return RedirectResponse(url=target, status_code=303)
    return await call_next(request)


@app.exception_handler(NotAuthenticated)
async def not_authenticated_handler(request: Request, exc: NotAuthenticated):
    response = redirect(LOGIN_PATH, "User not authenticated", "error")
    for name in SESSION_COOKIES:
        response.delete_cookie(name, path="/")
    return response


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and request.url.path.startswith(("/admin", "/user")):
        return render(request, "not_found.html", status_code=404)
    return await http_exception_handler(request, exc)


@app.get("/health", tags=["health"])
async def healthcheck():
    """Basic health check."""
    return {"status": "ok", "env": settings.app_env}


app.include_router(auth.router, tags=["auth"])
app.include_router(admin_dashboard.router, prefix="/admin/dashboard", tags=["admin"])
app.include_router(admin_books.router, prefix="/admin/books", tags=["admin"])
app.include_router(admin_genres.router, prefix="/admin/genres", tags=["admin"])
app.include_router(admin_users.router, prefix="/admin/users", tags=["admin"])
app.include_router(admin_reviews.router, prefix="/admin/reviews", tags=["admin"])
app.include_router(admin_tutorials.router, prefix="/admin/tutorial", tags=["admin"])
app.include_router(user_home.router, prefix="/user/home", tags=["user"])
app.include_router(user_books.router, prefix="/user/books", tags=["user"])
app.include_router(user_library.router, prefix="/user/library", tags=["user"])
app.include_router(user_tutorials.router, prefix="/user/tutorials", tags=["user"])
