"""Login, registration and logout pages."""
from typing import Dict, Optional

import httpx
from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from pydantic import ValidationError

from app.backend.client import BackendClient, BackendError
from app.config import settings
from app.models.user_model import LoginForm, RegisterForm
from app.services import auth_service, upload_service
from app.utils.dependencies import get_backend, get_http_client
from app.utils.forms import form_errors
from app.utils.security import (
    LOGIN_PATH,
    ROLE_COOKIE,
    SESSION_COOKIES,
    TOKEN_COOKIE,
    USER_COOKIE,
    encode_user_cookie,
    home_for,
)
from app.utils.templating import error_flash, redirect, render

router = APIRouter()


def _render(
    request: Request,
    name: str,
    values: Dict[str, str],
    errors: Optional[Dict[str, str]] = None,
    status_code: int = 200,
    message: Optional[str] = None,
):
    return render(
        request,
        name,
        {"values": values, "errors": errors or {}},
        status_code=status_code,
        message=error_flash(message) if message else None,
    )


@router.get("/login")
async def login_page(request: Request):
    return _render(request, "auth/login.html", {"email": ""})


@router.post("/login")
async def login(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    api: BackendClient = Depends(get_backend),
):
    values = {"email": email}
    try:
        form = LoginForm(email=email, password=password)
    except ValidationError as exc:
        return _render(request, "auth/login.html", values, errors=form_errors(exc), status_code=422)

    try:
        result = await auth_service.login(api, form)
    except BackendError as exc:
        return _render(request, "auth/login.html", values, status_code=400, message=exc.message)

    response = redirect(home_for(result.role), result.message or "Login successful")
    cookie_options = {"path": "/", "httponly": True, "samesite": "lax", "secure": settings.cookie_secure}
    response.set_cookie(TOKEN_COOKIE, result.token, **cookie_options)
    response.set_cookie(ROLE_COOKIE, result.role, **cookie_options)
    response.set_cookie(USER_COOKIE, encode_user_cookie(result.user), **cookie_options)
    return response


@router.get("/register")
async def register_page(request: Request):
    return _render(request, "auth/register.html", {"name": "", "email": "", "photo": ""})


@router.post("/register")
async def register(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
    photo: str = Form(""),
    photo_file: Optional[UploadFile] = File(None),
    api: BackendClient = Depends(get_backend),
    http: httpx.AsyncClient = Depends(get_http_client),
):
    values = {"name": name, "email": email, "photo": photo}
    errors: Dict[str, str] = {}
    if upload_service.has_file(photo_file):
        try:
            values["photo"] = await upload_service.upload_image(http, photo_file)
        except upload_service.UploadError as exc:
            errors["photo"] = exc.message

    form = None
    try:
        form = RegisterForm(name=name, email=email, password=password, photo=values["photo"])
    except ValidationError as exc:
        errors = {**form_errors(exc), **errors}
    if errors or form is None:
        return _render(request, "auth/register.html", values, errors=errors, status_code=422)

    try:
        message = await auth_service.register(api, form)
    except BackendError as exc:
        return _render(request, "auth/register.html", values, status_code=400, message=exc.message)
    return redirect(LOGIN_PATH, message or "Registration successful")


@router.api_route("/logout", methods=["GET", "POST"])
async def logout():
    response = redirect(LOGIN_PATH, "Logged out successfully")
    for name in SESSION_COOKIES:
        response.delete_cookie(name, path="/")
    return response
