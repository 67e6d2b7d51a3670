"""Admin tutorial management."""
from functools import partial
from typing import Dict, Optional
from urllib.parse import urlsplit

from fastapi import APIRouter, Depends, Form, Request
from pydantic import ValidationError
from starlette.datastructures import QueryParams

from app.backend.client import BackendClient, BackendError
from app.models.tutorial_model import TutorialForm
from app.models.user_model import SessionUser
from app.services import tutorial_service
from app.utils.dependencies import get_backend, get_current_user
from app.utils.forms import form_errors
from app.utils.list_controller import ListQuery, after_delete_url, fetch_list, safe_next
from app.utils.templating import error_flash, redirect, render, render_list

BASE_PATH = "/admin/tutorial"
PAGE_SIZE = 10

router = APIRouter()


def _render_form(
    request: Request,
    values: Dict[str, str],
    next_url: str,
    tutorial_id: Optional[str] = None,
    errors: Optional[Dict[str, str]] = None,
    status_code: int = 200,
    message: Optional[str] = None,
):
    return render(
        request,
        "admin/tutorials/form.html",
        {"values": values, "errors": errors or {}, "tutorial_id": tutorial_id, "next_url": next_url},
        status_code=status_code,
        message=error_flash(message) if message else None,
    )


@router.get("")
async def list_tutorials(request: Request, api: BackendClient = Depends(get_backend)):
    query = ListQuery.from_params(request.query_params, limit=PAGE_SIZE)
    page = await fetch_list(partial(tutorial_service.list_tutorials, api), query, BASE_PATH)
    return render_list(request, "admin/tutorials/list.html", page)


@router.get("/new")
async def new_tutorial(request: Request, next: str = ""):
    return _render_form(request, {"title": "", "description": "", "video_url": ""}, safe_next(next, BASE_PATH))


@router.get("/{tutorial_id}/edit")
async def edit_tutorial(request: Request, tutorial_id: str, next: str = "", api: BackendClient = Depends(get_backend)):
    # No single-tutorial endpoint; look the item up on the list page it was opened from.
    next_url = safe_next(next, BASE_PATH)
    query = ListQuery.from_params(QueryParams(urlsplit(next_url).query), limit=PAGE_SIZE)
    try:
        tutorials, _ = await tutorial_service.list_tutorials(api, query)
    except BackendError as exc:
        return redirect(next_url, exc.message, "error")
    matches = [t for t in tutorials if t.id == tutorial_id]
    if not matches:
        return redirect(next_url, "Tutorial not found", "error")
    tutorial = matches[0]
    values = {"title": tutorial.title, "description": tutorial.description or "", "video_url": tutorial.video_url}
    return _render_form(request, values, next_url, tutorial_id=tutorial_id)


async def _save_tutorial(
    request: Request,
    api: BackendClient,
    user: SessionUser,
    tutorial_id: Optional[str],
    values: Dict[str, str],
    next_url: str,
):
    try:
        form = TutorialForm.model_validate(values)
    except ValidationError as exc:
        return _render_form(request, values, next_url, tutorial_id=tutorial_id, errors=form_errors(exc), status_code=422)

    try:
        if tutorial_id:
            await tutorial_service.update_tutorial(api, tutorial_id, form, user.id)
        else:
            await tutorial_service.create_tutorial(api, form, user.id)
    except BackendError as exc:
        return _render_form(request, values, next_url, tutorial_id=tutorial_id, status_code=400, message=exc.message)

    if tutorial_id:
        return redirect(next_url, "Tutorial updated successfully")
    return redirect(next_url, "Tutorial created successfully")


@router.post("/new")
async def create_tutorial(
    request: Request,
    title: str = Form(""),
    description: str = Form(""),
    video_url: str = Form(""),
    next: str = Form(""),
    api: BackendClient = Depends(get_backend),
    user: SessionUser = Depends(get_current_user),
):
    values = {"title": title, "description": description, "video_url": video_url}
    return await _save_tutorial(request, api, user, None, values, safe_next(next, BASE_PATH))


@router.post("/{tutorial_id}/edit")
async def update_tutorial(
    request: Request,
    tutorial_id: str,
    title: str = Form(""),
    description: str = Form(""),
    video_url: str = Form(""),
    next: str = Form(""),
    api: BackendClient = Depends(get_backend),
    user: SessionUser = Depends(get_current_user),
):
    values = {"title": title, "description": description, "video_url": video_url}
    return await _save_tutorial(request, api, user, tutorial_id, values, safe_next(next, BASE_PATH))


@router.get("/{tutorial_id}/delete")
async def confirm_delete_tutorial(
    request: Request,
    tutorial_id: str,
    title: str = "",
    next: str = "",
    page: int = 1,
    count: int = 1,
):
    return render(
        request,
        "admin/confirm.html",
        {
            "heading": "Delete Tutorial",
            "prompt": f'Are you sure you want to delete "{title}"?' if title else "Are you sure you want to delete this tutorial?",
            "action": f"{BASE_PATH}/{tutorial_id}/delete",
            "confirm_label": "Delete",
            "danger": True,
            "next_url": safe_next(next, BASE_PATH),
            "page": page,
            "count": count,
        },
    )


@router.post("/{tutorial_id}/delete")
async def delete_tutorial(
    tutorial_id: str,
    next: str = Form(""),
    page: int = Form(1),
    count: int = Form(1),
    api: BackendClient = Depends(get_backend),
    user: SessionUser = Depends(get_current_user),
):
    next_url = safe_next(next, BASE_PATH)
    try:
        await tutorial_service.delete_tutorial(api, tutorial_id, user.id)
    except BackendError as exc:
        return redirect(next_url, exc.message, "error")
    return redirect(after_delete_url(next_url, BASE_PATH, page, count), "Tutorial deleted successfully")
