"""Admin genre management pages."""
from functools import partial
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Form, Request
from pydantic import ValidationError

from app.backend.client import BackendClient, BackendError
from app.models.genre_model import GENRE_NAME_MAX_LENGTH, GenreForm
from app.services import genre_service
from app.utils.dependencies import get_backend
from app.utils.forms import form_errors
from app.utils.list_controller import ListQuery, after_delete_url, fetch_list, safe_next
from app.utils.templating import error_flash, redirect, render, render_list

BASE_PATH = "/admin/genres"
PAGE_SIZE = 10

router = APIRouter()


def _render_form(
    request: Request,
    values: Dict[str, str],
    next_url: str,
    genre_id: Optional[str] = None,
    errors: Optional[Dict[str, str]] = None,
    status_code: int = 200,
    message: Optional[str] = None,
):
    return render(
        request,
        "admin/genres/form.html",
        {
            "values": values,
            "errors": errors or {},
            "genre_id": genre_id,
            "next_url": next_url,
            "max_name_length": GENRE_NAME_MAX_LENGTH,
        },
        status_code=status_code,
        message=error_flash(message) if message else None,
    )


@router.get("")
async def list_genres(request: Request, api: BackendClient = Depends(get_backend)):
    query = ListQuery.from_params(request.query_params, limit=PAGE_SIZE)
    page = await fetch_list(partial(genre_service.list_genres, api), query, BASE_PATH)
    return render_list(request, "admin/genres/list.html", page)


@router.get("/new")
async def new_genre(request: Request, next: str = ""):
    return _render_form(request, {"name": "", "description": ""}, safe_next(next, BASE_PATH))


@router.get("/{genre_id}/edit")
async def edit_genre(request: Request, genre_id: str, next: str = "", api: BackendClient = Depends(get_backend)):
    next_url = safe_next(next, BASE_PATH)
    try:
        genre = await genre_service.get_genre(api, genre_id)
    except BackendError as exc:
        return redirect(next_url, exc.message, "error")
    return _render_form(request, {"name": genre.name, "description": genre.description or ""}, next_url, genre_id=genre_id)


async def _save_genre(request: Request, api: BackendClient, genre_id: Optional[str], values: Dict[str, str], next_url: str):
    try:
        form = GenreForm.model_validate(values)
    except ValidationError as exc:
        return _render_form(request, values, next_url, genre_id=genre_id, errors=form_errors(exc), status_code=422)

    try:
        if genre_id:
            message = await genre_service.update_genre(api, genre_id, form)
        else:
            message = await genre_service.create_genre(api, form)
    except BackendError as exc:
        return _render_form(request, values, next_url, genre_id=genre_id, status_code=400, message=exc.message)

    if genre_id:
        return redirect(next_url, message or "Genre updated successfully!")
    return redirect(next_url, message or "Genre created successfully!")


@router.post("/new")
async def create_genre(
    request: Request,
    name: str = Form(""),
    description: str = Form(""),
    next: str = Form(""),
    api: BackendClient = Depends(get_backend),
):
    values = {"name": name, "description": description}
    return await _save_genre(request, api, None, values, safe_next(next, BASE_PATH))


@router.post("/{genre_id}/edit")
async def update_genre(
    request: Request,
    genre_id: str,
    name: str = Form(""),
    description: str = Form(""),
    next: str = Form(""),
    api: BackendClient = Depends(get_backend),
):
    values = {"name": name, "description": description}
    return await _save_genre(request, api, genre_id, values, safe_next(next, BASE_PATH))


@router.get("/{genre_id}/delete")
async def confirm_delete_genre(
    request: Request,
    genre_id: str,
    name: str = "",
    next: str = "",
    page: int = 1,
    count: int = 1,
):
    return render(
        request,
        "admin/confirm.html",
        {
            "heading": "Delete Genre",
            "prompt": f'Are you sure you want to delete the genre "{name}"?' if name else "Are you sure you want to delete this genre?",
            "action": f"{BASE_PATH}/{genre_id}/delete",
            "confirm_label": "Delete",
            "danger": True,
            "next_url": safe_next(next, BASE_PATH),
            "page": page,
            "count": count,
        },
    )


@router.post("/{genre_id}/delete")
async def delete_genre(
    genre_id: str,
    next: str = Form(""),
    page: int = Form(1),
    count: int = Form(1),
    api: BackendClient = Depends(get_backend),
):
    next_url = safe_next(next, BASE_PATH)
    try:
        message = await genre_service.delete_genre(api, genre_id)
    except BackendError as exc:
        return redirect(next_url, exc.message, "error")
    return redirect(after_delete_url(next_url, BASE_PATH, page, count), message or "Genre deleted successfully!")
