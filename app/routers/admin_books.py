"""Admin book management pages."""
import asyncio
from functools import partial
from typing import Any, Dict, List, Optional

import httpx
from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from pydantic import ValidationError

from app.backend.client import BackendClient, BackendError
from app.models.book_model import Book, BookForm, GenreRef
from app.services import book_service, genre_service, upload_service
from app.utils.dependencies import get_backend, get_http_client
from app.utils.forms import form_errors
from app.utils.list_controller import ListQuery, after_delete_url, fetch_list, safe_next
from app.utils.logger import get_logger
from app.utils.templating import error_flash, redirect, render, render_list

logger = get_logger(__name__)

BASE_PATH = "/admin/books"
PAGE_SIZE = 10

router = APIRouter()


def _form_values(book: Optional[Book] = None) -> Dict[str, Any]:
    if book is None:
        return {"title": "", "author": "", "genre": "", "description": "", "summary": "", "cover_image": ""}
    return {
        "title": book.title,
        "author": book.author,
        "genre": book.genre.id if book.genre else "",
        "description": book.description or "",
        "summary": book.summary or "",
        "cover_image": book.cover_image or "",
    }


async def _render_form(
    request: Request,
    api: BackendClient,
    values: Dict[str, Any],
    next_url: str,
    book_id: Optional[str] = None,
    genres: Optional[List[GenreRef]] = None,
    errors: Optional[Dict[str, str]] = None,
    status_code: int = 200,
    message: Optional[str] = None,
):
    if genres is None:
        try:
            genres = await genre_service.genre_names(api)
        except BackendError as exc:
            genres = []
            message = message or exc.message
    return render(
        request,
        "admin/books/form.html",
        {
            "values": values,
            "errors": errors or {},
            "genres": genres,
            "book_id": book_id,
            "next_url": next_url,
        },
        status_code=status_code,
        message=error_flash(message) if message else None,
    )


@router.get("")
async def list_books(request: Request, api: BackendClient = Depends(get_backend)):
    query = ListQuery.from_params(request.query_params, limit=PAGE_SIZE)
    page = await fetch_list(partial(book_service.list_books, api), query, BASE_PATH)
    return render_list(request, "admin/books/list.html", page)


@router.get("/new")
async def new_book(request: Request, next: str = "", api: BackendClient = Depends(get_backend)):
    return await _render_form(request, api, _form_values(), safe_next(next, BASE_PATH))


@router.get("/{book_id}/edit")
async def edit_book(request: Request, book_id: str, next: str = "", api: BackendClient = Depends(get_backend)):
    next_url = safe_next(next, BASE_PATH)
    try:
        book, genres = await asyncio.gather(
            book_service.get_book(api, book_id),
            genre_service.genre_names(api),
        )
    except BackendError as exc:
        logger.warning("Cannot edit book %s: %s", book_id, exc.message)
        return redirect(next_url, "Failed to fetch book details", "error")
    return await _render_form(request, api, _form_values(book), next_url, book_id=book_id, genres=genres)


async def _save_book(
    request: Request,
    api: BackendClient,
    http: httpx.AsyncClient,
    book_id: Optional[str],
    values: Dict[str, Any],
    cover: Optional[UploadFile],
    next_url: str,
):
    errors: Dict[str, str] = {}
    if upload_service.has_file(cover):
        try:
            values["cover_image"] = await upload_service.upload_image(http, cover)
        except upload_service.UploadError as exc:
            errors["cover_image"] = exc.message

    form = None
    try:
        form = BookForm.model_validate(values)
    except ValidationError as exc:
        errors = {**form_errors(exc), **errors}
    if errors or form is None:
        return await _render_form(request, api, values, next_url, book_id=book_id, errors=errors, status_code=422)

    try:
        if book_id:
            await book_service.update_book(api, book_id, form)
        else:
            await book_service.create_book(api, form)
    except BackendError as exc:
        return await _render_form(request, api, values, next_url, book_id=book_id, status_code=400, message=exc.message)

    if book_id:
        return redirect(next_url, "Book updated successfully!")
    return redirect(next_url, "Book created successfully!")


@router.post("/new")
async def create_book(
    request: Request,
    title: str = Form(""),
    author: str = Form(""),
    genre: str = Form(""),
    description: str = Form(""),
    summary: str = Form(""),
    cover_image: str = Form(""),
    cover: Optional[UploadFile] = File(None),
    next: str = Form(""),
    api: BackendClient = Depends(get_backend),
    http: httpx.AsyncClient = Depends(get_http_client),
):
    values = {
        "title": title,
        "author": author,
        "genre": genre,
        "description": description,
        "summary": summary,
        "cover_image": cover_image,
    }
    return await _save_book(request, api, http, None, values, cover, safe_next(next, BASE_PATH))


@router.post("/{book_id}/edit")
async def update_book(
    request: Request,
    book_id: str,
    title: str = Form(""),
    author: str = Form(""),
    genre: str = Form(""),
    description: str = Form(""),
    summary: str = Form(""),
    cover_image: str = Form(""),
    cover: Optional[UploadFile] = File(None),
    next: str = Form(""),
    api: BackendClient = Depends(get_backend),
    http: httpx.AsyncClient = Depends(get_http_client),
):
    values = {
        "title": title,
        "author": author,
        "genre": genre,
        "description": description,
        "summary": summary,
        "cover_image": cover_image,
    }
    return await _save_book(request, api, http, book_id, values, cover, safe_next(next, BASE_PATH))


@router.get("/{book_id}/delete")
async def confirm_delete_book(
    request: Request,
    book_id: str,
    title: str = "",
    next: str = "",
    page: int = 1,
    count: int = 1,
):
    return render(
        request,
        "admin/confirm.html",
        {
            "heading": "Delete Book",
            "prompt": f'Are you sure you want to delete "{title}"?' if title else "Are you sure you want to delete this book?",
            "action": f"{BASE_PATH}/{book_id}/delete",
            "confirm_label": "Delete",
            "danger": True,
            "next_url": safe_next(next, BASE_PATH),
            "page": page,
            "count": count,
        },
    )


@router.post("/{book_id}/delete")
async def delete_book(
    book_id: str,
    next: str = Form(""),
    page: int = Form(1),
    count: int = Form(1),
    api: BackendClient = Depends(get_backend),
):
    next_url = safe_next(next, BASE_PATH)
    try:
        await book_service.delete_book(api, book_id)
    except BackendError as exc:
        return redirect(next_url, exc.message, "error")
    return redirect(after_delete_url(next_url, BASE_PATH, page, count), "Book deleted successfully!")
