"""Reader library: shelves, moving books and reading progress."""
from fastapi import APIRouter, Depends, Form, Request
from pydantic import ValidationError

from app.backend.client import BackendClient, BackendError
from app.models.library_model import PROGRESS_QUICK_SELECT, SHELF_LABELS, SHELVES, ProgressForm, ShelfMove
from app.models.user_model import SessionUser
from app.services import library_service
from app.utils.dependencies import get_backend, get_current_user
from app.utils.forms import form_errors
from app.utils.list_controller import ListPage, ListQuery, paginate_local, safe_next
from app.utils.templating import error_flash, redirect, render

BASE_PATH = "/user/library"
PAGE_SIZE = 5

router = APIRouter()


@router.get("")
async def library(
    request: Request,
    api: BackendClient = Depends(get_backend),
    user: SessionUser = Depends(get_current_user),
):
    query = ListQuery.from_params(request.query_params, limit=PAGE_SIZE, filter_keys=("shelf",))
    shelf = query.filters.get("shelf")
    if shelf and shelf not in SHELVES:
        query = query.with_filter("shelf", None)

    message = None
    try:
        items = await library_service.get_library(api, user.id)
    except BackendError as exc:
        items = []
        message = error_flash(exc.message)

    visible, pagination = paginate_local(library_service.filter_shelf(items, query.filters.get("shelf")), query.page, PAGE_SIZE)
    page = ListPage(items=visible, pagination=pagination, query=query.with_page(pagination.page), base_path=BASE_PATH)
    return render(
        request,
        "user/library.html",
        {
            "page": page,
            "next_url": page.url_for_page(page.page),
            "stats": library_service.shelf_stats(items),
            "shelves": SHELVES,
            "shelf_labels": SHELF_LABELS,
            "quick_select": PROGRESS_QUICK_SELECT,
        },
        message=message,
    )


@router.post("/move")
async def move_book(
    book_id: str = Form(""),
    shelf: str = Form(""),
    next: str = Form(""),
    api: BackendClient = Depends(get_backend),
    user: SessionUser = Depends(get_current_user),
):
    next_url = safe_next(next, BASE_PATH)
    try:
        move = ShelfMove(book_id=book_id, shelf=shelf)
    except ValidationError:
        return redirect(next_url, "Failed to move book", "error")
    try:
        await library_service.move_book(api, user.id, move.book_id, move.shelf)
    except BackendError as exc:
        return redirect(next_url, exc.message, "error")
    return redirect(next_url, "Book moved successfully!")


@router.post("/progress")
async def update_progress(
    book_id: str = Form(""),
    progress: str = Form(""),
    next: str = Form(""),
    api: BackendClient = Depends(get_backend),
    user: SessionUser = Depends(get_current_user),
):
    next_url = safe_next(next, BASE_PATH)
    try:
        form = ProgressForm(book_id=book_id, progress=progress)
    except ValidationError as exc:
        return redirect(next_url, list(form_errors(exc).values())[0], "error")
    try:
        await library_service.update_progress(api, user.id, form.book_id, form.progress)
    except BackendError as exc:
        return redirect(next_url, exc.message, "error")
    return redirect(next_url, "Progress updated!")
