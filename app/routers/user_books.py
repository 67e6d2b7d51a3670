"""Reader book browsing and book detail pages."""
import asyncio
from functools import partial
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Form, Request
from pydantic import ValidationError

from app.backend.client import BackendClient, BackendError
from app.models.library_model import LibraryItem
from app.models.review_model import REVIEW_COMMENT_MAX_LENGTH, ReviewForm
from app.models.user_model import SessionUser
from app.services import book_service, genre_service, library_service, review_service
from app.utils.dependencies import get_backend, get_current_user, get_session
from app.utils.forms import form_errors
from app.utils.list_controller import ListQuery, fetch_list
from app.utils.logger import get_logger
from app.utils.security import Session
from app.utils.templating import error_flash, redirect, render

logger = get_logger(__name__)

BASE_PATH = "/user/books"
PAGE_SIZE = 10

router = APIRouter()


def split_genres(value: Optional[str]) -> List[str]:
    return [g for g in (value or "").split(",") if g]


def toggle_genre(selected: List[str], genre_id: str) -> str:
    if genre_id in selected:
        remaining = [g for g in selected if g != genre_id]
    else:
        remaining = selected + [genre_id]
    return ",".join(remaining)


def browse_query(params) -> ListQuery:
    """List state for the browse grid, with the rating range normalised."""
    query = ListQuery.from_params(params, limit=PAGE_SIZE, filter_keys=("genres",))
    if query.sort not in book_service.SORT_OPTIONS:
        query = query.with_sort("")
    rating_min, rating_max = book_service.normalize_rating_range(params.get("ratingMin"), params.get("ratingMax"))
    if rating_min > book_service.RATING_MIN:
        query.filters["ratingMin"] = f"{rating_min:g}"
    if rating_max < book_service.RATING_MAX:
        query.filters["ratingMax"] = f"{rating_max:g}"
    return query


@router.get("")
async def browse_books(request: Request, api: BackendClient = Depends(get_backend)):
    query = browse_query(request.query_params)
    page, genres = await asyncio.gather(
        fetch_list(partial(book_service.list_books, api), query, BASE_PATH),
        genre_service.genre_names(api),
        return_exceptions=True,
    )
    if isinstance(genres, BackendError):
        logger.warning("Genre filter unavailable: %s", genres.message)
        genres = []
    elif isinstance(genres, BaseException):
        raise genres
    if isinstance(page, BaseException):
        raise page

    selected = split_genres(query.filters.get("genres"))
    genre_links: Dict[str, str] = {
        genre.id: page.url(page=1, genres=toggle_genre(selected, genre.id) or None)
        for genre in genres
        if genre.id
    }
    return render(
        request,
        "user/books/list.html",
        {
            "page": page,
            "genres": genres,
            "selected_genres": selected,
            "genre_links": genre_links,
            "sort_options": book_service.SORT_OPTIONS,
            "rating_min": float(query.filters.get("ratingMin", book_service.RATING_MIN)),
            "rating_max": float(query.filters.get("ratingMax", book_service.RATING_MAX)),
            "has_active_filters": bool(selected or "ratingMin" in query.filters or "ratingMax" in query.filters),
        },
        message=error_flash(page.error) if page.error else None,
    )


async def _library_for(api: BackendClient, user_id: Optional[str]) -> List[LibraryItem]:
    if not user_id:
        return []
    return await library_service.get_library(api, user_id)


async def _render_detail(
    request: Request,
    api: BackendClient,
    book_id: str,
    user: Optional[SessionUser],
    errors: Optional[Dict[str, str]] = None,
    values: Optional[Dict[str, str]] = None,
    status_code: int = 200,
    message: Optional[str] = None,
):
    try:
        book = await book_service.get_book(api, book_id)
    except BackendError as exc:
        logger.info("Book %s not found: %s", book_id, exc.message)
        return render(request, "user/books/not_found.html", status_code=404)

    user_id = user.id if user else None
    library, reviews = await asyncio.gather(
        _library_for(api, user_id),
        review_service.approved_for_book(api, book_id),
        return_exceptions=True,
    )
    if isinstance(library, BackendError):
        logger.warning("Library status unavailable: %s", library.message)
        library = []
    elif isinstance(library, BaseException):
        raise library
    if isinstance(reviews, BackendError):
        logger.warning("Reviews unavailable for %s: %s", book_id, reviews.message)
        reviews = []
    elif isinstance(reviews, BaseException):
        raise reviews

    return render(
        request,
        "user/books/detail.html",
        {
            "book": book,
            "in_library": library_service.contains_book(library, book_id),
            "reviews": reviews,
            "user_review_count": review_service.count_by_user(reviews, user_id),
            "errors": errors or {},
            "values": values or {"rating": "0", "comment": ""},
            "comment_max_length": REVIEW_COMMENT_MAX_LENGTH,
            "show_review_form": bool(errors),
        },
        status_code=status_code,
        message=error_flash(message) if message else None,
    )


@router.get("/{book_id}")
async def book_detail(
    request: Request,
    book_id: str,
    api: BackendClient = Depends(get_backend),
    session: Session = Depends(get_session),
):
    return await _render_detail(request, api, book_id, session.user)


@router.post("/{book_id}/library")
async def add_to_library(
    book_id: str,
    api: BackendClient = Depends(get_backend),
    user: SessionUser = Depends(get_current_user),
):
    detail_url = f"{BASE_PATH}/{book_id}"
    try:
        await library_service.add_to_library(api, user.id, book_id)
    except BackendError as exc:
        return redirect(detail_url, exc.message or "Failed to add book", "error")
    return redirect(detail_url, "Book added to library!")


@router.post("/{book_id}/reviews")
async def submit_review(
    request: Request,
    book_id: str,
    rating: str = Form("0"),
    comment: str = Form(""),
    api: BackendClient = Depends(get_backend),
    user: SessionUser = Depends(get_current_user),
):
    values = {"rating": rating, "comment": comment}
    try:
        form = ReviewForm.model_validate(values)
    except ValidationError as exc:
        return await _render_detail(request, api, book_id, user, errors=form_errors(exc), values=values, status_code=422)

    try:
        await review_service.create_review(api, user.id, book_id, form)
    except BackendError as exc:
        return await _render_detail(
            request, api, book_id, user, values=values, status_code=400, message=exc.message
        )
    return redirect(f"{BASE_PATH}/{book_id}", "Review submitted for approval!")
