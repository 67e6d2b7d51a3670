"""Book service helpers."""
from typing import List, Optional, Tuple

from app.backend.client import BackendClient
from app.models.book_model import Book, BookForm
from app.models.pagination_model import Pagination
from app.utils.list_controller import ListQuery
from app.utils.logger import get_logger

logger = get_logger(__name__)

BOOKS_PATH = "/api/v1/book"
RATING_MIN = 0.0
RATING_MAX = 5.0
SORT_OPTIONS = {
    "": "Default",
    "title": "Title (A-Z)",
    "rating": "Highest Rated",
    "mostShelved": "Most Shelved",
}


def _parse_rating(value: Optional[str], default: float) -> float:
    try:
        rating = float(value) if value not in (None, "") else default
    except ValueError:
        return default
    return max(RATING_MIN, min(RATING_MAX, rating))


def normalize_rating_range(raw_min: Optional[str], raw_max: Optional[str]) -> Tuple[float, float]:
    """Clamp a rating range to 0..5; when min exceeds max, max is raised to min."""
    rating_min = _parse_rating(raw_min, RATING_MIN)
    rating_max = _parse_rating(raw_max, RATING_MAX)
    if rating_min > rating_max:
        rating_max = rating_min
    return rating_min, rating_max


async def list_books(api: BackendClient, query: ListQuery) -> Tuple[List[Book], Pagination]:
    """List books; ``genres``, ``ratingMin`` and ``ratingMax`` come from the query filters."""
    params = query.to_params()
    if query.sort:
        params["sortBy"] = query.sort
    response = await api.get(BOOKS_PATH, "Failed to fetch books", params=params)
    books = [Book.model_validate(item) for item in response.data or []]
    return books, Pagination.from_backend(response.pagination, query.page, query.limit, len(books))


async def get_book(api: BackendClient, book_id: str) -> Book:
    response = await api.get(f"{BOOKS_PATH}/{book_id}", "Failed to load book")
    return Book.model_validate(response.data)


async def create_book(api: BackendClient, form: BookForm) -> Optional[str]:
    response = await api.post(BOOKS_PATH, "Operation failed", json=form.to_payload())
    logger.info("Created book %r", form.title)
    return response.message


async def update_book(api: BackendClient, book_id: str, form: BookForm) -> Optional[str]:
    response = await api.put(f"{BOOKS_PATH}/{book_id}", "Operation failed", json=form.to_payload())
    logger.info("Updated book %s", book_id)
    return response.message


async def delete_book(api: BackendClient, book_id: str) -> None:
    await api.delete(f"{BOOKS_PATH}/{book_id}", "Delete failed")
    logger.info("Deleted book %s", book_id)
