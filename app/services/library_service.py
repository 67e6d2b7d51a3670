"""Personal library (shelves and reading progress)."""
from typing import List, Optional

from app.backend.client import BackendClient
from app.models.library_model import LibraryItem, ShelfStats
from app.utils.logger import get_logger

logger = get_logger(__name__)

LIBRARY_PATH = "/api/v1/library"


async def get_library(api: BackendClient, user_id: str) -> List[LibraryItem]:
    response = await api.get(f"{LIBRARY_PATH}/{user_id}", "Failed to load library")
    return [LibraryItem.model_validate(item) for item in response.data or []]


async def add_to_library(api: BackendClient, user_id: str, book_id: str, shelf: str = "want") -> None:
    await api.post(
        LIBRARY_PATH,
        "Failed to add book",
        json={"userId": user_id, "bookId": book_id, "shelf": shelf},
    )
    logger.info("User %s shelved book %s on %s", user_id, book_id, shelf)


async def move_book(api: BackendClient, user_id: str, book_id: str, shelf: str) -> None:
    await api.put(f"{LIBRARY_PATH}/moveBook/{user_id}", "Failed to move book", json={"bookId": book_id, "shelf": shelf})
    logger.info("User %s moved book %s to %s", user_id, book_id, shelf)


async def update_progress(api: BackendClient, user_id: str, book_id: str, progress: int) -> None:
    await api.put(
        f"{LIBRARY_PATH}/progress/{user_id}",
        "Failed to update progress",
        json={"bookId": book_id, "progress": progress},
    )
    logger.info("User %s progress on %s: %s%%", user_id, book_id, progress)


def shelf_stats(items: List[LibraryItem]) -> ShelfStats:
    stats = ShelfStats(total=len(items))
    for item in items:
        setattr(stats, item.shelf, getattr(stats, item.shelf) + 1)
    return stats


def filter_shelf(items: List[LibraryItem], shelf: Optional[str]) -> List[LibraryItem]:
    if not shelf or shelf == "all":
        return list(items)
    return [item for item in items if item.shelf == shelf]


def contains_book(items: List[LibraryItem], book_id: str) -> bool:
    return any(item.book.id == book_id for item in items)
