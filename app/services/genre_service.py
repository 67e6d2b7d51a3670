"""Genre service helpers."""
from typing import List, Optional, Tuple

from app.backend.client import BackendClient
from app.models.book_model import GenreRef
from app.models.genre_model import Genre, GenreForm
from app.models.pagination_model import Pagination
from app.utils.list_controller import ListQuery
from app.utils.logger import get_logger

logger = get_logger(__name__)

GENRES_PATH = "/api/v1/genre"


async def list_genres(api: BackendClient, query: ListQuery) -> Tuple[List[Genre], Pagination]:
    response = await api.get(GENRES_PATH, "Failed to fetch genres", params=query.to_params())
    genres = [Genre.model_validate(item) for item in response.data or []]
    return genres, Pagination.from_backend(response.pagination, query.page, query.limit, len(genres))


async def genre_names(api: BackendClient) -> List[GenreRef]:
    """All genres as ``{id, name}`` pairs for selects and filter chips."""
    response = await api.get(f"{GENRES_PATH}/genre-names", "Failed to fetch genres")
    return [GenreRef.model_validate(item) for item in response.data or []]


async def get_genre(api: BackendClient, genre_id: str) -> Genre:
    response = await api.get(f"{GENRES_PATH}/{genre_id}", "Failed to load genre")
    return Genre.model_validate(response.data)


async def create_genre(api: BackendClient, form: GenreForm) -> Optional[str]:
    response = await api.post(GENRES_PATH, "Failed to create genre", json=form.to_payload())
    logger.info("Created genre %r", form.name)
    return response.message


async def update_genre(api: BackendClient, genre_id: str, form: GenreForm) -> Optional[str]:
    response = await api.put(f"{GENRES_PATH}/{genre_id}", "Failed to update genre", json=form.to_payload())
    logger.info("Updated genre %s", genre_id)
    return response.message


async def delete_genre(api: BackendClient, genre_id: str) -> Optional[str]:
    response = await api.delete(f"{GENRES_PATH}/{genre_id}", "Failed to delete genre")
    logger.info("Deleted genre %s", genre_id)
    return response.message
