"""Tutorial service helpers."""
from typing import List, Tuple

from app.backend.client import BackendClient
from app.models.pagination_model import Pagination
from app.models.tutorial_model import Tutorial, TutorialForm
from app.utils.list_controller import ListQuery
from app.utils.logger import get_logger

logger = get_logger(__name__)

TUTORIALS_PATH = "/api/v1/tutorial"


async def list_tutorials(api: BackendClient, query: ListQuery) -> Tuple[List[Tutorial], Pagination]:
    response = await api.get(TUTORIALS_PATH, "Failed to fetch tutorials", params=query.to_params())
    tutorials = [Tutorial.model_validate(item) for item in response.data or []]
    return tutorials, Pagination.from_backend(response.pagination, query.page, query.limit, len(tutorials))


async def create_tutorial(api: BackendClient, form: TutorialForm, user_id: str) -> None:
    await api.post(TUTORIALS_PATH, "Failed to create tutorial", json=form.to_payload(user_id))
    logger.info("Created tutorial %r", form.title)


async def update_tutorial(api: BackendClient, tutorial_id: str, form: TutorialForm, user_id: str) -> None:
    await api.put(f"{TUTORIALS_PATH}/{tutorial_id}", "Failed to update tutorial", json=form.to_payload(user_id))
    logger.info("Updated tutorial %s", tutorial_id)


async def delete_tutorial(api: BackendClient, tutorial_id: str, user_id: str) -> None:
    await api.delete(f"{TUTORIALS_PATH}/{tutorial_id}", "Failed to delete tutorial", json={"userId": user_id})
    logger.info("Deleted tutorial %s", tutorial_id)
