"""User administration helpers."""
from typing import List, Tuple

from app.backend.client import BackendClient
from app.models.pagination_model import Pagination
from app.models.user_model import User
from app.utils.list_controller import ListQuery
from app.utils.logger import get_logger

logger = get_logger(__name__)

USERS_PATH = "/api/v1/user"


def toggled_role(role: str) -> str:
    return "user" if role == "admin" else "admin"


async def list_users(api: BackendClient, query: ListQuery) -> Tuple[List[User], Pagination]:
    response = await api.get(f"{USERS_PATH}/allusers", "Failed to fetch users", params=query.to_params())
    users = [User.model_validate(item) for item in response.data or []]
    return users, Pagination.from_backend(response.pagination, query.page, query.limit, len(users))


async def update_role(api: BackendClient, user_id: str, role: str) -> None:
    await api.put(f"{USERS_PATH}/{user_id}", "Failed to update role", json={"role": role})
    logger.info("Changed role of user %s to %s", user_id, role)
