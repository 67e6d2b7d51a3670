"""Review moderation and submission helpers."""
from typing import List, Optional, Tuple

from app.backend.client import BackendClient
from app.models.pagination_model import Pagination
from app.models.review_model import Review, ReviewForm
from app.utils.list_controller import ListQuery
from app.utils.logger import get_logger

logger = get_logger(__name__)

REVIEWS_PATH = "/api/v1/review"
SORT_FIELDS = {"newest": "-createdAt", "oldest": "createdAt"}
LIMIT_OPTIONS = (5, 10, 20, 50)


async def list_reviews(api: BackendClient, query: ListQuery) -> Tuple[List[Review], Pagination]:
    params = query.to_params()
    params["sort"] = SORT_FIELDS.get(query.sort, SORT_FIELDS["newest"])
    response = await api.get(REVIEWS_PATH, "Failed to load reviews", params=params)
    reviews = [Review.model_validate(item) for item in response.data or []]
    return reviews, Pagination.from_backend(response.pagination, query.page, query.limit, len(reviews))


async def update_status(api: BackendClient, review_id: str, status: str) -> None:
    await api.patch(
        f"{REVIEWS_PATH}/status",
        "Failed to update status",
        json={"reviewId": review_id, "status": status},
    )
    logger.info("Review %s set to %s", review_id, status)


async def delete_review(api: BackendClient, review_id: str) -> None:
    await api.delete(f"{REVIEWS_PATH}/{review_id}", "Failed to delete review")
    logger.info("Deleted review %s", review_id)


async def approved_for_book(api: BackendClient, book_id: str) -> List[Review]:
    response = await api.get(f"{REVIEWS_PATH}/approved/{book_id}", "Failed to fetch reviews")
    return [Review.model_validate(item) for item in response.data or []]


def count_by_user(reviews: List[Review], user_id: Optional[str]) -> int:
    if not user_id:
        return 0
    return sum(1 for review in reviews if review.user.id == user_id)


async def create_review(api: BackendClient, user_id: str, book_id: str, form: ReviewForm) -> None:
    await api.post(
        f"{REVIEWS_PATH}/{user_id}",
        "Failed to submit review",
        json={"bookId": book_id, "rating": form.rating, "comment": form.comment},
    )
    logger.info("User %s reviewed book %s", user_id, book_id)
