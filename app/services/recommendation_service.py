"""Dashboard statistics and personalised recommendations."""
from app.backend.client import BackendClient
from app.models.dashboard_model import DashboardStats, RecommendationData

RECOMMENDATION_PATH = "/api/v1/recommendation"
RECOMMENDATION_LIMIT = 12
MIN_BOOKS_FOR_PERSONALIZED = 3


async def dashboard_stats(api: BackendClient) -> DashboardStats:
    response = await api.get(RECOMMENDATION_PATH, "Failed to load dashboard data")
    return DashboardStats.model_validate(response.data or {})


async def for_user(api: BackendClient, user_id: str, limit: int = RECOMMENDATION_LIMIT) -> RecommendationData:
    response = await api.get(
        f"{RECOMMENDATION_PATH}/{user_id}",
        "Failed to load recommendations",
        params={"limit": limit},
    )
    return RecommendationData.model_validate(response.data or {})
