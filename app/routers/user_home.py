"""Reader home page: shelf stats and recommendations."""
import asyncio

from fastapi import APIRouter, Depends, Request

from app.backend.client import BackendClient, BackendError
from app.models.dashboard_model import RecommendationData
from app.models.library_model import ShelfStats
from app.models.user_model import SessionUser
from app.services import library_service, recommendation_service
from app.utils.dependencies import get_backend, get_current_user
from app.utils.logger import get_logger
from app.utils.templating import error_flash, render

logger = get_logger(__name__)

router = APIRouter()


async def _stats(api: BackendClient, user_id: str) -> ShelfStats:
    items = await library_service.get_library(api, user_id)
    return library_service.shelf_stats(items)


@router.get("")
async def home(
    request: Request,
    api: BackendClient = Depends(get_backend),
    user: SessionUser = Depends(get_current_user),
):
    stats, recommendations = await asyncio.gather(
        _stats(api, user.id),
        recommendation_service.for_user(api, user.id),
        return_exceptions=True,
    )

    message = None
    if isinstance(stats, BackendError):
        logger.warning("Shelf stats unavailable for %s: %s", user.id, stats.message)
        stats = ShelfStats()
    elif isinstance(stats, BaseException):
        raise stats
    if isinstance(recommendations, BackendError):
        message = error_flash(recommendations.message)
        recommendations = RecommendationData()
    elif isinstance(recommendations, BaseException):
        raise recommendations

    return render(
        request,
        "user/home.html",
        {
            "user": user,
            "stats": stats,
            "recommendations": recommendations,
            "explore_threshold": recommendation_service.RECOMMENDATION_LIMIT,
            "min_books": recommendation_service.MIN_BOOKS_FOR_PERSONALIZED,
        },
        message=message,
    )
