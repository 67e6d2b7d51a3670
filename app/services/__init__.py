"""Services package."""
from . import (
    auth_service,
    book_service,
    genre_service,
    library_service,
    recommendation_service,
    review_service,
    tutorial_service,
    upload_service,
    user_service,
)

__all__ = [
    "auth_service",
    "book_service",
    "genre_service",
    "library_service",
    "recommendation_service",
    "review_service",
    "tutorial_service",
    "upload_service",
    "user_service",
]
