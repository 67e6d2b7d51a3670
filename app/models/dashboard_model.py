"""Dashboard and recommendation models."""
from typing import List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.models.book_model import Book


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Overview(_CamelModel):
    total_books: int = 0
    total_users: int = 0
    total_reviews: int = 0
    pending_reviews: int = 0
    recent_users: int = 0


class GenreCount(_CamelModel):
    genre: str
    count: int


class MonthCount(_CamelModel):
    month: str
    count: int


class ShelfCount(_CamelModel):
    shelf: str
    count: int


class RoleCount(_CamelModel):
    role: str
    count: int


class TopRatedBook(_CamelModel):
    title: str
    avg_rating: float = 0.0
    total_reviews: int = 0


class Charts(_CamelModel):
    books_per_genre: List[GenreCount] = []
    monthly_books: List[MonthCount] = []
    shelf_distribution: List[ShelfCount] = []
    user_roles: List[RoleCount] = []
    top_rated_books: List[TopRatedBook] = []


class DashboardStats(_CamelModel):
    overview: Overview = Overview()
    charts: Charts = Charts()

    def stat_cards(self) -> List[dict]:
        o = self.overview
        return [
            {"label": "Total Books", "value": o.total_books, "color": "purple"},
            {"label": "Total Users", "value": o.total_users, "color": "blue"},
            {"label": "Total Reviews", "value": o.total_reviews, "color": "green"},
            {"label": "Pending Reviews", "value": o.pending_reviews, "color": "orange"},
            {"label": "New Users (7 Days)", "value": o.recent_users, "color": "pink"},
        ]


class RecommendationData(_CamelModel):
    recommendations: List[Book] = []
    is_personalized: bool = False
    books_read: int = 0
