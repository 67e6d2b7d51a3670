"""Pydantic models for backend payloads and page forms."""
from .book_model import Book, BookForm, GenreRef
from .dashboard_model import DashboardStats, RecommendationData
from .genre_model import Genre, GenreForm
from .library_model import LibraryItem, ProgressForm, ShelfStats
from .pagination_model import Pagination
from .review_model import Review, ReviewForm
from .tutorial_model import Tutorial, TutorialForm
from .user_model import LoginForm, RegisterForm, SessionUser, User
