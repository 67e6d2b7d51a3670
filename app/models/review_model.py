"""Review models."""
from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from app.utils.forms import require_text

ReviewStatus = Literal["pending", "approved"]
REVIEW_COMMENT_MAX_LENGTH = 500


class ReviewUser(BaseModel):
    id: str = Field(alias="_id")
    name: str = ""
    email: Optional[str] = None
    photo: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

    @property
    def initial(self) -> str:
        return self.name[:1].upper() if self.name else "?"


class ReviewBook(BaseModel):
    id: str = Field(alias="_id")
    title: str = ""
    author: str = ""
    cover_image: Optional[str] = Field(default=None, alias="coverImage")

    model_config = ConfigDict(populate_by_name=True)


class Review(BaseModel):
    id: str = Field(alias="_id")
    # Populated references; the backend keeps the foreign-key names.
    user: ReviewUser = Field(alias="userId")
    book: Optional[ReviewBook] = Field(default=None, alias="bookId")
    rating: int
    comment: str = ""
    status: ReviewStatus = "pending"
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("book", mode="before")
    @classmethod
    def _book_from_id(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"_id": value}
        return value


class ReviewForm(BaseModel):
    rating: int
    comment: str

    @field_validator("rating", mode="before")
    @classmethod
    def _rating(cls, value: Any) -> int:
        try:
            rating = int(value or 0)
        except (TypeError, ValueError):
            rating = 0
        if not 1 <= rating <= 5:
            raise PydanticCustomError("rating", "Please select a rating")
        return rating

    @field_validator("comment", mode="before")
    @classmethod
    def _comment(cls, value: Any) -> str:
        return require_text(
            value,
            "Please write a comment",
            max_length=REVIEW_COMMENT_MAX_LENGTH,
            too_long=f"Comment cannot exceed {REVIEW_COMMENT_MAX_LENGTH} characters",
        )
