"""Book models."""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.utils.forms import require_text


class GenreRef(BaseModel):
    """Genre as embedded in a book payload."""

    id: Optional[str] = Field(default=None, alias="_id")
    name: str = ""
    description: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class Book(BaseModel):
    id: str = Field(alias="_id")
    title: str
    author: str = ""
    genre: Optional[GenreRef] = None
    cover_image: Optional[str] = None
    description: Optional[str] = None
    summary: Optional[str] = None

    # Present on browse/recommendation payloads only
    avg_rating: Optional[float] = None
    shelved_count: Optional[int] = None
    reason: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("genre", mode="before")
    @classmethod
    def _genre_from_id(cls, value: Any) -> Any:
        # Some endpoints return the genre unpopulated, as a bare id.
        if isinstance(value, str):
            return {"_id": value}
        return value

    @property
    def genre_name(self) -> str:
        return self.genre.name if self.genre else ""


class BookForm(BaseModel):
    """Admin create/edit form."""

    title: str
    author: str
    genre: str
    description: str
    summary: str
    cover_image: str

    @field_validator("title", mode="before")
    @classmethod
    def _title(cls, value: Any) -> str:
        return require_text(value, "Title is required")

    @field_validator("author", mode="before")
    @classmethod
    def _author(cls, value: Any) -> str:
        return require_text(value, "Author is required")

    @field_validator("genre", mode="before")
    @classmethod
    def _genre(cls, value: Any) -> str:
        return require_text(value, "Genre is required")

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, value: Any) -> str:
        return require_text(value, "Description is required")

    @field_validator("summary", mode="before")
    @classmethod
    def _summary(cls, value: Any) -> str:
        return require_text(value, "Summary is required")

    @field_validator("cover_image", mode="before")
    @classmethod
    def _cover_image(cls, value: Any) -> str:
        return require_text(value, "Please upload a cover image")

    def to_payload(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "author": self.author,
            "genre": self.genre,
            "description": self.description,
            "summary": self.summary,
            "coverImage": self.cover_image,
        }
