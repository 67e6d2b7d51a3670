"""Library (shelf) models."""
from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from app.models.book_model import Book

Shelf = Literal["want", "reading", "read"]
SHELVES = ("want", "reading", "read")
SHELF_LABELS = {
    "want": "Want to Read",
    "reading": "Currently Reading",
    "read": "Read",
}
PROGRESS_QUICK_SELECT = (0, 25, 50, 75, 100)


class LibraryItem(BaseModel):
    id: str = Field(alias="_id")
    book: Book
    shelf: Shelf
    progress: int = 0
    started_at: Optional[datetime] = Field(default=None, alias="startedAt")
    finished_at: Optional[datetime] = Field(default=None, alias="finishedAt")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def tracks_progress(self) -> bool:
        return self.shelf in ("reading", "read")

    @property
    def shelf_label(self) -> str:
        return SHELF_LABELS[self.shelf]


class ShelfStats(BaseModel):
    total: int = 0
    want: int = 0
    reading: int = 0
    read: int = 0


class ShelfMove(BaseModel):
    book_id: str
    shelf: Shelf


class ProgressForm(BaseModel):
    book_id: str
    progress: int

    @field_validator("progress", mode="before")
    @classmethod
    def _progress(cls, value: Any) -> int:
        try:
            progress = int(float(value))
        except (TypeError, ValueError):
            raise PydanticCustomError("progress", "Progress must be a number between 0 and 100")
        if not 0 <= progress <= 100:
            raise PydanticCustomError("progress", "Progress must be a number between 0 and 100")
        return progress
