"""Genre models."""
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.utils.forms import require_text

GENRE_NAME_MAX_LENGTH = 20


class Genre(BaseModel):
    id: str = Field(alias="_id")
    name: str
    description: str = ""

    model_config = ConfigDict(populate_by_name=True)


class GenreForm(BaseModel):
    name: str
    description: str

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value: Any) -> str:
        return require_text(
            value,
            "Genre name is required",
            max_length=GENRE_NAME_MAX_LENGTH,
            too_long=f"Name cannot exceed {GENRE_NAME_MAX_LENGTH} characters",
        )

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, value: Any) -> str:
        return require_text(value, "Description is required")

    def to_payload(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description}
