"""Tutorial models."""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.utils.forms import optional_text, require_text


class Tutorial(BaseModel):
    id: str = Field(alias="_id")
    title: str
    description: Optional[str] = None
    video_url: str = Field(alias="videoUrl")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)


class TutorialForm(BaseModel):
    title: str
    description: Optional[str] = None
    video_url: str

    @field_validator("title", mode="before")
    @classmethod
    def _title(cls, value: Any) -> str:
        return require_text(value, "Title is required")

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, value: Any) -> Optional[str]:
        return optional_text(value)

    @field_validator("video_url", mode="before")
    @classmethod
    def _video_url(cls, value: Any) -> str:
        return require_text(value, "Video URL is required")

    def to_payload(self, user_id: str) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"title": self.title, "videoUrl": self.video_url, "userId": user_id}
        if self.description:
            payload["description"] = self.description
        return payload
