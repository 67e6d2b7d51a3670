"""User models."""
from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError

from app.utils.forms import optional_text, require_text

Role = Literal["admin", "user"]
ROLES = ("admin", "user")


class User(BaseModel):
    id: str = Field(alias="_id")
    name: str = ""
    email: str = ""
    role: Role = "user"
    photo: Optional[str] = None
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class SessionUser(BaseModel):
    """User stored as JSON in the ``user`` cookie at login."""

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    name: str = ""
    email: Optional[str] = None
    role: Optional[str] = None
    photo: Optional[str] = None


class LoginForm(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, value: Any) -> str:
        return require_text(value, "Email is required")

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, value: Any) -> str:
        # Passwords are not stripped
        if not value:
            raise PydanticCustomError("required", "Password is required")
        return str(value)


class RegisterForm(LoginForm):
    name: str
    photo: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value: Any) -> str:
        return require_text(value, "Name is required")

    @field_validator("photo", mode="before")
    @classmethod
    def _photo(cls, value: Any) -> Optional[str]:
        return optional_text(value)
