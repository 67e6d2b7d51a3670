"""Pagination metadata returned alongside backend lists."""
import math
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


class Pagination(BaseModel):
    total: int = 0
    page: int = 1
    limit: int = 10
    # Reviews report ``totalPages`` inside a ``meta`` block instead of ``pages``.
    pages: int = Field(default=1, validation_alias=AliasChoices("pages", "totalPages"))

    @classmethod
    def from_backend(cls, raw: Optional[dict], page: int, limit: int, count: int) -> "Pagination":
        """Build pagination from the backend block, falling back to the item count."""
        if raw:
            pagination = cls.model_validate(raw)
        else:
            pagination = cls(total=count, page=page, limit=limit)
            pagination.pages = math.ceil(count / limit) if limit else 1
        pagination.pages = max(pagination.pages, 1)
        return pagination

    @classmethod
    def empty(cls, page: int = 1, limit: int = 10) -> "Pagination":
        return cls(total=0, page=page, limit=limit, pages=1)
