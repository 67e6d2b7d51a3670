"""Form validation helpers shared by the page models."""
from typing import Any, Dict, Optional

from pydantic import ValidationError
from pydantic_core import PydanticCustomError


def require_text(value: Any, message: str, max_length: Optional[int] = None, too_long: str = "") -> str:
    """Strip ``value`` and reject it when blank or longer than ``max_length``."""
    text = str(value or "").strip()
    if not text:
        raise PydanticCustomError("required", message)
    if max_length is not None and len(text) > max_length:
        raise PydanticCustomError("too_long", too_long or message)
    return text


def optional_text(value: Any) -> Optional[str]:
    text = str(value or "").strip()
    return text or None


def form_errors(exc: ValidationError) -> Dict[str, str]:
    """Map a pydantic ``ValidationError`` onto ``{field: first message}``."""
    errors: Dict[str, str] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "__all__"
        errors.setdefault(field, error["msg"])
    return errors
