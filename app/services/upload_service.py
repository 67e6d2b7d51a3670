"""Image uploads to the external image host."""
from typing import Optional

import httpx
from fastapi import UploadFile

from app.backend.client import BackendError
from app.config import settings
from app.utils.logger import get_logger

logger = get_logger(__name__)


class UploadError(BackendError):
    pass


def has_file(upload: Optional[UploadFile]) -> bool:
    return upload is not None and bool(upload.filename)


def validate_image(content_type: Optional[str], size: int) -> None:
    if size > settings.max_upload_bytes:
        limit_mb = settings.max_upload_bytes // (1024 * 1024)
        raise UploadError(f"File size must be less than {limit_mb}MB")
    if not (content_type or "").startswith("image/"):
        raise UploadError("Please upload an image file")


async def upload_image(http: httpx.AsyncClient, upload: UploadFile) -> str:
    """Upload ``upload`` and return its public ``secure_url``."""
    content = await upload.read()
    validate_image(upload.content_type, len(content))

    try:
        response = await http.post(
            settings.image_upload_url,
            data={"upload_preset": settings.image_upload_preset},
            files={"file": (upload.filename, content, upload.content_type)},
        )
        payload = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Image upload failed: %s", exc)
        raise UploadError("Image upload failed!") from exc

    secure_url = payload.get("secure_url") if isinstance(payload, dict) else None
    if response.is_error or not secure_url:
        logger.warning("Image host rejected upload (%s)", response.status_code)
        raise UploadError("Image upload failed!", response.status_code)

    logger.info("Uploaded image %s", upload.filename)
    return secure_url
