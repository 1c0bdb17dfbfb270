"""
Asset Store client.

Uploads profile photos and resumes to Cloudinary through its SDK and hands
back the durable https URL.
"""

import io
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader
import urllib3

from app.core.config import settings
from app.core.errors import UpstreamError

logger = logging.getLogger("asset_store")
logger.setLevel(logging.INFO)

if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[ASSET STORE] %(levelname)s %(message)s"))
    logger.addHandler(handler)

PROFILE_PHOTO_FOLDER = "profile_photos"
RESUME_FOLDER = "resumes"


@dataclass
class FilePayload:
    """An uploaded file held in memory."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


class AssetStore(ABC):
    """Upload bytes, get back a stable URL."""

    @abstractmethod
    def upload(self, payload: FilePayload, *, folder: str, resource_type: str = "image") -> str:
        ...


def configure_cloudinary() -> bool:
    """
    Configure the Cloudinary SDK from settings.

    Returns True if configured successfully, False otherwise.
    """
    if not (
        settings.CLOUDINARY_CLOUD_NAME
        and settings.CLOUDINARY_API_KEY
        and settings.CLOUDINARY_API_SECRET
    ):
        logger.warning("Cloudinary credentials not set - uploads will be refused")
        return False

    cloudinary.config(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
        secure=True,
    )
    logger.info("Cloudinary configured for cloud %s", settings.CLOUDINARY_CLOUD_NAME)
    return True


class CloudinaryAssetStore(AssetStore):
    def __init__(self, timeout: float = 15.0):
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        config = cloudinary.config()
        return bool(config.cloud_name and config.api_key and config.api_secret)

    def upload(self, payload: FilePayload, *, folder: str, resource_type: str = "image") -> str:
        if not self.configured:
            logger.error("Cloudinary is not configured")
            raise UpstreamError("Asset storage is not configured")

        try:
            result = cloudinary.uploader.upload(
                io.BytesIO(payload.data),
                filename=payload.filename,
                folder=folder,
                resource_type=resource_type,
                timeout=self.timeout,
            )
        except (urllib3.exceptions.TimeoutError, TimeoutError):
            logger.warning("Upload to %s timed out after %.1fs", folder, self.timeout)
            raise UpstreamError("File upload timed out")
        except (cloudinary.exceptions.Error, urllib3.exceptions.HTTPError, OSError) as e:
            logger.warning("Upload to %s failed: %s", folder, e)
            raise UpstreamError("File upload failed")

        secure_url = result.get("secure_url") if isinstance(result, dict) else None
        if not secure_url:
            logger.warning("Upload to %s returned no secure_url", folder)
            raise UpstreamError("File upload failed")

        logger.info("Uploaded %s (%d bytes) to %s", payload.filename, payload.size, folder)
        return secure_url


def get_asset_store() -> AssetStore:
    """FastAPI dependency returning the configured asset store."""
    return CloudinaryAssetStore(timeout=settings.ASSET_UPLOAD_TIMEOUT_SECONDS)
