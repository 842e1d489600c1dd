from __future__ import annotations

import io
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from app.core.config import Settings
from app.core.errors import UploadFailed

logger = logging.getLogger(__name__)

PLACEHOLDER_VALUES = {"your-cloud-name", "your-api-key", "your-api-secret"}


@dataclass(frozen=True)
class StoredObject:
    url: str
    public_id: str


class StorageProvider(Protocol):
    def upload(self, data: bytes, content_type: str, filename: str) -> StoredObject: ...


class LocalStorageProvider:
    """
    Stockage sur disque (dev / tests sans compte Cloudinary).
    """

    def __init__(self, base_path: str = "./storage", public_prefix: str = "/storage") -> None:
        self.base_path = Path(base_path)
        self.public_prefix = public_prefix.rstrip("/")
        self.base_path.mkdir(parents=True, exist_ok=True)

    def upload(self, data: bytes, content_type: str, filename: str) -> StoredObject:
        ext = Path(filename).suffix.lower()
        file_id = str(uuid.uuid4())
        dest_path = self.base_path / f"{file_id}{ext}"
        try:
            with open(dest_path, "wb") as f:
                f.write(data)
        except OSError as e:
            logger.exception("local storage write failed")
            raise UploadFailed.from_provider(str(e))
        return StoredObject(url=f"{self.public_prefix}/{dest_path.name}", public_id=file_id)


class CloudinaryStorageProvider:
    """
    Envoi vers Cloudinary (resource_type auto, dossier configurable).
    """

    ALLOWED_FORMATS = ["jpg", "jpeg", "png", "pdf"]

    def __init__(self, cloud_name: str, api_key: str, api_secret: str, folder: str = "drive-smart") -> None:
        self.folder = folder
        cloudinary.config(
            cloud_name=cloud_name.strip(),
            api_key=api_key.strip(),
            api_secret=api_secret.strip(),
            secure=True,
        )

    def upload(self, data: bytes, content_type: str, filename: str) -> StoredObject:
        try:
            result = cloudinary.uploader.upload(
                io.BytesIO(data),
                filename=filename,
                resource_type="auto",
                folder=self.folder,
                allowed_formats=self.ALLOWED_FORMATS,
            )
        except CloudinaryError as e:
            logger.exception("cloudinary upload error")
            raise UploadFailed.from_provider(str(e))

        url = (result or {}).get("secure_url")
        if not url:
            raise UploadFailed.from_provider("no URL returned by storage provider")
        logger.info("cloudinary upload ok: %s", url)
        return StoredObject(url=url, public_id=result.get("public_id", ""))


def cloudinary_configured(settings: Settings) -> bool:
    values = [settings.CLOUDINARY_CLOUD_NAME, settings.CLOUDINARY_API_KEY, settings.CLOUDINARY_API_SECRET]
    return all(v and v.strip() and v.strip() not in PLACEHOLDER_VALUES for v in values)


def build_storage_provider(settings: Settings) -> StorageProvider:
    """
    Choisit le backend au démarrage. Cloudinary sans identifiants = erreur immédiate.
    """
    backend = (settings.STORAGE_BACKEND or "").strip().lower()
    if backend == "local":
        return LocalStorageProvider(base_path=settings.STORAGE_PATH)
    if backend == "cloudinary":
        if not cloudinary_configured(settings):
            raise RuntimeError(
                "Cloudinary not configured: set CLOUDINARY_CLOUD_NAME, CLOUDINARY_API_KEY "
                "and CLOUDINARY_API_SECRET (or STORAGE_BACKEND=local)"
            )
        return CloudinaryStorageProvider(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            folder=settings.CLOUDINARY_FOLDER,
        )
    raise RuntimeError(f"Unknown STORAGE_BACKEND: {settings.STORAGE_BACKEND!r}")
