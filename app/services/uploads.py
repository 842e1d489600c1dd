from __future__ import annotations

import logging
import re
import uuid
from typing import List

from app.core.errors import UploadFailed
from app.db.json_store import JsonStore, Record
from app.models.auth import Identity
from app.services.activity import ActivityLog, utcnow_iso
from app.services.storage import StorageProvider
from app.utils.pdf_extract import count_pdf_pages

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = {"image/jpeg", "image/jpg", "image/png", "application/pdf"}
ALLOWED_EXTENSIONS = re.compile(r"\.(jpg|jpeg|png|pdf)$", re.IGNORECASE)
TYPE_ERROR = "Only PDF, JPG, and PNG files are allowed"


class UploadRelay:
    """
    Valide un document, l'envoie au fournisseur de stockage puis enregistre
    ses métadonnées dans uploads.json. Rien n'est enregistré si l'envoi échoue.
    """

    def __init__(self, provider: StorageProvider, store: JsonStore, activity: ActivityLog,
                 max_upload_mb: int = 10) -> None:
        self.provider = provider
        self.store = store
        self.activity = activity
        self.max_upload_mb = max_upload_mb
        self.max_upload_bytes = max_upload_mb * 1024 * 1024

    def validate(self, filename: str, content_type: str, size: int) -> None:
        if not filename:
            raise UploadFailed("No file uploaded")
        if size <= 0:
            raise UploadFailed("Uploaded file is empty")
        if size > self.max_upload_bytes:
            raise UploadFailed(f"File size exceeds {self.max_upload_mb}MB limit")
        if (content_type or "").lower() not in ALLOWED_MIME_TYPES or not ALLOWED_EXTENSIONS.search(filename):
            raise UploadFailed(TYPE_ERROR)

    def relay(self, identity: Identity, filename: str, content_type: str, data: bytes,
              category: str = "general") -> Record:
        content_type = (content_type or "").lower()
        self.validate(filename, content_type, len(data))

        stored = self.provider.upload(data, content_type, filename)

        category = (category or "").strip() or "general"
        record = {
            "id": f"upload-{uuid.uuid4().hex[:12]}",
            "userId": identity.id,
            "userName": identity.name,
            "fileName": filename,
            "fileType": content_type,
            "fileSize": len(data),
            "pages": count_pdf_pages(data) if content_type == "application/pdf" else 0,
            "cloudinaryUrl": stored.url,
            "cloudinaryId": stored.public_id,
            "uploadedAt": utcnow_iso(),
            "category": category,
        }
        self.store.append(record)
        self.activity.record(identity, "document_upload", {"fileName": filename, "category": category})
        logger.info("upload recorded id=%s user=%s size=%d", record["id"], identity.id, len(data))
        return record

    def list_for(self, identity: Identity) -> List[Record]:
        uploads = self.store.read_all()
        if identity.is_admin:
            return uploads
        return [u for u in uploads if u.get("userId") == identity.id]
