from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.core.deps import get_current_identity, get_upload_relay
from app.core.errors import UploadFailed
from app.models.auth import Identity
from app.models.files import UploadListResponse, UploadRecord, UploadResponse
from app.services.uploads import UploadRelay

router = APIRouter(prefix="/api", tags=["files"])


@router.post("/upload", response_model=UploadResponse)
def upload_document(
    document: Optional[UploadFile] = File(default=None),
    category: str = Form(default="general"),
    identity: Identity = Depends(get_current_identity),
    relay: UploadRelay = Depends(get_upload_relay),
):
    if document is None or not document.filename:
        raise UploadFailed("No file uploaded")

    # lecture bornée : inutile de charger plus que la limite
    data = document.file.read(relay.max_upload_bytes + 1)
    record = relay.relay(
        identity,
        filename=document.filename,
        content_type=document.content_type or "",
        data=data,
        category=category,
    )
    return UploadResponse(upload=UploadRecord(**record))


@router.get("/uploads", response_model=UploadListResponse)
def list_uploads(
    identity: Identity = Depends(get_current_identity),
    relay: UploadRelay = Depends(get_upload_relay),
):
    return UploadListResponse(uploads=[UploadRecord(**u) for u in relay.list_for(identity)])
