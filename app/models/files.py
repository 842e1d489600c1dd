from typing import List
from pydantic import BaseModel, Field


class UploadRecord(BaseModel):
    id: str = Field(..., description="Identifiant unique (upload-<hex>)")
    userId: str
    userName: str
    fileName: str = Field(..., description="Nom du fichier avec extension")
    fileType: str
    fileSize: int = Field(..., ge=0, description="Taille en octets")
    pages: int = Field(0, ge=0, description="Nombre de pages détectées (PDF)")
    cloudinaryUrl: str
    cloudinaryId: str
    uploadedAt: str
    category: str = "general"


class UploadResponse(BaseModel):
    success: bool = True
    upload: UploadRecord


class UploadListResponse(BaseModel):
    success: bool = True
    uploads: List[UploadRecord]
