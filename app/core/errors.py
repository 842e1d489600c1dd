"""
Erreurs métier du portail.

Toutes héritent de HTTPException : services et routers les lèvent directement,
FastAPI les rend en {"detail": ...} avec le bon code.
"""
from typing import Optional

from fastapi import HTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_502_BAD_GATEWAY,
)


class PortalError(HTTPException):
    status_code: int = HTTP_400_BAD_REQUEST
    default_detail: str = "Request failed"

    def __init__(self, detail: Optional[str] = None, status_code: Optional[int] = None) -> None:
        super().__init__(
            status_code=status_code or self.status_code,
            detail=detail or self.default_detail,
        )


class ValidationError(PortalError):
    status_code = HTTP_400_BAD_REQUEST
    default_detail = "Invalid request"


class AuthError(PortalError):
    status_code = HTTP_401_UNAUTHORIZED
    default_detail = "Authentication failed"


class InvalidCredentials(AuthError):
    # même message pour email inconnu et mauvais mot de passe
    default_detail = "Invalid credentials"


class Unauthenticated(AuthError):
    default_detail = "Not authenticated"


class Forbidden(AuthError):
    status_code = HTTP_403_FORBIDDEN
    default_detail = "Access denied. Admin privileges required."


class InsufficientData(PortalError):
    status_code = HTTP_400_BAD_REQUEST
    default_detail = "Not enough questions available"


class UploadFailed(PortalError):
    status_code = HTTP_400_BAD_REQUEST
    default_detail = "File upload error"

    @classmethod
    def from_provider(cls, reason: str) -> "UploadFailed":
        return cls(f"Upload failed: {reason}", status_code=HTTP_502_BAD_GATEWAY)


class NotFound(PortalError):
    status_code = HTTP_404_NOT_FOUND
    default_detail = "Not found"
