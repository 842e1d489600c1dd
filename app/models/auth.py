from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class Role(str, Enum):
    user = "user"
    admin = "admin"


class Identity(BaseModel):
    """Utilisateur connecté, tel que porté par la session (jamais le hash)."""
    id: str
    name: str = Field(..., description="Nom affiché")
    email: str
    role: Role = Role.user

    @property
    def is_admin(self) -> bool:
        return self.role == Role.admin


class RegisterIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1)


class LoginIn(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RegisterOut(BaseModel):
    success: bool = True
    message: str


class LoginOut(BaseModel):
    success: bool = True
    user: Identity


class SessionOut(BaseModel):
    user: Identity


class OkOut(BaseModel):
    success: bool = True
    message: Optional[str] = None
