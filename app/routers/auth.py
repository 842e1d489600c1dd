from typing import Optional

from fastapi import APIRouter, Depends, Response

from app.core.config import Settings
from app.core.deps import (
    get_credentials,
    get_current_identity,
    get_gate,
    get_session_token,
    get_settings_dep,
)
from app.models.auth import Identity, LoginIn, LoginOut, OkOut, RegisterIn, RegisterOut, SessionOut
from app.services.credentials import CredentialStore
from app.services.sessions import SessionGate

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register", response_model=RegisterOut)
def register(payload: RegisterIn, credentials: CredentialStore = Depends(get_credentials)):
    credentials.register(payload.name, payload.email, payload.password)
    return RegisterOut(message="Registration successful")


@router.post("/login", response_model=LoginOut)
def login(
    payload: LoginIn,
    response: Response,
    gate: SessionGate = Depends(get_gate),
    settings: Settings = Depends(get_settings_dep),
):
    token, identity = gate.login(payload.email, payload.password)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_TTL_SECONDS,
        httponly=True,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
    )
    return LoginOut(user=identity)


@router.post("/logout", response_model=OkOut)
def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    gate: SessionGate = Depends(get_gate),
    settings: Settings = Depends(get_settings_dep),
):
    # le quiz rattaché au token part avec la session (SessionStore.on_evict)
    gate.logout(token)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return OkOut()


@router.get("/session", response_model=SessionOut)
def session(identity: Identity = Depends(get_current_identity)):
    return SessionOut(user=identity)


# ancien nom utilisé par les pages
@router.get("/user", response_model=SessionOut, include_in_schema=False)
def user(identity: Identity = Depends(get_current_identity)):
    return SessionOut(user=identity)
