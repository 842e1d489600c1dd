from typing import Optional

from fastapi import Depends, Request

from app.core.config import Settings, get_settings
from app.core.gate import Access, authorize
from app.db.json_store import DataStores
from app.models.auth import Identity
from app.services.activity import ActivityLog
from app.services.credentials import CredentialStore
from app.services.problems import ProblemDesk
from app.services.quiz_engine import QuizRegistry
from app.services.sessions import SessionGate, SessionStore
from app.services.uploads import UploadRelay


def get_settings_dep() -> Settings:
    return get_settings()


# =========================================================
# Services (portés par app.state, un jeu par application)
# =========================================================
def get_stores(request: Request) -> DataStores:
    return request.app.state.stores


def get_activity(request: Request) -> ActivityLog:
    return request.app.state.activity


def get_credentials(request: Request) -> CredentialStore:
    return request.app.state.credentials


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_gate(request: Request) -> SessionGate:
    return request.app.state.gate


def get_quiz_registry(request: Request) -> QuizRegistry:
    return request.app.state.quizzes


def get_upload_relay(request: Request) -> UploadRelay:
    return request.app.state.uploads


def get_problem_desk(request: Request) -> ProblemDesk:
    return request.app.state.problems


# =========================================================
# Session
# =========================================================
def get_session_token(request: Request) -> Optional[str]:
    settings = get_settings()
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def get_optional_identity(
    token: Optional[str] = Depends(get_session_token),
    sessions: SessionStore = Depends(get_session_store),
) -> Optional[Identity]:
    return sessions.resolve(token)


def get_current_identity(identity: Optional[Identity] = Depends(get_optional_identity)) -> Identity:
    return authorize(identity, Access.authenticated)


def require_admin(identity: Optional[Identity] = Depends(get_optional_identity)) -> Identity:
    return authorize(identity, Access.admin)
