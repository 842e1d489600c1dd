import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.status import HTTP_400_BAD_REQUEST

from app.core.config import get_settings
from app.core.gate import PageGateMiddleware
from app.core.logging import setup_logging
from app.db.json_store import DataStores
from app.routers import admin, assistant, auth, files, pages, problems, quiz, system
from app.services.activity import ActivityLog
from app.services.credentials import CredentialStore
from app.services.problems import ProblemDesk
from app.services.quiz_engine import QuizRegistry, load_question_pool
from app.services.sessions import SessionGate, SessionStore
from app.services.storage import StorageProvider, build_storage_provider
from app.services.uploads import UploadRelay

logger = logging.getLogger(__name__)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # 400 lisible au lieu du 422 par défaut
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return JSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={"detail": "; ".join(parts) or "Invalid request"},
    )


def create_app(storage_provider: Optional[StorageProvider] = None) -> FastAPI:
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="API du portail Drive Smart (comptes, assistant RTO, documents, quiz LL, admin)",
    )

    # Services : une erreur de configuration ici doit empêcher le démarrage
    try:
        pool = load_question_pool(settings.QUESTIONS_PATH)
    except (OSError, ValueError) as e:
        raise RuntimeError(f"Cannot load question pool from {settings.QUESTIONS_PATH}: {e}") from e

    provider = storage_provider or build_storage_provider(settings)

    stores = DataStores(settings.DATA_DIR)
    activity = ActivityLog(stores.activities)
    credentials = CredentialStore(stores.users, min_password_length=settings.MIN_PASSWORD_LENGTH)
    quizzes = QuizRegistry(pool)
    # un quiz vit tant que la session de connexion qui le porte
    sessions = SessionStore(ttl_seconds=settings.SESSION_TTL_SECONDS, on_evict=quizzes.drop)

    app.state.stores = stores
    app.state.activity = activity
    app.state.credentials = credentials
    app.state.sessions = sessions
    app.state.gate = SessionGate(credentials, sessions, activity)
    app.state.quizzes = quizzes
    app.state.uploads = UploadRelay(provider, stores.uploads, activity, max_upload_mb=settings.MAX_UPLOAD_MB)
    app.state.problems = ProblemDesk(stores.problems, activity)

    if settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD:
        credentials.ensure_admin(settings.ADMIN_NAME, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)

    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # Middleware CORS
    origins = []
    if settings.CORS_ORIGINS:
        origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],  # fallback si mal configuré
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(PageGateMiddleware)

    # Routers
    app.include_router(system.router)
    app.include_router(pages.router)
    app.include_router(auth.router)
    app.include_router(assistant.router)
    app.include_router(files.router)
    app.include_router(problems.router)
    app.include_router(quiz.router)
    app.include_router(admin.router)

    # Pages HTML (filtrées par PageGateMiddleware), en dernier
    public_dir = Path(settings.PUBLIC_DIR)
    if public_dir.is_dir():
        app.mount("/", StaticFiles(directory=public_dir), name="public")
    else:
        logger.warning("PUBLIC_DIR %s not found, HTML pages disabled", public_dir)

    logger.info("%s %s started (env=%s, storage=%s, %d questions)",
                settings.APP_NAME, settings.APP_VERSION, settings.APP_ENV,
                settings.STORAGE_BACKEND, len(pool))
    return app


app = create_app()
