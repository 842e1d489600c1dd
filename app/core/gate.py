"""
Contrôle d'accès par requête : public, connecté, ou admin.

- API : dépendances FastAPI (voir app.core.deps) -> 401 / 403 en JSON
- pages HTML : PageGateMiddleware -> redirection vers /login.html ou 403 texte
"""
import posixpath
from enum import Enum
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse, RedirectResponse, Response

from app.core.config import get_settings
from app.core.errors import Forbidden, Unauthenticated
from app.models.auth import Identity


class Access(str, Enum):
    public = "public"
    authenticated = "authenticated"
    admin = "admin"


LOGIN_PAGE = "/login.html"
HOME_PAGE = "/dashboard.html"

# pages accessibles sans compte ; un utilisateur connecté y est renvoyé vers HOME_PAGE
AUTH_PAGES = {"/login.html", "/signup.html"}
# pages d'information générale, publiques dans ce déploiement
INFO_PAGES = {"/ai.html", "/problem.html"}
ADMIN_PAGES = {"/admin.html"}

ADMIN_DENIED = "Access denied. Admin privileges required."


def normalize_page_path(path: str) -> str:
    """
    Chemin tel que StaticFiles le résoudra : "//admin.html", "/x/../admin.html" -> "/admin.html".
    """
    collapsed = "/" + "/".join(part for part in path.split("/") if part)
    normalized = posixpath.normpath(collapsed)
    if path.endswith("/") and normalized != "/":
        normalized += "/"
    return normalized


def classify_page(path: str) -> Access:
    path = normalize_page_path(path)
    if path in AUTH_PAGES or path in INFO_PAGES:
        return Access.public
    if path in ADMIN_PAGES:
        return Access.admin
    return Access.authenticated


def authorize(identity: Optional[Identity], required: Access) -> Optional[Identity]:
    """
    Lève Unauthenticated (pas de session valide) ou Forbidden (rôle insuffisant).
    """
    if required == Access.public:
        return identity
    if identity is None:
        raise Unauthenticated()
    if required == Access.admin and not identity.is_admin:
        raise Forbidden()
    return identity


class PageGateMiddleware(BaseHTTPMiddleware):
    """
    Filtre les pages HTML avant le service des fichiers statiques.
    Les routes /api/* ne sont pas concernées (elles ont leurs dépendances).
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        # scope["path"] est déjà décodé : "/%2Fadmin.html" arrive en "//admin.html"
        path = normalize_page_path(request.scope["path"])

        if any(part.startswith(".") for part in path.split("/") if part):
            return PlainTextResponse("Not found", status_code=404)

        if path.endswith("/") and path != "/":
            return PlainTextResponse("Directory listing disabled", status_code=403)

        if not path.endswith(".html"):
            return await call_next(request)

        settings = get_settings()
        token = request.cookies.get(settings.SESSION_COOKIE_NAME)
        identity = request.app.state.sessions.resolve(token)

        if path in AUTH_PAGES and identity is not None:
            return RedirectResponse(url=HOME_PAGE, status_code=302)

        try:
            authorize(identity, classify_page(path))
        except Forbidden:
            return PlainTextResponse(ADMIN_DENIED, status_code=403)
        except Unauthenticated:
            return RedirectResponse(url=LOGIN_PAGE, status_code=302)

        return await call_next(request)
