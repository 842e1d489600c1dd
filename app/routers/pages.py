from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse, RedirectResponse, Response

from app.core.config import Settings
from app.core.deps import get_optional_identity, get_settings_dep
from app.core.errors import NotFound
from app.core.gate import HOME_PAGE, LOGIN_PAGE
from app.models.auth import Identity

router = APIRouter(tags=["pages"])


@router.get("/", include_in_schema=False)
def root(
    identity: Optional[Identity] = Depends(get_optional_identity),
    settings: Settings = Depends(get_settings_dep),
) -> Response:
    if identity is not None:
        return RedirectResponse(url=HOME_PAGE, status_code=302)
    login_page = Path(settings.PUBLIC_DIR) / LOGIN_PAGE.lstrip("/")
    if not login_page.is_file():
        return RedirectResponse(url=LOGIN_PAGE, status_code=302)
    return FileResponse(login_page, media_type="text/html")


@router.get("/data/ll_questions.json", include_in_schema=False)
def question_source(settings: Settings = Depends(get_settings_dep)) -> Response:
    path = Path(settings.QUESTIONS_PATH)
    if not path.is_file():
        raise NotFound("Question source not found")
    return FileResponse(path, media_type="application/json")
