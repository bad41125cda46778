"""
Server-rendered vows page.

Same markup as the display client. The gate is read on every request and
vows are only loaded while it is unlocked. `?lang=` switches language and
is remembered in a cookie.
"""
from fastapi import APIRouter, Cookie, Depends, Query
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from vowsite.client.models import DEFAULT_LANGUAGE, RenderContext, VowsPayload, normalize_language
from vowsite.client.storage import LANGUAGE_KEY
from vowsite.client.view import VowsView
from vowsite.core.config import settings
from vowsite.core.errors import StorageError
from vowsite.db.session import get_db
from vowsite.services.unlock.service import UnlockService
from vowsite.services.vows.service import VowService

router = APIRouter(tags=["pages"])

LANGUAGE_COOKIE_MAX_AGE = 365 * 24 * 3600

_view: VowsView | None = None


def get_view() -> VowsView:
    global _view
    if _view is None:
        _view = VowsView(refresh_seconds=settings.poll_interval_seconds)
    return _view


def _load_context(db: Session, language: str) -> RenderContext:
    try:
        is_unlocked = UnlockService(db).get_status()["is_unlocked"]
    except StorageError:
        # Unknown gate state renders as locked
        is_unlocked = False
    payload = None
    if is_unlocked:
        svc = VowService(db)
        by_person = svc.get_active_by_person()
        if any(by_person.values()):
            payload = VowsPayload.model_validate(
                {person: svc.as_dict(row) for person, row in by_person.items()}
            )
    return RenderContext(payload=payload, is_unlocked=is_unlocked, language=language)


@router.get("/", response_class=HTMLResponse)
def vows_page(
    db: Session = Depends(get_db),
    view: VowsView = Depends(get_view),
    lang: str | None = Query(None),
    saved_lang: str | None = Cookie(None, alias=LANGUAGE_KEY),
):
    chosen = normalize_language(lang)
    language = chosen or normalize_language(saved_lang) or DEFAULT_LANGUAGE
    response = HTMLResponse(view.render(_load_context(db, language)))
    if chosen:
        response.set_cookie(LANGUAGE_KEY, chosen, max_age=LANGUAGE_COOKIE_MAX_AGE, samesite="lax")
    return response
