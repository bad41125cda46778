import os

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session
from starlette.templating import Jinja2Templates

from vowsite.api.deps import authorize_admin
from vowsite.core.errors import AuthError, StorageError
from vowsite.db.session import get_db
from vowsite.schemas.vows import PublishRequest
from vowsite.services.unlock.service import UnlockService
from vowsite.services.vows.service import VowService


router = APIRouter(prefix="/admin", tags=["admin-ui"])
templates = Jinja2Templates(directory=os.path.join(os.path.dirname(__file__), "templates"))

MESSAGES = {
    "published": "Vows saved successfully.",
    "unlocked": "Vows are now visible.",
    "locked": "Vows are hidden again.",
}

ERRORS = {
    "auth": "Invalid admin password.",
    "invalid": "All fields are required for both languages.",
    "rate_limit": "Too many attempts. Try again later.",
    "storage": "Could not save. Try again.",
}


def _redirect(query: str) -> RedirectResponse:
    return RedirectResponse(url=f"/admin?{query}", status_code=303)


def _guarded(request: Request, password: str, db: Session, action) -> RedirectResponse:
    """Run an admin action and turn its failure into an error redirect."""
    try:
        authorize_admin(request, password, db)
        return _redirect(f"ok={action()}")
    except HTTPException:
        return _redirect("error=rate_limit")
    except AuthError:
        return _redirect("error=auth")
    except StorageError:
        return _redirect("error=storage")


@router.get("", response_class=HTMLResponse)
def admin_page(request: Request, db: Session = Depends(get_db)) -> HTMLResponse:
    try:
        gate = UnlockService(db).get_status()
    except StorageError:
        gate = None
    return templates.TemplateResponse(
        request,
        "admin.html",
        {
            "gate": gate,
            "message": MESSAGES.get(request.query_params.get("ok", "")),
            "error": ERRORS.get(request.query_params.get("error", "")),
        },
    )


@router.post("/publish")
def publish(
    request: Request,
    password: str = Form(""),
    groom_name_en: str = Form(""),
    groom_name_pt: str = Form(""),
    groom_text_en: str = Form(""),
    groom_text_pt: str = Form(""),
    bride_name_en: str = Form(""),
    bride_name_pt: str = Form(""),
    bride_text_en: str = Form(""),
    bride_text_pt: str = Form(""),
    db: Session = Depends(get_db),
) -> RedirectResponse:
    try:
        body = PublishRequest(
            password=password,
            groom={"name_en": groom_name_en, "name_pt": groom_name_pt, "text_en": groom_text_en, "text_pt": groom_text_pt},
            bride={"name_en": bride_name_en, "name_pt": bride_name_pt, "text_en": bride_text_en, "text_pt": bride_text_pt},
        )
    except ValidationError:
        return _redirect("error=invalid")

    def action() -> str:
        VowService(db).publish(body.groom.model_dump(), body.bride.model_dump())
        return "published"

    return _guarded(request, body.password, db, action)


@router.post("/unlock")
def unlock(request: Request, password: str = Form(""), db: Session = Depends(get_db)) -> RedirectResponse:
    def action() -> str:
        UnlockService(db).set_unlocked(True)
        return "unlocked"

    return _guarded(request, password, db, action)


@router.post("/lock")
def lock(request: Request, password: str = Form(""), db: Session = Depends(get_db)) -> RedirectResponse:
    def action() -> str:
        UnlockService(db).set_unlocked(False)
        return "locked"

    return _guarded(request, password, db, action)
