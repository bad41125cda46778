"""
Vows content routes: public read (gated) and admin publish.
"""
from fastapi import APIRouter, Body, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from vowsite.api.deps import authorize_admin, require_admin_header
from vowsite.core.config import settings
from vowsite.db.session import get_db
from vowsite.models.vow import PersonType
from vowsite.schemas.vows import PublishOut, PublishRequest, VowOut, VowsOut
from vowsite.services.unlock.service import UnlockService
from vowsite.services.vows.service import VowService

router = APIRouter(prefix="/api", tags=["vows"])


@router.get(
    "/vows",
    response_model=VowsOut,
    responses={403: {"description": "Vows are locked"}, 404: {"description": "Nothing published yet"}},
)
def get_vows(db: Session = Depends(get_db)):
    """Active vows for both people, in both languages."""
    if settings.vows_enforce_lock and not UnlockService(db).get_status()["is_unlocked"]:
        return JSONResponse(status_code=403, content={"error": "Vows are locked"})
    svc = VowService(db)
    by_person = svc.get_active_by_person()
    if not any(by_person.values()):
        return JSONResponse(status_code=404, content={"error": "No vows published"})
    return {person: svc.as_dict(row) for person, row in by_person.items()}


@router.post("/vows", response_model=PublishOut)
def publish_vows(request: Request, body: PublishRequest = Body(...), db: Session = Depends(get_db)):
    """Replace the published vows. Admin only; every field in both languages is required."""
    authorize_admin(request, body.password, db)
    VowService(db).publish(
        body.groom.model_dump(),
        body.bride.model_dump(),
    )
    return {"success": True, "message": "Vows saved successfully"}


@router.get("/vows/history", response_model=list[VowOut], dependencies=[Depends(require_admin_header)])
def vows_history(
    db: Session = Depends(get_db),
    person_type: PersonType | None = None,
    limit: int = Query(50, ge=1, le=500),
):
    """Every stored version, newest first. Admin only."""
    svc = VowService(db)
    rows = svc.history(person_type.value if person_type else None, limit)
    return [svc.as_dict(r) for r in rows]
