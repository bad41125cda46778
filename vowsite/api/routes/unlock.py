from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from vowsite.api.deps import authorize_admin
from vowsite.db.session import get_db
from vowsite.schemas.vows import AdminRequest, GateChangeOut, UnlockStatusOut
from vowsite.services.unlock.service import UnlockService

router = APIRouter(prefix="/api", tags=["unlock"])


@router.get("/unlock-status", response_model=UnlockStatusOut)
def unlock_status(db: Session = Depends(get_db)):
    return UnlockService(db).get_status()


@router.post("/unlock", response_model=GateChangeOut)
def unlock(request: Request, body: AdminRequest = Body(...), db: Session = Depends(get_db)):
    """Reveal the vows. Admin only."""
    authorize_admin(request, body.password, db)
    status = UnlockService(db).set_unlocked(True)
    return {"success": True, "is_unlocked": status["is_unlocked"]}


@router.post("/lock", response_model=GateChangeOut)
def lock(request: Request, body: AdminRequest = Body(...), db: Session = Depends(get_db)):
    """Hide the vows again. Admin only."""
    authorize_admin(request, body.password, db)
    status = UnlockService(db).set_unlocked(False)
    return {"success": True, "is_unlocked": status["is_unlocked"]}
