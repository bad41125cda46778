"""
Admin credential checks shared by the mutating routes.
"""
import logging

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.orm import Session

from vowsite.core.errors import AuthError
from vowsite.db.session import get_db
from vowsite.services.auth.admin_password import AdminAuthenticator
from vowsite.services.auth.login_rate_limit import (
    get_client_ip,
    is_rate_limited,
    record_failed_attempt,
    reset_attempts,
)
from vowsite.utils.metrics import admin_auth_failures_total

logger = logging.getLogger("auth")


def authorize_admin(request: Request, password: str | None, db: Session) -> None:
    """Raise unless password is the admin secret. Failed attempts are rate limited per IP."""
    client_ip = get_client_ip(request)
    if is_rate_limited(client_ip):
        admin_auth_failures_total.labels(reason="rate_limited").inc()
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many attempts. Try again later.",
        )
    if not AdminAuthenticator(db).verify(password):
        record_failed_attempt(client_ip)
        admin_auth_failures_total.labels(reason="invalid").inc()
        logger.warning("admin_auth_failed", extra={"ip": client_ip, "path": request.url.path})
        raise AuthError("Invalid admin password")
    reset_attempts(client_ip)


def require_admin_header(
    request: Request,
    x_admin_password: str | None = Header(default=None),
    db: Session = Depends(get_db),
) -> None:
    """Admin check for read-only admin routes (no JSON body)."""
    authorize_admin(request, x_admin_password, db)
