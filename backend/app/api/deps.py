"""
Shared FastAPI dependencies: the session gate and upload helpers.
"""

from typing import Optional

from fastapi import Cookie, Depends, Request, UploadFile
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import AuthenticationError
from app.core.security import get_token_account_id, session_lifetime
from app.db.session import get_db
from app.models import Account
from app.services.asset_store import FilePayload
from app.services.profile import get_account

SESSION_COOKIE = "token"


def get_current_account_id(token: Optional[str] = Cookie(default=None)) -> int:
    """
    Session gate. Resolves the `token` cookie to an account id.

    A missing cookie is an ordinary unauthenticated request and is answered
    with 401, same as a malformed or expired token.
    """
    if not token:
        raise AuthenticationError("User not authenticated")

    account_id = get_token_account_id(token)
    if account_id is None:
        raise AuthenticationError("Invalid or expired session")

    return account_id


def get_current_account(
    account_id: int = Depends(get_current_account_id),
    db: Session = Depends(get_db),
) -> Account:
    return get_account(db, account_id)


def to_file_payload(upload: Optional[UploadFile]) -> Optional[FilePayload]:
    """Read an optional multipart file; an empty part counts as no file."""
    if upload is None or not upload.filename:
        return None
    data = upload.file.read()
    if not data:
        return None
    return FilePayload(
        filename=upload.filename,
        content_type=upload.content_type or "application/octet-stream",
        data=data,
    )


def session_cookie_params(request: Request) -> dict:
    """
    Cookie attributes for the session token.

    Secure follows COOKIE_SECURE, or the request scheme when unset. A secure
    cookie is SameSite=None so the cross-origin client (kept in check by the
    CORS allow-list) still receives it; a plain-http cookie falls back to Lax.
    """
    secure = settings.COOKIE_SECURE
    if secure is None:
        secure = request.url.scheme == "https"
    return {
        "httponly": True,
        "secure": secure,
        "samesite": "none" if secure else "lax",
        "path": "/",
    }


def session_max_age() -> int:
    """Cookie Max-Age in seconds (86400 for the default 24 h session)."""
    return int(session_lifetime().total_seconds())
