"""
Profile Mutation Workflow.

Applies a partial update to an account. All fields are validated before the
resume is uploaded, and the account is only written after the upload
succeeded, so a failed request leaves the stored account untouched.

Blank policy: a blank or absent fullname, email, phoneNumber, bio or skills
value keeps the stored value. A skills string that parses to no entries
(" , ") counts as blank.
"""

import logging
from typing import Optional

from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.models import Account
from app.services import account_store
from app.services.asset_store import RESUME_FOLDER, AssetStore, FilePayload
from app.services.fields import is_blank, normalize_email, parse_phone_number, parse_skills

logger = logging.getLogger("profile")
logger.setLevel(logging.INFO)

if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[PROFILE] %(levelname)s %(message)s"))
    logger.addHandler(handler)

RESUME_CONTENT_TYPES = ("application/pdf",)


class ProfileChanges(BaseModel):
    """Profile fields as submitted. Role is deliberately not part of it."""

    fullname: Optional[str] = None
    email: Optional[str] = None
    phoneNumber: Optional[str] = None
    bio: Optional[str] = None
    skills: Optional[str] = None


def validate_resume(resume: FilePayload) -> None:
    if resume.content_type not in RESUME_CONTENT_TYPES:
        raise ValidationError("Resume must be a PDF file")
    if resume.size > settings.MAX_RESUME_BYTES:
        raise ValidationError("Resume size must be less than 5MB")


def get_account(db: Session, account_id: int) -> Account:
    account = account_store.get_by_id(db, account_id)
    if account is None:
        raise NotFoundError("User not found")
    return account


def _collect_updates(db: Session, account: Account, changes: ProfileChanges) -> dict:
    updates: dict = {}

    if not is_blank(changes.fullname):
        updates["fullname"] = changes.fullname.strip()

    if not is_blank(changes.email):
        email = normalize_email(changes.email)
        if email != account.email:
            owner = account_store.get_by_email(db, email)
            if owner is not None and owner.id != account.id:
                raise ConflictError("Email already in use")
            updates["email"] = email

    if not is_blank(changes.phoneNumber):
        updates["phone_number"] = parse_phone_number(changes.phoneNumber)

    if not is_blank(changes.bio):
        updates["bio"] = changes.bio.strip()

    if changes.skills is not None:
        skills = parse_skills(changes.skills)
        if skills:
            updates["skills"] = skills

    return updates


def update_profile(
    db: Session,
    account_id: int,
    changes: ProfileChanges,
    resume: Optional[FilePayload],
    asset_store: AssetStore,
) -> Account:
    """
    Apply a partial profile update and persist it.

    Raises:
        NotFoundError: account_id does not resolve
        ValidationError: a supplied field or the resume is invalid
        ConflictError: the new email belongs to another account
        UpstreamError: the resume upload failed
    """
    account = account_store.get_by_id(db, account_id, for_update=True)
    if account is None:
        raise NotFoundError("User not found")

    try:
        updates = _collect_updates(db, account, changes)
        if resume is not None:
            validate_resume(resume)
            updates["resume_url"] = asset_store.upload(
                resume, folder=RESUME_FOLDER, resource_type="raw"
            )
            updates["resume_original_filename"] = resume.filename
    except Exception:
        # Release the row lock taken above.
        db.rollback()
        raise

    # Only changed attributes end up in the UPDATE statement.
    for field, value in updates.items():
        setattr(account, field, value)

    account = account_store.save(db, account)
    logger.info("Updated account %s: %s", account.id, ", ".join(sorted(updates)) or "no changes")
    return account
