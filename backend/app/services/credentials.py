"""
Credential Workflow.

Registration and login. Registration validates everything and checks for
an existing account before touching the asset store, so a rejected request
never uploads anything.
"""

import logging
from typing import Optional

from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import AuthenticationError, ConflictError, ValidationError
from app.core.security import create_access_token, get_password_hash, verify_password
from app.models import Account
from app.services import account_store
from app.services.asset_store import PROFILE_PHOTO_FOLDER, AssetStore, FilePayload
from app.services.fields import ROLES, is_blank, normalize_email, parse_phone_number

logger = logging.getLogger("credentials")
logger.setLevel(logging.INFO)

if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[AUTH] %(levelname)s %(message)s"))
    logger.addHandler(handler)

MIN_PASSWORD_LENGTH = 6
PHOTO_CONTENT_TYPES = ("image/jpeg", "image/webp")

INVALID_CREDENTIALS = "Invalid credentials"


class RegistrationForm(BaseModel):
    """Raw registration fields as submitted."""

    fullname: Optional[str] = None
    email: Optional[str] = None
    phoneNumber: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


def validate_photo(photo: FilePayload) -> None:
    if photo.content_type not in PHOTO_CONTENT_TYPES:
        raise ValidationError("Only JPEG and WEBP images are allowed")
    if photo.size > settings.MAX_PHOTO_BYTES:
        raise ValidationError("Image size must be less than 1MB")


def register(
    db: Session,
    form: RegistrationForm,
    photo: Optional[FilePayload],
    asset_store: AssetStore,
) -> Account:
    """
    Create a new account. Does not log the user in.

    Raises:
        ValidationError: first invalid field, in form order
        ConflictError: the email is already registered
        UpstreamError: the profile photo upload failed
    """
    if is_blank(form.fullname):
        raise ValidationError("Full name is required")
    if is_blank(form.email):
        raise ValidationError("Email is required")
    email = normalize_email(form.email)
    if is_blank(form.phoneNumber):
        raise ValidationError("Phone number is required")
    phone_number = parse_phone_number(form.phoneNumber)
    if not form.password:
        raise ValidationError("Password is required")
    if len(form.password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("Password must be at least 6 characters")
    if is_blank(form.role):
        raise ValidationError("Please select a role")
    role = form.role.strip()
    if role not in ROLES:
        raise ValidationError("Role must be 'jobseeker' or 'recruiter'")
    if photo is not None:
        validate_photo(photo)

    if account_store.get_by_email(db, email) is not None:
        raise ConflictError("User already exists")

    profile_photo_url = None
    if photo is not None:
        profile_photo_url = asset_store.upload(
            photo, folder=PROFILE_PHOTO_FOLDER, resource_type="image"
        )

    account = Account(
        email=email,
        hashed_password=get_password_hash(form.password),
        fullname=form.fullname.strip(),
        phone_number=phone_number,
        role=role,
        skills=[],
        profile_photo_url=profile_photo_url,
    )
    account = account_store.create(db, account)

    logger.info("Registered account %s (%s)", account.id, account.role)
    return account


def login(db: Session, email: Optional[str], password: Optional[str], role: Optional[str]) -> tuple[Account, str]:
    """
    Verify credentials and issue a session token.

    Unknown email, wrong password and role mismatch all fail with the same
    AuthenticationError so the response never reveals which check failed.
    """
    if is_blank(email) or not password or is_blank(role):
        raise ValidationError("All fields are required")

    account = account_store.get_by_email(db, email.strip().lower())
    password_ok = verify_password(password, account.hashed_password if account else None)

    if account is None or not password_ok or account.role != role.strip():
        logger.info("Rejected login attempt")
        raise AuthenticationError(INVALID_CREDENTIALS, status_code=400)

    token = create_access_token(account.id)
    logger.info("Account %s logged in", account.id)
    return account, token
