"""
Authentication API endpoints.

Handles registration, login with a session cookie, and logout.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from app.api.deps import (
    SESSION_COOKIE,
    session_cookie_params,
    session_max_age,
    to_file_payload,
)
from app.core.errors import ValidationError
from app.db.session import get_db
from app.models import Account
from app.services import credentials
from app.services.asset_store import AssetStore, get_asset_store

router = APIRouter()


# ============== Pydantic Schemas ==============


class ProfileResponse(BaseModel):
    """Schema for the mutable profile sub-record."""

    bio: Optional[str] = None
    skills: list[str] = []
    profilePhotoUrl: Optional[str] = None
    resumeUrl: Optional[str] = None
    resumeOriginalFilename: Optional[str] = None


class UserResponse(BaseModel):
    """Schema for user response (without password)."""

    id: int
    fullname: str
    email: str
    phoneNumber: int
    role: str
    profile: ProfileResponse
    createdAt: Optional[datetime] = None

    @classmethod
    def from_account(cls, account: Account) -> "UserResponse":
        return cls(
            id=account.id,
            fullname=account.fullname,
            email=account.email,
            phoneNumber=account.phone_number,
            role=account.role,
            profile=ProfileResponse(
                bio=account.bio,
                skills=account.skills or [],
                profilePhotoUrl=account.profile_photo_url,
                resumeUrl=account.resume_url,
                resumeOriginalFilename=account.resume_original_filename,
            ),
            createdAt=account.created_at,
        )


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class UserEnvelope(MessageResponse):
    user: UserResponse


class LoginRequest(BaseModel):
    """Schema for login, accepted as JSON or form data."""

    email: str
    password: str
    role: str


# ============== API Endpoints ==============


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(
    fullname: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    phoneNumber: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    role: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    asset_store: AssetStore = Depends(get_asset_store),
):
    """
    Register a new job seeker or recruiter.

    Accepts multipart form data with an optional profile photo. Does not
    start a session; the client logs in afterwards.
    """
    form = credentials.RegistrationForm(
        fullname=fullname,
        email=email,
        phoneNumber=phoneNumber,
        password=password,
        role=role,
    )
    credentials.register(db, form, to_file_payload(file), asset_store)

    return MessageResponse(message="Account created successfully")


async def _read_login_body(request: Request) -> LoginRequest:
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith("application/json"):
            payload = await request.json()
        else:
            payload = dict(await request.form())
        return LoginRequest.model_validate(payload)
    except (ValueError, PydanticValidationError):
        raise ValidationError("All fields are required")


@router.post("/login", response_model=UserEnvelope)
async def login(
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
):
    """
    Login and receive the session cookie.

    Send email, password and role as JSON or form data.
    """
    body = await _read_login_body(request)
    account, token = await run_in_threadpool(
        credentials.login, db, body.email, body.password, body.role
    )

    response.set_cookie(
        SESSION_COOKIE,
        token,
        max_age=session_max_age(),
        **session_cookie_params(request),
    )

    return UserEnvelope(
        message=f"Welcome back {account.fullname}",
        user=UserResponse.from_account(account),
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(request: Request, response: Response):
    """Clear the session cookie. Always succeeds."""
    response.set_cookie(
        SESSION_COOKIE,
        "",
        max_age=0,
        **session_cookie_params(request),
    )
    return MessageResponse(message="Logged out successfully")
