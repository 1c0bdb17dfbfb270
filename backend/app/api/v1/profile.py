"""
Profile API endpoints.

Partial profile updates with optional resume upload, and the current
account view. Both sit behind the session cookie.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.api.deps import get_current_account, get_current_account_id, to_file_payload
from app.api.v1.auth import UserEnvelope, UserResponse
from app.db.session import get_db
from app.models import Account
from app.services.asset_store import AssetStore, get_asset_store
from app.services.profile import ProfileChanges, update_profile

router = APIRouter()


class CurrentUserResponse(BaseModel):
    success: bool = True
    user: UserResponse


@router.post("/profile/update", response_model=UserEnvelope)
def update_profile_endpoint(
    fullname: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    phoneNumber: Optional[str] = Form(None),
    bio: Optional[str] = Form(None),
    skills: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    account_id: int = Depends(get_current_account_id),
    db: Session = Depends(get_db),
    asset_store: AssetStore = Depends(get_asset_store),
):
    """
    Update the logged-in user's profile.

    Blank fields keep their stored value. A PDF in `file` replaces the resume.
    """
    changes = ProfileChanges(
        fullname=fullname,
        email=email,
        phoneNumber=phoneNumber,
        bio=bio,
        skills=skills,
    )
    account = update_profile(db, account_id, changes, to_file_payload(file), asset_store)

    return UserEnvelope(
        message="Profile updated successfully",
        user=UserResponse.from_account(account),
    )


@router.get("/me", response_model=CurrentUserResponse)
def get_me(current_account: Account = Depends(get_current_account)):
    """Get the logged-in user."""
    return CurrentUserResponse(user=UserResponse.from_account(current_account))
