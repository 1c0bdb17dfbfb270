from app.services import account_store
from app.services.asset_store import (
    AssetStore,
    CloudinaryAssetStore,
    FilePayload,
    configure_cloudinary,
    get_asset_store,
)
from app.services.credentials import RegistrationForm, login, register
from app.services.fields import normalize_email, parse_phone_number, parse_skills
from app.services.profile import ProfileChanges, get_account, update_profile

__all__ = [
    "account_store",
    "AssetStore",
    "CloudinaryAssetStore",
    "FilePayload",
    "configure_cloudinary",
    "get_asset_store",
    "RegistrationForm",
    "login",
    "register",
    "normalize_email",
    "parse_phone_number",
    "parse_skills",
    "ProfileChanges",
    "get_account",
    "update_profile",
]
