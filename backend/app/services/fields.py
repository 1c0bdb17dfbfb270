"""
Input normalisation shared by the registration and profile workflows.
"""

import re
from typing import Optional

from app.core.errors import ValidationError

ROLES = ("jobseeker", "recruiter")

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$")
PHONE_PATTERN = re.compile(r"^\+?[0-9]+$")
MAX_PHONE_DIGITS = 15


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def normalize_email(email: str) -> str:
    """Lower-case and strip an email address, rejecting malformed ones."""
    normalized = email.strip().lower()
    if not EMAIL_PATTERN.match(normalized):
        raise ValidationError("Invalid email format")
    return normalized


def parse_phone_number(value: str) -> int:
    """
    Parse a phone number into its stored numeric form.

    Accepts ASCII digits with an optional leading '+', at most 15 digits,
    surrounding whitespace ignored.
    """
    cleaned = value.strip()
    if not PHONE_PATTERN.match(cleaned):
        raise ValidationError("Phone number must be numeric")
    digits = cleaned.lstrip("+")
    if len(digits) > MAX_PHONE_DIGITS:
        raise ValidationError("Phone number must be at most 15 digits")
    return int(digits)


def parse_skills(value: str) -> list[str]:
    """
    Split a comma-separated skills string.

    Entries are trimmed, empty entries dropped, input order kept:
    " go, , rust ,  " -> ["go", "rust"].
    """
    return [skill.strip() for skill in value.split(",") if skill.strip()]
