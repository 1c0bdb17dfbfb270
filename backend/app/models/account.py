from datetime import datetime, timezone

from sqlalchemy import BigInteger, Column, DateTime, Integer, JSON, String

from app.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Account(Base):
    """A registered job seeker or recruiter, with credentials and profile."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)  # always lower-case
    hashed_password = Column(String, nullable=False)
    fullname = Column(String, nullable=False)
    phone_number = Column(BigInteger, nullable=False)
    role = Column(String, nullable=False)  # 'jobseeker' | 'recruiter'

    # Profile. One column per field so an update only writes what it changed.
    bio = Column(String, nullable=True)
    skills = Column(JSON, nullable=True)  # ["Python", "React"]
    profile_photo_url = Column(String, nullable=True)
    resume_url = Column(String, nullable=True)
    resume_original_filename = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
