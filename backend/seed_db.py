"""
Job Portal Database Seeder

Creates two demo accounts through the registration workflow:
- A recruiter (recruiter@jobportal.dev / recruiter123)
- A job seeker with bio and skills (jobseeker@jobportal.dev / jobseeker123)
"""

from sqlalchemy.orm import Session

from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.services import account_store
from app.services.asset_store import get_asset_store
from app.services.credentials import RegistrationForm, register
from app.services.profile import ProfileChanges, update_profile

DEMO_ACCOUNTS = [
    {
        "form": RegistrationForm(
            fullname="Sarah Chen",
            email="recruiter@jobportal.dev",
            phoneNumber="9876543210",
            password="recruiter123",
            role="recruiter",
        ),
        "profile": ProfileChanges(bio="Hiring engineers for the platform team."),
    },
    {
        "form": RegistrationForm(
            fullname="John Doe",
            email="jobseeker@jobportal.dev",
            phoneNumber="9123456780",
            password="jobseeker123",
            role="jobseeker",
        ),
        "profile": ProfileChanges(
            bio="Backend developer, 4 years of Python.",
            skills="Python, FastAPI, SQL, Docker",
        ),
    },
]


def seed_database(db: Session) -> int:
    """Seed the database with demo accounts. Returns how many were created."""
    asset_store = get_asset_store()
    created = 0

    for demo in DEMO_ACCOUNTS:
        if account_store.get_by_email(db, demo["form"].email) is not None:
            print(f"{demo['form'].email} already seeded. Skipping...")
            continue

        account = register(db, demo["form"], None, asset_store)
        update_profile(db, account.id, demo["profile"], None, asset_store)
        print(f"Created {account.role} {account.email}")
        created += 1

    return created


if __name__ == "__main__":
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        seed_database(session)
    finally:
        session.close()
