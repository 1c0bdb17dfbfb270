"""
Account Store: create / find / save against the accounts table.

The unique index on accounts.email is the final authority on uniqueness;
a violation is surfaced as ConflictError.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError
from app.models import Account


def get_by_email(db: Session, email: str) -> Optional[Account]:
    """Get an account by its (already normalised) email."""
    return db.query(Account).filter(Account.email == email).first()


def get_by_id(db: Session, account_id: int, for_update: bool = False) -> Optional[Account]:
    """Get an account by id, optionally locking the row until commit."""
    stmt = select(Account).where(Account.id == account_id)
    if for_update:
        stmt = stmt.with_for_update()
    return db.execute(stmt).scalar_one_or_none()


def create(db: Session, account: Account) -> Account:
    db.add(account)
    _commit(db, "User already exists")
    db.refresh(account)
    return account


def save(db: Session, account: Account) -> Account:
    _commit(db, "Email already in use")
    db.refresh(account)
    return account


def _commit(db: Session, conflict_message: str) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(conflict_message)
    except Exception:
        db.rollback()
        raise
