"""Credential store: register users, look them up, check passwords."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import DuplicateError, StoreError, ValidationError
from app.core.security import DEFAULT_BCRYPT_ROUNDS, hash_password, verify_password
from app.models import User

logger = logging.getLogger(__name__)


def _require(**fields: str | None) -> None:
    missing = [name for name, value in fields.items() if value is None or not str(value).strip()]
    if missing:
        raise ValidationError(f"Please provide all required fields: {', '.join(missing)}")


def find_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def find_user_by_id(db: Session, user_id: int) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def register_user(
    db: Session,
    username: str | None,
    email: str | None,
    password: str | None,
    rounds: int = DEFAULT_BCRYPT_ROUNDS,
) -> User:
    """
    Create a user with a bcrypt password hash.

    Raises ValidationError for missing fields, DuplicateError when the email
    (or, via the unique constraint, the username) is taken, StoreError otherwise.
    """
    _require(username=username, email=email, password=password)

    try:
        if find_user_by_email(db, email) is not None:
            raise DuplicateError("User already exists")
        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password, rounds=rounds),
        )
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError as e:
        db.rollback()
        raise DuplicateError("User already exists", cause=e) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to register user")
        raise StoreError("Server error", cause=e) from e

    logger.info("User registered", extra={"user_id": user.id})
    return user


def verify_user_password(user: User, password: str) -> bool:
    """True if password matches the user's stored hash."""
    return verify_password(password, user.password_hash)
