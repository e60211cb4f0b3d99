"""Account registration, credential checks and user lookup."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError
from sqlmodel import Session, select

from ..errors import DuplicateError, HabitVaultError
from ..infra.database import SessionFactory
from ..logging_config import get_logger
from ..models.user import User

_hasher = PasswordHasher()
logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 6


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def _find_by_email(session: Session, email: str) -> Optional[User]:
    return session.exec(select(User).where(User.email == email)).first()


def _detached(session: Session, user: Optional[User]) -> Optional[User]:
    if user is not None:
        session.expunge(user)
    return user


def get_user(user_id: int, session_factory: SessionFactory) -> Optional[User]:
    with session_factory() as session:
        return _detached(session, session.get(User, user_id))


def get_user_by_email(email: str, session_factory: SessionFactory) -> Optional[User]:
    """Look a user up by email, ignoring case and surrounding whitespace."""
    with session_factory() as session:
        return _detached(session, _find_by_email(session, _normalize_email(email)))


def register_user(
    *,
    email: str,
    password: str,
    name: str | None = None,
    session_factory: SessionFactory,
) -> User:
    """Create an account and return it.

    Raises ``HabitVaultError`` for a malformed email or short password and
    ``DuplicateError`` when the email is taken.
    """

    email = _normalize_email(email)
    if "@" not in email:
        raise HabitVaultError("A valid email address is required.")
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise HabitVaultError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")

    with session_factory() as session:
        if _find_by_email(session, email) is not None:
            raise DuplicateError("Email already in use")
        user = User(
            email=email,
            name=(name or "").strip() or None,
            password_hash=_hasher.hash(password),
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        _detached(session, user)

    logger.info("User registered", extra={"user_id": user.id})
    return user


def authenticate(
    *,
    email: str,
    password: str,
    session_factory: SessionFactory,
) -> Optional[User]:
    """Return the user when the credentials match, otherwise ``None``.

    A successful login stamps ``last_login`` and upgrades the stored hash when
    the hasher's parameters have changed.
    """

    email = _normalize_email(email)
    if not email or not password:
        return None
    with session_factory() as session:
        user = _find_by_email(session, email)
        if user is None:
            logger.info("Login failed: unknown email")
            return None
        try:
            _hasher.verify(user.password_hash, password)
        except (VerifyMismatchError, InvalidHash, VerificationError):
            logger.info("Login failed: bad password", extra={"user_id": user.id})
            return None

        if _hasher.check_needs_rehash(user.password_hash):
            user.password_hash = _hasher.hash(password)
        user.last_login = datetime.now(timezone.utc)
        session.add(user)
        session.commit()
        session.refresh(user)
        return _detached(session, user)


__all__ = ["authenticate", "get_user", "get_user_by_email", "register_user"]
