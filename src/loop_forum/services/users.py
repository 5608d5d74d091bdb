"""Account registration and credential checks."""

from __future__ import annotations

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from loop_forum.core.errors import UnauthorizedError, ValidationError
from loop_forum.core.security import hash_password, verify_password
from loop_forum.core.settings import settings
from loop_forum.models import User

logger = logging.getLogger(__name__)


def register_user(db: Session, username: str, email: str, password: str) -> User:
    """Create an account.

    Raises:
        ValidationError: If the username or password is too short, or the
            username or email is already taken.
    """
    username = username.strip()
    email = email.strip().lower()
    if len(username) < settings.min_username_length:
        raise ValidationError(
            f"Username must be at least {settings.min_username_length} characters"
        )
    if len(password) < settings.min_password_length:
        raise ValidationError(
            f"Password must be at least {settings.min_password_length} characters"
        )

    taken = (
        db.query(User.id)
        .filter(or_(User.username == username, User.email == email))
        .first()
    )
    if taken is not None:
        raise ValidationError("Username or email already exists")

    user = User(username=username, email=email, password_hash=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise ValidationError("Username or email already exists") from err
    db.refresh(user)

    logger.info("Registered user %s (%s)", user.id, user.username)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """Return the user matching ``email`` and ``password``.

    Raises:
        UnauthorizedError: If no user matches or the password is wrong.
    """
    user = db.query(User).filter(User.email == email.strip().lower()).first()
    if user is None or not verify_password(password, user.password_hash):
        logger.debug("Failed login for %s", email)
        raise UnauthorizedError("Invalid email or password")
    return user
