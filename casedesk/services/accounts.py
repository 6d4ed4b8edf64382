"""Account service: registration, login, blocking, and admin bootstrap."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from casedesk.core.database import store_errors
from casedesk.core.errors import (
    BlockedError,
    ConflictError,
    InvalidInputError,
    NotFoundError,
    UserNotFoundError,
    WrongPasswordError,
)
from casedesk.core.security import (
    DEFAULT_BCRYPT_ROUNDS,
    Role,
    TokenService,
    hash_password,
    verify_password,
)
from casedesk.models import User

if TYPE_CHECKING:
    from casedesk.core.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    token: str
    role: Role


def get_user(db: Session, user_id: str) -> User | None:
    with store_errors(db):
        return db.get(User, user_id)


def find_by_email(db: Session, email: str) -> User | None:
    """Exact, case-sensitive email lookup."""
    with store_errors(db):
        return db.query(User).filter(User.email == email).first()


def _create_user(
    db: Session,
    email: str,
    password: str,
    name: str,
    role: Role,
    rounds: int,
) -> User:
    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password, rounds=rounds),
        role=role.value,
        blocked=False,
    )
    with store_errors(db):
        db.add(user)
        try:
            db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same email.
            db.rollback()
            raise ConflictError(cause=e) from e
        db.refresh(user)
    return user


def register(
    db: Session,
    email: str | None,
    password: str | None,
    name: str | None = None,
    *,
    rounds: int = DEFAULT_BCRYPT_ROUNDS,
) -> User:
    """
    Create a regular, unblocked account.

    Raises InvalidInputError if email or password is missing/empty and
    ConflictError if the email is already registered.
    """
    if not email or not password:
        raise InvalidInputError()
    if find_by_email(db, email) is not None:
        raise ConflictError()
    user = _create_user(db, email, password, name or "", Role.USER, rounds)
    logger.info("Registered user id=%s", user.id)
    return user


def login(
    db: Session,
    email: str | None,
    password: str | None,
    tokens: TokenService,
) -> LoginResult:
    """
    Authenticate and issue a session token.

    The blocked flag is only consulted after the password matches, so a caller
    without the right password cannot learn whether an account is blocked.
    """
    if not email or not password:
        raise InvalidInputError()
    user = find_by_email(db, email)
    if user is None:
        logger.info("Login rejected: unknown email")
        raise UserNotFoundError()
    if not verify_password(password, user.password_hash):
        logger.info("Login rejected: wrong password for user id=%s", user.id)
        raise WrongPasswordError()
    if user.blocked:
        logger.info("Login rejected: user id=%s is blocked", user.id)
        raise BlockedError()
    role = Role(user.role)
    return LoginResult(token=tokens.issue(user.id, role), role=role)


def toggle_block(db: Session, user_id: str) -> User:
    """Flip the blocked flag of a user. Raises NotFoundError if the user does not exist."""
    user = get_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    with store_errors(db):
        user.blocked = not user.blocked
        db.commit()
        db.refresh(user)
    logger.info("User id=%s blocked=%s", user.id, user.blocked)
    return user


def seed_admin(db: Session, settings: "Settings") -> bool:
    """
    Create the bootstrap admin account if no user has ADMIN_EMAIL yet.

    Returns True when the account was created, False when it already existed.
    """
    if find_by_email(db, settings.ADMIN_EMAIL) is not None:
        return False
    try:
        _create_user(
            db,
            settings.ADMIN_EMAIL,
            settings.ADMIN_PASSWORD.get_secret_value(),
            settings.ADMIN_NAME,
            Role.ADMIN,
            settings.BCRYPT_ROUNDS,
        )
    except ConflictError:
        return False
    logger.info("Seeded admin account %s", settings.ADMIN_EMAIL)
    return True
