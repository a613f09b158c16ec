"""Authentication service for registration, login and password handling."""

import logging
import uuid

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.exceptions import ConflictError, InternalError, NotFoundError, UnauthorizedError
from src.models.user import User
from src.services.tokens import TokenService

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing context, fixed work factor
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)

INVALID_CREDENTIALS = "Incorrect email or password"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


class AuthService:
    """Service for user registration, login and lookup."""

    def __init__(self, db: Session, token_service: TokenService):
        self.db = db
        self.token_service = token_service

    def get_user_by_email(self, email: str) -> User | None:
        """Get a user by email (exact match)."""
        try:
            return self.db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to look up user by email: {e}")
            raise InternalError() from e

    def get_by_id(self, user_id: uuid.UUID) -> User:
        """Get a user by id."""
        try:
            user = self.db.query(User).filter(User.id == user_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to look up user {user_id}: {e}")
            raise InternalError() from e
        if user is None:
            raise NotFoundError("User not found")
        return user

    def register(self, name: str, email: str, password: str) -> tuple[User, str]:
        """Create a new user and issue a token for it.

        The existence check is only a fast path. Two concurrent registrations
        can both pass it, so the unique index on ``users.email`` decides and
        its violation is reported as a conflict.
        """
        if self.get_user_by_email(email) is not None:
            raise ConflictError("Email already registered")

        try:
            password_hash = get_password_hash(password)
        except ValueError as e:
            logger.error(f"Password hashing failed: {e}")
            raise InternalError() from e

        user = User(name=name, email=email, password_hash=password_hash)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.info(f"Registration lost uniqueness race for {email}")
            raise ConflictError("Email already registered") from None
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create user: {e}")
            raise InternalError() from e
        self.db.refresh(user)

        logger.info(f"Registered user {user.id}")
        return user, self.token_service.issue(user.id)

    def login(self, email: str, password: str) -> tuple[User, str]:
        """Authenticate by email and password, issuing a fresh token."""
        user = self.get_user_by_email(email)
        if user is None:
            # Spend the same hashing time as a real mismatch
            pwd_context.dummy_verify()
            logger.info("Rejected login attempt")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        try:
            matches = verify_password(password, user.password_hash)
        except ValueError:
            # Input bcrypt refuses must look like any other wrong password
            matches = False
        if not matches:
            logger.info("Rejected login attempt")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        return user, self.token_service.issue(user.id)
